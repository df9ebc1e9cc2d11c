# -*- coding: utf-8 -*-
"""
Менеджер геокодирования.

Функции:
- Поиск координат по названию места (Open-Meteo Geocoding API)
- Валидация координат найденного места
- Обработка ошибок API

Использование:
>>> from core.utils.coordinate_manager import GeocodingClient
>>> place = GeocodingClient().resolve("Paris")
>>> print(place.name, place.country)
'Paris France'
"""

import logging
from typing import Dict, Optional

import requests

from config.app_config import GEOCODING_URL
from core.models.weather_response import GeoResult
from core.utils.error_handler import FetchFailure, log_and_raise
from core.utils.validator import validate_coordinates

logger = logging.getLogger("coordinate_manager")

# === КОНФИГУРАЦИЯ ===
REQUEST_TIMEOUT = 30  # секунд
RESULTS_COUNT = 1


class GeocodingClient:
    """Клиент прямого геокодирования: название → координаты."""

    def __init__(self, base_url: str = GEOCODING_URL, timeout: Optional[float] = REQUEST_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout

    def resolve(self, place_name: str) -> Optional[GeoResult]:
        """
        Ищет место по названию.

        Args:
            place_name (str): Непустое название (обрезку пробелов делает вызывающий)

        Returns:
            Optional[GeoResult]: Первое совпадение или None, если ничего не найдено

        Raises:
            FetchFailure: Ошибка сети, статуса или разбора ответа
        """
        params = {"name": place_name, "count": RESULTS_COUNT}
        context = {"place": place_name}

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            log_and_raise("❌ Ошибка геокодирования", e, context)

        if not isinstance(data, dict):
            log_and_raise("❌ Ошибка обработки ответа геокодера", FetchFailure(f"unexpected payload: {type(data).__name__}"), context)

        results = data.get("results") or []
        if not isinstance(results, list):
            log_and_raise("❌ Ошибка обработки ответа геокодера", FetchFailure(f"results is {type(results).__name__}"), context)
        if not results:
            logger.info(f"🔍 Место не найдено: '{place_name}'")
            return None

        place = self.parse_result(results[0], context)
        logger.info(f"🌍 Найдено: {place.name}, {place.country} ({place.latitude}, {place.longitude})")
        return place

    @staticmethod
    def parse_result(item: Dict, context: Optional[dict] = None) -> GeoResult:
        """Разбирает первое совпадение; country может отсутствовать."""
        try:
            place = GeoResult(
                latitude=float(item["latitude"]),
                longitude=float(item["longitude"]),
                name=str(item["name"]),
                country=str(item.get("country") or ""),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            log_and_raise("❌ Ошибка обработки ответа геокодера", e, context)

        if not validate_coordinates(place.latitude, place.longitude):
            log_and_raise(
                "❌ Геокодер вернул неверные координаты",
                FetchFailure(f"lat={place.latitude}, lon={place.longitude}"),
                context,
            )
        return place
