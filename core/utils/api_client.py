# -*- coding: utf-8 -*-
"""
Клиент прогноза погоды Open-Meteo.

Возвращает текущую погоду и почасовые ряды (время, температура,
вероятность осадков) без обрезки: до 24 точек ряд сокращает
forecast_transformer, а не клиент.
"""
import logging
from typing import Dict, Optional

import requests

from config.app_config import FORECAST_URL
from core.models.weather_response import WeatherPayload
from core.utils.error_handler import log_and_raise

logger = logging.getLogger("api_client")

# === КОНФИГУРАЦИЯ API ===
API_TIMEOUT = 30  # секунд
HOURLY_METRICS = ["temperature_2m", "relative_humidity_2m", "precipitation_probability"]


class OpenMeteoClient:
    """Клиент для Open-Meteo Forecast API."""

    def __init__(self, base_url: str = FORECAST_URL, timeout: Optional[float] = API_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout

    def fetch_weather(self, lat: float, lon: float) -> WeatherPayload:
        """
        Получает текущую погоду и почасовой прогноз.

        Args:
            lat (float): Широта
            lon (float): Долгота

        Returns:
            WeatherPayload: Текущие значения и параллельные почасовые ряды

        Raises:
            FetchFailure: Ошибка сети, статуса или разбора ответа
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "current_weather": "true",
            "hourly": ",".join(HOURLY_METRICS),
            "timezone": "auto",
        }
        context = {"lat": lat, "lon": lon}

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            log_and_raise("❌ Open-Meteo: ошибка запроса прогноза", e, context)

        payload = self.parse_payload(data, context)
        logger.info(f"✅ Open-Meteo: прогноз получен для ({lat}, {lon}), часов: {len(payload.hourly_times)}")
        return payload

    @staticmethod
    def parse_payload(data: Dict, context: Optional[dict] = None) -> WeatherPayload:
        """Разбирает JSON-ответ Open-Meteo в WeatherPayload."""
        try:
            current = data["current_weather"]
            hourly = data["hourly"]
            return WeatherPayload(
                temperature_c=float(current["temperature"]),
                wind_kph=float(current["windspeed"]),
                condition_code=int(current["weathercode"]),
                hourly_times=list(hourly["time"]),
                hourly_temperatures=list(hourly["temperature_2m"]),
                hourly_rain=list(hourly["precipitation_probability"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            log_and_raise("❌ Open-Meteo: неожиданный формат ответа", e, context)
