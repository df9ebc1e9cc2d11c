# -*- coding: utf-8 -*-
"""
Конвейер поиска погоды: геокодинг → прогноз → преобразование →
история → готовое к отображению состояние.

Каждый переход (Loading / Success / Error) публикуется через event_bus
событием "search_state". Поиски нумеруются: результат поиска, который
обогнал более новый поиск того же origin (чата), не публикуется и не
попадает в историю.

Использование:
# В app_context.py:
pipeline = SearchPipeline(geocoder, weather_client, store)
await pipeline.restore_last_search()

# В bot.py:
await pipeline.submit(update.message.text, origin=chat_id)
"""

import asyncio
import logging
import sqlite3
from typing import Any, Dict, List, Optional

from core.db.recent_searches_db import RecentSearchStore
from core.event_bus import SEARCH_STATE_EVENT, emit_event
from core.models.search_state import (
    CITY_NOT_FOUND,
    FETCH_FAILED,
    Error,
    Idle,
    Loading,
    SearchState,
    Success,
)
from core.models.weather_response import CurrentConditions
from core.utils.api_client import OpenMeteoClient
from core.utils.coordinate_manager import GeocodingClient
from core.utils.error_handler import FetchFailure, log_exception
from core.utils.validator import sanitize_place_query
from scripts.weather._processes.forecast_transformer import to_forecast_series

logger = logging.getLogger("search_pipeline")


class SearchPipeline:
    """Единственный владелец состояния поиска и истории в памяти."""

    def __init__(
        self,
        geocoder: GeocodingClient,
        weather_client: OpenMeteoClient,
        store: RecentSearchStore,
    ):
        self.geocoder = geocoder
        self.weather_client = weather_client
        self.store = store
        self._state: SearchState = Idle()
        self._seq = 0
        # Последний номер поиска и последнее состояние для каждого origin
        self._latest: Dict[Any, int] = {}
        self._states: Dict[Any, SearchState] = {}
        # Загружается один раз при старте
        self._recent: List[str] = store.load()
        logger.info(f"📂 История поиска загружена: {self._recent}")

    @property
    def state(self) -> SearchState:
        return self._state

    def state_for(self, origin: Any) -> SearchState:
        """Последнее состояние для origin; если origin ещё не искал, состояние, восстановленное при старте."""
        return self._current(origin)

    @property
    def recent_searches(self) -> List[str]:
        return list(self._recent)

    def clear_recent(self) -> None:
        """Забывает историю поиска в памяти и в хранилище."""
        self.store.clear()
        self._recent = []

    async def submit(self, raw_text: str, origin: Any = None) -> Optional[SearchState]:
        """
        Обработка отправки формы: пустой ввод игнорируется.

        Returns:
            Optional[SearchState]: Итоговое состояние или None, если поиск не запускался
        """
        place_name = sanitize_place_query(raw_text or "")
        if not place_name:
            logger.debug("Пустой запрос — поиск не запускается")
            return None
        return await self.search(place_name, origin=origin)

    async def restore_last_search(self) -> Optional[SearchState]:
        """При старте повторяет последний поиск, если история не пуста."""
        if not self._recent:
            logger.info("🕳️ История пуста — остаёмся в Idle")
            return None
        logger.info(f"🔁 Восстанавливаем последний поиск: '{self._recent[0]}'")
        return await self.search(self._recent[0])

    async def search(self, place_name: str, origin: Any = None) -> SearchState:
        """
        Выполняет поиск: один вызов геокодера и не более одного вызова прогноза.

        Вытеснение действует в пределах одного origin: новый поиск из того же
        чата отменяет результат старого, поиски из разных чатов не мешают друг другу.

        Args:
            place_name (str): Обрезанное непустое название
            origin: Токен инициатора, передаётся подписчикам без изменений

        Returns:
            SearchState: Success или Error; для вытесненного поиска — состояние более нового поиска того же origin
        """
        if not place_name or not place_name.strip():
            raise ValueError("place_name must be a non-empty string")

        self._seq += 1
        seq = self._seq
        self._latest[origin] = seq
        await self._publish(Loading(query=place_name), seq, origin)

        try:
            place = await self._run_blocking(self.geocoder.resolve, place_name)
            if self._is_stale(seq, origin):
                return self._current(origin)
            if place is None:
                return await self._publish(Error(CITY_NOT_FOUND), seq, origin)

            payload = await self._run_blocking(self.weather_client.fetch_weather, place.latitude, place.longitude)
            forecast = to_forecast_series(payload.hourly_times, payload.hourly_temperatures, payload.hourly_rain)
        except (FetchFailure, ValueError) as e:
            log_exception(e, "❌ Поиск погоды завершился ошибкой", {"place": place_name, "seq": seq})
            return await self._publish(Error(FETCH_FAILED), seq, origin)
        except Exception as e:
            log_exception(e, "❌ Непредвиденная ошибка поиска", {"place": place_name, "seq": seq})
            return await self._publish(Error(FETCH_FAILED), seq, origin)

        conditions = CurrentConditions(
            name=place.name,
            country=place.country,
            temperature_c=payload.temperature_c,
            wind_kph=payload.wind_kph,
            condition_code=payload.condition_code,
        )
        state = Success(conditions=conditions, forecast=forecast)
        if self._is_stale(seq, origin):
            return self._current(origin)

        self._remember(place_name)
        await self._publish(state, seq, origin)
        logger.info(f"✅ Поиск #{seq} '{place_name}': {conditions.title}, {conditions.temperature_c}°C, точек прогноза: {len(forecast)}")
        return state

    def _remember(self, place_name: str) -> None:
        """
        Записывает успешный поиск в историю.
        Если хранилище недоступно, погода всё равно показывается, а история остаётся прежней.
        """
        try:
            self._recent = self.store.record(place_name, self._recent)
        except (sqlite3.Error, OSError) as e:
            log_exception(e, "⚠️ История поиска не сохранена", {"place": place_name})

    def _current(self, origin: Any) -> SearchState:
        return self._states.get(origin, self._states.get(None, Idle()))

    def _is_stale(self, seq: int, origin: Any) -> bool:
        latest = self._latest.get(origin)
        if seq != latest:
            logger.info(f"⏭️ Поиск #{seq} вытеснен поиском #{latest} (origin={origin}), результат отброшен")
            return True
        return False

    async def _publish(self, state: SearchState, seq: int, origin: Any) -> SearchState:
        """Заменяет текущее состояние целиком и оповещает подписчиков (только для актуального поиска)."""
        if seq != self._latest.get(origin):
            return self._current(origin)
        self._state = state
        self._states[origin] = state
        await emit_event(SEARCH_STATE_EVENT, {"state": state, "seq": seq, "origin": origin})
        return state

    @staticmethod
    async def _run_blocking(func, *args):
        """Блокирующий HTTP-вызов в executor'е, чтобы не держать event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)
