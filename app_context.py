# app_context.py
# -*- coding: utf-8 -*-
"""
Глобальный координатор зависимостей.
Инициализирует все сервисы один раз и предоставляет к ним доступ.
"""

import logging
from pathlib import Path
from typing import Optional

from config.app_config import AppConfig
from config.db_config import RECENT_SEARCHES_DB_PATH
from config.logging_config import setup_logging
from core.db.recent_searches_db import RecentSearchStore
from core.search_pipeline import SearchPipeline
from core.utils.api_client import OpenMeteoClient
from core.utils.coordinate_manager import GeocodingClient

logger = logging.getLogger("app_context")


class AppContext:
    """
    Единый контекст приложения. Все зависимости инициализируются здесь.
    """

    def __init__(self):
        self._initialized = False
        # Конфигурация
        self.config: Optional[AppConfig] = None
        # Хранилище и конвейер поиска
        self.store: Optional[RecentSearchStore] = None
        self.pipeline: Optional[SearchPipeline] = None
        # telegram.Bot, выставляется из bot.py после запуска приложения
        self.bot = None

    def initialize_sync(self, config: Optional[AppConfig] = None, db_path: Optional[Path] = None):
        """Синхронная инициализация всех компонентов."""
        if self._initialized:
            return

        # 1. Загрузка конфигурации и логирования
        self.config = config or AppConfig.load()
        setup_logging(self.config.log_level)

        # 2. История поиска (читается один раз)
        self.store = RecentSearchStore(db_path=db_path or RECENT_SEARCHES_DB_PATH)

        # 3. Клиенты и конвейер
        timeout = self.config.request_timeout
        self.pipeline = SearchPipeline(
            geocoder=GeocodingClient(self.config.geocoding_url, timeout=timeout),
            weather_client=OpenMeteoClient(self.config.forecast_url, timeout=timeout),
            store=self.store,
        )

        self._initialized = True
        logger.info("✅ AppContext: initialized (pipeline ready)")

    async def start(self):
        """Восстанавливает последний просмотр из истории поиска."""
        await self.pipeline.restore_last_search()

    def shutdown_sync(self):
        """Синхронное завершение."""
        if not self._initialized:
            return
        # SQLite-подключения локальны для каждого метода, закрывать нечего
        self.bot = None
        logger.info("🛑 AppContext: shut down")


# Глобальный экземпляр — точка доступа для всех модулей
app_context = AppContext()
