# -*- coding: utf-8 -*-
"""
Конфигурация путей к локальному хранилищу проекта.
"""

from pathlib import Path

# === Корень проекта ===
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# === Папка данных ===
DATA_DIR = PROJECT_ROOT / "data"
CHARTS_DIR = DATA_DIR / "charts"

# === ИСТОРИЯ ПОИСКА: один ключ с JSON-массивом ===
RECENT_SEARCHES_DB_PATH = DATA_DIR / "recent_searches.db"
RECENT_SEARCHES_KEY = "recentSearches"

# === ПАРАМЕТРЫ ПОДКЛЮЧЕНИЯ ===
DB_CONNECTION_TIMEOUT = 30  # секунд

# === ГРАФИКИ ===
CHARTS_KEEP_LAST = 20
