# -*- coding: utf-8 -*-
"""
История недавних поисков.

Хранится как один ключ в SQLite (таблица kv_store) с JSON-массивом
до 5 названий, самое новое первым. Чтение при старте, перезапись
после каждого успешного поиска.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

from config.app_config import RECENT_SEARCHES_LIMIT
from config.db_config import DB_CONNECTION_TIMEOUT, RECENT_SEARCHES_DB_PATH, RECENT_SEARCHES_KEY

logger = logging.getLogger("recent_searches_db")

CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


class RecentSearchStore:
    """
    Узкий интерфейс load/record над локальным хранилищем.
    Подключение открывается в каждом методе, как в остальных БД проекта.
    """

    def __init__(self, db_path: Optional[Path] = None, limit: int = RECENT_SEARCHES_LIMIT):
        self.db_path = Path(db_path or RECENT_SEARCHES_DB_PATH)
        self.limit = limit
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=DB_CONNECTION_TIMEOUT)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self):
        """Создаёт файл и таблицу при первом запуске."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._get_connection()
        try:
            conn.executescript(CREATE_TABLES_SQL)
            conn.commit()
            logger.info("БД истории поиска инициализирована: %s", self.db_path)
        finally:
            conn.close()

    def load(self) -> List[str]:
        """
        Читает сохранённую историю.

        Returns:
            List[str]: Названия, новое первым; [] если ключа нет или данные битые
        """
        try:
            conn = self._get_connection()
            try:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?",
                    (RECENT_SEARCHES_KEY,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"⚠️ Не удалось прочитать историю поиска: {e}")
            return []

        if row is None:
            return []

        try:
            items = json.loads(row["value"])
        except (TypeError, ValueError) as e:
            logger.warning(f"⚠️ История поиска повреждена, начинаем с пустой: {e}")
            return []

        if not isinstance(items, list):
            logger.warning("⚠️ История поиска не является списком, начинаем с пустой")
            return []

        return [item for item in items if isinstance(item, str)][:self.limit]

    def record(self, name: str, current: List[str]) -> List[str]:
        """
        Переносит name в начало, убирает дубликаты (с учётом регистра),
        обрезает до limit и сохраняет до возврата.
        """
        updated = [name] + [item for item in current if item != name]
        updated = updated[:self.limit]
        self._save(updated)
        logger.info(f"💾 История поиска обновлена: {updated}")
        return updated

    def clear(self) -> None:
        """Удаляет ключ истории."""
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (RECENT_SEARCHES_KEY,))
            conn.commit()
        finally:
            conn.close()
        logger.info("🗑️ История поиска очищена")

    def _save(self, items: List[str]) -> None:
        conn = self._get_connection()
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (RECENT_SEARCHES_KEY, json.dumps(items, ensure_ascii=False))
            )
            conn.commit()
        finally:
            conn.close()
