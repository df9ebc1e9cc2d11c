# -*- coding: utf-8 -*-
"""
Шина событий для публикации состояния поиска.

Архитектурный принцип:
- Производитель (search_pipeline) публикует каждое новое SearchState
- Потребители (бот, тесты) подписываются и получают последнее значение
- event_bus.py не импортирует bot.py и scripts/ — зависимости только в одну сторону

Использование:

# В bot.py (потребитель):
from core.event_bus import subscribe_async, SEARCH_STATE_EVENT

async def on_search_state(event):
    await bot.send_message(event["origin"], render(event["state"]))

subscribe_async(SEARCH_STATE_EVENT, on_search_state)

# В search_pipeline.py (производитель):
await emit_event(SEARCH_STATE_EVENT, {"state": state, "seq": seq, "origin": chat_id})
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List

logger = logging.getLogger("event_bus")

SEARCH_STATE_EVENT = "search_state"

# Типы обработчиков
SyncHandler = Callable[[Dict[str, Any]], None]
AsyncHandler = Callable[[Dict[str, Any]], Awaitable[None]]

# Реестры обработчиков
_sync_handlers: Dict[str, List[SyncHandler]] = {}
_async_handlers: Dict[str, List[AsyncHandler]] = {}


def subscribe(event_type: str, handler: SyncHandler) -> None:
    """
    Подписка на событие с синхронным обработчиком.

    Args:
        event_type (str): Тип события (например, "search_state")
        handler (callable): Функция, принимающая dict с данными события
    """
    _sync_handlers.setdefault(event_type, []).append(handler)
    logger.debug("Зарегистрирован синхронный обработчик для события: %s", event_type)


def subscribe_async(event_type: str, handler: AsyncHandler) -> None:
    """
    Подписка на событие с асинхронным обработчиком.

    Args:
        event_type (str): Тип события
        handler (callable): Асинхронная функция, принимающая dict с данными события
    """
    if handler is None:
        logger.warning(f"⚠️ Попытка подписаться на событие {event_type} с handler=None. Игнорируем.")
        return
    _async_handlers.setdefault(event_type, []).append(handler)
    logger.debug("Зарегистрирован асинхронный обработчик для события: %s", event_type)


def unsubscribe_async(event_type: str, handler: AsyncHandler) -> None:
    """Отписка асинхронного обработчика от события."""
    try:
        _async_handlers.get(event_type, []).remove(handler)
        logger.debug("Обработчик удалён для события: %s", event_type)
    except ValueError:
        logger.warning("Обработчик не найден для события: %s", event_type)


async def emit_event(event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Асинхронная публикация события.

    Синхронные обработчики выполняются в executor'е, асинхронные — по очереди.
    Ошибки в обработчиках логируются, но не прерывают публикацию.

    Args:
        event_type (str): Тип события
        event_data (dict): Данные события
    """
    logger.debug("Публикация события: %s, данные: %s", event_type, event_data)

    loop = asyncio.get_running_loop()
    for handler in list(_sync_handlers.get(event_type, [])):
        try:
            await loop.run_in_executor(None, handler, event_data)
        except Exception as e:
            logger.error("Ошибка в синхронном обработчике события %s: %s", event_type, e, exc_info=True)

    for handler in list(_async_handlers.get(event_type, [])):
        try:
            await handler(event_data)
        except Exception as e:
            logger.error("Ошибка в асинхронном обработчике события %s: %s", event_type, e, exc_info=True)


# Утилита для очистки (полезна в тестах)
def clear_all_handlers() -> None:
    """Очищает все зарегистрированные обработчики. Используется в тестах."""
    _sync_handlers.clear()
    _async_handlers.clear()
    logger.info("Все обработчики событий очищены.")
