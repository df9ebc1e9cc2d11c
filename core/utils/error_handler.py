# -*- coding: utf-8 -*-
"""
Утилита для централизованной обработки ошибок.
"""

import logging
from typing import Optional

logger = logging.getLogger("error_handler")


class FetchFailure(Exception):
    """Сетевая ошибка, неверный статус или неразборчивый ответ внешнего API."""


def log_and_raise(message: str, exception: Exception, context: Optional[dict] = None):
    """
    Логирует ошибку и выбрасывает FetchFailure с исходным исключением в __cause__.

    Args:
        message (str): Описание операции
        exception (Exception): Исходное исключение
        context (dict): Дополнительный контекст (например, lat, lon)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}")
    if isinstance(exception, FetchFailure):
        raise exception
    raise FetchFailure(message) from exception


def log_exception(exception: Exception, message: str = "Необработанное исключение", context: Optional[dict] = None):
    """
    Просто логирует исключение без выбрасывания.

    Args:
        exception (Exception): Исключение
        message (str): Описание
        context (dict): Контекст (запрос, координаты и т.п.)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=exception)
