# -*- coding: utf-8 -*-
"""
Сохранение графиков прогноза в data/charts.

Имена файлов вида: `{prefix}_{timestamp}_{random_suffix}.png`
"""

import logging
import os
import random
import string
from datetime import datetime
from pathlib import Path
from typing import Optional

from config.db_config import CHARTS_DIR

logger = logging.getLogger("cache_manager")


def generate_unique_filename(prefix: str, ext: str) -> str:
    """
    Генерирует уникальное имя файла.

    Args:
        prefix (str): Префикс (например, "forecast_paris")
        ext (str): Расширение (например, "png")

    Returns:
        str: Уникальное имя файла
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{prefix}_{timestamp}_{random_suffix}.{ext}"


def save_plot(figure, prefix: str = "plot", directory: Optional[Path] = None) -> str:
    """
    Сохраняет matplotlib-график в PNG.

    Args:
        figure: matplotlib.figure.Figure
        prefix (str): Префикс имени файла
        directory (Path): Папка (по умолчанию data/charts)

    Returns:
        str: Путь к файлу
    """
    if not hasattr(figure, "savefig"):
        raise ValueError(f"❌ Неизвестный тип данных для сохранения графика: {type(figure)}")

    directory = Path(directory or CHARTS_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    full_path = directory / generate_unique_filename(prefix, "png")

    figure.savefig(full_path)
    logger.info(f"💾 График сохранён: {full_path}")
    return str(full_path)


def cleanup_old_files(directory: Optional[Path] = None, ext: str = "png", keep_last_n: int = 20) -> int:
    """
    Удаляет старые файлы, оставляя последние N.

    Returns:
        int: Количество удалённых файлов
    """
    directory = Path(directory or CHARTS_DIR)
    files = list(directory.glob(f"*.{ext}"))
    files.sort(key=os.path.getmtime)

    to_delete = files[:-keep_last_n] if len(files) > keep_last_n else []
    for f in to_delete:
        f.unlink()
        logger.debug(f"🗑️  Удалён старый файл: {f.name}")

    if to_delete:
        logger.info(f"🧹 Удалено {len(to_delete)} старых файлов ({ext})")
    return len(to_delete)
