# -*- coding: utf-8 -*-
"""
Форматирование результата поиска: HTML-панель текущей погоды и
график температуры на 24 часа.
"""

import logging
import os

import matplotlib
matplotlib.use("Agg")  # без GUI: график сохраняется в файл
import matplotlib.pyplot as plt
from jinja2 import Environment, FileSystemLoader, select_autoescape

from config.db_config import CHARTS_KEEP_LAST
from core.models.weather_response import CurrentConditions, ForecastSeries
from core.utils.cache_manager import cleanup_old_files, save_plot

logger = logging.getLogger("formatter")

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "_io", "templates")
_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html", "j2"]),
    trim_blocks=True,
)


def render_conditions_html(conditions: CurrentConditions) -> str:
    """Панель текущей погоды: «Paris, France», «18.2°C», ветер, код погоды."""
    return _env.get_template("current_weather.html.j2").render(conditions=conditions).strip()


def build_forecast_chart(series: ForecastSeries, title: str = "Next 24 Hours"):
    """
    Линейный график температуры по часам.

    Args:
        series (ForecastSeries): До 24 точек прогноза
        title (str): Заголовок графика

    Returns:
        matplotlib.figure.Figure
    """
    labels = [point.hour_label for point in series]
    temps = [point.temperature_c for point in series]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(range(len(labels)), temps, color="#ffb300", linewidth=2)
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=45)
    ax.set_ylabel("°C")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig


def save_forecast_chart(series: ForecastSeries, place: str = "forecast") -> str:
    """Сохраняет график в data/charts и оставляет последние CHARTS_KEEP_LAST файлов."""
    fig = build_forecast_chart(series)
    try:
        prefix = "forecast_" + "".join(ch if ch.isalnum() else "_" for ch in place.lower())
        path = save_plot(fig, prefix=prefix)
    finally:
        plt.close(fig)
    cleanup_old_files(keep_last_n=CHARTS_KEEP_LAST)
    logger.info(f"✅ График прогноза сформирован: {len(series)} точек")
    return path
