# -*- coding: utf-8 -*-
"""
Преобразование почасовых рядов Open-Meteo в серию для графика на 24 часа.
"""

from datetime import datetime
from typing import Sequence

from core.models.weather_response import ForecastPoint, ForecastSeries

FORECAST_HOURS = 24


def hour_label(timestamp: str) -> str:
    """'2025-01-01T07:00' → '7:00' (час как есть, без перевода часового пояса)."""
    return f"{datetime.fromisoformat(timestamp).hour}:00"


def to_forecast_series(
    hourly_times: Sequence[str],
    hourly_temps: Sequence[float],
    hourly_rain: Sequence[float],
) -> ForecastSeries:
    """
    Берёт первые 24 значения трёх параллельных рядов (меньше, если данных меньше)
    и собирает точки в хронологическом порядке.

    Raises:
        ValueError: Метка времени не в формате ISO-8601
    """
    count = min(FORECAST_HOURS, len(hourly_times), len(hourly_temps), len(hourly_rain))
    return tuple(
        ForecastPoint(
            hour_label=hour_label(hourly_times[i]),
            temperature_c=hourly_temps[i],
            rain_probability_pct=hourly_rain[i],
        )
        for i in range(count)
    )
