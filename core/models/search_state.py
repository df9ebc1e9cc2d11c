# -*- coding: utf-8 -*-
"""
Состояние поиска (Idle / Loading / Success / Error).

Значения неизменяемые: каждый переход заменяет состояние целиком,
подписчики получают последнее значение через event_bus.
"""

from dataclasses import dataclass
from typing import Union

from core.models.weather_response import CurrentConditions, ForecastSeries

CITY_NOT_FOUND = "City not found"
FETCH_FAILED = "Failed to fetch weather data."


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    query: str


@dataclass(frozen=True)
class Success:
    conditions: CurrentConditions
    forecast: ForecastSeries


@dataclass(frozen=True)
class Error:
    message: str


SearchState = Union[Idle, Loading, Success, Error]
