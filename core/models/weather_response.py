# core/models/weather_response.py
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class GeoResult:
    latitude: float
    longitude: float
    name: str
    country: str


@dataclass(frozen=True)
class WeatherPayload:
    """Сырой ответ прогноза: текущая погода + почасовые ряды без обрезки."""
    temperature_c: float
    wind_kph: float
    condition_code: int
    hourly_times: List[str]
    hourly_temperatures: List[float]
    hourly_rain: List[float]


@dataclass(frozen=True)
class CurrentConditions:
    name: str
    country: str
    temperature_c: float
    wind_kph: float
    condition_code: int

    @property
    def title(self) -> str:
        return f"{self.name}, {self.country}" if self.country else self.name


@dataclass(frozen=True)
class ForecastPoint:
    hour_label: str  # "H:00"
    temperature_c: float
    rain_probability_pct: float


ForecastSeries = Tuple[ForecastPoint, ...]
