# -*- coding: utf-8 -*-
"""
Тесты для scripts/weather/_processes/forecast_transformer.py
"""
import pytest

from core.models.weather_response import ForecastPoint
from scripts.weather._processes.forecast_transformer import hour_label, to_forecast_series


def _series(hours, start_hour=0):
    times = [f"2025-06-{1 + (start_hour + i) // 24:02d}T{(start_hour + i) % 24:02d}:00" for i in range(hours)]
    temps = [float(i) for i in range(hours)]
    rain = [float(i % 100) for i in range(hours)]
    return times, temps, rain


def test_hour_label_has_no_leading_zero():
    assert hour_label("2025-06-01T00:00") == "0:00"
    assert hour_label("2025-06-01T07:00") == "7:00"
    assert hour_label("2025-06-01T23:00") == "23:00"


def test_truncates_to_24_points():
    series = to_forecast_series(*_series(168))
    assert len(series) == 24
    assert series[0] == ForecastPoint(hour_label="0:00", temperature_c=0.0, rain_probability_pct=0.0)
    assert series[-1] == ForecastPoint(hour_label="23:00", temperature_c=23.0, rain_probability_pct=23.0)


def test_short_series_is_kept():
    series = to_forecast_series(*_series(5))
    assert [p.hour_label for p in series] == ["0:00", "1:00", "2:00", "3:00", "4:00"]


def test_uneven_arrays_use_shortest():
    times, temps, rain = _series(24)
    series = to_forecast_series(times, temps[:10], rain)
    assert len(series) == 10


def test_starts_at_first_reported_hour_and_wraps():
    series = to_forecast_series(*_series(24, start_hour=14))
    labels = [p.hour_label for p in series]
    assert labels[0] == "14:00"
    assert labels[9] == "23:00"
    assert labels[10] == "0:00"


def test_is_pure():
    data = _series(30)
    assert to_forecast_series(*data) == to_forecast_series(*data)
    assert len(data[0]) == 30


def test_empty_input():
    assert to_forecast_series([], [], []) == ()


def test_bad_timestamp_raises():
    with pytest.raises(ValueError):
        to_forecast_series(["yesterday"], [1.0], [0.0])
