# -*- coding: utf-8 -*-
"""
Тесты для core/utils/api_client.py
Тестирует:
- Параметры запроса к Open-Meteo
- Разбор ответа без обрезки почасовых рядов
- Обработку ошибок (FetchFailure)
"""
import pytest
import requests

from core.utils.api_client import OpenMeteoClient
from core.utils.error_handler import FetchFailure


def test_fetch_weather_request_params(fake_http, payloads):
    fake_http.routes[fake_http.forecast_url] = payloads.response(payloads.forecast())

    OpenMeteoClient().fetch_weather(48.85, 2.35)

    params = fake_http.calls[0]["params"]
    assert params["latitude"] == 48.85
    assert params["longitude"] == 2.35
    assert params["current_weather"] == "true"
    assert params["hourly"] == "temperature_2m,relative_humidity_2m,precipitation_probability"
    assert params["timezone"] == "auto"


def test_fetch_weather_keeps_full_series(fake_http, payloads):
    fake_http.routes[fake_http.forecast_url] = payloads.response(payloads.forecast(hours=168))

    payload = OpenMeteoClient().fetch_weather(48.85, 2.35)

    assert payload.temperature_c == 18.2
    assert payload.wind_kph == 10.0
    assert payload.condition_code == 3
    assert len(payload.hourly_times) == 168
    assert len(payload.hourly_temperatures) == 168
    assert len(payload.hourly_rain) == 168
    assert payload.hourly_times[0] == "2025-06-01T00:00"


def test_fetch_weather_transport_error(fake_http):
    fake_http.routes[fake_http.forecast_url] = requests.exceptions.ConnectionError("network down")
    with pytest.raises(FetchFailure):
        OpenMeteoClient().fetch_weather(48.85, 2.35)


def test_fetch_weather_http_error(fake_http, payloads):
    fake_http.routes[fake_http.forecast_url] = payloads.response({"reason": "Latitude must be in range"}, status_code=400)
    with pytest.raises(FetchFailure):
        OpenMeteoClient().fetch_weather(48.85, 2.35)


def test_fetch_weather_malformed_payload(fake_http, payloads):
    broken = payloads.forecast()
    del broken["hourly"]["precipitation_probability"]
    fake_http.routes[fake_http.forecast_url] = payloads.response(broken)
    with pytest.raises(FetchFailure):
        OpenMeteoClient().fetch_weather(48.85, 2.35)

    fake_http.routes[fake_http.forecast_url] = payloads.response(json_error=True)
    with pytest.raises(FetchFailure):
        OpenMeteoClient().fetch_weather(48.85, 2.35)


def test_fetch_weather_without_timeout(fake_http, payloads):
    fake_http.routes[fake_http.forecast_url] = payloads.response(payloads.forecast())
    OpenMeteoClient(timeout=None).fetch_weather(1.0, 2.0)
    assert fake_http.calls[0]["timeout"] is None
