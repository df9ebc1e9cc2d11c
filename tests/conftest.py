# -*- coding: utf-8 -*-
"""
Общие фикстуры: подмена requests.get и типовые ответы Open-Meteo.
"""
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
import requests

from config.app_config import FORECAST_URL, GEOCODING_URL
from core.event_bus import clear_all_handlers


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


@pytest.fixture(autouse=True)
def _clean_event_bus():
    clear_all_handlers()
    yield
    clear_all_handlers()


@pytest.fixture
def fake_http(monkeypatch):
    """
    routes[url] = FakeResponse | Exception | callable(params) -> FakeResponse.
    calls — список всех запросов (url, params, timeout).
    """
    routes = {}
    calls = []

    def fake_get(url, params=None, timeout=None, **kwargs):
        calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        handler = routes[url]
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return handler(params)
        return handler

    monkeypatch.setattr(requests, "get", fake_get)
    return SimpleNamespace(routes=routes, calls=calls, geocoding_url=GEOCODING_URL, forecast_url=FORECAST_URL)


def geocoding_payload(*places):
    return {"results": [dict(p) for p in places]} if places else {"generationtime_ms": 0.5}


def forecast_payload(hours=24, start="2025-06-01T00:00", temperature=18.2, windspeed=10.0, weathercode=3):
    first = datetime.fromisoformat(start)
    times = [(first + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)]
    return {
        "latitude": 48.86,
        "longitude": 2.34,
        "timezone": "Europe/Paris",
        "current_weather": {
            "temperature": temperature,
            "windspeed": windspeed,
            "winddirection": 200,
            "weathercode": weathercode,
            "time": start,
        },
        "hourly": {
            "time": times,
            "temperature_2m": [round(12.0 + i * 0.5, 1) for i in range(hours)],
            "relative_humidity_2m": [60 + (i % 10) for i in range(hours)],
            "precipitation_probability": [(i * 5) % 100 for i in range(hours)],
        },
    }


PARIS = {"latitude": 48.85, "longitude": 2.35, "name": "Paris", "country": "France"}
TOKYO = {"latitude": 35.69, "longitude": 139.69, "name": "Tokyo", "country": "Japan"}


@pytest.fixture
def payloads():
    return SimpleNamespace(
        geocoding=geocoding_payload,
        forecast=forecast_payload,
        paris=PARIS,
        tokyo=TOKYO,
        response=FakeResponse,
    )
