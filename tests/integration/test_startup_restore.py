# -*- coding: utf-8 -*-
"""
Запуск приложения: история из SQLite → автоматический поиск последнего города.
"""
import app_context as app_context_module
from app_context import AppContext
from config.app_config import FORECAST_URL, GEOCODING_URL, AppConfig
from core.db.recent_searches_db import RecentSearchStore
from core.models.search_state import Idle, Success


def make_config(api_timeout=30.0):
    return AppConfig(
        telegram_token="test-token",
        geocoding_url=GEOCODING_URL,
        forecast_url=FORECAST_URL,
        api_timeout=api_timeout,
    )


async def test_startup_restores_last_search(fake_http, payloads, tmp_path, monkeypatch):
    monkeypatch.setattr(app_context_module, "setup_logging", lambda level: None)
    db_path = tmp_path / "recent.db"
    RecentSearchStore(db_path=db_path).record("Tokyo", [])
    fake_http.routes[fake_http.geocoding_url] = payloads.response(payloads.geocoding(payloads.tokyo))
    fake_http.routes[fake_http.forecast_url] = payloads.response(payloads.forecast())

    ctx = AppContext()
    ctx.initialize_sync(config=make_config(), db_path=db_path)
    assert ctx.pipeline.recent_searches == ["Tokyo"]

    await ctx.start()

    assert fake_http.calls[0]["params"]["name"] == "Tokyo"
    assert fake_http.calls[0]["timeout"] == 30.0
    assert isinstance(ctx.pipeline.state, Success)
    assert ctx.pipeline.state.conditions.title == "Tokyo, Japan"
    assert ctx.pipeline.recent_searches == ["Tokyo"]


async def test_startup_with_empty_history_stays_idle(fake_http, tmp_path, monkeypatch):
    monkeypatch.setattr(app_context_module, "setup_logging", lambda level: None)

    ctx = AppContext()
    ctx.initialize_sync(config=make_config(api_timeout=0), db_path=tmp_path / "recent.db")
    await ctx.start()

    assert fake_http.calls == []
    assert ctx.pipeline.state == Idle()
    assert ctx.pipeline.recent_searches == []
    assert ctx.config.request_timeout is None
