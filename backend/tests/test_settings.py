from __future__ import annotations

import logging

from app.config.settings import AppSettings, get_settings
from app.core.logging import setup_logging
from networth.dates import TimeRange


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_HISTORY_RANGE", "quarter")
    monkeypatch.setenv("PORTFOLIO_SERVICE_URL", "http://crud.internal/api")
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.default_history_range == TimeRange.QUARTER
    assert settings.portfolio_service_url == "http://crud.internal/api"
    assert get_settings() is settings


def test_secrets_are_masked_for_logging():
    settings = AppSettings(portfolio_service_token="top-secret")
    assert settings.dict_for_logging()["portfolio_service_token"] == "***"
    assert settings.dict_for_logging()["database_url"] == settings.database_url


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    previous_level = root.level
    try:
        setup_logging("DEBUG")
        setup_logging("WARNING")
        ours = [h for h in root.handlers if getattr(h, "_networth_handler", False)]
        assert len(ours) == 1
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous_level)


async def test_async_tests_receive_requested_fixtures(monkeypatch):
    monkeypatch.setenv("BASE_CURRENCY", "EUR")
    get_settings.cache_clear()
    assert get_settings().base_currency == "EUR"
