"""Tests for database URL handling and startup table creation."""

import logging
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

import database
import main
from config import Settings
from database import to_async_url


class TestAsyncUrl:
    def test_plain_sqlite_url_is_converted(self):
        assert to_async_url("sqlite:///./data/app.db") == "sqlite+aiosqlite:///./data/app.db"

    def test_async_sqlite_url_is_unchanged(self):
        url = "sqlite+aiosqlite:///./attrition_risk.db"
        assert to_async_url(url) == url

    def test_other_drivers_are_unchanged(self):
        url = "postgresql+asyncpg://user:pw@db/attrition"
        assert to_async_url(url) == url

    def test_default_setting_yields_single_driver(self):
        default = Settings.model_fields["database_url"].default
        converted = to_async_url(default)
        assert converted.startswith("sqlite+aiosqlite:///")
        assert "aiosqlite+aiosqlite" not in converted


def test_module_engine_uses_converted_url():
    assert database.database_url == to_async_url(main.settings.database_url)
    assert "aiosqlite+aiosqlite" not in database.database_url


def test_startup_creates_tables_and_warns_once(monkeypatch, caplog):
    init_db = AsyncMock()
    monkeypatch.setattr(main, "init_db", init_db)
    monkeypatch.setattr(main.settings, "gemini_api_key", "")

    with caplog.at_level(logging.WARNING, logger="main"):
        with TestClient(main.app) as client:
            assert client.get("/health").status_code == 200

    init_db.assert_awaited_once()
    warnings = [r for r in caplog.records if "GEMINI_API_KEY" in r.getMessage()]
    assert len(warnings) == 1
