"""Unit tests for environment-backed settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from app.core.config import DEFAULT_LOCALES_DIR
from app.core.config import get_app_settings
from app.core.config import redact_database_url


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_app_settings.cache_clear()
    yield
    get_app_settings.cache_clear()


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("USERDIR_DATABASE_URL", "postgresql+psycopg://app:s3cret@db:5432/users")
    monkeypatch.setenv("USERDIR_DEFAULT_LANGUAGE", "id")
    monkeypatch.setenv("USERDIR_LOCALES_DIR", str(tmp_path))
    monkeypatch.setenv("USERDIR_DEFAULT_PAGE_SIZE", "50")

    settings = get_app_settings()

    assert settings.default_language == "id"
    assert settings.locales_dir == tmp_path
    assert settings.default_page_size == 50
    assert settings.safe_for_logging()["database_url"] == "postgresql+psycopg://app:<redacted>@db:5432/users"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("USERDIR_DEFAULT_LANGUAGE", "USERDIR_LOCALES_DIR", "USERDIR_LOG_LEVEL", "USERDIR_DEFAULT_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)

    settings = get_app_settings()

    assert settings.default_language == "en"
    assert settings.locales_dir == DEFAULT_LOCALES_DIR
    assert settings.log_level == "INFO"
    assert settings.default_page_size == 20


def test_redact_leaves_passwordless_urls_untouched() -> None:
    assert redact_database_url("sqlite+pysqlite:///:memory:") == "sqlite+pysqlite:///:memory:"
