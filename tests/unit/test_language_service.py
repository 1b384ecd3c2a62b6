"""Unit tests for JSON-backed localization lookup."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from app.core.config import DEFAULT_LOCALES_DIR
from app.core.exceptions import LanguageNotAvailable
from app.core.exceptions import LocalizationKeyMissing
from app.language.service import LanguageService
from app.language.service import flatten_catalog
from app.response.constants import MESSAGE_CATALOG


def _write_catalog(directory: Path, language: str, catalog: dict) -> None:
    (directory / f"{language}.json").write_text(json.dumps(catalog), encoding="utf-8")


def test_flatten_catalog_joins_nested_keys_with_dots() -> None:
    flat = flatten_catalog({"user": {"error": {"emailExist": "taken"}}, "ok": "fine"})

    assert flat == {"user.error.emailExist": "taken", "ok": "fine"}


def test_get_returns_translation(tmp_path: Path) -> None:
    _write_catalog(tmp_path, "en", {"request": {"min": "$property must be at least $value"}})
    service = LanguageService("en", tmp_path)

    assert service.get("request.min") == "$property must be at least $value"
    assert service.has("request.min")


def test_unknown_key_fails_instead_of_echoing_key(tmp_path: Path) -> None:
    _write_catalog(tmp_path, "en", {"known": "yes"})
    service = LanguageService("en", tmp_path)

    with pytest.raises(LocalizationKeyMissing) as excinfo:
        service.get("unknown.key")

    assert excinfo.value.key == "unknown.key"
    assert excinfo.value.language == "en"
    assert not service.has("unknown.key")


def test_missing_language_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(LanguageNotAvailable):
        LanguageService("fr", tmp_path)


def test_reload_swaps_in_new_catalog(tmp_path: Path) -> None:
    _write_catalog(tmp_path, "en", {"greeting": "hello"})
    service = LanguageService("en", tmp_path)

    _write_catalog(tmp_path, "en", {"greeting": "hi", "farewell": "bye"})
    service.reload()

    assert service.get("greeting") == "hi"
    assert service.get("farewell") == "bye"


@pytest.mark.parametrize("language", ["en", "id"])
def test_bundled_catalogs_cover_every_status_message(language: str) -> None:
    service = LanguageService(language, DEFAULT_LOCALES_DIR)

    for entry in MESSAGE_CATALOG:
        assert service.get(entry.message_key)
    assert service.has("request.invalid")
