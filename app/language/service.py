"""Localized message lookup backed by JSON catalog files."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any

from app.core.config import get_app_settings
from app.core.exceptions import LanguageNotAvailable
from app.core.exceptions import LocalizationKeyMissing

logger = logging.getLogger(__name__)


def flatten_catalog(catalog: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested catalog objects into dotted message keys."""
    flat: dict[str, str] = {}
    for name, value in catalog.items():
        key = f"{prefix}.{name}" if prefix else str(name)
        if isinstance(value, Mapping):
            flat.update(flatten_catalog(value, key))
        else:
            flat[key] = str(value)
    return flat


class LanguageService:
    """Resolve message keys to text in one language."""

    def __init__(self, language: str, locales_dir: Path) -> None:
        self.language = language
        self.locales_dir = Path(locales_dir)
        self._messages: Mapping[str, str] = self._load()

    def _catalog_path(self) -> Path:
        return self.locales_dir / f"{self.language}.json"

    def _load(self) -> Mapping[str, str]:
        path = self._catalog_path()
        if not path.is_file():
            raise LanguageNotAvailable(self.language)
        with path.open(encoding="utf-8") as handle:
            raw = json.load(handle)
        messages = flatten_catalog(raw)
        logger.debug("Loaded %d messages for language=%s", len(messages), self.language)
        return MappingProxyType(messages)

    def reload(self) -> None:
        """Re-read the catalog file and swap it in as a whole."""
        self._messages = self._load()

    def get(self, key: str) -> str:
        messages = self._messages
        try:
            return messages[key]
        except KeyError:
            raise LocalizationKeyMissing(key, self.language) from None

    def has(self, key: str) -> bool:
        return key in self._messages


@lru_cache(maxsize=1)
def get_language_service() -> LanguageService:
    """Return the language service for the configured default language."""
    settings = get_app_settings()
    return LanguageService(settings.default_language, settings.locales_dir)
