"""Exception taxonomy for message resolution and localization."""

from __future__ import annotations

from typing import Any


class RegistryConfigurationError(ValueError):
    """Raised when the status code tables are inconsistent at load time."""


class MessageKeyNotFound(LookupError):
    """Raised when a status code has no registered catalog entry."""

    def __init__(self, status_code: Any) -> None:
        super().__init__(f"No message catalog entry for status code {status_code!r}")
        self.status_code = status_code


class LocalizationKeyMissing(LookupError):
    """Raised when a message key has no translation in the active language."""

    def __init__(self, key: str, language: str) -> None:
        super().__init__(f"Missing translation for key {key!r} in language {language!r}")
        self.key = key
        self.language = language


class LanguageNotAvailable(LookupError):
    """Raised when no catalog file exists for a requested language."""

    def __init__(self, language: str) -> None:
        super().__init__(f"No localization catalog for language {language!r}")
        self.language = language


class MalformedValidationFailure(ValueError):
    """Raised when a validation failure carries no constraint detail."""

    def __init__(self, property_name: str) -> None:
        super().__init__(f"Validation failure for {property_name!r} has no constraints")
        self.property = property_name
