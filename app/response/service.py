"""Localized message resolution and response envelope construction."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from functools import lru_cache
import logging
from typing import Any

from app.core.exceptions import MalformedValidationFailure
from app.language.service import LanguageService
from app.language.service import get_language_service
from app.response.constants import ErrorCode
from app.response.constants import StatusCodeRegistry
from app.response.constants import StatusKind
from app.response.constants import SuccessCode
from app.response.constants import get_status_registry
from app.schemas.response import ErrorEnvelope
from app.schemas.response import FieldError
from app.schemas.response import FieldErrorCode
from app.schemas.response import ResolvedMessage
from app.schemas.response import SuccessEnvelope
from app.schemas.response import ValidationFailure

logger = logging.getLogger(__name__)

REQUEST_MESSAGE_PREFIX = "request."


def substitute(template: str, *, property_name: str, value: Any) -> str:
    """Replace every ``$property`` and ``$value`` token in a message template.

    Substituted text is not scanned again, so tokens inside the property name
    or the value are kept literally.
    """
    pieces = [piece.replace("$value", str(value)) for piece in template.split("$property")]
    return property_name.join(pieces)


class ResponseService:
    """Turn status codes into localized messages and response envelopes."""

    def __init__(
        self,
        language_service: LanguageService,
        registry: StatusCodeRegistry,
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self._language = language_service
        self._registry = registry
        self._logger = log or logger

    @property
    def language(self) -> LanguageService:
        return self._language

    def resolve(self, status_code: SuccessCode | ErrorCode) -> ResolvedMessage:
        """Return the localized message for ``status_code``."""
        entry = self._registry.lookup(status_code)
        message = self._language.get(entry.message_key)
        return ResolvedMessage(status_code=status_code, message=message)

    def resolve_field_errors(
        self,
        errors: Sequence[FieldErrorCode | Mapping[str, Any]],
    ) -> list[FieldError]:
        """Localize field-level error codes, keeping input order and duplicates."""
        resolved: list[FieldError] = []
        for item in errors:
            error = item if isinstance(item, FieldErrorCode) else FieldErrorCode.model_validate(item)
            message = self.resolve(error.status_code).message
            resolved.append(FieldError(property_name=error.property_name, message=message))
        return resolved

    def resolve_constraint_errors(
        self,
        raw_constraints: Sequence[ValidationFailure | Mapping[str, Any]],
    ) -> list[FieldError]:
        """Localize raw validation failures, one message per field.

        Only the first failed rule of each field is reported, following the
        iteration order of its ``constraints`` mapping.
        """
        resolved: list[FieldError] = []
        for item in raw_constraints:
            failure = item if isinstance(item, ValidationFailure) else ValidationFailure.model_validate(item)
            rule_name = next(iter(failure.constraints or {}), None)
            if rule_name is None:
                raise MalformedValidationFailure(failure.property_name)

            template = self._language.get(f"{REQUEST_MESSAGE_PREFIX}{rule_name}")
            message = substitute(template, property_name=failure.property_name, value=failure.value)
            resolved.append(FieldError(property_name=failure.property_name, message=message))
        return resolved

    def _code_of_kind(self, status_code: int, kind: StatusKind) -> int:
        # Plain integers are accepted and mapped to their enum member.
        if isinstance(status_code, bool) or not isinstance(status_code, int):
            raise TypeError(f"Status code must be an integer, got {status_code!r}")
        entry = self._registry.lookup(status_code)
        if entry.kind is not kind:
            raise TypeError(
                f"{kind.value.capitalize()} envelopes cannot carry {entry.kind.value} code {status_code!r}"
            )
        return entry.status_code

    def error(
        self,
        status_code: ErrorCode | int,
        errors: Sequence[FieldError] | None = None,
    ) -> ErrorEnvelope:
        """Build an error envelope and log it at error level."""
        status_code = ErrorCode(self._code_of_kind(status_code, StatusKind.ERROR))

        resolved = self.resolve(status_code)
        envelope = ErrorEnvelope(
            status_code=status_code,
            message=resolved.message,
            errors=list(errors) if errors is not None else None,
        )
        payload = envelope.to_payload()
        self._logger.error("Error response=%s", payload, extra={"response": payload})
        return envelope

    def success(
        self,
        status_code: SuccessCode | int,
        data: dict[str, Any] | list[dict[str, Any]] | None = None,
    ) -> SuccessEnvelope:
        """Build a success envelope and log it at info level."""
        status_code = SuccessCode(self._code_of_kind(status_code, StatusKind.SUCCESS))

        resolved = self.resolve(status_code)
        envelope = SuccessEnvelope(status_code=status_code, message=resolved.message, data=data)
        payload = envelope.to_payload()
        self._logger.info("Success response=%s", payload, extra={"response": payload})
        return envelope

    def raw(self, response: dict[str, Any]) -> dict[str, Any]:
        """Log a response that bypasses the standard envelope and return it as-is."""
        self._logger.info("Raw response=%s", response, extra={"response": response})
        return response


@lru_cache(maxsize=1)
def get_response_service() -> ResponseService:
    """Return the process-wide response service."""
    return ResponseService(get_language_service(), get_status_registry())
