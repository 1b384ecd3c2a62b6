"""Response envelope schemas shared across API handlers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from app.response.constants import ErrorCode
from app.response.constants import SuccessCode


class WireModel(BaseModel):
    """Base model for camelCase wire payloads."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ResolvedMessage(WireModel):
    """Localized text for one status code."""

    status_code: SuccessCode | ErrorCode = Field(alias="statusCode")
    message: str


class FieldError(WireModel):
    """Single localized error tied to an input field."""

    property_name: str = Field(alias="property")
    message: str


class FieldErrorCode(WireModel):
    """Unresolved field error: a status code attached to an input field.

    The code is kept as a plain integer so that unknown codes reach the
    registry and fail there with ``MessageKeyNotFound``.
    """

    status_code: int = Field(alias="statusCode")
    property_name: str = Field(alias="property")


class ValidationFailure(WireModel):
    """Raw validation result for one field, possibly with several failed rules."""

    property_name: str = Field(alias="property")
    value: Any = None
    constraints: dict[str, str] | None = None


class SuccessEnvelope(WireModel):
    """Top-level API success response envelope."""

    status_code: SuccessCode = Field(alias="statusCode")
    message: str
    data: dict[str, Any] | list[dict[str, Any]] | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready wire body, omitting ``data`` when unset."""
        payload = self.model_dump(mode="json", by_alias=True)
        if payload["data"] is None:
            del payload["data"]
        return payload


class ErrorEnvelope(WireModel):
    """Top-level API error response envelope."""

    status_code: ErrorCode = Field(alias="statusCode")
    message: str
    errors: list[FieldError] | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready wire body, omitting ``errors`` when unset."""
        payload = self.model_dump(mode="json", by_alias=True)
        if payload["errors"] is None:
            del payload["errors"]
        return payload
