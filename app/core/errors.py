"""API error envelope and exception handler registration."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.response.constants import ErrorCode
from app.response.service import REQUEST_MESSAGE_PREFIX
from app.response.service import ResponseService
from app.response.service import get_response_service
from app.schemas.response import FieldError
from app.schemas.response import ValidationFailure

logger = logging.getLogger(__name__)

ERROR_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.GENERAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_EXIST: status.HTTP_409_CONFLICT,
    ErrorCode.USER_EMAIL_EXIST: status.HTTP_409_CONFLICT,
    ErrorCode.USER_MOBILE_NUMBER_EXIST: status.HTTP_409_CONFLICT,
    ErrorCode.USER_ROLE_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
}

FALLBACK_ERROR_BODY = {"statusCode": int(ErrorCode.GENERAL_ERROR), "message": "Internal server error"}

FALLBACK_RULE = "invalid"


class EnvelopeError(Exception):
    """Domain exception rendered as a localized error envelope."""

    def __init__(
        self,
        code: ErrorCode,
        *,
        errors: Sequence[FieldError] | None = None,
        http_status: int | None = None,
    ) -> None:
        super().__init__(code.name)
        self.code = code
        self.errors = list(errors) if errors is not None else None
        self.http_status = http_status or ERROR_HTTP_STATUS.get(code, status.HTTP_400_BAD_REQUEST)


class NotFoundError(EnvelopeError):
    """Convenience exception for missing resources."""

    def __init__(self, code: ErrorCode = ErrorCode.NOT_FOUND) -> None:
        super().__init__(code, http_status=status.HTTP_404_NOT_FOUND)


def _response_service(request: Request) -> ResponseService:
    provider = request.app.dependency_overrides.get(get_response_service, get_response_service)
    return provider()


def _build_error_response(
    service: ResponseService,
    *,
    http_status: int,
    code: ErrorCode,
    errors: Sequence[FieldError] | None = None,
) -> JSONResponse:
    envelope = service.error(code, errors)
    return JSONResponse(status_code=http_status, content=envelope.to_payload())


def _http_error_code(status_code: int) -> ErrorCode:
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.NOT_FOUND
    if status_code in (status.HTTP_400_BAD_REQUEST, 422):
        return ErrorCode.VALIDATION_FAILED
    return ErrorCode.GENERAL_ERROR


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    prefixes = {"body", "query", "path", "header", "cookie"}
    filtered = [str(part) for part in location if part not in prefixes]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def validation_failures(exc: RequestValidationError, service: ResponseService) -> list[ValidationFailure]:
    """Convert FastAPI validation issues into raw per-field validation failures."""
    failures: list[ValidationFailure] = []
    for issue in exc.errors():
        rule = str(issue.get("type", FALLBACK_RULE))
        if not service.language.has(f"{REQUEST_MESSAGE_PREFIX}{rule}"):
            rule = FALLBACK_RULE
        failures.append(
            ValidationFailure(
                property_name=_format_location(issue.get("loc", ())),
                value=issue.get("input"),
                constraints={rule: str(issue.get("msg", "Invalid value"))},
            )
        )
    return failures


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to the localized error envelope."""
    service = _response_service(request)
    errors = service.resolve_constraint_errors(validation_failures(exc, service))
    return _build_error_response(
        service,
        http_status=status.HTTP_400_BAD_REQUEST,
        code=ErrorCode.VALIDATION_FAILED,
        errors=errors,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize HTTP exceptions to the localized error envelope."""
    return _build_error_response(
        _response_service(request),
        http_status=exc.status_code,
        code=_http_error_code(exc.status_code),
    )


async def envelope_error_handler(request: Request, exc: EnvelopeError) -> JSONResponse:
    """Return explicit domain errors in the shared envelope."""
    return _build_error_response(
        _response_service(request),
        http_status=exc.http_status,
        code=exc.code,
        errors=exc.errors,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure and answer with a general error envelope."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    try:
        return _build_error_response(
            _response_service(request),
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code=ErrorCode.GENERAL_ERROR,
        )
    except LookupError:
        logger.exception("General error message could not be resolved")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=FALLBACK_ERROR_BODY)


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(EnvelopeError, envelope_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
