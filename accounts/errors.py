"""Translate raised failures into structured JSON error responses."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import AccountsError, FailureKind, ValidationFailed

logger = logging.getLogger("accounts.errors")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

FAILURE_STATUS: Dict[FailureKind, Tuple[int, str]] = {
    FailureKind.USER_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Not Found"),
    FailureKind.DUPLICATE_USER: (status.HTTP_409_CONFLICT, "Conflict"),
    FailureKind.VALIDATION_FAILED: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    FailureKind.INVALID_INPUT: (status.HTTP_400_BAD_REQUEST, "Bad Request"),
    FailureKind.MISSING_PARAMETER: (status.HTTP_400_BAD_REQUEST, "Bad Request"),
    FailureKind.UNCLASSIFIED: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
}


class ErrorPayload(BaseModel):
    status: int
    error: str
    message: str
    path: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    details: Optional[List[str]] = None


def map_failure(exc: AccountsError, path: str) -> ErrorPayload:
    """Build the payload for ``exc`` according to :data:`FAILURE_STATUS`."""

    status_code, label = FAILURE_STATUS[exc.kind]
    if exc.kind is FailureKind.UNCLASSIFIED:
        message = UNEXPECTED_ERROR_MESSAGE
    else:
        message = exc.message
    details = list(exc.details) if exc.kind is FailureKind.VALIDATION_FAILED else None
    return ErrorPayload(status=status_code, error=label, message=message, path=path, details=details)


def _render(payload: ErrorPayload) -> JSONResponse:
    return JSONResponse(
        status_code=payload.status,
        content=payload.model_dump(mode="json", exclude_none=True),
    )


def _format_location(loc: Tuple[object, ...]) -> str:
    if not loc:
        return "request"
    parts = [str(part) for part in loc if part not in ("body", "query")]
    return ".".join(parts) or str(loc[0])


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every failure into an :class:`ErrorPayload`."""

    @app.exception_handler(AccountsError)
    async def handle_accounts_error(request: Request, exc: AccountsError) -> JSONResponse:
        return _render(map_failure(exc, request.url.path))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            f"{_format_location(tuple(error.get('loc', ())))}: {error.get('msg', 'Invalid value')}"
            for error in exc.errors()
        ]
        return _render(map_failure(ValidationFailed(details), request.url.path))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        try:
            label = HTTPStatus(exc.status_code).phrase
        except ValueError:
            label = "Error"
        payload = ErrorPayload(
            status=exc.status_code,
            error=label,
            message=str(exc.detail),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=payload.model_dump(mode="json", exclude_none=True),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error while processing %s %s", request.method, request.url.path)
        return _render(map_failure(AccountsError(str(exc)), request.url.path))


__all__ = [
    "ErrorPayload",
    "FAILURE_STATUS",
    "UNEXPECTED_ERROR_MESSAGE",
    "map_failure",
    "register_exception_handlers",
]
