"""
Error types and the terminal error handler.

Feature code signals failures by raising `ApiError` (or FastAPI's
`HTTPException`) with the status it wants; every error then lands in
`error_handler`, which renders `{"message": ..., "stack": ...}`.
"""
from __future__ import annotations

import logging
import traceback
from typing import Optional

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error carrying the HTTP status the response should use."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class AuthenticationError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT


def _status_for(exc: Exception) -> int:
    if isinstance(exc, (ApiError, StarletteHTTPException)):
        return exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, RequestValidationError):
        return 422
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _message_for(exc: Exception) -> str:
    if isinstance(exc, ApiError):
        return exc.message
    if isinstance(exc, StarletteHTTPException):
        return str(exc.detail)
    if isinstance(exc, RequestValidationError):
        parts = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()))
            parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        return "; ".join(parts) or "Request validation failed"
    return str(exc) or exc.__class__.__name__


def format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _is_production(request: Request) -> bool:
    config = getattr(request.app.state, "config", None)
    # Without a config, fail closed and hide traces
    return config is None or config.is_production


def error_body(request: Request, exc: Exception) -> dict:
    return {
        "message": _message_for(exc),
        "stack": None if _is_production(request) else format_stack(exc),
    }


async def error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.exception(
            "request_failed: method=%s path=%s status=%s",
            request.method, request.url.path, status_code, exc_info=exc,
        )
    else:
        logger.warning(
            "request_rejected: method=%s path=%s status=%s message=%s",
            request.method, request.url.path, status_code, _message_for(exc),
        )
    headers = getattr(exc, "headers", None)
    return JSONResponse(error_body(request, exc), status_code=status_code, headers=headers)


def install_error_handlers(app: FastAPI) -> None:
    """Route every error FastAPI can surface into `error_handler`."""
    app.add_exception_handler(ApiError, error_handler)
    app.add_exception_handler(StarletteHTTPException, error_handler)
    app.add_exception_handler(RequestValidationError, error_handler)
    app.add_exception_handler(Exception, error_handler)


__all__ = [
    "ApiError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "error_handler",
    "install_error_handlers",
]
