# src/errcode/infrastructure/http/errors.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""FastAPI exception handlers for structured errors.

Summary:
    Map any exception reaching the HTTP boundary to the canonical error
    envelope. The cause chain is searched for a structured
    :class:`~errcode.domain.error.Error`; when found, its status code and
    rendered message are returned to the client. Wrapping context stays in
    the logs and never reaches the response body.

Envelope:
    {"error": {"code": 4, "http_status": 400, "message": "Invalid username",
               "trace_id": "..."}}

    Exceptions without a structured error in their chain become a 500 with
    ``code == "INTERNAL_ERROR"``.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from errcode.config.settings import Environment, Settings, get_settings
from errcode.domain.error import Error
from errcode.domain.unwrap import WrappedError, hard_unwrap, iter_chain
from errcode.infrastructure.logging.logger import get_json_logger, get_trace_id

__all__ = [
    "TRACE_HEADER",
    "error_envelope",
    "handle_exception",
    "install_error_handlers",
]

logger = get_json_logger(__name__)

TRACE_HEADER = "x-trace-id"


def _trace_id(request: Request) -> str | None:
    state_trace = getattr(getattr(request, "state", None), "trace_id", None)
    return state_trace or request.headers.get(TRACE_HEADER) or get_trace_id()


def _settings_for(request: Request) -> Settings:
    settings = getattr(request.app.state, "errcode_settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


def _chain_summary(exc: BaseException, max_depth: int) -> list[str]:
    return [type(link).__name__ for link in iter_chain(exc, max_depth=max_depth)]


def error_envelope(
    *,
    code: int | str,
    http_status: int,
    message: str,
    details: dict[str, Any] | None = None,
    trace_id: str | None = None,
) -> dict[str, Any]:
    err: dict[str, Any] = {
        "code": code,
        "http_status": http_status,
        "message": message,
    }
    if details is not None:
        err["details"] = details
    if trace_id is not None:
        err["trace_id"] = trace_id
    return {"error": err}


def _structured_response(
    request: Request, exc: Exception, structured: Error, settings: Settings
) -> Response:
    logger.warning(
        "errcode.structured_error",
        extra={
            "extra": {
                "error_code": structured.code,
                "http_status_code": structured.http_status_code,
                "error": str(exc),
                "chain": _chain_summary(exc, settings.max_unwrap_depth),
                "path": request.url.path,
            }
        },
    )
    payload = error_envelope(
        code=structured.code,
        http_status=structured.http_status_code,
        message=structured.message,
        trace_id=_trace_id(request),
    )
    return JSONResponse(status_code=structured.http_status_code, content=payload)


def _internal_response(request: Request, exc: Exception, settings: Settings) -> Response:
    logger.error(
        "errcode.unhandled_exception",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "extra": {
                "chain": _chain_summary(exc, settings.max_unwrap_depth),
                "path": request.url.path,
            }
        },
    )
    details: dict[str, Any] | None = None
    if settings.expose_internal_messages and settings.environment is not Environment.PRODUCTION:
        details = {"exception": type(exc).__name__, "error": str(exc)}
    payload = error_envelope(
        code="INTERNAL_ERROR",
        http_status=500,
        message="Internal server error",
        details=details,
        trace_id=_trace_id(request),
    )
    return JSONResponse(status_code=500, content=payload)


async def handle_exception(request: Request, exc: Exception) -> Response:
    """Render ``exc`` as an error envelope.

    Args:
        request: Incoming request.
        exc: Exception raised by the route or a dependency.

    Returns:
        JSON response using the structured error's status and message, or a
        500 envelope when the cause chain holds no structured error.
    """
    settings = _settings_for(request)
    structured, found = hard_unwrap(exc, max_depth=settings.max_unwrap_depth)
    if found and structured is not None:
        return _structured_response(request, exc, structured, settings)
    return _internal_response(request, exc, settings)


def install_error_handlers(app: FastAPI, settings: Settings | None = None) -> None:
    """Register the errcode handlers on ``app``.

    Structured errors and :class:`WrappedError` are handled by Starlette's
    exception middleware. Any other exception falls through to the server
    error middleware, which still renders the envelope (including structured
    errors found behind ``raise ... from``) and then re-raises for the server.

    Args:
        app: FastAPI application.
        settings: Settings to use instead of :func:`get_settings`.
    """
    if settings is not None:
        app.state.errcode_settings = settings
    app.add_exception_handler(Error, handle_exception)
    app.add_exception_handler(WrappedError, handle_exception)
    app.add_exception_handler(Exception, handle_exception)
