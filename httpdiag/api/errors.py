"""Shared HTTP error helpers and exception handlers for API routes."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from httpdiag.service.errors import RequestError

_LOG = logging.getLogger(__name__)

ERROR_LABEL = "ERROR"


def log_error(msg: str, label: str = ERROR_LABEL) -> None:
    """Write the single log line recorded for a handler failure."""
    _LOG.error("%s %s", label, msg)


def error_response(msg: str, label: str = ERROR_LABEL) -> PlainTextResponse:
    """Log ``msg`` and return it as a plain-text HTTP 500 body."""
    log_error(msg, label)
    return PlainTextResponse(msg, status_code=500)


def http_500(exc: Exception) -> PlainTextResponse:
    """Map a request error to its plain-text 500 response."""
    return error_response(str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Register process-wide FastAPI exception handlers."""

    @app.exception_handler(RequestError)
    async def _request_error_handler(_: Request, exc: RequestError):
        return http_500(exc)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(_: Request, exc: Exception):
        _LOG.exception("Unhandled API exception")
        return PlainTextResponse(str(exc), status_code=500)
