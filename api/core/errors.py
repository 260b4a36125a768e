"""
Error taxonomy and the handlers that turn it into HTTP responses.

- ValidationFailure  -> 400 {"error": ...}
- FieldTypeError     -> 400 {"error": ...} (value cannot be stored in its column)
- not found          -> generic 404 responder (returned, not raised)
- PersistenceFailure -> 500 {"error": ...}; the cause is logged, not exposed
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .schema import FieldTypeError
from .store import StoreError

logger = logging.getLogger(__name__)


class ValidationFailure(ValueError):
    pass


class PersistenceFailure(RuntimeError):
    pass


@contextmanager
def persistence_failure(message: str) -> Iterator[None]:
    """
    Re-raise store errors as PersistenceFailure carrying a client-safe message.
    """
    try:
        yield
    except StoreError as exc:
        raise PersistenceFailure(message) from exc


def not_found(request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": f"Requested resource {request.url.path} does not exist"},
    )


async def _bad_request_handler(_: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _persistence_failure_handler(request: Request, exc: PersistenceFailure) -> JSONResponse:
    logger.error(
        "persistence_failure method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc.__cause__ or exc,
    )
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return not_found(request)
    return await http_exception_handler(request, exc)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error."})


def register_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailure, _bad_request_handler)
    app.add_exception_handler(FieldTypeError, _bad_request_handler)
    app.add_exception_handler(PersistenceFailure, _persistence_failure_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
