"""
Global middleware and error-to-response mapping.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from auth.errors import AuthError, ValidationError

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # handled here so the server error middleware does not log it again
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"errors": [{"msg": "Server error"}]},
            )
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response


def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    errors = []
    for err in exc.errors():
        loc = err.get("loc", ())
        entry: Dict[str, Any] = {"msg": err.get("msg", "Invalid value")}
        if len(loc) > 1:
            entry["param"] = ".".join(str(p) for p in loc[1:])
        if loc:
            entry["location"] = str(loc[0])
        errors.append(entry)
    return errors


def _respond(exc: AuthError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"errors": exc.to_errors()})


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error kind to its status code and ``{"errors": [...]}`` body."""

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc,
                exc_info=exc.__cause__ or exc,
            )
        else:
            logger.info(
                "%s %s rejected (%s): %s",
                request.method, request.url.path, type(exc).__name__, exc,
            )
        return _respond(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError(_field_errors(exc))
        logger.info("%s %s invalid input: %s", request.method, request.url.path, error)
        return _respond(error)
