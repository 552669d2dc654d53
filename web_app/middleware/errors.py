"""
Error handling for consistent ``{StatusCode, Message}`` error bodies.
"""

import logging
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from shortener.errors import ShortenerError
from shortener.common.logging_config import get_logger

INTERNAL_ERROR_MESSAGE = "Internal Server Error."


def error_body(status_code: int, message: str, **extra) -> dict:
    return {"StatusCode": status_code, "Message": message, **extra}


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Catches service errors and converts them to their HTTP responses.

    Anything that is not a ``ShortenerError`` is logged with its traceback
    and answered with a generic 500; internals never reach the client.
    """

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or get_logger("api")

    async def dispatch(self, request: Request, call_next: Callable):
        try:
            return await call_next(request)
        except ShortenerError as e:
            if e.status_code >= 500:
                self.logger.error(f"Service error in {request.method} {request.url.path}: {e.message}")
            else:
                self.logger.info(f"{e.status_code} in {request.method} {request.url.path}: {e.message}")
            return JSONResponse(error_body(e.status_code, e.message), status_code=e.status_code)
        except Exception as e:
            self.logger.exception(f"Something went wrong: {e}")
            return JSONResponse(error_body(500, INTERNAL_ERROR_MESSAGE), status_code=500)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed bodies with 400 and the failing fields."""
    errors = {}
    for err in exc.errors():
        # Drop the leading "body"/"path" marker from the location
        field = ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
        errors.setdefault(field, []).append(err["msg"])
    return JSONResponse(
        error_body(400, "One or more validation errors occurred.", Errors=errors),
        status_code=400,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework raised HTTP errors (unknown route, wrong method) in the same shape."""
    return JSONResponse(
        error_body(exc.status_code, str(exc.detail)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
