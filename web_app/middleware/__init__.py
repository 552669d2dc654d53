"""Middleware for URL shortener web apps."""

from .cache_headers import CacheHeadersMiddleware
from .errors import ErrorHandlingMiddleware, register_exception_handlers
from .logging import LoggingMiddleware

__all__ = [
    "CacheHeadersMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
    "register_exception_handlers",
]
