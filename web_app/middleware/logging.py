"""Request/response logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable, Iterable, Optional

from shortener.common.links import extract_forwarded_headers
from shortener.common.logging_config import get_logger

# Probes hit these every few seconds; keep them out of INFO
QUIET_PATHS = ("/hc", "/liveness", "/static/")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and one per response, at a level matching the status."""

    def __init__(
        self,
        app,
        logger: Optional[logging.Logger] = None,
        quiet_paths: Iterable[str] = QUIET_PATHS,
    ):
        super().__init__(app)
        self.logger = logger or get_logger("web")
        self.quiet_paths = tuple(quiet_paths)

    def _client_ip(self, request: Request) -> str:
        forwarded_for = extract_forwarded_headers(dict(request.headers))["forwarded_for"]
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _level_for(self, path: str, status_code: int) -> int:
        if status_code >= 500:
            return logging.ERROR
        if path.startswith(self.quiet_paths):
            return logging.DEBUG
        if status_code >= 400:
            return logging.WARNING
        return logging.INFO

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        path = request.url.path

        self.logger.log(
            self._level_for(path, 200),
            f"Request: {request.method} {path} from {self._client_ip(request)}",
        )

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        self.logger.log(
            self._level_for(path, response.status_code),
            f"Response: {request.method} {path} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms",
        )

        return response
