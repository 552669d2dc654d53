"""Cache-Control / Vary headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable


class CacheHeadersMiddleware(BaseHTTPMiddleware):
    """Default ``Cache-Control: public, max-age=N`` and ``Vary: Accept-Encoding`` on every response.

    Routes that set their own Cache-Control keep it.
    """

    def __init__(self, app, max_age: int = 10):
        super().__init__(app)
        self.max_age = max_age

    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)
        response.headers.setdefault("Cache-Control", f"public, max-age={self.max_age}")
        response.headers["Vary"] = "Accept-Encoding"
        return response
