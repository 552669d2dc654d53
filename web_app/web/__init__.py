"""Server-rendered front end."""

from .routes import router as web_router
from .api_client import ShortenerAPIClient, APIClientError

__all__ = ["web_router", "ShortenerAPIClient", "APIClientError"]
