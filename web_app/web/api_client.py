"""HTTP client the front end uses to call the shortener API."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from shortener.common.logging_config import get_logger

UNEXPECTED_ERROR_MESSAGE = "An unexpected error has occurred."


class APIClientError(Exception):
    """Non-success answer (or no answer) from the API."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message or UNEXPECTED_ERROR_MESSAGE
        super().__init__(f"{status_code}: {self.message}")

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class ShortenerAPIClient:
    """Thin async wrapper over the API routes."""

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize API client.

        Args:
            api_url: API base URL (e.g. http://localhost:9200)
            timeout_seconds: Per request timeout
            client: Preconfigured httpx client (tests pass one bound to the ASGI app)
            logger: Optional logger
        """
        self.api_url = api_url.rstrip("/")
        self.logger = logger or get_logger("api_client")
        self.client = client or httpx.AsyncClient(base_url=self.api_url, timeout=timeout_seconds)

    async def _request(self, method: str, url: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        try:
            response = await self.client.request(method, url, json=json)
        except httpx.HTTPError as e:
            self.logger.error(f"API request {method} {url} failed: {e}")
            raise APIClientError(503)

        if response.is_success:
            return response

        message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        # Proxies in front of the API may answer with any JSON shape
        if isinstance(body, dict) and isinstance(body.get("Message"), str):
            message = body["Message"]
        self.logger.info(f"API request {method} {url} returned {response.status_code}: {message}")
        raise APIClientError(response.status_code, message)

    async def create(self, destination: str, path: Optional[str] = None) -> Dict[str, Any]:
        """POST / ; returns ``{"Path", "Destination"}``."""
        body = {"Destination": destination}
        if path:
            body["Path"] = path
        response = await self._request("POST", "/", json=body)
        return response.json()

    async def get_by_path(self, path: str) -> Dict[str, Any]:
        """POST /get-path."""
        response = await self._request("POST", "/get-path", json={"Path": path})
        return response.json()

    async def resolve(self, path: str) -> Dict[str, Any]:
        """GET /{path}."""
        response = await self._request("GET", f"/{quote(path, safe='')}")
        return response.json()

    async def delete(self, path: str) -> None:
        """DELETE /{path}."""
        await self._request("DELETE", f"/{quote(path, safe='')}")

    async def close(self) -> None:
        await self.client.aclose()
