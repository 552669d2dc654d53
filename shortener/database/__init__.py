"""Database layer for URL shortener."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import URLShortenerDBBase
from .models import ShortUrl
from .postgres import URLShortenerPostgres
from .sqlite import URLShortenerSQLite
from .cache import RedisCache


def create_store(
    database_url: str,
    pool_max_size: int = 10,
    max_retry_count: int = 15,
    max_retry_delay_seconds: float = 30.0,
    logger: Optional[logging.Logger] = None,
) -> URLShortenerDBBase:
    """Build the store matching the URL scheme (postgresql://, postgres://, sqlite:///)."""
    scheme = urlparse(database_url).scheme
    if scheme in ("postgresql", "postgres"):
        return URLShortenerPostgres(
            db_config=database_url,
            pool_max_size=pool_max_size,
            max_retry_count=max_retry_count,
            max_retry_delay_seconds=max_retry_delay_seconds,
            logger=logger,
        )
    if scheme == "sqlite":
        return URLShortenerSQLite(db_config=database_url, logger=logger)
    raise ValueError(f"Unsupported database URL scheme: '{scheme}'")


__all__ = [
    "URLShortenerDBBase",
    "URLShortenerPostgres",
    "URLShortenerSQLite",
    "RedisCache",
    "ShortUrl",
    "create_store",
]
