"""SQLite implementation for URL shortener (local development and tests)."""

import os
import sqlite3
import asyncio
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse

from .base import URLShortenerDBBase
from .models import ShortUrl
from ..errors import PathConflictError


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS short_urls (
    path TEXT PRIMARY KEY,
    destination TEXT NOT NULL,
    created_at TEXT NOT NULL
);
"""


def sqlite_path_from_url(db_config: str) -> str:
    """Turn ``sqlite:///relative.db`` or ``sqlite:////abs/path.db`` into a file path."""
    parsed = urlparse(db_config)
    if parsed.scheme != "sqlite":
        raise ValueError(f"Not a sqlite URL: {db_config}")
    # urlparse keeps the leading slash of the path component
    path = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
    if not path:
        raise ValueError("sqlite URL must name a database file")
    return path


class URLShortenerSQLite(URLShortenerDBBase):
    """SQLite implementation; each call opens its own connection in a worker thread."""

    def __init__(
        self,
        db_config: str,
        timeout_seconds: float = 5.0,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self.db_path = sqlite_path_from_url(db_config)
        self.timeout_seconds = timeout_seconds

    @contextmanager
    def _get_conn(self):
        conn = sqlite3.connect(self.db_path, timeout=self.timeout_seconds)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    # Sync helpers (run via asyncio.to_thread)

    def _ensure_schema(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.db_path))
        os.makedirs(directory, exist_ok=True)
        with self._get_conn() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def _insert(self, path: str, destination: str, created_at: datetime) -> None:
        with self._get_conn() as conn:
            try:
                conn.execute(
                    "INSERT INTO short_urls (path, destination, created_at) VALUES (?, ?, ?)",
                    (path, destination, created_at.isoformat()),
                )
                conn.commit()
            except sqlite3.IntegrityError:
                raise PathConflictError(f"Path '{path}' already exists")

    def _get(self, path: str) -> Optional[ShortUrl]:
        with self._get_conn() as conn:
            row = conn.execute(
                "SELECT path, destination, created_at FROM short_urls WHERE path = ?",
                (path,),
            ).fetchone()
        return ShortUrl.from_dict(dict(row)) if row else None

    def _delete(self, path: str) -> bool:
        with self._get_conn() as conn:
            cur = conn.execute("DELETE FROM short_urls WHERE path = ?", (path,))
            conn.commit()
            return cur.rowcount > 0

    def _ping(self) -> None:
        with self._get_conn() as conn:
            conn.execute("SELECT 1").fetchone()

    # Async interface

    async def ensure_schema(self) -> None:
        self.logger.info(f"Creating short_urls table in {self.db_path} if not exists...")
        await asyncio.to_thread(self._ensure_schema)

    async def insert_short_url(
        self,
        path: str,
        destination: str,
        created_at: Optional[datetime] = None,
    ) -> ShortUrl:
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        elif created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        await asyncio.to_thread(self._insert, path, destination, created_at)
        self.logger.debug(f"Inserted short URL: {path} -> {destination}")
        return ShortUrl(path=path, destination=destination, created_at=created_at)

    async def get_short_url(self, path: str) -> Optional[ShortUrl]:
        return await asyncio.to_thread(self._get, path)

    async def delete_short_url(self, path: str) -> bool:
        return await asyncio.to_thread(self._delete, path)

    async def health_check(self) -> bool:
        try:
            await asyncio.to_thread(self._ping)
            return True
        except sqlite3.Error as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        # Connections are per call; nothing held open
        return None
