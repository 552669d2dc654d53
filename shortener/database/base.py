"""Abstract base class for URL shortener database implementations."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime

from .models import ShortUrl


class URLShortenerDBBase(ABC):
    """Abstract base class for URL shortener database operations.

    Implementations must enforce path uniqueness in the table itself and
    raise ``PathConflictError`` from ``insert_short_url`` when it is violated.
    """

    def __init__(self, db_config: str):
        """Initialize database connection.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def ensure_schema(self) -> None:
        """Create the short_urls table if it does not exist."""
        pass

    @abstractmethod
    async def insert_short_url(
        self,
        path: str,
        destination: str,
        created_at: Optional[datetime] = None,
    ) -> ShortUrl:
        """Insert a new path -> destination mapping.

        Args:
            path: The short path to use
            destination: The destination URL
            created_at: Optional creation timestamp (defaults to now UTC)

        Returns:
            The stored mapping

        Raises:
            PathConflictError: If the path already exists
        """
        pass

    @abstractmethod
    async def get_short_url(self, path: str) -> Optional[ShortUrl]:
        """Get the mapping for a path.

        Args:
            path: The short path to lookup

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete_short_url(self, path: str) -> bool:
        """Delete a mapping.

        Args:
            path: The short path to delete

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass
