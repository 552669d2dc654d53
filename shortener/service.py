"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict

from .shortcode import ShortCodeGenerator
from .database.base import URLShortenerDBBase
from .database.cache import RedisCache
from .database.models import ShortUrl
from .common.validators import is_valid_url, is_valid_path, RESERVED_PATHS
from .errors import NotFoundError, PathConflictError, PathGenerationError, ValidationError


MAX_GENERATION_ATTEMPTS = 10


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        db: URLShortenerDBBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_generation_attempts: int = MAX_GENERATION_ATTEMPTS,
        max_path_length: int = 64,
    ):
        """Initialize URL shortener service.

        Args:
            db: Database instance
            cache: Optional cache instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_generation_attempts: Inserts tried with generated paths before giving up
            max_path_length: Longest accepted user supplied path
        """
        if max_generation_attempts < 1:
            raise ValueError("max_generation_attempts must be at least 1")
        self.db = db
        self.cache = cache
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_generation_attempts = max_generation_attempts
        self.max_path_length = max_path_length

    async def create_short_url(
        self,
        destination: str,
        path: Optional[str] = None,
    ) -> ShortUrl:
        """Create a new short URL.

        Args:
            destination: The URL the short path points to
            path: Optional caller chosen path; generated when empty

        Returns:
            The stored mapping

        Raises:
            ValidationError: If the destination or path is invalid
            PathConflictError: If the chosen path already exists
            PathGenerationError: If no free generated path was found
        """
        is_valid, error = is_valid_url(destination)
        if not is_valid:
            raise ValidationError(f"Invalid destination: {error}")

        if path:
            is_valid, error = is_valid_path(path, max_length=self.max_path_length)
            if not is_valid:
                raise ValidationError(f"Invalid path: {error}")

            try:
                short_url = await self.db.insert_short_url(path, destination)
            except PathConflictError:
                self.logger.info(f"Rejected duplicate path: {path}")
                raise
        else:
            short_url = await self._insert_with_generated_path(destination)

        if self.cache:
            await self.cache.set_short_url(short_url)

        self.logger.info(f"Created short URL: {short_url.path} -> {destination}")
        return short_url

    async def get_by_path(self, path: str) -> ShortUrl:
        """Resolve a path.

        Args:
            path: The short path to lookup

        Returns:
            The stored mapping

        Raises:
            NotFoundError: If no mapping exists for the path
        """
        if self.cache:
            cached = await self.cache.get_short_url(path)
            if cached:
                self.logger.debug(f"Cache hit for {path}")
                return cached

        short_url = await self.db.get_short_url(path)
        if short_url is None:
            self.logger.info(f"Path not found: {path}")
            raise NotFoundError(f"Short URL with path '{path}' not found.")

        if self.cache:
            await self.cache.set_short_url(short_url)

        self.logger.debug(f"Resolved {path} -> {short_url.destination}")
        return short_url

    async def delete_short_url(self, path: str) -> None:
        """Delete a short URL.

        Args:
            path: The short path to delete

        Raises:
            NotFoundError: If no mapping exists for the path
        """
        # Evict after the DB delete; a read racing it may have re-cached the row
        deleted = await self.db.delete_short_url(path)
        if self.cache:
            await self.cache.delete(path)

        if not deleted:
            self.logger.info(f"Delete of unknown path: {path}")
            raise NotFoundError(f"Short URL with path '{path}' not found.")

        self.logger.info(f"Deleted short URL: {path}")

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status; the cache counts as healthy when not configured
        """
        db_healthy = await self.db.health_check()

        cache_healthy = True
        if self.cache and self.cache.configured:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def _insert_with_generated_path(self, destination: str) -> ShortUrl:
        """Insert under fresh random paths until the unique constraint accepts one.

        Raises:
            PathGenerationError: If every attempt collided
        """
        for attempt in range(1, self.max_generation_attempts + 1):
            path = self.generator.generate_random()
            if path.lower() in RESERVED_PATHS:
                continue

            try:
                short_url = await self.db.insert_short_url(path, destination)
            except PathConflictError:
                self.logger.warning(
                    f"Generated path collision on attempt {attempt}/{self.max_generation_attempts}: {path}"
                )
                continue

            if attempt > 1:
                self.logger.debug(f"Generated path after {attempt} attempts: {path}")
            return short_url

        self.logger.error(
            f"Unable to generate a unique path after {self.max_generation_attempts} attempts"
        )
        raise PathGenerationError(
            f"Unable to generate a unique path after {self.max_generation_attempts} attempts."
        )

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
        if self.cache:
            await self.cache.close()
