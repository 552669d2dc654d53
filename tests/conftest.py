"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

import httpx
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.database.sqlite import URLShortenerSQLite
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app, create_frontend_app
from web_app.web.api_client import ShortenerAPIClient


class SequenceRandom:
    """Random source whose ``choices`` replays fixed codes, one per call."""

    def __init__(self, codes):
        self.codes = list(codes)
        self.calls = 0

    def choices(self, population, k):
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return list(code[:k])


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'shortener.sqlite3'}"


@pytest.fixture
async def test_db(database_url, logger) -> AsyncGenerator[URLShortenerSQLite, None]:
    """Create test database instance."""
    db = URLShortenerSQLite(db_config=database_url, logger=logger)
    await db.ensure_schema()

    yield db

    await db.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
async def service(test_db, short_code_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        db=test_db,
        cache=None,  # No cache for tests
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config(database_url) -> Config:
    return Config(
        database_url=database_url,
        base_url="http://testserver",
        api_url="http://api",
    )


@pytest.fixture
def api_app(test_db, service, config):
    """Create test API app."""
    return create_app(
        db_instance=test_db,
        cache_instance=None,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(api_app):
    """Create API test client."""
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
async def api_client(api_app, logger):
    """Front end API client wired to the in-process API app."""
    http_client = httpx.AsyncClient(transport=ASGITransport(app=api_app), base_url="http://api")
    api_client = ShortenerAPIClient(api_url="http://api", client=http_client, logger=logger)

    yield api_client

    await api_client.close()


@pytest.fixture
def frontend_app(api_client, config):
    """Create test front end app."""
    return create_frontend_app(api_client=api_client, config=config)


@pytest.fixture
async def web_client(frontend_app):
    """Create front end test client."""
    async with AsyncClient(transport=ASGITransport(app=frontend_app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
