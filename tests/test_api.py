"""Tests for API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from shortener.database.cache import RedisCache
from shortener.database.sqlite import URLShortenerSQLite
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from web_app import create_app

from conftest import SequenceRandom


class BrokenSQLite(URLShortenerSQLite):
    """Store whose reads blow up and whose health check fails."""

    async def get_short_url(self, path):
        raise RuntimeError("disk on fire")

    async def health_check(self):
        return False


@pytest.fixture
async def broken_client(database_url, config, logger):
    db = BrokenSQLite(db_config=database_url, logger=logger)
    await db.ensure_schema()
    service = URLShortenerService(db=db, logger=logger)
    app = create_app(db_instance=db, cache_instance=None, service_instance=service, config=config)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.mark.asyncio
class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_create_short_url(self, client, sample_urls):
        """Test POST /."""
        response = await client.post("/", json={"Destination": sample_urls[0]})

        assert response.status_code == 201
        data = response.json()
        assert len(data["Path"]) == 6
        assert data["Destination"] == sample_urls[0]
        assert response.headers["location"] == f"/{data['Path']}"

    async def test_create_accepts_lower_case_names(self, client, sample_urls):
        response = await client.post("/", json={"destination": sample_urls[0], "path": "lower"})

        assert response.status_code == 201
        assert response.json() == {"Path": "lower", "Destination": sample_urls[0]}

    async def test_create_with_custom_path(self, client, sample_urls):
        """Test POST / with custom path."""
        response = await client.post("/", json={"Destination": sample_urls[0], "Path": "test123"})

        assert response.status_code == 201
        assert response.json()["Path"] == "test123"

    async def test_create_invalid_url(self, client):
        """Test POST / with invalid URL."""
        response = await client.post("/", json={"Destination": "not-a-url"})

        assert response.status_code == 400
        data = response.json()
        assert data["StatusCode"] == 400
        assert "Invalid destination" in data["Message"]

    async def test_create_missing_destination(self, client):
        response = await client.post("/", json={})

        assert response.status_code == 400
        data = response.json()
        assert data["StatusCode"] == 400
        assert data["Message"] == "One or more validation errors occurred."
        assert "Destination" in data["Errors"]

    async def test_create_invalid_path_pattern(self, client, sample_urls):
        response = await client.post("/", json={"Destination": sample_urls[0], "Path": "no spaces"})

        assert response.status_code == 400
        assert "Path" in response.json()["Errors"]

    async def test_create_path_too_long(self, client, sample_urls):
        response = await client.post("/", json={"Destination": sample_urls[0], "Path": "a" * 65})

        assert response.status_code == 400

    async def test_create_duplicate_path(self, client, sample_urls):
        """Test POST / with duplicate path."""
        await client.post("/", json={"Destination": sample_urls[0], "Path": "duplicate123"})

        response = await client.post("/", json={"Destination": sample_urls[1], "Path": "duplicate123"})

        assert response.status_code == 409
        assert response.json()["StatusCode"] == 409

        # The original mapping is untouched
        response = await client.get("/duplicate123")
        assert response.json()["Destination"] == sample_urls[0]

    async def test_get_path(self, client, sample_urls):
        """Test POST /get-path."""
        await client.post("/", json={"Destination": sample_urls[0], "Path": "lookup"})

        response = await client.post("/get-path", json={"Path": "lookup"})

        assert response.status_code == 200
        assert response.json() == {"Path": "lookup", "Destination": sample_urls[0]}

    async def test_get_path_not_found(self, client):
        response = await client.post("/get-path", json={"Path": "nonexistent"})

        assert response.status_code == 404
        data = response.json()
        assert data["StatusCode"] == 404
        assert "nonexistent" in data["Message"]

    async def test_get_path_missing_body_field(self, client):
        response = await client.post("/get-path", json={})

        assert response.status_code == 400

    async def test_resolve(self, client, sample_urls):
        """Test GET /{path}."""
        created = (await client.post("/", json={"Destination": sample_urls[0]})).json()

        response = await client.get(f"/{created['Path']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_resolve_not_found(self, client):
        """Test GET /{path} for unknown path."""
        response = await client.get("/nonexistent")

        assert response.status_code == 404
        assert response.json()["StatusCode"] == 404

    async def test_delete(self, client, sample_urls):
        """Test DELETE /{path}."""
        created = (await client.post("/", json={"Destination": sample_urls[0]})).json()

        response = await client.delete(f"/{created['Path']}")
        assert response.status_code == 204
        assert response.content == b""

        response = await client.get(f"/{created['Path']}")
        assert response.status_code == 404

    async def test_delete_not_found(self, client):
        response = await client.delete("/nonexistent")

        assert response.status_code == 404
        assert response.json()["StatusCode"] == 404

    async def test_create_resolve_delete_example(self, client):
        response = await client.post("/", json={"Destination": "https://example.com"})
        assert response.status_code == 201
        path = response.json()["Path"]
        assert len(path) == 6

        response = await client.get(f"/{path}")
        assert response.json() == {"Path": path, "Destination": "https://example.com"}

        assert (await client.delete(f"/{path}")).status_code == 204
        assert (await client.get(f"/{path}")).status_code == 404


@pytest.mark.asyncio
class TestCacheHeaders:
    """Cache-Control and Vary on responses."""

    async def test_read_endpoints_cache_for_30_seconds(self, client, sample_urls):
        await client.post("/", json={"Destination": sample_urls[0], "Path": "cached"})

        for response in (
            await client.get("/cached"),
            await client.post("/get-path", json={"Path": "cached"}),
        ):
            assert response.headers["cache-control"] == "public, max-age=30"
            assert response.headers["vary"] == "Accept-Encoding"

    async def test_other_responses_cache_for_10_seconds(self, client, sample_urls):
        response = await client.post("/", json={"Destination": sample_urls[0]})

        assert response.headers["cache-control"] == "public, max-age=10"
        assert response.headers["vary"] == "Accept-Encoding"

    async def test_error_responses_get_headers(self, client):
        response = await client.get("/nonexistent")

        assert response.headers["cache-control"] == "public, max-age=10"
        assert response.headers["vary"] == "Accept-Encoding"


@pytest.mark.asyncio
class TestErrorResponses:

    async def test_unexpected_error_is_hidden(self, broken_client):
        response = await broken_client.get("/anything")

        assert response.status_code == 500
        assert response.json() == {"StatusCode": 500, "Message": "Internal Server Error."}
        assert "disk on fire" not in response.text

    async def test_generation_exhausted(self, test_db, config, logger):
        await test_db.insert_short_url("aaaaaa", "https://example.com/taken")
        service = URLShortenerService(
            db=test_db,
            short_code_generator=ShortCodeGenerator(rng=SequenceRandom(["aaaaaa"])),
            logger=logger,
        )
        app = create_app(db_instance=test_db, cache_instance=None, service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            response = await ac.post("/", json={"Destination": "https://example.com/new"})

        assert response.status_code == 503
        data = response.json()
        assert data["StatusCode"] == 503
        assert "unique path" in data["Message"]

    async def test_unknown_method(self, client):
        response = await client.put("/abc")

        assert response.status_code == 405
        assert response.json()["StatusCode"] == 405


@pytest.mark.asyncio
class TestHealthAndDocs:

    async def test_health_check(self, client):
        """Test GET /hc."""
        response = await client.get("/hc")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Healthy"
        assert "totalDuration" in data
        assert set(data["entries"]) == {"self", "apidb-check"}
        assert data["entries"]["apidb-check"]["status"] == "Healthy"

    async def test_health_check_unhealthy(self, broken_client):
        response = await broken_client.get("/hc")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "Unhealthy"
        assert data["entries"]["self"]["status"] == "Healthy"
        assert data["entries"]["apidb-check"]["status"] == "Unhealthy"

    async def test_unreachable_cache_is_reported(self, test_db, config, logger):
        cache = RedisCache(redis_url="redis://localhost:6379/0", logger=logger)
        # What connect() leaves behind when Redis refused the connection
        cache.enabled = False
        service = URLShortenerService(db=test_db, cache=cache, logger=logger)
        app = create_app(db_instance=test_db, cache_instance=cache, service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            response = await ac.get("/hc")

        assert response.status_code == 503
        entries = response.json()["entries"]
        assert entries["apidb-check"]["status"] == "Healthy"
        assert entries["cache-check"]["status"] == "Unhealthy"
        assert (await service.health_check())["cache"] is False

    async def test_liveness_ignores_database(self, broken_client):
        response = await broken_client.get("/liveness")

        assert response.status_code == 200
        assert list(response.json()["entries"]) == ["self"]

    async def test_swagger_ui_at_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "swagger" in response.text.lower()

    async def test_openapi_document(self, client):
        response = await client.get("/swagger/v1/swagger.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/" in paths
        assert "/get-path" in paths
        assert "/{path}" in paths
