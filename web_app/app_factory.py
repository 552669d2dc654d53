"""FastAPI application factories for the API and the front end."""

import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .api import api_router, health_router
from .web import web_router
from .middleware import (
    CacheHeadersMiddleware,
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    register_exception_handlers,
)

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")


def create_app(
    db_instance,
    cache_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure the API application.

    Args:
        db_instance: Database instance
        cache_instance: Cache instance (or None)
        service_instance: Service instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener API",
        description="An URL shortener service",
        version="1.0.0",
        docs_url="/",
        redoc_url=None,
        openapi_url="/swagger/v1/swagger.json",
    )

    # Store instances in app state for access in routes
    app.state.db = db_instance
    app.state.cache = cache_instance
    app.state.service = service_instance
    app.state.config = config

    register_exception_handlers(app)

    # Last added runs first: logging wraps cache headers wraps error handling
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(CacheHeadersMiddleware, max_age=config.cache_control_max_age)
    app.add_middleware(LoggingMiddleware)

    # Health routes first so /hc and /liveness are not taken as paths
    app.include_router(health_router, tags=["Health"])
    app.include_router(api_router, tags=["ShortUrl"])

    return app


def create_frontend_app(api_client, config) -> FastAPI:
    """Create the server-rendered front end.

    Args:
        api_client: ShortenerAPIClient used to reach the API
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.api_client = api_client
    app.state.config = config

    app.add_middleware(LoggingMiddleware)

    if os.path.isdir(STATIC_DIR):
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.include_router(web_router, tags=["Web"])

    return app
