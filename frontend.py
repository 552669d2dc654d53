#!/usr/bin/env python3
"""
Entry point for the URL shortener front end.

The front end renders HTML and calls the API over HTTP (API_URL).

Usage:
    python frontend.py

Environment variables:
    API_URL - Base URL of the running API
    BASE_URL - Base URL used when displaying short links
    PATH_PREFIX - Optional prefix for short links
    HOST / FRONTEND_PORT - Address to listen on
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortener.common.logging_config import setup_logging
from web_app import create_frontend_app
from web_app.web.api_client import ShortenerAPIClient


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the API client on shutdown."""
    yield
    await app.state.api_client.close()
    app.state.logger.info("Front end stopped")


def build_frontend_app(config: Config, logger) -> FastAPI:
    api_client = ShortenerAPIClient(
        api_url=config.api_url,
        timeout_seconds=config.api_timeout_seconds,
        logger=logger,
    )
    app = create_frontend_app(api_client=api_client, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info(f"URL Shortener front end (API at {config.api_url})")

    app = build_frontend_app(config, logger)

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.host,
            port=config.frontend_port,
            log_level=config.log_level.lower(),
            access_log=True,
        )
    )

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting front end on {config.host}:{config.frontend_port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
