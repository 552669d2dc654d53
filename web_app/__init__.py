"""Web applications (API and front end) for URL shortener."""

from .app_factory import create_app, create_frontend_app

__all__ = ["create_app", "create_frontend_app"]
