"""
Error classes for the URL shortener.

Each error carries the HTTP status code the API answers with, so the web
layer can translate them without knowing about individual cases.
"""

from typing import Optional, Dict, Any


class ShortenerError(Exception):
    """
    Base shortener error class.

    Attributes:
        status_code: HTTP status code (default: 500)
        message: Error message (default: "Internal Server Error.")
        details: Optional additional error details
    """
    status_code: int = 500
    message: str = "Internal Server Error."

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize shortener error.

        Args:
            message: Error message (overrides default)
            details: Optional additional error details
        """
        self.message = message or self.message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ShortenerError):
    """400 Validation error."""
    status_code = 400
    message = "Validation error"


class NotFoundError(ShortenerError):
    """404 Not Found error."""
    status_code = 404
    message = "Not found"


class PathConflictError(ShortenerError):
    """409 Conflict: the path is already taken."""
    status_code = 409
    message = "Path already exists"


class PathGenerationError(ShortenerError):
    """503: no free path found within the attempt cap."""
    status_code = 503
    message = "Unable to generate a unique path"
