"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlparse
from typing import Tuple

from ..shortcode import ShortCodeGenerator


# Request schema pattern; same alphabet as ShortCodeGenerator.PATH_CHARS
PATH_PATTERN = re.compile(r'^[a-zA-Z0-9_-]*$')

MAX_URL_LENGTH = 2048

# Paths that collide with front-end or API routes
RESERVED_PATHS = {
    "get-path", "hc", "liveness", "swagger", "docs", "redoc", "openapi.json",
    "shorturl", "static", "favicon.ico", "robots.txt",
}


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a destination URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "Destination is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def is_valid_path(path: str, max_length: int = 64) -> Tuple[bool, str]:
    """Validate a user supplied short path.

    Args:
        path: The path to validate
        max_length: Maximum length for the path

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not path or not isinstance(path, str):
        return False, "Path is required"

    if len(path) > max_length:
        return False, f"Path must be at most {max_length} characters"

    if not ShortCodeGenerator.is_valid_format(path):
        return False, "Path can only contain letters, numbers, hyphens, and underscores"

    if path.lower() in RESERVED_PATHS:
        return False, f"'{path}' is a reserved word and cannot be used"

    return True, ""
