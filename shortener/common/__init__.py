"""Common utilities for URL shortener."""

from .validators import is_valid_url, is_valid_path
from .links import (
    extract_forwarded_headers,
    normalize_prefix,
    resolve_base_url,
    resolve_path_prefix,
    build_short_url,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_path",
    "extract_forwarded_headers",
    "normalize_prefix",
    "resolve_base_url",
    "resolve_path_prefix",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
