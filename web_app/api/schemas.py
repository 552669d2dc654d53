"""Pydantic schemas for API requests and responses.

Wire names follow the public contract (``Path``, ``Destination``,
``StatusCode``, ``Message``); lower-case field names are accepted on input.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from shortener.common.validators import PATH_PATTERN
from shortener.database.models import ShortUrl


class ShortUrlRequest(BaseModel):
    """Request to create a short URL."""

    destination: str = Field(
        ...,
        alias="Destination",
        description="The URL to shorten",
        min_length=1,
        max_length=2048,
    )
    path: Optional[str] = Field(
        None,
        alias="Path",
        description="Optional custom path; generated when omitted",
        max_length=64,
        pattern=PATH_PATTERN.pattern,
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"Destination": "https://example.com/very/long/path/to/resource"},
                {"Destination": "https://github.com/user/repo", "Path": "myrepo"},
            ]
        },
    }


class PathRequest(BaseModel):
    """Request naming an existing path."""

    path: str = Field(..., alias="Path", description="Short path", min_length=1, max_length=64)

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {"examples": [{"Path": "abc123"}]},
    }


class ShortUrlResponse(BaseModel):
    """A stored path -> destination mapping."""

    path: str = Field(..., alias="Path", description="Short path")
    destination: str = Field(..., alias="Destination", description="Destination URL")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{"Path": "abc123", "Destination": "https://example.com/very/long/path"}]
        },
    }

    @classmethod
    def from_entity(cls, short_url: ShortUrl) -> "ShortUrlResponse":
        return cls(path=short_url.path, destination=short_url.destination)


class ErrorResponse(BaseModel):
    """Error response."""

    status_code: int = Field(..., alias="StatusCode", description="HTTP status code")
    message: str = Field(..., alias="Message", description="Error message")

    model_config = {"populate_by_name": True}


class HealthEntry(BaseModel):
    """Result of one health check."""

    status: str
    description: Optional[str] = None
    duration: str
    tags: List[str] = []
    data: Dict[str, str] = {}


class HealthReport(BaseModel):
    """Aggregated health report."""

    status: str = Field(..., description="Healthy or Unhealthy")
    total_duration: str = Field(..., alias="totalDuration")
    entries: Dict[str, HealthEntry]

    model_config = {"populate_by_name": True}
