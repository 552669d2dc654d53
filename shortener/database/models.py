"""Data models for URL shortener."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class ShortUrl:
    """Represents a path -> destination mapping in the database."""

    path: str
    destination: str
    created_at: Optional[datetime] = field(default=None)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "destination": self.destination,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShortUrl":
        """Create from dictionary (database row or cached JSON)."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if isinstance(created_at, datetime) and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            path=data["path"],
            destination=data["destination"],
            created_at=created_at,
        )
