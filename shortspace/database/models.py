"""Data models for short URLs."""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional


@dataclass
class ShortURL:
    """Represents a short URL record in a space."""

    id: str
    target_url: str
    created_at: datetime
    updated_at: datetime
    metadata: Optional[Dict[str, str]] = None
    visit_count: int = 0
    last_visited_at: Optional[datetime] = None
    space: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "space": self.space,
            "target_url": self.target_url,
            "metadata": self.metadata,
            "visit_count": self.visit_count,
            "last_visited_at": self.last_visited_at.isoformat() if self.last_visited_at else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
