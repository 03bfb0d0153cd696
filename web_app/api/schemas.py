"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field("", description="The URL to shorten", max_length=2048)
    custom_id: Optional[str] = Field(None, description="Optional custom short ID", max_length=32)
    meta: Optional[Dict[str, str]] = Field(None, description="Optional page metadata; scraped when omitted")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "url": "https://github.com/user/repo",
                    "custom_id": "myrepo",
                    "meta": {"title": "My repo"},
                }
            ]
        }
    }


class ShortURLData(BaseModel):
    """A short URL record as returned by the API."""

    id: str
    url: str = Field(..., description="Target URL")
    meta: Optional[Dict[str, str]] = None
    visited: int = Field(..., description="Number of redirects served")
    last_visited_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    path: str = Field(..., description="Redirect path, /<space>/<id>")
    short_url: Optional[str] = Field(None, description="Complete short URL")


class ShortURLEnvelope(BaseModel):
    """Envelope for single-record responses."""

    status: str
    message: str
    data: Optional[ShortURLData] = None


class StatusResponse(BaseModel):
    """Status-only response."""

    status: str
    message: str


class StatisticsResponse(BaseModel):
    """Statistics for one space."""

    space: str
    total_urls: int
    total_visits: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    partitions_open: List[str] = Field(default_factory=list, description="Spaces with an open store")
    timestamp: datetime = Field(..., description="Check timestamp")
