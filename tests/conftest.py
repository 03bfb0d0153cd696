"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest

from shortspace.allocator import IdentifierAllocator
from shortspace.common.logging_config import setup_logging
from shortspace.database.partitions import PartitionManager
from shortspace.database.sqlite import URLShortenerSQLite
from shortspace.service import ShortURLService
from shortspace.shortcode import ShortCodeGenerator


class FakeClock:
    """Clock that moves forward a fixed step on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step
        self.last = None

    def __call__(self) -> datetime:
        self.last = self.current
        self.current = self.current + self.step
        return self.last


FIXED_NOW = datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture
def data_dir(tmp_path):
    return str(tmp_path / "spaces")


@pytest.fixture
async def partitions(data_dir, logger) -> AsyncGenerator[PartitionManager, None]:
    """Create a partition manager over a temporary data directory."""
    manager = PartitionManager(data_dir, operation_timeout_seconds=5.0, logger=logger)

    yield manager

    await manager.close()


@pytest.fixture
def test_db(partitions, clock, logger) -> URLShortenerSQLite:
    """Create test store instance."""
    return URLShortenerSQLite(partitions, clock=clock, logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short ID generator."""
    return ShortCodeGenerator(default_length=5)


@pytest.fixture
def allocator(test_db, short_code_generator, logger) -> IdentifierAllocator:
    return IdentifierAllocator(test_db, short_code_generator, max_attempts=5, logger=logger)


@pytest.fixture
def service(test_db, allocator, logger) -> ShortURLService:
    """Create service instance (no scraping)."""
    return ShortURLService(
        db=test_db,
        allocator=allocator,
        scraper=None,
        logger=logger,
        scrape_metadata=False,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
