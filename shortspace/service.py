"""Business logic service for the short URL engine."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .allocator import IdentifierAllocator
from .common.validators import is_valid_url
from .database.base import ShortURLStoreBase
from .database.models import ShortURL
from .errors import InvalidInputError, ShortSpaceError
from .partition import DEFAULT_EPOCH_YEAR, label_for_now, label_for_path
from .scraper import MetadataScraper


class ShortURLService:
    """Service layer tying label derivation, allocation and storage together."""

    def __init__(
        self,
        db: ShortURLStoreBase,
        allocator: IdentifierAllocator,
        scraper: Optional[MetadataScraper] = None,
        logger: Optional[logging.Logger] = None,
        scrape_metadata: bool = True,
        epoch_year: int = DEFAULT_EPOCH_YEAR,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize short URL service.

        Args:
            db: Store instance
            allocator: Short ID allocator bound to the same store
            scraper: Optional metadata scraper
            logger: Optional logger
            scrape_metadata: Whether to scrape metadata when none is supplied
            epoch_year: Year whose space label is ``a``
            clock: Source of the current time for picking the space
        """
        self.db = db
        self.allocator = allocator
        self.scraper = scraper
        self.logger = logger or logging.getLogger(__name__)
        self.scrape_metadata = scrape_metadata
        self.epoch_year = epoch_year
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def current_space(self) -> str:
        """Label of the space new records are created in."""
        return label_for_now(self.clock(), self.epoch_year)

    async def create_short_url(
        self,
        url: str,
        custom_id: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> ShortURL:
        """Create a new short URL in the current space.

        Args:
            url: The target URL
            custom_id: Optional caller-chosen short ID
            metadata: Optional page metadata; scraped when absent

        Returns:
            The stored record

        Raises:
            InvalidInputError: If the URL or custom ID is invalid
            DuplicateIDError: If the custom ID is taken
            CapacityExhaustedError: If no free ID could be generated
        """
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise InvalidInputError(error)

        space = self.current_space()
        short_id = await self.allocator.allocate(space, url, custom_id)

        if metadata is None and self.scrape_metadata and self.scraper:
            metadata = await self._scrape(url)

        return await self.db.create_short_url(space, short_id, url, metadata)

    async def _scrape(self, url: str) -> Optional[Dict[str, str]]:
        try:
            return await self.scraper.fetch(url)
        except ShortSpaceError as e:
            self.logger.warning(f"Error scraping metadata for {url}: {e}")
            return None

    async def get_url_info(self, space: str, short_id: str) -> ShortURL:
        """Get a record without counting a visit."""
        return await self.db.get_short_url(label_for_path(space), short_id)

    async def list_urls(
        self,
        space: str,
        page: Any = None,
        per_page: Any = None,
    ) -> List[ShortURL]:
        """List records in a space, newest first."""
        return await self.db.list_short_urls(label_for_path(space), page, per_page)

    async def url_exists(self, space: str, short_id: str) -> bool:
        """Check if a short ID is taken (fails closed)."""
        return await self.allocator.exists(label_for_path(space), short_id)

    async def delete_short_url(self, space: str, short_id: str) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If the record does not exist
        """
        await self.db.delete_short_url(label_for_path(space), short_id)

    async def resolve(self, space: str, short_id: str) -> ShortURL:
        """Look up a record for redirecting and count the visit.

        The visit counter is best-effort: if it cannot be updated the
        failure is logged and the record is still returned.

        Raises:
            NotFoundError: If the record does not exist
        """
        space = label_for_path(space)
        record = await self.db.get_short_url(space, short_id)

        try:
            await self.db.record_visit(space, short_id)
        except ShortSpaceError as e:
            self.logger.error(f"Error updating statistics for /{space}/{short_id}: {e}")

        return record

    async def get_statistics(self, space: str) -> Dict[str, Any]:
        """Get statistics for a space."""
        return await self.db.get_statistics(label_for_path(space))

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check."""
        db_healthy = await self.db.health_check()

        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
        if self.scraper:
            await self.scraper.close()
