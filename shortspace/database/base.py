"""Abstract base class for short URL stores."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .models import ShortURL


class ShortURLStoreBase(ABC):
    """Abstract base class for partitioned short URL storage.

    Every operation names the space it runs against.
    """

    @abstractmethod
    async def create_short_url(
        self,
        space: str,
        short_id: str,
        target_url: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> ShortURL:
        """Create a new short URL record.

        Args:
            space: Space label
            short_id: The short ID to use
            target_url: The long URL to redirect to
            metadata: Optional page metadata

        Returns:
            The stored record

        Raises:
            DuplicateIDError: If short_id already exists in the space
        """

    @abstractmethod
    async def get_short_url(self, space: str, short_id: str) -> ShortURL:
        """Get a short URL record.

        Raises:
            NotFoundError: If short_id does not exist in the space
        """

    @abstractmethod
    async def short_code_exists(self, space: str, short_id: str) -> bool:
        """Check if a short ID exists in the space."""

    @abstractmethod
    async def list_short_urls(
        self,
        space: str,
        page: Any = None,
        per_page: Any = None,
    ) -> List[ShortURL]:
        """List records in the space, newest first.

        Args:
            space: Space label
            page: 1-based page number (defaults to 1)
            per_page: Page size (defaults to 10)

        Returns:
            List of records, empty if the page is past the end
        """

    @abstractmethod
    async def delete_short_url(self, space: str, short_id: str) -> None:
        """Delete a short URL record.

        Raises:
            NotFoundError: If short_id does not exist in the space
        """

    @abstractmethod
    async def record_visit(self, space: str, short_id: str) -> None:
        """Increment the visit count and stamp the visit time.

        Raises:
            NotFoundError: If short_id does not exist in the space
        """

    @abstractmethod
    async def get_statistics(self, space: str) -> Dict[str, Any]:
        """Get statistics for a space."""

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy."""
