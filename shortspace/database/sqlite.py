"""SQLite implementation of the partitioned short URL store."""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from ..common.validators import parse_positive_int
from ..errors import DuplicateIDError, NotFoundError
from ..metadata import decode_metadata, encode_metadata
from .base import ShortURLStoreBase
from .models import ShortURL
from .partitions import PartitionManager

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10

_COLUMNS = "id, target_url, metadata, visit_count, last_visited_at, created_at, updated_at"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _row_to_short_url(space: str, row: tuple) -> ShortURL:
    short_id, target_url, metadata, visit_count, last_visited_at, created_at, updated_at = row
    return ShortURL(
        id=short_id,
        target_url=target_url,
        metadata=decode_metadata(metadata),
        visit_count=visit_count,
        last_visited_at=datetime.fromisoformat(last_visited_at) if last_visited_at else None,
        created_at=datetime.fromisoformat(created_at),
        updated_at=datetime.fromisoformat(updated_at),
        space=space,
    )


class URLShortenerSQLite(ShortURLStoreBase):
    """Short URL store with one SQLite file per space."""

    def __init__(
        self,
        partitions: PartitionManager,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the store.

        Args:
            partitions: Manager owning the per-space connections
            clock: Source of the current time (defaults to UTC now)
            logger: Optional logger instance
        """
        self.partitions = partitions
        self.clock = clock or utc_now
        self.logger = logger or logging.getLogger(__name__)

    def _now(self) -> datetime:
        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    async def create_short_url(
        self,
        space: str,
        short_id: str,
        target_url: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> ShortURL:
        """Insert a new record with no visits.

        Raises:
            DuplicateIDError: If short_id already exists in the space
        """
        handle = await self.partitions.activate(space)
        created_at = self._now()
        metadata_text = encode_metadata(metadata)

        def insert(conn: sqlite3.Connection) -> None:
            try:
                with conn:
                    conn.execute(
                        f"""
                        INSERT INTO short_urls ({_COLUMNS})
                        VALUES (?, ?, ?, 0, NULL, ?, ?)
                        """,
                        (
                            short_id,
                            target_url,
                            metadata_text,
                            created_at.isoformat(timespec="microseconds"),
                            created_at.isoformat(timespec="microseconds"),
                        ),
                    )
            except sqlite3.IntegrityError as e:
                raise DuplicateIDError(space, short_id) from e

        await handle.run(insert)

        self.logger.info(f"Created short URL: /{space}/{short_id} -> {target_url}")

        return ShortURL(
            id=short_id,
            target_url=target_url,
            metadata=decode_metadata(metadata_text),
            visit_count=0,
            last_visited_at=None,
            created_at=created_at,
            updated_at=created_at,
            space=space,
        )

    async def get_short_url(self, space: str, short_id: str) -> ShortURL:
        """Get a record by ID.

        Raises:
            NotFoundError: If short_id does not exist in the space
        """
        handle = await self.partitions.activate(space)

        row = await handle.run(
            lambda conn: conn.execute(
                f"SELECT {_COLUMNS} FROM short_urls WHERE id = ?",
                (short_id,),
            ).fetchone()
        )

        if row is None:
            raise NotFoundError(space, short_id)

        self.logger.debug(f"Retrieved short URL: /{space}/{short_id}")
        return _row_to_short_url(space, row)

    async def short_code_exists(self, space: str, short_id: str) -> bool:
        """Check if a short ID exists in the space.

        Storage errors propagate as StorageFaultError.
        """
        handle = await self.partitions.activate(space)

        row = await handle.run(
            lambda conn: conn.execute(
                "SELECT COUNT(*) FROM short_urls WHERE id = ?",
                (short_id,),
            ).fetchone()
        )

        return row[0] > 0

    async def list_short_urls(
        self,
        space: str,
        page: Any = None,
        per_page: Any = None,
    ) -> List[ShortURL]:
        """List records in the space, newest first.

        Missing, non-numeric or non-positive paging values fall back to
        page 1 and 10 per page.
        """
        page = parse_positive_int(page, DEFAULT_PAGE)
        per_page = parse_positive_int(per_page, DEFAULT_PER_PAGE)
        offset = (page - 1) * per_page

        handle = await self.partitions.activate(space)

        rows = await handle.run(
            lambda conn: conn.execute(
                f"""
                SELECT {_COLUMNS}
                FROM short_urls
                ORDER BY created_at DESC, rowid DESC
                LIMIT ? OFFSET ?
                """,
                (per_page, offset),
            ).fetchall()
        )

        return [_row_to_short_url(space, row) for row in rows]

    async def delete_short_url(self, space: str, short_id: str) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If short_id does not exist in the space
        """
        if not await self.short_code_exists(space, short_id):
            raise NotFoundError(space, short_id)

        handle = await self.partitions.activate(space)

        def delete(conn: sqlite3.Connection) -> None:
            with conn:
                conn.execute("DELETE FROM short_urls WHERE id = ?", (short_id,))

        await handle.run(delete)

        self.logger.info(f"Deleted short URL: /{space}/{short_id}")

    async def record_visit(self, space: str, short_id: str) -> None:
        """Increment the visit count and stamp the visit time in one statement.

        ``updated_at`` is left as is.

        Raises:
            NotFoundError: If short_id does not exist in the space
        """
        handle = await self.partitions.activate(space)
        visited_at = self._now()

        def update(conn: sqlite3.Connection) -> int:
            with conn:
                cursor = conn.execute(
                    """
                    UPDATE short_urls
                    SET visit_count = visit_count + 1, last_visited_at = ?
                    WHERE id = ?
                    """,
                    (visited_at.isoformat(timespec="microseconds"), short_id),
                )
            return cursor.rowcount

        updated = await handle.run(update)

        if updated == 0:
            raise NotFoundError(space, short_id)

        self.logger.debug(f"Recorded visit for /{space}/{short_id}")

    async def get_statistics(self, space: str) -> Dict[str, Any]:
        """Get record and visit totals for a space."""
        handle = await self.partitions.activate(space)

        total_urls, total_visits = await handle.run(
            lambda conn: conn.execute(
                "SELECT COUNT(*), COALESCE(SUM(visit_count), 0) FROM short_urls"
            ).fetchone()
        )

        return {
            "space": space,
            "total_urls": total_urls,
            "total_visits": total_visits,
        }

    async def health_check(self) -> bool:
        return await self.partitions.health_check()

    async def close(self) -> None:
        await self.partitions.close()
