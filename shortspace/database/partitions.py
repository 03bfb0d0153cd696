"""Per-space SQLite connection management.

Each space is one SQLite file under the data directory. Connections are
opened lazily on first use of a label and kept open until the manager is
closed, so concurrent requests against different spaces never close each
other's connection.
"""

import asyncio
import logging
import os
import sqlite3
import threading
from typing import Callable, Dict, List, Optional, TypeVar

from ..errors import ShortSpaceError, StorageFaultError

T = TypeVar("T")


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS short_urls (
    id TEXT PRIMARY KEY,
    target_url TEXT NOT NULL,
    metadata TEXT,
    visit_count INTEGER NOT NULL DEFAULT 0,
    last_visited_at TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_short_urls_created_at
ON short_urls(created_at);
"""


class PartitionHandle:
    """An open connection to one space's store."""

    def __init__(
        self,
        label: str,
        path: str,
        conn: sqlite3.Connection,
        timeout_seconds: float,
    ):
        self.label = label
        self.path = path
        self._conn = conn
        self._lock = threading.Lock()
        self._timeout_seconds = timeout_seconds

    def _call(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        with self._lock:
            return fn(self._conn)

    async def run(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        """Run a blocking function against the connection in a worker thread.

        A timeout does not stop the worker thread: the call may still finish
        and commit after StorageFaultError has been raised, so a timed-out
        write must be treated as "outcome unknown", not "not written".

        Raises:
            StorageFaultError: On SQLite errors or when the call times out
        """
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._call, fn),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise StorageFaultError(
                f"Operation on space '{self.label}' timed out after {self._timeout_seconds}s"
            ) from e
        except sqlite3.Error as e:
            raise StorageFaultError(f"Storage error in space '{self.label}': {e}") from e

    def close(self) -> None:
        with self._lock:
            self._conn.close()


class PartitionManager:
    """Owns one open store per space label."""

    def __init__(
        self,
        data_dir: str,
        operation_timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize partition manager.

        Args:
            data_dir: Directory holding one ``<label>.db`` file per space
            operation_timeout_seconds: Upper bound for each blocking call
            logger: Optional logger instance
        """
        self.data_dir = data_dir
        self.operation_timeout_seconds = operation_timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

        self._handles: Dict[str, PartitionHandle] = {}
        self._lock = asyncio.Lock()

    def path_for(self, label: str) -> str:
        return os.path.join(self.data_dir, f"{label}.db")

    def _open(self, label: str) -> PartitionHandle:
        os.makedirs(self.data_dir, exist_ok=True)
        path = self.path_for(label)

        conn = sqlite3.connect(path, check_same_thread=False)
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA busy_timeout=5000")
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        except sqlite3.Error:
            conn.close()
            raise

        return PartitionHandle(label, path, conn, self.operation_timeout_seconds)

    async def activate(self, label: str) -> PartitionHandle:
        """Return the open store for a space, creating it on first use.

        Raises:
            StorageFaultError: If the store cannot be opened or created
        """
        handle = self._handles.get(label)
        if handle is not None:
            return handle

        async with self._lock:
            handle = self._handles.get(label)
            if handle is not None:
                return handle

            self.logger.info(f"Opening space '{label}' at {self.path_for(label)}")
            try:
                handle = await asyncio.wait_for(
                    asyncio.to_thread(self._open, label),
                    timeout=self.operation_timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                raise StorageFaultError(f"Opening space '{label}' timed out") from e
            except (sqlite3.Error, OSError) as e:
                self.logger.error(f"Error opening space '{label}': {e}")
                raise StorageFaultError(f"Failed to open space '{label}': {e}") from e

            self._handles[label] = handle
            return handle

    def open_labels(self) -> List[str]:
        """Labels of the spaces with an open connection."""
        return sorted(self._handles)

    async def health_check(self) -> bool:
        """Check that the data directory is usable and open stores answer."""
        if os.path.exists(self.data_dir) and not os.path.isdir(self.data_dir):
            self.logger.error(f"Data directory {self.data_dir} is not a directory")
            return False

        for label, handle in list(self._handles.items()):
            try:
                await handle.run(lambda conn: conn.execute("SELECT 1").fetchone())
            except ShortSpaceError as e:
                self.logger.error(f"Health check failed for space '{label}': {e}")
                return False

        return True

    async def close(self) -> None:
        """Close every open store."""
        async with self._lock:
            for label, handle in self._handles.items():
                try:
                    await asyncio.to_thread(handle.close)
                    self.logger.debug(f"Closed space '{label}'")
                except sqlite3.Error as e:
                    self.logger.error(f"Error closing space '{label}': {e}")

            self._handles.clear()
