"""Error types for the short URL engine.

Each failure kind has its own class so the HTTP layer can map it to a
precise status instead of a generic 500.
"""


class ShortSpaceError(Exception):
    """Base class for all short URL errors."""


class NotFoundError(ShortSpaceError):
    """The identifier does not exist in the requested space."""

    def __init__(self, space: str, short_id: str):
        super().__init__(f"Short URL '{short_id}' not found in space '{space}'")
        self.space = space
        self.short_id = short_id


class DuplicateIDError(ShortSpaceError):
    """The identifier is already taken in the requested space."""

    def __init__(self, space: str, short_id: str):
        super().__init__(f"Short ID '{short_id}' already exists in space '{space}'")
        self.space = space
        self.short_id = short_id


class InvalidInputError(ShortSpaceError, ValueError):
    """Caller supplied a missing or malformed value."""


class CodecError(ShortSpaceError):
    """Stored metadata could not be encoded or decoded."""


class StorageFaultError(ShortSpaceError):
    """Opening, querying or writing a partition store failed."""


class CapacityExhaustedError(ShortSpaceError):
    """No free identifier was found within the attempt budget."""


class PartitionLabelError(ShortSpaceError):
    """A point in time has no partition label."""


class ScrapeError(ShortSpaceError):
    """Fetching or parsing page metadata failed."""
