"""Storage layer for short URLs."""

from .base import ShortURLStoreBase
from .models import ShortURL
from .partitions import PartitionManager
from .sqlite import URLShortenerSQLite

__all__ = ["ShortURLStoreBase", "ShortURL", "PartitionManager", "URLShortenerSQLite"]
