"""Core engine for partitioned short URLs."""

from .allocator import IdentifierAllocator
from .service import ShortURLService
from .shortcode import ShortCodeGenerator

__all__ = ["IdentifierAllocator", "ShortURLService", "ShortCodeGenerator"]

__version__ = "1.0.0"
