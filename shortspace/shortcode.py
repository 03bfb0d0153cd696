"""Short ID generation."""

import hashlib
import string
import time
from typing import Optional


class ShortCodeGenerator:
    """Generate candidate short IDs for URLs."""

    ALLOWED_CHARS = string.ascii_letters + string.digits + "-_"

    def __init__(self, default_length: int = 5):
        """Initialize short ID generator.

        Args:
            default_length: Default length for generated IDs
        """
        self.default_length = default_length

    def generate(self, url: str, space: str, length: Optional[int] = None) -> str:
        """Generate a short ID from the current time, the URL and the space.

        Two calls never share a nanosecond timestamp in practice, but the
        truncated hash can still collide, so callers must check the result
        against the store.

        Args:
            url: Target URL
            space: Space label the ID will live in
            length: Length of the ID (uses default if not specified)

        Returns:
            Lowercase hex short ID
        """
        length = length or self.default_length

        data = f"{time.time_ns()}{url}{space}"
        digest = hashlib.md5(data.encode()).hexdigest()

        return digest[:length]

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if an ID only uses letters, digits, hyphens and underscores."""
        return bool(code) and all(c in ShortCodeGenerator.ALLOWED_CHARS for c in code)
