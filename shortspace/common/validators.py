"""Validation utilities for the short URL service."""

from typing import Any, Tuple
from urllib.parse import urlparse

from ..shortcode import ShortCodeGenerator


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a target URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > 2048:
        return False, "URL is too long (max 2048 characters)"

    try:
        result = urlparse(url)
    except ValueError:
        return False, "URL is malformed"

    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def is_valid_custom_id(short_id: str, min_length: int = 1, max_length: int = 32) -> Tuple[bool, str]:
    """Validate a caller-supplied short ID.

    Args:
        short_id: The ID to validate
        min_length: Minimum length
        max_length: Maximum length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_id or not isinstance(short_id, str):
        return False, "Short ID is required"

    if len(short_id) < min_length:
        return False, f"Short ID must be at least {min_length} characters"

    if len(short_id) > max_length:
        return False, f"Short ID must be at most {max_length} characters"

    if not ShortCodeGenerator.is_valid_format(short_id):
        return False, "Short ID can only contain letters, numbers, hyphens, and underscores"

    return True, ""


def parse_positive_int(value: Any, default: int) -> int:
    """Parse a paging parameter, falling back to default.

    Absent, non-numeric and values below 1 all yield the default.
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default

    return parsed if parsed >= 1 else default
