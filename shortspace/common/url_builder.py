"""URL building utilities for the short URL service."""


def build_short_path(space: str, short_id: str, path_prefix: str = "") -> str:
    """Build the redirect path for a record, e.g. ``/d/1a2b3``."""
    prefix = path_prefix.strip("/")

    if prefix:
        return f"/{prefix}/{space}/{short_id}"
    return f"/{space}/{short_id}"


def build_short_url(
    space: str,
    short_id: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete short URL.

    Args:
        space: Space label
        short_id: The short ID
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    return base_url.rstrip("/") + build_short_path(space, short_id, path_prefix)
