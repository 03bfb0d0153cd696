"""Proxy header handling for building public short URLs."""

from typing import Mapping, Optional


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == name and value:
            return value.strip()
    return None


def extract_forwarded_headers(headers: Mapping[str, str]) -> dict:
    """Collect the X-Forwarded-* values a reverse proxy may set.

    Keys: ``proto``, ``host``, ``for`` and ``prefix``; missing headers are None.
    The prefix is normalised to a leading slash and no trailing one.
    """
    prefix = _header(headers, "x-forwarded-prefix")
    if prefix is not None:
        prefix = prefix.strip("/")
        prefix = f"/{prefix}" if prefix else None

    return {
        "proto": _header(headers, "x-forwarded-proto"),
        "host": _header(headers, "x-forwarded-host"),
        "for": _header(headers, "x-forwarded-for"),
        "prefix": prefix,
    }


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Public origin that short links should point at.

    The proxy's X-Forwarded-Proto/Host pair wins, then the request's own
    scheme and host, then the configured base URL.

    Returns:
        Origin without a trailing slash (e.g. https://sho.rt)
    """
    forwarded = extract_forwarded_headers(headers)

    if forwarded["proto"] and forwarded["host"]:
        return f"{forwarded['proto']}://{forwarded['host']}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def resolve_path_prefix(headers: Mapping[str, str], configured_prefix: str = "") -> str:
    """Path prefix for redirect links: X-Forwarded-Prefix, else the configured one."""
    return extract_forwarded_headers(headers)["prefix"] or configured_prefix
