"""Common utilities for the short URL service."""

from .validators import is_valid_url, is_valid_custom_id, parse_positive_int
from .headers import extract_forwarded_headers, build_base_url, resolve_path_prefix
from .url_builder import build_short_path, build_short_url
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_custom_id",
    "parse_positive_int",
    "extract_forwarded_headers",
    "build_base_url",
    "resolve_path_prefix",
    "build_short_path",
    "build_short_url",
    "setup_logging",
]
