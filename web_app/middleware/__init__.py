"""Middleware for the short URL web app."""

from .api_key import APIKeyMiddleware
from .headers import ForwardedHeadersMiddleware
from .logging import LoggingMiddleware

__all__ = ["APIKeyMiddleware", "ForwardedHeadersMiddleware", "LoggingMiddleware"]
