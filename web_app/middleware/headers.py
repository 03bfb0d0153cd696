"""Forwarded headers middleware."""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortspace.common.headers import extract_forwarded_headers


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Expose the proxy's X-Forwarded-* values as ``request.state.forwarded``."""

    async def dispatch(self, request: Request, call_next: Callable):
        request.state.forwarded = extract_forwarded_headers(request.headers)
        return await call_next(request)
