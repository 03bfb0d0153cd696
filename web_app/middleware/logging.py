"""Request logging middleware."""

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortspace.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request, with level following the response status."""

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or get_logger("shortspace.web")

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        forwarded = getattr(request.state, "forwarded", None) or {}
        origin = forwarded.get("for") or client_ip

        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(f"{request.method} {request.url.path} from {origin} failed")
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        self.logger.log(
            level,
            f"{request.method} {request.url.path} from {origin} - "
            f"{response.status_code} in {duration_ms:.2f}ms",
        )

        return response
