"""Shared-secret check for the management API."""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

API_KEY_HEADER = "x-api-key"

# Reachable without a key
OPEN_API_PATHS = {"/api/health", "/api/docs", "/api/redoc", "/openapi.json"}


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require the configured API key on every /api route."""

    async def dispatch(self, request: Request, call_next: Callable):
        path = request.url.path
        is_api = path == "/api" or path.startswith("/api/")
        if not is_api or path in OPEN_API_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        config = request.app.state.config
        api_key = getattr(config, "api_key", None)

        if not api_key:
            return JSONResponse(
                status_code=500,
                content={"status": "error", "message": "API key is not set"},
            )

        if request.headers.get(API_KEY_HEADER) != api_key:
            return JSONResponse(
                status_code=401,
                content={"status": "error", "message": "Invalid API key"},
            )

        return await call_next(request)
