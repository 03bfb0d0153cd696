"""FastAPI application factory."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from shortspace import __version__
from shortspace.errors import ShortSpaceError
from .api import api_router
from .errors import error_response
from .web import web_router
from .middleware.api_key import APIKeyMiddleware
from .middleware.headers import ForwardedHeadersMiddleware
from .middleware.logging import LoggingMiddleware


async def _engine_error_handler(request: Request, exc: ShortSpaceError):
    return error_response(exc)


def create_app(db_instance, service_instance, config) -> FastAPI:
    """Build the API + redirect app.

    ``db_instance`` and ``service_instance`` may be None when the server's
    lifespan builds them on startup; tests pass ready-made ones.

    Args:
        db_instance: Partitioned store
        service_instance: ShortURLService bound to that store
        config: Config instance (API key, base URL, path prefix)
    """
    app = FastAPI(
        title="ShortSpace",
        description="Short URLs partitioned into yearly spaces",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.db = db_instance
    app.state.service = service_instance
    app.state.config = config

    # Engine errors a route did not translate itself
    app.add_exception_handler(ShortSpaceError, _engine_error_handler)

    # Last added runs first: forwarded headers, then logging, then the key check
    app.add_middleware(APIKeyMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ForwardedHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
