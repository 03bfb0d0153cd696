#!/usr/bin/env python3
"""
Server entry point for ShortSpace.

Each yearly space is one SQLite file under DATA_DIR. A space's connection is
opened the first time it is used and stays open until shutdown, so the server
runs as a single process.

Run with ``shortspace-server`` or ``python app.py``. Settings come from the
environment or .env (see config.py); the ones most often set are DATA_DIR,
API_KEY, BASE_URL, PORT and LOG_LEVEL.
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortspace.bootstrap import build_service
from shortspace.common.logging_config import setup_logging
from web_app import create_app


def build_app(config: Config, logger: logging.Logger) -> FastAPI:
    """Create the app; the service is built on startup and closed on shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service = build_service(config, logger)
        app.state.db = service.db
        app.state.service = service
        logger.info(
            f"Serving spaces from {config.data_dir}; "
            f"new links go to space '{service.current_space()}'"
        )

        try:
            yield
        finally:
            await service.close()
            logger.info(f"Closed spaces: {', '.join(service.db.partitions.open_labels()) or 'none'}")

    app = create_app(db_instance=None, service_instance=None, config=config)
    app.router.lifespan_context = lifespan
    return app


def main():
    config = load_config()
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")
    if not config.api_key:
        logger.warning("API_KEY is not set; /api routes will answer 500 until it is")

    server = uvicorn.Server(
        uvicorn.Config(
            build_app(config, logger),
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )
    )

    def request_shutdown(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        server.should_exit = True

    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, request_shutdown)

    logger.info(f"Listening on {config.host}:{config.port}")
    try:
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
