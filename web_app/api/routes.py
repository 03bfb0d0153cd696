"""API routes implementation."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Query, Request, status

from shortspace.common.headers import build_base_url, resolve_path_prefix
from shortspace.common.url_builder import build_short_path, build_short_url
from shortspace.database.models import ShortURL
from shortspace.errors import NotFoundError, ShortSpaceError
from .schemas import (
    HealthResponse,
    ShortenRequest,
    ShortURLData,
    ShortURLEnvelope,
    StatisticsResponse,
    StatusResponse,
)
from ..errors import error_response

router = APIRouter()

logger = logging.getLogger("shortspace.web.api")


def _to_data(request: Request, space: str, record: ShortURL) -> ShortURLData:
    config = request.app.state.config

    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    return ShortURLData(
        id=record.id,
        url=record.target_url,
        meta=record.metadata,
        visited=record.visit_count,
        last_visited_at=record.last_visited_at,
        created_at=record.created_at,
        updated_at=record.updated_at,
        path=build_short_path(space, record.id),
        short_url=build_short_url(
            space,
            record.id,
            base_url,
            resolve_path_prefix(request.headers, config.path_prefix),
        ),
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service
    db = request.app.state.db

    health = await service.health_check()
    partitions = getattr(db, "partitions", None)

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        partitions_open=partitions.open_labels() if partitions else [],
        timestamp=datetime.now(timezone.utc),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ShortURLEnvelope,
    responses={
        400: {"model": StatusResponse, "description": "Invalid request"},
        409: {"model": StatusResponse, "description": "Short ID already exists"},
        500: {"model": StatusResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a short URL in the current year's space. Optionally provide a custom ID and metadata.",
)
async def create_short_url(request: Request, body: ShortenRequest):
    """Create a short URL."""
    service = request.app.state.service

    try:
        record = await service.create_short_url(
            url=body.url,
            custom_id=body.custom_id or None,
            metadata=body.meta,
        )
    except ShortSpaceError as e:
        logger.warning(f"Failed to create short URL for {body.url!r}: {e}")
        return error_response(e)

    return ShortURLEnvelope(
        status="success",
        message="Short URL created successfully",
        data=_to_data(request, record.space, record),
    )


@router.get(
    "/{space}",
    response_model=List[ShortURLData],
    summary="List short URLs",
    description="List short URLs in a space, newest first.",
)
async def list_short_urls(
    request: Request,
    space: str,
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None, alias="perPage"),
):
    """List short URLs in a space."""
    service = request.app.state.service

    try:
        records = await service.list_urls(space, page, per_page)
    except ShortSpaceError as e:
        logger.error(f"Error listing short URLs in space '{space}': {e}")
        return error_response(e, "Failed to get short URLs")

    return [_to_data(request, space, record) for record in records]


@router.get(
    "/{space}/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get record and visit totals for a space.",
)
async def get_statistics(request: Request, space: str):
    """Get statistics for a space."""
    service = request.app.state.service

    try:
        stats = await service.get_statistics(space)
    except ShortSpaceError as e:
        return error_response(e)

    return StatisticsResponse(**stats)


@router.get(
    "/{space}/{short_id}",
    response_model=ShortURLEnvelope,
    responses={
        404: {"model": StatusResponse, "description": "Short URL not found"},
    },
    summary="Get short URL",
    description="Get a short URL including visit statistics.",
)
async def get_short_url(request: Request, space: str, short_id: str):
    """Get a short URL."""
    service = request.app.state.service

    try:
        record = await service.get_url_info(space, short_id)
    except NotFoundError as e:
        return error_response(e, "Short URL not found")
    except ShortSpaceError as e:
        return error_response(e)

    return ShortURLEnvelope(
        status="success",
        message="Short URL found successfully",
        data=_to_data(request, space, record),
    )


@router.delete(
    "/{space}/{short_id}",
    response_model=StatusResponse,
    responses={
        404: {"model": StatusResponse, "description": "Short URL not found"},
    },
    summary="Delete short URL",
)
async def delete_short_url(request: Request, space: str, short_id: str):
    """Delete a short URL."""
    service = request.app.state.service

    try:
        await service.delete_short_url(space, short_id)
    except NotFoundError as e:
        return error_response(e, "URL not found")
    except ShortSpaceError as e:
        logger.error(f"Error deleting /{space}/{short_id}: {e}")
        return error_response(e, "Failed to delete short URL")

    return StatusResponse(status="success", message="URL deleted successfully")
