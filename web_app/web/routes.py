"""Redirect routes implementation."""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shortspace.errors import NotFoundError, ShortSpaceError
from ..errors import status_for_error

router = APIRouter()

logger = logging.getLogger("shortspace.web")


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service

    health = await service.health_check()

    if health["overall"]:
        return {"status": "healthy"}

    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service unhealthy",
    )


@router.get("/{space}/{short_id}", include_in_schema=False)
async def redirect_to_url(request: Request, space: str, short_id: str):
    """Redirect to the target URL and count the visit."""
    service = request.app.state.service

    try:
        record = await service.resolve(space, short_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="URL not found",
        )
    except ShortSpaceError as e:
        logger.error(f"Error resolving /{space}/{short_id}: {e}")
        raise HTTPException(status_code=status_for_error(e), detail=str(e))

    # 302 so every visit reaches us and is counted
    return RedirectResponse(url=record.target_url, status_code=status.HTTP_302_FOUND)
