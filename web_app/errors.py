"""Map engine errors to HTTP responses."""

from fastapi import status
from fastapi.responses import JSONResponse

from shortspace.errors import (
    CapacityExhaustedError,
    DuplicateIDError,
    InvalidInputError,
    NotFoundError,
    ShortSpaceError,
)

_STATUS_BY_ERROR = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateIDError, status.HTTP_409_CONFLICT),
    (CapacityExhaustedError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for_error(exc: ShortSpaceError) -> int:
    """HTTP status for an engine error; anything unlisted is a 500."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: ShortSpaceError, message: str = None) -> JSONResponse:
    """JSON error envelope for an engine error."""
    return JSONResponse(
        status_code=status_for_error(exc),
        content={"status": "error", "message": message or str(exc)},
    )
