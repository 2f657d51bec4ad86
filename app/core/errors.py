# File: app/core/errors.py
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for failures a caller can act on; carries its HTTP status."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class BadRequest(AppError):
    pass


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized Access"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InvalidTransition(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Invalid transition"


class QuotaExceeded(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Post limit reached for your membership"


class StaffUnavailable(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Staff not available"


class TrackingIdExhausted(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Could not allocate a unique tracking id"


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
