"""
Handlers for failures the booking rules do not classify.

Business failures never reach these: they are returned as values and mapped
to 402/403/404 by the routes. What arrives here is infrastructure trouble or
a bug, reported as 503 or 500.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("storage_error", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "storage unavailable"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


EXCEPTION_HANDLERS = {
    SQLAlchemyError: storage_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app):
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
