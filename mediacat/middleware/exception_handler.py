"""Exception handlers for structured error responses."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import DatabaseError, MediaCatException

logger = logging.getLogger(__name__)


async def mediacat_exception_handler(request: Request, exc: MediaCatException) -> JSONResponse:
    """Log the error and convert it to the standard JSON error body."""
    logger.error(
        f"MediaCatException: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures surface as DATABASE_ERROR; the transaction was already rolled back."""
    logger.exception("Database operation failed", extra={"path": request.url.path, "method": request.method})
    wrapped = DatabaseError("Database operation failed", original_error=exc)
    return JSONResponse(status_code=wrapped.status_code, content=wrapped.to_dict())
