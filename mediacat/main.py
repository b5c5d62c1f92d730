"""Main FastAPI application."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .api import folders_router, users_router
from .core.config import settings
from .core.logging_config import mask_url, setup_logging
from .database import DATABASE_URL, get_db, init_db
from .exceptions import MediaCatException
from .middleware.exception_handler import database_exception_handler, mediacat_exception_handler
from .middleware.request_context import RequestContextMiddleware

setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup."""
    logger.info("Connecting to database: %s", mask_url(DATABASE_URL))
    init_db()
    logger.info(
        "Media catalog API started | env=%s | auto_reassign=%s",
        settings.environment.value,
        settings.auto_reassign,
    )
    yield


app = FastAPI(
    title="Media Catalog API",
    description=(
        "Admin API for music folders: folder registry, per-user folder "
        "visibility and reassignment of catalog entries between nested folders."
    ),
    version="1.0.0",
    license_info={"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)

app.add_exception_handler(MediaCatException, mediacat_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)

app.include_router(folders_router)
app.include_router(users_router)


_startup_time = time.monotonic()


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check returning database status, uptime, and folder count.

    Never raises; returns degraded status on DB failure.
    """
    db_status = "ok"
    folder_count = 0
    try:
        folder_count = db.execute(text("SELECT COUNT(*) FROM music_folder")).scalar() or 0
    except SQLAlchemyError:
        db_status = "error"

    return {
        "status": "healthy" if db_status == "ok" else "degraded",
        "db": db_status,
        "uptime_seconds": round(time.monotonic() - _startup_time),
        "folder_count": folder_count,
    }
