"""Database configuration, session management and the unit of work."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url


def enable_sqlite_foreign_keys(engine) -> None:
    """Turn on FK enforcement for every new SQLite connection.

    SQLite defaults foreign_keys to OFF, so ON DELETE CASCADE from
    music_folder to its grants and catalog entries is silently ignored
    without it.
    """
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if settings.is_sqlite():
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)
else:
    engine = create_engine(
        DATABASE_URL,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet."""
    from . import models  # noqa: F401  registers the mappers on Base.metadata

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Dependency for FastAPI routes to get database session.

    Rolls back the transaction on unhandled exceptions so that the
    connection is returned to the pool in a clean state.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Run a block of statements as one transaction on *db*.

    Commits when the block exits normally. On any exception the whole
    transaction is rolled back and the exception re-raised unchanged, so a
    failure halfway through a multi-statement rewrite leaves no partial state.
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.debug("Rolling back unit of work", exc_info=True)
        db.rollback()
        raise
