"""Shared test fixtures for the media catalog test suite.

Each test gets its own in-memory SQLite database (StaticPool keeps the
single connection alive) with foreign keys enforced, so ON DELETE CASCADE
behaves as it does in production.
"""

import os

# Configure the app before any mediacat imports.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FORMAT"] = "text"
os.environ["AUTO_REASSIGN"] = "true"

from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mediacat import models  # noqa: F401
from mediacat.database import Base, enable_sqlite_foreign_keys, get_db
from mediacat.main import app
from mediacat.models import FolderType, MediaFile, MediaType, MusicFolder, User
from mediacat.repositories import MediaFileRepository


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def db(engine):
    """Per-test database session."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """FastAPI TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, username: str) -> User:
    user = User(username=username)
    db.add(user)
    db.commit()
    return user


def make_folder(db, path: str, name: Optional[str] = None, enabled: bool = True) -> MusicFolder:
    """Insert a folder row directly, with no grants and no reassignment."""
    folder = MusicFolder(
        path=path,
        name=name or path.rstrip("/").rsplit("/", 1)[-1],
        type=FolderType.MEDIA,
        enabled=enabled,
    )
    db.add(folder)
    db.commit()
    return folder


def make_entry(
    db,
    folder: MusicFolder,
    path: str,
    parent_path: Optional[str] = "",
    cover_art_path: Optional[str] = None,
    type: MediaType = MediaType.MUSIC,
    title: Optional[str] = None,
) -> MediaFile:
    entry = MediaFile(
        folder_id=folder.id,
        path=path,
        parent_path=parent_path,
        cover_art_path=cover_art_path,
        title=title or (path.rsplit("/", 1)[-1] if path else folder.name),
        type=type,
    )
    MediaFileRepository(db).add(entry)
    db.commit()
    return entry


@pytest.fixture()
def music_library(db):
    """/music with a jazz subtree, registered /music/jazz folder with no entries.

    Returns a dict of the two folders and every entry, keyed by a short name.
    """
    music = make_folder(db, "/music")
    jazz = make_folder(db, "/music/jazz")

    entries = {
        "root": make_entry(db, music, "", parent_path=None, type=MediaType.DIRECTORY),
        "jazz_dir": make_entry(
            db, music, "jazz", parent_path="", cover_art_path="jazz/cover.jpg",
            type=MediaType.DIRECTORY, title="Jazz Collection",
        ),
        "miles": make_entry(db, music, "jazz/miles.mp3", parent_path="jazz", cover_art_path="jazz/cover.jpg"),
        "live_dir": make_entry(
            db, music, "jazz/live", parent_path="jazz", cover_art_path="jazz/live/front.png",
            type=MediaType.ALBUM,
        ),
        "live_track": make_entry(
            db, music, "jazz/live/track01.flac", parent_path="jazz/live",
            cover_art_path="jazz/live/front.png",
        ),
        "rock_dir": make_entry(db, music, "rock", parent_path="", type=MediaType.DIRECTORY),
        "rock_track": make_entry(db, music, "rock/song.mp3", parent_path="rock"),
        "jazzfunk_track": make_entry(db, music, "jazzfunk/groove.mp3", parent_path="jazzfunk"),
    }
    return {"music": music, "jazz": jazz, "entries": entries}


def snapshot(db, entries) -> dict:
    """(folder_id, path, parent_path, cover_art_path) per entry id, read fresh."""
    db.expire_all()
    result = {}
    for entry in entries:
        row = db.get(MediaFile, entry.id)
        result[entry.id] = (row.folder_id, row.path, row.parent_path, row.cover_art_path)
    return result
