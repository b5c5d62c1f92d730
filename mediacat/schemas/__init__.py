"""Pydantic schemas for request/response validation."""

from .folder import (
    Direction,
    MusicFolderCreate,
    MusicFolderUpdate,
    MusicFolderResponse,
    ReassignRequest,
    ReassignResponse,
    UserFoldersUpdate,
    UserCreate,
)

__all__ = [
    "Direction",
    "MusicFolderCreate",
    "MusicFolderUpdate",
    "MusicFolderResponse",
    "ReassignRequest",
    "ReassignResponse",
    "UserFoldersUpdate",
    "UserCreate",
]
