"""Music folder, grant and reassignment schemas."""

import enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from pathlib import PurePosixPath
from typing import List, Optional

from ..models.music_folder import FolderType


class Direction(str, enum.Enum):
    """Which way catalog entries move between two nested folders."""
    PROMOTE = "PROMOTE"
    FOLD = "FOLD"


def _normalize_folder_path(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Path cannot be empty")
    if not v.startswith("/"):
        raise ValueError("Folder path must be absolute")
    # PurePosixPath collapses duplicate and trailing separators and "." but keeps "..".
    pure = PurePosixPath(v)
    if ".." in pure.parts:
        raise ValueError("Folder path must not contain '..' segments")
    return str(pure)


class MusicFolderCreate(BaseModel):
    """Schema for registering a music folder."""
    path: str
    name: Optional[str] = None
    type: FolderType = FolderType.MEDIA
    enabled: bool = True

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        return _normalize_folder_path(v)

    def display_name(self) -> str:
        """Explicit name, or the last path segment."""
        return self.name or PurePosixPath(self.path).name or self.path


class MusicFolderUpdate(BaseModel):
    """Schema for updating a music folder. Omitted fields are left unchanged."""
    path: Optional[str] = None
    name: Optional[str] = None
    type: Optional[FolderType] = None
    enabled: Optional[bool] = None

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_folder_path(v) if v is not None else v


class MusicFolderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    path: str
    name: str
    type: FolderType
    enabled: bool
    changed: Optional[datetime] = None


class ReassignRequest(BaseModel):
    """Request to move catalog entries between two nested folders."""
    from_id: int
    to_id: int


class ReassignResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    direction: Direction
    from_folder_id: int
    to_folder_id: int
    relative_path: str
    affected: int


class UserFoldersUpdate(BaseModel):
    """Replace-all set of folder ids visible to a user."""
    folder_ids: List[int] = Field(default_factory=list)


class UserCreate(BaseModel):
    username: str
    email: Optional[str] = None

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be empty")
        return v
