"""Database models."""

from .music_folder import MusicFolder, MusicFolderUser, FolderType
from .media_file import MediaFile, MediaType
from .user import User

__all__ = [
    "MusicFolder", "MusicFolderUser", "FolderType",
    "MediaFile", "MediaType",
    "User",
]
