"""Data access repositories."""

from .base import BaseRepository
from .music_folder_repository import MusicFolderRepository
from .media_file_repository import MediaFileRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "MusicFolderRepository",
    "MediaFileRepository",
    "UserRepository",
]
