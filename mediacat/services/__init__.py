"""Business logic services."""

from .music_folder_service import MusicFolderService
from .user_service import UserService

__all__ = ["MusicFolderService", "UserService"]
