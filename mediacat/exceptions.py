"""Custom exception hierarchy for the media catalog."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Folder errors
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    UNRELATED_FOLDERS = "UNRELATED_FOLDERS"

    # User errors
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Catalog errors
    MEDIA_FILE_NOT_FOUND = "MEDIA_FILE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class MediaCatException(Exception):
    """
    Base exception for all media catalog errors.

    Provides structured error responses with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class FolderNotFoundError(MediaCatException):
    """Music folder not found in database."""

    def __init__(self, folder_id: int):
        super().__init__(
            f"Music folder not found: {folder_id}",
            ErrorCode.FOLDER_NOT_FOUND,
            status_code=404,
            details={"folder_id": folder_id}
        )


class UserNotFoundError(MediaCatException):
    """User not found in database."""

    def __init__(self, username: str):
        super().__init__(
            f"User not found: {username}",
            ErrorCode.USER_NOT_FOUND,
            status_code=404,
            details={"username": username}
        )


class MediaFileNotFoundError(MediaCatException):
    """Catalog entry not found in database."""

    def __init__(self, media_file_id: int):
        super().__init__(
            f"Media file not found: {media_file_id}",
            ErrorCode.MEDIA_FILE_NOT_FOUND,
            status_code=404,
            details={"media_file_id": media_file_id}
        )


class UnrelatedFoldersError(MediaCatException):
    """Two folders are not in an ancestor/descendant relationship."""

    def __init__(self, from_path: str, to_path: str):
        super().__init__(
            f"Folders are not nested inside one another: {from_path} and {to_path}",
            ErrorCode.UNRELATED_FOLDERS,
            status_code=400,
            details={"from_path": from_path, "to_path": to_path}
        )


class ValidationError(MediaCatException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class DatabaseError(MediaCatException):
    """Database operation failed."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(
            message,
            ErrorCode.DATABASE_ERROR,
            status_code=500,
            details=details
        )
