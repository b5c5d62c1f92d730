"""Repository for catalog entries (the media_file table)."""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import update

from ..core.paths import SEPARATOR
from ..exceptions import MediaFileNotFoundError
from ..models.media_file import MediaFile
from .base import BaseRepository


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MediaFileRepository(BaseRepository[MediaFile]):
    """Data access layer for catalog entries."""

    model_class = MediaFile
    not_found_error = MediaFileNotFoundError

    def add(self, media_file: MediaFile) -> MediaFile:
        self.db.add(media_file)
        self.db.flush()
        return media_file

    def get_by_path(self, folder_id: int, path: str) -> Optional[MediaFile]:
        return (
            self.db.query(MediaFile)
            .filter(MediaFile.folder_id == folder_id, MediaFile.path == path)
            .first()
        )

    def get_root(self, folder_id: int) -> Optional[MediaFile]:
        return self.get_by_path(folder_id, "")

    def list_by_folder(self, folder_id: int) -> List[MediaFile]:
        return (
            self.db.query(MediaFile)
            .filter(MediaFile.folder_id == folder_id)
            .order_by(MediaFile.path)
            .all()
        )

    def list_under(self, folder_id: int, rel_path: str) -> List[MediaFile]:
        """Entries of *folder_id* whose path lies strictly below *rel_path*."""
        pattern = _escape_like(rel_path + SEPARATOR) + "%"
        return (
            self.db.query(MediaFile)
            .filter(
                MediaFile.folder_id == folder_id,
                MediaFile.path.like(pattern, escape="\\"),
            )
            .order_by(MediaFile.path)
            .all()
        )

    def bulk_update(self, mappings: Sequence[Dict[str, Any]]) -> int:
        """Apply per-row column values in one executemany keyed on ``id``."""
        if not mappings:
            return 0
        self.db.execute(update(MediaFile), list(mappings))
        # Rows already loaded in the session are now stale.
        self.db.expire_all()
        return len(mappings)
