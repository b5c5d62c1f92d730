"""Repository for music folders and folder visibility grants."""

import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import insert, literal, select

from ..core.paths import depth, is_strict_ancestor
from ..exceptions import FolderNotFoundError
from ..models.music_folder import MusicFolder, MusicFolderUser
from ..models.user import User
from .base import BaseRepository

logger = logging.getLogger(__name__)


class MusicFolderRepository(BaseRepository[MusicFolder]):
    """Data access layer for the folder registry."""

    model_class = MusicFolder
    not_found_error = FolderNotFoundError

    def create(self, folder: MusicFolder) -> Tuple[MusicFolder, bool]:
        """Insert *folder* and grant it to every existing user.

        Idempotent on the absolute path: when a folder with the same path is
        already registered nothing is written and ``(existing, False)`` is
        returned. Otherwise returns ``(folder, True)`` with ``folder.id`` set.
        """
        existing = self.get_by_path(folder.path)
        if existing is not None:
            return existing, False

        self.db.add(folder)
        self.db.flush()

        self.db.execute(
            insert(MusicFolderUser).from_select(
                ["music_folder_id", "username"],
                select(literal(folder.id), User.username),
            )
        )
        logger.info("Created music folder %s with id %s", folder.path, folder.id)
        return folder, True

    def delete(self, folder_id: int) -> int:
        """Delete the folder row. Returns the number of rows removed.

        Grants and catalog entries still pointing at it are not inspected.
        """
        count = (
            self.db.query(MusicFolder)
            .filter(MusicFolder.id == folder_id)
            .delete(synchronize_session="fetch")
        )
        logger.info("Deleted music folder with id %s", folder_id)
        return count

    def update(self, folder: MusicFolder) -> MusicFolder:
        """Write path/name/type/enabled/changed of *folder* back by id."""
        self.db.query(MusicFolder).filter(MusicFolder.id == folder.id).update(
            {
                MusicFolder.path: folder.path,
                MusicFolder.name: folder.name,
                MusicFolder.type: folder.type,
                MusicFolder.enabled: folder.enabled,
                MusicFolder.changed: folder.changed,
            },
            synchronize_session="fetch",
        )
        self.db.flush()
        return folder

    def get_by_path(self, path: str) -> Optional[MusicFolder]:
        return self.db.query(MusicFolder).filter(MusicFolder.path == path).first()

    def list_all(self, include_disabled: bool = True) -> List[MusicFolder]:
        query = self.db.query(MusicFolder)
        if not include_disabled:
            query = query.filter(MusicFolder.enabled.is_(True))
        return query.order_by(MusicFolder.id).all()

    def find_enclosing(self, path: str) -> Optional[MusicFolder]:
        """Deepest registered folder whose path is a strict ancestor of *path*."""
        candidates = [f for f in self.list_all() if is_strict_ancestor(f.path, path)]
        if not candidates:
            return None
        return max(candidates, key=lambda f: depth(f.path))

    # -- Visibility -------------------------------------------------------

    def list_for_user(self, username: str, include_disabled: bool = True) -> List[MusicFolder]:
        query = (
            self.db.query(MusicFolder)
            .join(MusicFolderUser, MusicFolderUser.music_folder_id == MusicFolder.id)
            .filter(MusicFolderUser.username == username)
        )
        if not include_disabled:
            query = query.filter(MusicFolder.enabled.is_(True))
        return query.order_by(MusicFolder.id).all()

    def set_for_user(self, username: str, folder_ids: Iterable[int]) -> None:
        """Replace every grant of *username* with one row per id in *folder_ids*.

        Two statements; callers wrap them in one transaction.
        """
        self.db.query(MusicFolderUser).filter(
            MusicFolderUser.username == username
        ).delete(synchronize_session="fetch")
        rows = [{"music_folder_id": folder_id, "username": username} for folder_id in folder_ids]
        if rows:
            self.db.execute(insert(MusicFolderUser), rows)

    def delete_grants(self, folder_id: int) -> int:
        return (
            self.db.query(MusicFolderUser)
            .filter(MusicFolderUser.music_folder_id == folder_id)
            .delete(synchronize_session="fetch")
        )

