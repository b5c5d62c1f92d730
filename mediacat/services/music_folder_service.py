"""Deep module for music folder operations: registry, visibility and reassignment.

Every mutating method runs in one ``unit_of_work``: the insert plus grant
fan-out of a new folder, the delete plus re-insert of a user's grants, and
the bulk rewrites of a reassignment either all land or none do.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..core.config import settings
from ..database import unit_of_work
from ..exceptions import FolderNotFoundError, UserNotFoundError, ValidationError
from ..models.music_folder import MusicFolder
from ..repositories.music_folder_repository import MusicFolderRepository
from ..repositories.user_repository import UserRepository
from ..schemas.folder import MusicFolderCreate, MusicFolderUpdate
from .reassignment import ReassignmentResult, reassign_children

logger = logging.getLogger(__name__)

# Reassignments rewrite shared path space; only one runs at a time per process.
_reassign_lock = threading.RLock()


class MusicFolderService:
    """Folder registry and catalog reassignment behind a simple interface.

    Public methods:
        create_folder        -- idempotent on path; grants to all users; promotes
                                the subtree out of an enclosing folder
        delete_folder        -- folds the catalog back into an enclosing folder
        update_folder        -- partial update, stamps ``changed``
        reassign             -- move catalog entries between nested folders
        list_folders / get_folder / find_by_path
        list_folders_for_user / set_folders_for_user
    """

    def __init__(self, db: Session, auto_reassign: Optional[bool] = None):
        self.db = db
        self.folder_repo = MusicFolderRepository(db)
        self.user_repo = UserRepository(db)
        self.auto_reassign = settings.auto_reassign if auto_reassign is None else auto_reassign

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def create_folder(self, data: MusicFolderCreate) -> Tuple[MusicFolder, bool]:
        """Register a folder. Returns ``(folder, created)``.

        A path that is already registered is a no-op returning the existing
        folder with ``created=False``.
        """
        with _reassign_lock, unit_of_work(self.db):
            folder, created = self.folder_repo.create(MusicFolder(
                path=data.path,
                name=data.display_name(),
                type=data.type,
                enabled=data.enabled,
                changed=datetime.now(timezone.utc),
            ))
            if created and self.auto_reassign:
                ancestor = self.folder_repo.find_enclosing(folder.path)
                if ancestor is not None:
                    reassign_children(self.db, ancestor, folder)
        return folder, created

    def delete_folder(self, folder_id: int) -> None:
        """Delete a folder.

        When the folder is nested inside another registered folder its catalog
        is folded back into that ancestor first. Otherwise the store's cascade
        removes its grants and entries along with the row.
        """
        with _reassign_lock, unit_of_work(self.db):
            folder = self.folder_repo.get_by_id(folder_id)
            if self.auto_reassign:
                ancestor = self.folder_repo.find_enclosing(folder.path)
                if ancestor is not None:
                    reassign_children(self.db, folder, ancestor)
            self.folder_repo.delete_grants(folder_id)
            self.folder_repo.delete(folder_id)

    def update_folder(self, folder_id: int, data: MusicFolderUpdate) -> MusicFolder:
        """Update name/type/enabled/path. Catalog entries are not touched."""
        with unit_of_work(self.db):
            folder = self.folder_repo.get_by_id(folder_id)
            if data.path is not None and data.path != folder.path:
                clash = self.folder_repo.get_by_path(data.path)
                if clash is not None:
                    raise ValidationError(f"Folder path already registered: {data.path}", field="path")
                folder.path = data.path
            if data.name is not None:
                folder.name = data.name
            if data.type is not None:
                folder.type = data.type
            if data.enabled is not None:
                folder.enabled = data.enabled
            folder.changed = datetime.now(timezone.utc)
            self.folder_repo.update(folder)
        return folder

    def get_folder(self, folder_id: int) -> MusicFolder:
        return self.folder_repo.get_by_id(folder_id)

    def find_by_path(self, path: str) -> Optional[MusicFolder]:
        return self.folder_repo.get_by_path(path)

    def list_folders(self, include_disabled: bool = True) -> List[MusicFolder]:
        return self.folder_repo.list_all(include_disabled=include_disabled)

    # ------------------------------------------------------------------
    # Reassignment
    # ------------------------------------------------------------------

    def reassign(self, from_id: int, to_id: int) -> ReassignmentResult:
        """Move catalog entries between two nested folders in one transaction.

        Raises:
            ValidationError: *from_id* equals *to_id*.
            FolderNotFoundError: either folder is missing.
            UnrelatedFoldersError: neither folder contains the other.
        """
        if from_id == to_id:
            raise ValidationError("Cannot reassign a folder to itself", field="to_id")

        with _reassign_lock, unit_of_work(self.db):
            from_folder = self.folder_repo.get_by_id(from_id)
            to_folder = self.folder_repo.get_by_id(to_id)
            return reassign_children(self.db, from_folder, to_folder)

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def list_folders_for_user(self, username: str, include_disabled: bool = True) -> List[MusicFolder]:
        return self.folder_repo.list_for_user(username, include_disabled=include_disabled)

    def set_folders_for_user(self, username: str, folder_ids: Sequence[int]) -> List[MusicFolder]:
        """Replace the set of folders visible to *username*.

        Duplicate ids are collapsed. Every id must name an existing folder.
        """
        unique_ids = list(dict.fromkeys(folder_ids))

        with unit_of_work(self.db):
            if self.user_repo.get(username) is None:
                raise UserNotFoundError(username)
            for folder_id in unique_ids:
                if self.folder_repo.get_by_id_optional(folder_id) is None:
                    raise FolderNotFoundError(folder_id)
            self.folder_repo.set_for_user(username, unique_ids)

        logger.info(
            "Replaced folder grants for %s", username,
            extra={"folder_ids": unique_ids},
        )
        return self.folder_repo.list_for_user(username)
