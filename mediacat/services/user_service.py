"""User population management.

New users are not granted any existing folder; visibility is assigned
explicitly through ``MusicFolderService.set_folders_for_user``.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..database import unit_of_work
from ..exceptions import UserNotFoundError
from ..models.user import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def create_user(self, username: str, email: Optional[str] = None) -> User:
        with unit_of_work(self.db):
            user = self.user_repo.create(username, email=email)
        logger.info("Registered user %s", username)
        return user

    def list_usernames(self) -> List[str]:
        return self.user_repo.list_usernames()

    def delete_user(self, username: str) -> None:
        with unit_of_work(self.db):
            if not self.user_repo.delete(username):
                raise UserNotFoundError(username)
        logger.info("Deleted user %s", username)
