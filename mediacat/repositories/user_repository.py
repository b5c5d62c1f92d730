"""Repository for the username population."""

from typing import List, Optional

from ..models.user import User


class UserRepository:
    """Data access layer for users."""

    def __init__(self, db):
        self.db = db

    def create(self, username: str, email: Optional[str] = None) -> User:
        """Create a user. Idempotent: returns the existing record if present.

        Existing music folders are not granted to the new user.
        """
        user = self.get(username)
        if user is not None:
            return user
        user = User(username=username, email=email)
        self.db.add(user)
        self.db.flush()
        return user

    def get(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def list_usernames(self) -> List[str]:
        return [row.username for row in self.db.query(User.username).order_by(User.username)]

    def delete(self, username: str) -> bool:
        count = self.db.query(User).filter(User.username == username).delete(synchronize_session="fetch")
        return count > 0
