"""Music folder and folder-visibility models.

A music folder is a root directory exposed to users. Its ``path`` is an
absolute filesystem location; uniqueness of that path is checked by the
registry before insert rather than by a table constraint.
"""

import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class FolderType(str, enum.Enum):
    MEDIA = "MEDIA"
    PODCAST = "PODCAST"


class MusicFolder(Base):
    """Registered root directory."""

    __tablename__ = "music_folder"

    id = Column(Integer, primary_key=True, autoincrement=True)
    path = Column(Text, nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(Enum(FolderType, native_enum=False, length=20), nullable=False, default=FolderType.MEDIA)
    enabled = Column(Boolean, nullable=False, default=True)
    changed = Column(DateTime(timezone=True), nullable=True)

    grants = relationship(
        "MusicFolderUser",
        back_populates="folder",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<MusicFolder id={self.id} path={self.path!r}>"


class MusicFolderUser(Base):
    """Grants visibility of one folder to one user.

    A folder is visible to a user exactly when a row for the pair exists.
    """

    __tablename__ = "music_folder_user"

    music_folder_id = Column(
        Integer,
        ForeignKey("music_folder.id", ondelete="CASCADE"),
        primary_key=True,
    )
    username = Column(
        String(255),
        ForeignKey("users.username", ondelete="CASCADE"),
        primary_key=True,
    )

    folder = relationship("MusicFolder", back_populates="grants")
