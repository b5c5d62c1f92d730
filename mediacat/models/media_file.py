"""Catalog entry model."""

import enum

from sqlalchemy import Column, Enum, ForeignKey, Index, Integer, String, Text

from ..database import Base


class MediaType(str, enum.Enum):
    MUSIC = "MUSIC"
    PODCAST = "PODCAST"
    AUDIOBOOK = "AUDIOBOOK"
    VIDEO = "VIDEO"
    DIRECTORY = "DIRECTORY"
    ALBUM = "ALBUM"


class MediaFile(Base):
    """A file or directory in the catalog, owned by exactly one music folder.

    ``path``, ``parent_path`` and ``cover_art_path`` are all relative to the
    owning folder's root and use ``/`` between segments. The entry with
    ``path == ""`` is the folder's root directory; its ``parent_path`` is NULL
    once it has been promoted to a root and ``""`` for a folder scanned fresh.
    """

    __tablename__ = "media_file"
    __table_args__ = (
        Index("ix_media_file_folder_path", "folder_id", "path"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    folder_id = Column(
        Integer,
        ForeignKey("music_folder.id", ondelete="CASCADE"),
        nullable=False,
    )
    path = Column(Text, nullable=False, default="")
    parent_path = Column(Text, nullable=True)
    cover_art_path = Column(Text, nullable=True)
    title = Column(String(500), nullable=True)
    type = Column(Enum(MediaType, native_enum=False, length=20), nullable=False, default=MediaType.MUSIC)

    def __repr__(self) -> str:
        return f"<MediaFile id={self.id} folder_id={self.folder_id} path={self.path!r}>"
