"""Move catalog ownership between two nested music folders.

Two directions exist, picked by comparing how deep the two folder paths are:

PROMOTE  the deeper folder ``to`` sits inside ``from``. Every entry of
         ``from`` below the relative path R is handed to ``to`` with R
         stripped from its path, parent path and cover-art path. The
         directory entry at exactly R becomes the root entry of ``to``.

FOLD     the deeper folder ``from`` sits inside ``to``. Every entry of
         ``from`` is handed to ``to`` with R prepended; the root entry of
         ``from`` becomes the directory entry at R.

The rewrites are computed by pure functions over segment lists
(``promote_entries`` / ``fold_entries``) and applied as one bulk update per
column set. Nothing here commits: the caller owns the transaction and must
not run two reassignments over overlapping subtrees concurrently.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..core.paths import depth, join_segments, relative_segments, split_segments, starts_with
from ..exceptions import UnrelatedFoldersError
from ..models.media_file import MediaType
from ..models.music_folder import MusicFolder
from ..repositories.media_file_repository import MediaFileRepository
from ..schemas.folder import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReassignmentPlan:
    direction: Direction
    ancestor: MusicFolder
    descendant: MusicFolder
    relative: Tuple[str, ...]

    @property
    def relative_path(self) -> str:
        return join_segments(self.relative)


@dataclass(frozen=True)
class EntryRewrite:
    """New column values for one catalog entry.

    ``title`` and ``type`` are only carried for the entry that becomes the
    root of a promoted folder.
    """

    id: int
    folder_id: int
    path: str
    parent_path: Optional[str]
    cover_art_path: Optional[str]
    title: Optional[str] = None
    type: Optional[MediaType] = None
    becomes_root: bool = field(default=False, compare=False)

    def as_mapping(self) -> Dict[str, Any]:
        mapping: Dict[str, Any] = {
            "id": self.id,
            "folder_id": self.folder_id,
            "path": self.path,
            "parent_path": self.parent_path,
            "cover_art_path": self.cover_art_path,
        }
        if self.becomes_root:
            mapping["title"] = self.title
            mapping["type"] = self.type
        return mapping


@dataclass(frozen=True)
class ReassignmentResult:
    direction: Direction
    from_folder_id: int
    to_folder_id: int
    relative_path: str
    affected: int


def plan_direction(from_folder: MusicFolder, to_folder: MusicFolder) -> ReassignmentPlan:
    """Decide which way entries move between *from_folder* and *to_folder*.

    The deeper path is taken as the descendant. The shallower path must be a
    true segment-wise ancestor of it; otherwise ``UnrelatedFoldersError`` is
    raised before anything is read or written.
    """
    if depth(to_folder.path) > depth(from_folder.path):
        direction, ancestor, descendant = Direction.PROMOTE, from_folder, to_folder
    else:
        direction, ancestor, descendant = Direction.FOLD, to_folder, from_folder

    relative = relative_segments(ancestor.path, descendant.path)
    if relative is None:
        raise UnrelatedFoldersError(from_folder.path, to_folder.path)
    return ReassignmentPlan(direction, ancestor, descendant, tuple(relative))


def _strip(rel_path: Optional[str], prefix: Sequence[str]) -> Optional[List[str]]:
    """Segments of *rel_path* below *prefix*, or None if it is not under it."""
    segments = split_segments(rel_path)
    if not starts_with(segments, prefix):
        return None
    return segments[len(prefix):]


def _strip_cover_art(cover_art_path: Optional[str], prefix: Sequence[str]) -> Optional[str]:
    if not cover_art_path:
        return cover_art_path
    remainder = _strip(cover_art_path, prefix)
    if not remainder:
        # Outside the subtree, or the promoted directory itself; no file below the new root.
        return None
    return join_segments(remainder)


def _prefix_cover_art(cover_art_path: Optional[str], prefix: Sequence[str]) -> Optional[str]:
    if not cover_art_path:
        return cover_art_path
    return join_segments(list(prefix) + split_segments(cover_art_path))


def promote_entries(
    entries: Iterable[Any],
    relative: Sequence[str],
    to_folder: MusicFolder,
) -> List[EntryRewrite]:
    """Rewrite entries of the ancestor so that they belong to *to_folder*.

    *entries* may contain anything from the ancestor folder; only the
    directory at *relative* and the entries strictly below it are rewritten.
    """
    prefix = list(relative)
    rewrites: List[EntryRewrite] = []

    for entry in entries:
        segments = split_segments(entry.path)
        if not starts_with(segments, prefix):
            continue

        if len(segments) == len(prefix):
            rewrites.append(EntryRewrite(
                id=entry.id,
                folder_id=to_folder.id,
                path="",
                parent_path=None,
                cover_art_path=_strip_cover_art(entry.cover_art_path, prefix),
                title=to_folder.name,
                type=MediaType.DIRECTORY,
                becomes_root=True,
            ))
            continue

        remainder = segments[len(prefix):]
        parent = _strip(entry.parent_path, prefix)
        if parent is None:
            parent = remainder[:-1]
        rewrites.append(EntryRewrite(
            id=entry.id,
            folder_id=to_folder.id,
            path=join_segments(remainder),
            parent_path=join_segments(parent),
            cover_art_path=_strip_cover_art(entry.cover_art_path, prefix),
        ))

    return rewrites


def fold_entries(
    entries: Iterable[Any],
    relative: Sequence[str],
    to_folder_id: int,
) -> List[EntryRewrite]:
    """Rewrite every entry of a nested folder into its ancestor's namespace."""
    prefix = list(relative)
    rewrites: List[EntryRewrite] = []

    for entry in entries:
        if entry.path == "":
            rewrites.append(EntryRewrite(
                id=entry.id,
                folder_id=to_folder_id,
                path=join_segments(prefix),
                parent_path=join_segments(prefix[:-1]),
                cover_art_path=_prefix_cover_art(entry.cover_art_path, prefix),
            ))
            continue

        rewrites.append(EntryRewrite(
            id=entry.id,
            folder_id=to_folder_id,
            path=join_segments(prefix + split_segments(entry.path)),
            parent_path=join_segments(prefix + split_segments(entry.parent_path)),
            cover_art_path=_prefix_cover_art(entry.cover_art_path, prefix),
        ))

    return rewrites


def _apply(repo: MediaFileRepository, rewrites: Sequence[EntryRewrite]) -> None:
    # One executemany per column set: plain entries, then the promoted root.
    plain = [r.as_mapping() for r in rewrites if not r.becomes_root]
    roots = [r.as_mapping() for r in rewrites if r.becomes_root]
    repo.bulk_update(plain)
    repo.bulk_update(roots)


def reassign_children(db: Session, from_folder: MusicFolder, to_folder: MusicFolder) -> ReassignmentResult:
    """Move catalog entries from *from_folder* to *to_folder* inside *db*'s transaction.

    Raises:
        UnrelatedFoldersError: the folders are not nested inside one another.
    """
    plan = plan_direction(from_folder, to_folder)
    repo = MediaFileRepository(db)

    if plan.direction is Direction.PROMOTE:
        entries = repo.list_under(from_folder.id, plan.relative_path)
        directory = repo.get_by_path(from_folder.id, plan.relative_path)
        if directory is not None:
            entries.append(directory)
        rewrites = promote_entries(entries, plan.relative, to_folder)
    else:
        entries = repo.list_by_folder(from_folder.id)
        rewrites = fold_entries(entries, plan.relative, to_folder.id)

    _apply(repo, rewrites)

    logger.info(
        "Reassigned %d catalog entries from folder %s to folder %s",
        len(rewrites), from_folder.id, to_folder.id,
        extra={"direction": plan.direction.value, "relative_path": plan.relative_path},
    )
    return ReassignmentResult(
        direction=plan.direction,
        from_folder_id=from_folder.id,
        to_folder_id=to_folder.id,
        relative_path=plan.relative_path,
        affected=len(rewrites),
    )
