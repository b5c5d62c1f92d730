"""Segment-level path helpers.

Catalog paths are stored relative to their folder with ``/`` between
segments; folder paths are absolute POSIX locations. All prefix work is
done on segment lists so a separator can never be left dangling or a
character dropped at the boundary.
"""

from pathlib import PurePosixPath
from typing import List, Optional, Sequence

SEPARATOR = "/"


def split_segments(rel_path: Optional[str]) -> List[str]:
    """``"a/b/c"`` -> ``["a", "b", "c"]``; empty or None -> ``[]``."""
    if not rel_path:
        return []
    return [segment for segment in rel_path.split(SEPARATOR) if segment]


def join_segments(segments: Sequence[str]) -> str:
    return SEPARATOR.join(segments)


def folder_segments(folder_path: str) -> List[str]:
    """Segments of an absolute folder path, without the root anchor."""
    pure = PurePosixPath(folder_path)
    return [part for part in pure.parts if part != pure.anchor]


def depth(folder_path: str) -> int:
    return len(folder_segments(folder_path))


def starts_with(segments: Sequence[str], prefix: Sequence[str]) -> bool:
    return len(segments) >= len(prefix) and list(segments[:len(prefix)]) == list(prefix)


def is_strict_ancestor(ancestor_path: str, descendant_path: str) -> bool:
    ancestor = folder_segments(ancestor_path)
    descendant = folder_segments(descendant_path)
    return len(descendant) > len(ancestor) and starts_with(descendant, ancestor)


def relative_segments(ancestor_path: str, descendant_path: str) -> Optional[List[str]]:
    """Segments leading from *ancestor_path* down to *descendant_path*.

    Returns None when *descendant_path* is not strictly below *ancestor_path*.
    """
    if not is_strict_ancestor(ancestor_path, descendant_path):
        return None
    return folder_segments(descendant_path)[depth(ancestor_path):]
