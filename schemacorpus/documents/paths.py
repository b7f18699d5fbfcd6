"""
Corpus path segmenting.

Paths are split one separator at a time. Consecutive separators are kept
significant: ``"a//b"`` has an empty middle segment.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

SEPARATOR = "/"
NAMESPACE_SEPARATOR = ":"


def split_first(path: str) -> Tuple[str, Optional[str]]:
    """
    Split at the first separator.

    Returns (segment, remainder); remainder is None when the path holds no
    separator, in which case the whole path is the segment.
    """
    first = path.find(SEPARATOR)
    if first < 0:
        return path, None
    return path[:first], path[first + 1:]


def walk_segments(path: str) -> Iterator[Tuple[str, Optional[str]]]:
    """
    Yield (segment, remainder) pairs until no separator remains.

    The last pair carries remainder None. Empty input yields one empty segment.
    """
    remaining: Optional[str] = path
    while remaining is not None:
        segment, remaining = split_first(remaining)
        yield segment, remaining


def split_segments(path: str) -> List[str]:
    """``"a/b/"`` -> ``["a", "b", ""]``."""
    return [segment for segment, _ in walk_segments(path)]


def split_namespace_path(path: str) -> Tuple[Optional[str], str]:
    """
    Split ``"adls:/a/b.json"`` into ``("adls", "/a/b.json")``.

    Paths without a namespace prefix return (None, path).
    """
    colon = path.find(NAMESPACE_SEPARATOR)
    if colon < 0:
        return None, path
    # a separator before the colon means the colon belongs to a name
    slash = path.find(SEPARATOR)
    if 0 <= slash < colon:
        return None, path
    return path[:colon], path[colon + 1:]
