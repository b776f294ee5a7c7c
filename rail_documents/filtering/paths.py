"""
Dot-path matching helpers for filter lists.

A filter list is a list of dot-separated field paths such as
``["name", "fb.id"]``. ``None`` stands for "no restriction".
"""

from typing import Iterable, Optional

FilterList = Optional[list[str]]

PATH_SEPARATOR = "."


def is_allowed(path: str, filters: FilterList) -> bool:
    """Return True if ``path`` is literally permitted by ``filters``."""
    if filters is None:
        return True
    return path in filters


def is_whole_subtree_allowed(key: str, filters: FilterList) -> bool:
    """Return True if ``key`` itself is listed, so its nested object passes as-is."""
    if filters is None:
        return True
    return key in filters


def reduce_for_descent(key: str, filters: Iterable[str]) -> list[str]:
    """
    Derive the filter list that applies one level below ``key``.

    Examples:
        >>> reduce_for_descent("fb", ["name", "fb.id", "fb.auth.token", "fbx.id"])
        ['id', 'auth.token']
    """
    prefix = key + PATH_SEPARATOR
    return [path[len(prefix):] for path in filters if path.startswith(prefix)]


def top_level_fields(filters: Iterable[str]) -> list[str]:
    """
    First segments of every path, deduplicated, order preserved.

    Examples:
        >>> top_level_fields(["name", "fb.id", "fb.name", "id"])
        ['name', 'fb', 'id']
    """
    seen: list[str] = []
    for path in filters:
        head = path.split(PATH_SEPARATOR, 1)[0]
        if head and head not in seen:
            seen.append(head)
    return seen
