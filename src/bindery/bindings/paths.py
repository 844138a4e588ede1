"""Path resolution against the data model or a local scope.

Paths are slash-delimited. An absolute path (``/user/name``) always walks the
data model. A relative path (``name``) walks the scope when one is supplied
and the data model otherwise; there is no fallback from scope to data model.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from bindery.bindings.values import UNDEFINED

__all__ = ["resolve_path", "split_path"]


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments.

    Examples:
        >>> split_path("/user/name")
        ['user', 'name']
        >>> split_path("//a//b")
        ['a', 'b']
        >>> split_path("/")
        []
    """
    if path.startswith("/"):
        path = path[1:]
    return [segment for segment in path.split("/") if segment]


def _step(cursor: Any, segment: str) -> Any:
    if isinstance(cursor, Mapping):
        return cursor.get(segment, UNDEFINED)
    if isinstance(cursor, Sequence) and not isinstance(cursor, (str, bytes)):
        if not (segment.isascii() and segment.isdigit()):
            return UNDEFINED
        index = int(segment)
        if segment != str(index):
            return UNDEFINED
        if index >= len(cursor):
            return UNDEFINED
        return cursor[index]
    return UNDEFINED


def resolve_path(
    data_model: Mapping[str, Any],
    path: str,
    scope: Mapping[str, Any] | None = None,
) -> Any:
    """Resolve a path to a value, or UNDEFINED when any segment is missing.

    Args:
        data_model: Root of absolute paths.
        path: Slash-delimited path. ``"/"`` and ``""`` address the root itself.
        scope: Optional root for relative paths.

    Returns:
        The value at the path, or UNDEFINED. Never raises for missing data.

    Examples:
        >>> model = {"user": {"name": "Ada"}, "tags": ["x", "y"]}
        >>> resolve_path(model, "/user/name")
        'Ada'
        >>> resolve_path(model, "/tags/1")
        'y'
        >>> resolve_path(model, "name", scope={"name": "Grace"})
        'Grace'
        >>> resolve_path(model, "/user/name/first")
        UNDEFINED
    """
    source: Any = data_model if path.startswith("/") or scope is None else scope
    if path in ("/", ""):
        return source

    cursor = source
    for segment in split_path(path):
        cursor = _step(cursor, segment)
        if cursor is UNDEFINED:
            return UNDEFINED
    return cursor
