"""Dot-notation addressing into a nested Document.

"a.b.c" addresses doc["a"]["b"]["c"]. Literal dots inside a key cannot be
escaped. A key with an empty segment ("", "a..b", ".a") is an empty path:
not found for reads, a no-op for deletes, and an error for writes.
"""

from __future__ import annotations

from typing import Any

from .exceptions import InvalidKeyError
from .values import ValueKind, kind_of


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def split_key(key: str) -> tuple[str, ...]:
    segments = tuple(key.split("."))
    if any(not s for s in segments):
        return ()
    return segments


def _is_mapping(value: Any) -> bool:
    return kind_of(value) is ValueKind.MAPPING


def resolve_get(doc: dict[str, Any], path: tuple[str, ...]) -> Any:
    """Return the value at `path`, or MISSING if any step does not resolve."""
    if not path:
        return MISSING
    current: Any = doc
    for segment in path:
        if not _is_mapping(current) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def resolve_set(doc: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """
    Set `value` at `path`, creating mappings along the way.

    Intermediate values that are missing or not mappings are replaced by an
    empty mapping.
    """
    if not path:
        raise InvalidKeyError(".".join(path))
    current = doc
    for segment in path[:-1]:
        nxt = current.get(segment)
        if not _is_mapping(nxt):
            nxt = {}
            current[segment] = nxt
        current = nxt
    current[path[-1]] = value


def resolve_delete(doc: dict[str, Any], path: tuple[str, ...]) -> bool:
    """Remove the value at `path`. Returns True only if something was removed."""
    if not path:
        return False
    parent = resolve_get(doc, path[:-1]) if len(path) > 1 else doc
    if not _is_mapping(parent) or path[-1] not in parent:
        return False
    del parent[path[-1]]
    return True
