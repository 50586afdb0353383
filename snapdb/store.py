"""The SnapDB store engine.

Every mutation runs the same three steps: change the in-memory Document,
save it to disk synchronously, then notify observers. Reads never touch the
disk; changes made to the backing file by someone else stay invisible until
reload().

Example:
    from snapdb import SnapDB

    db = SnapDB("app.json")
    db.set("user.name", "alice")
    db.add("user.visits", 1)
    db.push("user.tags", "admin")

    db.get("user")          # {'name': 'alice', 'visits': 1, 'tags': ['admin']}
    db.has("user.email")    # False
"""

from __future__ import annotations

import copy
import logging
import math
import os
from pathlib import Path
from typing import Any, Callable, Literal, Mapping

from .codec import codec_for
from .disk_store import DiskDocumentStore
from .events import EventBus, EventName, Listener
from .exceptions import InvalidKeyError, InvalidOperatorError, ValueKindError
from .interfaces import DocumentBackend
from .keypath import MISSING, resolve_delete, resolve_get, resolve_set, split_key
from .settings import StoreOptions
from .values import ValueKind, canonical, kind_of

logger = logging.getLogger(__name__)

Operator = Literal["+", "-", "*", "/", "%"]


def _divide(a: float, b: float) -> float:
    if b != 0:
        return a / b
    # IEEE-754: x/0 is +-inf by the signs of x and 0, 0/0 is nan
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _modulo(a: float, b: float) -> float:
    # truncated remainder: the result takes the sign of the dividend
    if b == 0 or math.isinf(a):
        return math.nan
    if isinstance(a, int) and isinstance(b, int):
        r = abs(a) % abs(b)
        return -r if a < 0 else r
    return math.fmod(a, b)


_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "%": _modulo,
}


class SnapDB:
    """File-backed key-value store with dot-notation keys.

    Args:
        options: A file path, a mapping of options (file_path/filePath,
            encryption_key/encryptionKey, pretty, debug) or a StoreOptions.
        events: An EventBus to publish on. Pass one that already has
            listeners to observe the initial "ready" event.
        backend: Persistence backend; defaults to a DiskDocumentStore on
            options.file_path.

    Raises:
        ConfigurationError: If the options are invalid. Nothing touches the
            disk in that case.
    """

    def __init__(
        self,
        options: StoreOptions | str | os.PathLike[str] | Mapping[str, Any] | None = None,
        *,
        events: EventBus | None = None,
        backend: DocumentBackend | None = None,
    ):
        self._options = StoreOptions.parse(options)
        self._events = events if events is not None else EventBus()
        self._backend = backend or DiskDocumentStore(
            self._options.file_path,
            codec_for(self._options),
            debug=self._options.debug,
        )
        self._doc: dict[str, Any] = {}
        self._load()

    # Properties

    @property
    def options(self) -> StoreOptions:
        return self._options

    @property
    def file_path(self) -> Path:
        return self._options.file_path

    @property
    def events(self) -> EventBus:
        return self._events

    # Observers

    def on(self, event: EventName, listener: Listener) -> Listener:
        return self._events.on(event, listener)

    def once(self, event: EventName, listener: Listener) -> Listener:
        return self._events.once(event, listener)

    def off(self, event: EventName, listener: Listener) -> bool:
        return self._events.off(event, listener)

    # Persistence

    def _load(self) -> None:
        result = self._backend.load()
        self._doc = result.document
        if result.write_error is not None:
            self._events.emit("error", result.write_error)
        logger.debug("LOAD: %s ready with %d top-level keys", self.file_path, len(self._doc))
        self._events.emit("ready", self)

    def _save(self) -> None:
        result = self._backend.save(self._doc)
        if not result.ok:
            self._events.emit("error", result.error)

    def reload(self) -> None:
        """Re-read the backing file, discarding the in-memory Document."""
        self._load()

    # Core operations

    def set(self, key: str, value: Any) -> Any:
        """Store `value` at `key` (dot notation creates nested mappings).

        Returns:
            The value passed in.

        Raises:
            InvalidKeyError: If `key` has an empty segment.
        """
        path = split_key(key)
        if not path:
            raise InvalidKeyError(key)
        resolve_set(self._doc, path, copy.deepcopy(value))
        self._save()
        self._events.emit("set", key, value)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Return a copy of the value at `key`, or `default` if it does not resolve."""
        value = resolve_get(self._doc, split_key(key))
        if value is MISSING:
            return default
        return copy.deepcopy(value)

    def has(self, key: str) -> bool:
        return resolve_get(self._doc, split_key(key)) is not MISSING

    def delete(self, key: str) -> bool:
        """Remove `key`. Saves and emits "delete" only when something was removed."""
        removed = resolve_delete(self._doc, split_key(key))
        if removed:
            self._save()
            self._events.emit("delete", key)
        return removed

    def all(self) -> dict[str, Any]:
        """Return a deep copy of the whole Document."""
        return copy.deepcopy(self._doc)

    def clear(self) -> None:
        self._doc = {}
        self._save()
        self._events.emit("clear")

    def backup(self, dest_path: str | os.PathLike[str]) -> bool:
        """Copy the current backing file to `dest_path`. Never raises."""
        return self._backend.copy_to(dest_path)

    # Numbers

    def _number_at(self, key: str) -> float:
        current = resolve_get(self._doc, split_key(key))
        if current is MISSING:
            return 0
        kind = kind_of(current)
        if kind is not ValueKind.NUMBER:
            raise ValueKindError(key, "a number", kind.value)
        return current

    def math(self, key: str, operator: Operator, operand: float) -> float:
        """Apply `current <operator> operand` and store the result.

        Division and modulo by zero follow IEEE-754 (inf/nan) instead of
        raising. `%` is a truncated remainder, so its sign follows the
        current value: -5 % 3 == -2.

        Raises:
            ValueKindError: If the current value is not a number.
            InvalidOperatorError: If `operator` is not one of + - * / %.
        """
        current = self._number_at(key)
        fn = _OPERATORS.get(operator)
        if fn is None:
            raise InvalidOperatorError(operator)
        return self.set(key, fn(current, operand))

    def add(self, key: str, count: float) -> float:
        return self.math(key, "+", count)

    def subtract(self, key: str, count: float) -> float:
        return self.math(key, "-", count)

    # Arrays

    def _array_at(self, key: str) -> list[Any]:
        current = resolve_get(self._doc, split_key(key))
        if current is MISSING:
            return []
        kind = kind_of(current)
        if kind is not ValueKind.ARRAY:
            raise ValueKindError(key, "an array", kind.value)
        return list(current)

    def push(self, key: str, *elements: Any) -> list[Any]:
        """Append `elements` to the array at `key` (created if absent)."""
        items = self._array_at(key)
        items.extend(elements)
        return self.set(key, items)

    def pull(self, key: str, element_or_filter: Any) -> list[Any]:
        """Remove matching elements from the array at `key`.

        A callable is a predicate: every item for which it returns true is
        removed. Anything else is compared structurally against each item
        (mapping key order does not matter).
        """
        items = self._array_at(key)
        if callable(element_or_filter):
            kept = [item for item in items if not element_or_filter(item)]
        else:
            target = canonical(element_or_filter)
            kept = [item for item in items if canonical(item) != target]
        return self.set(key, kept)

    # Python conveniences

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        return len(self._doc)

    def __bool__(self) -> bool:
        # an empty store is still a usable store
        return True

    def __repr__(self) -> str:
        return f"SnapDB({str(self.file_path)!r}, encrypted={self._options.encrypted})"
