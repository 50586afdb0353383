from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class LoadResult:
    document: dict[str, Any] = field(default_factory=dict)
    error: Exception | None = None
    # True when the backing file did not exist and load() created it
    created: bool = False
    # set when the backing file was missing and creating it failed
    write_error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class WriteResult:
    ok: bool = True
    error: Exception | None = None


class DocumentBackend(Protocol):
    """
    Minimal persistence interface: a single JSON-like Document stored as a whole.
    """

    def load(self) -> LoadResult:
        """Load and return the full document (never raises)."""
        ...

    def save(self, doc: dict[str, Any]) -> WriteResult:
        """Persist the full document atomically (never raises)."""
        ...

    def copy_to(self, dest: Any) -> bool:
        """Copy the stored bytes elsewhere; False on failure."""
        ...
