from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, Callable

import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection
# without requiring an editable install.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


SECRET = "12345678901234567890123456789012"


@pytest.fixture
def sandbox(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Run the test from a temp working directory so default/relative paths never
    touch the real repo.
    """
    monkeypatch.chdir(tmp_path)
    for name in ("SNAPDB_FILE_PATH", "SNAPDB_ENCRYPTION_KEY", "SNAPDB_PRETTY", "SNAPDB_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def db_path(sandbox: Path) -> Path:
    return sandbox / "db.json"


@pytest.fixture
def make_db(db_path: Path) -> Callable[..., Any]:
    from snapdb import SnapDB

    def _make(**options: Any) -> SnapDB:
        options.setdefault("file_path", db_path)
        return SnapDB(options)

    return _make


@pytest.fixture
def recorder() -> Callable[[str], Callable[..., None]]:
    """
    Returns a factory of listeners that append (event, args) to `recorder.calls`.
    """
    calls: list[tuple[str, tuple[Any, ...]]] = []

    def _listener_for(event: str) -> Callable[..., None]:
        def _listener(*args: Any) -> None:
            calls.append((event, args))

        return _listener

    _listener_for.calls = calls  # type: ignore[attr-defined]
    return _listener_for
