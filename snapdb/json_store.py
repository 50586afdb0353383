from __future__ import annotations

import os
import shutil
from pathlib import Path

from .paths import temp_path_for


def read_bytes(path: Path) -> bytes | None:
    """
    Read the raw file content.

    Returns None for missing files. Other I/O errors propagate.
    """
    if not path.exists():
        return None
    return path.read_bytes()


def atomic_write_bytes(path: Path, payload: bytes) -> None:
    """
    Atomically write bytes to disk by writing to <path>.tmp then replacing.

    A failure before the replace leaves `path` untouched (and possibly a stray
    temp file behind).
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = temp_path_for(path)
    with tmp_path.open("wb") as f:
        f.write(payload)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp_path, path)


def copy_file(src: Path, dest: Path) -> None:
    shutil.copyfile(src, dest)
