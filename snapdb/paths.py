from __future__ import annotations

import os
from pathlib import Path

DEFAULT_FILE_NAME = "database.json"


def resolve_file_path(path: str | os.PathLike[str]) -> Path:
    # relative paths resolve against the current working directory
    return Path(path).expanduser().resolve()


def temp_path_for(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")
