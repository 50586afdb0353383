from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .codec import Codec, JsonCodec
from .exceptions import FormatError
from .interfaces import DocumentBackend, LoadResult, WriteResult
from .json_store import atomic_write_bytes, copy_file, read_bytes
from .paths import resolve_file_path

logger = logging.getLogger(__name__)


class DiskDocumentStore(DocumentBackend):
    """
    Stores a single Document on disk at a fixed path.

    - load() always yields a dict (empty on missing/invalid content).
    - save() writes atomically via a <path>.tmp sibling.
    - Neither raises; failures come back in the result objects.
    """

    def __init__(self, path: Path, codec: Codec | None = None, *, debug: bool = False):
        self._path = path
        self._codec = codec or JsonCodec()
        self._debug = debug

    @property
    def path(self) -> Path:
        return self._path

    def _warn(self, msg: str, *args: Any) -> None:
        if self._debug:
            logger.warning(msg, *args)
        else:
            logger.debug(msg, *args)

    def load(self) -> LoadResult:
        try:
            raw = read_bytes(self._path)
        except OSError as e:
            self._warn("LOAD: failed to read %s: %r", self._path, e)
            return LoadResult(error=e)

        if raw is None:
            written = self.save({})
            return LoadResult(error=written.error, write_error=written.error, created=written.ok)

        if not raw.strip():
            return LoadResult()

        try:
            return LoadResult(document=self._codec.decode(raw))
        except FormatError as e:
            self._warn("LOAD: could not decode %s, starting empty: %r", self._path, e)
            return LoadResult(error=e)

    def save(self, doc: dict[str, Any]) -> WriteResult:
        try:
            atomic_write_bytes(self._path, self._codec.encode(doc))
        except (OSError, FormatError) as e:
            self._warn("SAVE: failed to write %s: %r", self._path, e)
            return WriteResult(ok=False, error=e)
        return WriteResult()

    def copy_to(self, dest: Any) -> bool:
        try:
            copy_file(self._path, resolve_file_path(dest))
        except OSError as e:
            self._warn("BACKUP: failed to copy %s to %s: %r", self._path, dest, e)
            return False
        return True
