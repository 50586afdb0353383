"""snapdb: a file-backed JSON key-value store with dot-notation keys.

    from snapdb import SnapDB

    db = SnapDB({"file_path": "app.json", "encryption_key": "0" * 32})
    db.set("settings.theme", "dark")
    db.get("settings")  # {'theme': 'dark'}
"""

from __future__ import annotations

from .codec import EncryptedCodec, JsonCodec, codec_for
from .disk_store import DiskDocumentStore
from .events import EventBus
from .exceptions import (
    ConfigurationError,
    DecryptionError,
    FormatError,
    InvalidKeyError,
    InvalidOperatorError,
    SnapDBError,
    ValueKindError,
)
from .interfaces import DocumentBackend, LoadResult, WriteResult
from .settings import StoreOptions
from .store import SnapDB
from .values import ValueKind, kind_of

__all__ = [
    "SnapDB",
    "StoreOptions",
    "EventBus",
    "DocumentBackend",
    "DiskDocumentStore",
    "LoadResult",
    "WriteResult",
    "JsonCodec",
    "EncryptedCodec",
    "codec_for",
    "ValueKind",
    "kind_of",
    "SnapDBError",
    "ConfigurationError",
    "InvalidKeyError",
    "ValueKindError",
    "InvalidOperatorError",
    "FormatError",
    "DecryptionError",
]
