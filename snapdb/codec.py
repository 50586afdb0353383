"""Document <-> bytes.

JsonCodec writes plain JSON, ASCII-escaped, with non-finite floats stored as
null. EncryptedCodec wraps compact JSON in the AES envelope from
snapdb.crypto, and on read falls back to plain JSON so a store that was
previously unencrypted still opens.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Protocol

from . import crypto
from .exceptions import FormatError

logger = logging.getLogger(__name__)


class Codec(Protocol):
    def encode(self, doc: dict[str, Any]) -> bytes:
        ...

    def decode(self, data: bytes) -> dict[str, Any]:
        ...


def _finite(value: Any) -> Any:
    """Replace NaN and +-Infinity with None, as strict JSON has no token for them."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(v) for v in value]
    return value


def _dumps(doc: dict[str, Any], *, indent: int | None) -> str:
    separators = None if indent else (",", ":")
    try:
        try:
            return json.dumps(doc, indent=indent, separators=separators, allow_nan=False)
        except ValueError:
            # non-finite floats; a circular reference fails again below
            return json.dumps(_finite(doc), indent=indent, separators=separators, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise FormatError(f"document is not JSON serializable: {e}") from e


def _bytes(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FormatError(f"document is not UTF-8 encodable: {e}") from e


def _loads(text: str) -> dict[str, Any]:
    try:
        raw = json.loads(text)
    except ValueError as e:
        raise FormatError(f"malformed JSON: {e}") from e
    if not isinstance(raw, dict):
        raise FormatError(f"top-level JSON value must be an object, got {type(raw).__name__}")
    return raw


def _text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"file is not UTF-8: {e}") from e


class JsonCodec:
    def __init__(self, *, pretty: bool = True):
        self.pretty = pretty

    def encode(self, doc: dict[str, Any]) -> bytes:
        return _bytes(_dumps(doc, indent=2 if self.pretty else None) + "\n")

    def decode(self, data: bytes) -> dict[str, Any]:
        return _loads(_text(data))


class EncryptedCodec:
    def __init__(self, key: str, *, debug: bool = False):
        self._key = crypto.key_bytes(key)
        self.debug = debug

    def encode(self, doc: dict[str, Any]) -> bytes:
        return _bytes(crypto.encrypt(_dumps(doc, indent=None), self._key))

    def decode(self, data: bytes) -> dict[str, Any]:
        text = _text(data)
        try:
            return _loads(crypto.decrypt(text, self._key))
        except FormatError as e:
            log = logger.warning if self.debug else logger.debug
            log("DECRYPT: failed (%r), attempting plain JSON read", e)
        try:
            return _loads(text)
        except FormatError as e:
            raise FormatError("content is neither a valid encrypted envelope nor plain JSON") from e


def codec_for(options: Any) -> Codec:
    if options.encryption_key:
        return EncryptedCodec(options.encryption_key, debug=options.debug)
    return JsonCodec(pretty=options.pretty)
