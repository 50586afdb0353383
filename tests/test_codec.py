from __future__ import annotations

import json
import math

import pytest

from snapdb import crypto
from snapdb.codec import EncryptedCodec, JsonCodec, codec_for
from snapdb.exceptions import DecryptionError, FormatError
from snapdb.settings import StoreOptions

from conftest import SECRET

DOC = {
    "name": "alice",
    "n": 3,
    "f": 1.5,
    "ok": True,
    "none": None,
    "tags": ["a", {"b": [1, 2]}],
    "nested": {"deep": {"er": "ünïcode"}},
}


def test_json_codec_roundtrip_pretty_and_compact():
    pretty = JsonCodec(pretty=True).encode(DOC)
    compact = JsonCodec(pretty=False).encode(DOC)

    assert b'\n  "name": "alice"' in pretty
    assert b"\n  " not in compact
    assert compact.startswith(b'{"name":"alice","n":3')
    assert JsonCodec().decode(pretty) == DOC
    assert JsonCodec().decode(compact) == DOC


def test_json_codec_rejects_malformed_and_non_object():
    codec = JsonCodec()
    with pytest.raises(FormatError):
        codec.decode(b"{not json")
    with pytest.raises(FormatError):
        codec.decode(b"[1, 2, 3]")
    with pytest.raises(FormatError):
        codec.decode(b"\xff\xfe")


def test_json_codec_encode_unserializable_raises_format_error():
    with pytest.raises(FormatError):
        JsonCodec().encode({"bad": object()})


def _strict(data: bytes):
    def _reject(token):
        raise ValueError(f"non-JSON constant {token}")

    return json.loads(data, parse_constant=_reject)


def test_json_codec_writes_non_finite_numbers_as_null():
    doc = {"inf": math.inf, "nan": math.nan, "nested": [1.5, -math.inf, {"x": math.nan}]}
    out = _strict(JsonCodec().encode(doc))
    assert out == {"inf": None, "nan": None, "nested": [1.5, None, {"x": None}]}
    # the caller's document is left alone
    assert doc["inf"] == math.inf


def test_encrypted_codec_writes_non_finite_numbers_as_null():
    codec = EncryptedCodec(SECRET)
    assert codec.decode(codec.encode({"v": math.inf})) == {"v": None}


def test_json_codec_escapes_lone_surrogates():
    data = JsonCodec().encode({"s": "\ud800", "u": "ünï"})
    assert data.isascii()
    assert JsonCodec().decode(data) == {"s": "\ud800", "u": "ünï"}


def test_json_codec_circular_document_raises_format_error():
    doc: dict = {}
    doc["self"] = doc
    with pytest.raises(FormatError):
        JsonCodec().encode(doc)


def test_crypto_envelope_format_and_fresh_iv():
    key = crypto.key_bytes(SECRET)
    a = crypto.encrypt("hello", key)
    b = crypto.encrypt("hello", key)

    iv_hex, _, body_hex = a.partition(":")
    assert len(bytes.fromhex(iv_hex)) == crypto.IV_LENGTH
    assert len(bytes.fromhex(body_hex)) % 16 == 0
    assert a != b
    assert crypto.decrypt(a, key) == "hello"
    assert crypto.decrypt(b, key) == "hello"


def test_crypto_key_length_enforced():
    with pytest.raises(ValueError):
        crypto.key_bytes("short")
    with pytest.raises(ValueError):
        crypto.key_bytes(SECRET + "x")


@pytest.mark.parametrize(
    "envelope",
    [
        "no-separator",
        "zz:00",
        "00ff:00112233445566778899aabbccddeeff",
        "00112233445566778899aabbccddeeff:0011",
    ],
)
def test_crypto_decrypt_malformed_raises(envelope):
    with pytest.raises(DecryptionError):
        crypto.decrypt(envelope, crypto.key_bytes(SECRET))


def test_encrypted_codec_roundtrip_hides_plaintext():
    codec = EncryptedCodec(SECRET)
    data = codec.encode(DOC)

    assert b"alice" not in data
    assert data.count(b":") == 1
    assert codec.decode(data) == DOC


def test_encrypted_codec_falls_back_to_plain_json():
    plain = json.dumps(DOC).encode("utf-8")
    assert EncryptedCodec(SECRET).decode(plain) == DOC


def test_encrypted_codec_wrong_key_raises_format_error():
    data = EncryptedCodec(SECRET).encode(DOC)
    other = EncryptedCodec("abcdefghijklmnopqrstuvwxyz012345")
    with pytest.raises(FormatError):
        other.decode(data)


def test_plain_codec_cannot_read_encrypted_bytes():
    data = EncryptedCodec(SECRET).encode(DOC)
    with pytest.raises(FormatError):
        JsonCodec().decode(data)


def test_codec_for_picks_by_options(sandbox):
    assert isinstance(codec_for(StoreOptions.parse({})), JsonCodec)
    assert codec_for(StoreOptions.parse({"pretty": False})).pretty is False
    assert isinstance(codec_for(StoreOptions.parse({"encryption_key": SECRET})), EncryptedCodec)
