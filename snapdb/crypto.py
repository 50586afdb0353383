"""AES-256-CBC envelope: "<hex iv>:<hex ciphertext>".

There is no authentication tag. A tampered envelope either fails to decrypt
or, if the padding still validates, yields wrong plaintext.
"""

from __future__ import annotations

import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .exceptions import DecryptionError, FormatError

KEY_LENGTH = 32
IV_LENGTH = 16
_BLOCK_BITS = 128


def key_bytes(key: str) -> bytes:
    raw = key.encode("utf-8")
    if len(raw) != KEY_LENGTH:
        raise ValueError(f"Encryption key must be exactly {KEY_LENGTH} characters long.")
    return raw


def encrypt(plaintext: str, key: bytes) -> str:
    iv = os.urandom(IV_LENGTH)
    padder = padding.PKCS7(_BLOCK_BITS).padder()
    try:
        raw = plaintext.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FormatError(f"plaintext is not UTF-8 encodable: {e}") from e
    padded = padder.update(raw) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return iv.hex() + ":" + ciphertext.hex()


def decrypt(envelope: str, key: bytes) -> str:
    iv_hex, sep, body_hex = envelope.strip().partition(":")
    if not sep:
        raise DecryptionError("missing ':' separator in encrypted envelope")
    try:
        iv = bytes.fromhex(iv_hex)
        ciphertext = bytes.fromhex(body_hex)
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except ValueError as e:
        # bad hex, IV length, block length, padding and UTF-8 all land here
        raise DecryptionError(str(e)) from e
