"""Exceptions raised by snapdb."""

from __future__ import annotations


class SnapDBError(Exception):
    """Base exception for all snapdb errors."""


class ConfigurationError(SnapDBError, ValueError):
    """Store options are invalid (e.g. wrong encryption key length)."""


class InvalidKeyError(SnapDBError, KeyError):
    """A dot-notation key has no usable segments."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid key: {key!r}")


class ValueKindError(SnapDBError, TypeError):
    """The value stored at a key has the wrong kind for the operation."""

    def __init__(self, key: str, expected: str, actual: str):
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(f'Value at key "{key}" is not {expected} (got {actual}).')


class InvalidOperatorError(SnapDBError, ValueError):
    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"Invalid operator: {operator}")


class FormatError(SnapDBError):
    """Bytes could not be turned into a Document, or vice versa."""


class DecryptionError(FormatError):
    """Encrypted envelope is malformed or the key does not match."""
