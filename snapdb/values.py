from __future__ import annotations

import json
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    MAPPING = "mapping"
    OTHER = "other"


def kind_of(value: Any) -> ValueKind:
    """
    Classify a stored value. bool is checked before int since it subclasses it.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.MAPPING
    return ValueKind.OTHER


def canonical(value: Any) -> str:
    """
    Key-order independent JSON text, used for structural comparison.
    """
    return json.dumps(value, sort_keys=True, separators=(",", ":"))
