"""Utility functions for the balance checker."""

from __future__ import annotations

from typing import Any

from .exceptions import InvalidValueError
from .models import JsonType, MISSING


PATH_SEPARATOR = "."


def get_json_type(value: Any) -> JsonType:
    """
    Classify a host value as one of the JSON value kinds.

    Tuples are accepted as arrays. Anything that could not have come out of
    a JSON parser raises InvalidValueError.
    """
    if value is MISSING:
        return JsonType.MISSING
    if value is None:
        return JsonType.NULL
    # bool before int: True is an int in Python
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonType.NUMBER
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, (list, tuple)):
        return JsonType.ARRAY
    if isinstance(value, dict):
        return JsonType.OBJECT
    raise InvalidValueError(value)


def join_path(prefix: str, key: str) -> str:
    """Append a key to a dotted field path."""
    if prefix:
        return f"{prefix}{PATH_SEPARATOR}{key}"
    return key


def split_path(path: str) -> list[str]:
    """
    Split a dotted field path into keys.

    The empty path addresses the root value and has no keys.
    """
    if not path:
        return []
    return path.split(PATH_SEPARATOR)
