"""Value extraction at a dotted field path."""

from __future__ import annotations

from typing import Any, Sequence

from .models import JsonType, MISSING
from .utils import get_json_type, split_path


def value_at_path(value: Any, path: str) -> Any:
    """
    Extract the value found at ``path`` inside a JSON value.

    Walking rules:
    - null or missing along the way gives MISSING
    - an array fans out: each object element continues the walk with the
      remaining keys, any other element gives MISSING, and the result is
      a list with one entry per element
    - an array met again inside an element fans out again, so every array
      level adds one list level (nothing is flattened)
    - a scalar with keys still to walk gives MISSING

    Never raises for absent keys or type mismatches.

    Args:
        value: Parsed JSON value (usually ``Document.data``)
        path: Dotted field path; the empty path is the root value

    Returns:
        The value, a (possibly nested) list of per-element values, or MISSING
    """
    return _walk(value, split_path(path))


def _walk(current: Any, keys: Sequence[str]) -> Any:
    for position, key in enumerate(keys):
        kind = get_json_type(current)

        if kind in (JsonType.NULL, JsonType.MISSING):
            return MISSING

        if kind is JsonType.ARRAY:
            remaining = keys[position:]
            return [_walk_element(item, remaining) for item in current]

        if kind is not JsonType.OBJECT:
            return MISSING

        current = current.get(key, MISSING)

    return current


def _walk_element(item: Any, keys: Sequence[str]) -> Any:
    """Continue a fanned-out walk inside one array element."""
    if not isinstance(item, dict):
        return MISSING
    return _walk(item, keys)
