"""Canonical string form of JSON values, used as the equality key."""

from __future__ import annotations

import json
from typing import Any

from .exceptions import CircularRefError
from .models import JsonType
from .utils import get_json_type


# Not valid JSON text, so it can never equal the form of a real value.
MISSING_TOKEN = "undefined"
NULL_TOKEN = "null"


def canonical_form(value: Any, missing_as_null: bool = False) -> str:
    """
    Serialize a value deterministically for equality comparison.

    Two values are equal iff their canonical forms are identical:
    - object keys are sorted, array order is kept
    - integral floats are written as integers (``1.0`` equals ``1``)
    - types stay distinct (``"1"``, ``1`` and ``true`` all differ)
    - MISSING becomes ``undefined``, or ``null`` when ``missing_as_null``

    Args:
        value: JSON value, possibly containing MISSING (e.g. from a fan-out)
        missing_as_null: Treat absent values as explicit nulls

    Returns:
        Compact canonical JSON text
    """
    return _Canonicalizer(missing_as_null).encode(value, "")


class _Canonicalizer:
    """Encodes with an explicit work stack, so deep nesting cannot overflow."""

    _TEXT = "text"
    _VALUE = "value"
    _LEAVE = "leave"

    def __init__(self, missing_as_null: bool):
        self.missing_token = NULL_TOKEN if missing_as_null else MISSING_TOKEN
        self._active: set[int] = set()

    def encode(self, value: Any, path: str) -> str:
        out: list[str] = []
        stack: list[tuple] = [(self._VALUE, value, path)]

        while stack:
            entry = stack.pop()
            if entry[0] == self._TEXT:
                out.append(entry[1])
                continue
            if entry[0] == self._LEAVE:
                self._active.discard(entry[1])
                continue

            _, current, current_path = entry
            kind = get_json_type(current)

            if kind is JsonType.MISSING:
                out.append(self.missing_token)
            elif kind is JsonType.NULL:
                out.append(NULL_TOKEN)
            elif kind is JsonType.NUMBER:
                out.append(_encode_number(current))
            elif kind in (JsonType.BOOLEAN, JsonType.STRING):
                out.append(json.dumps(current, ensure_ascii=False))
            else:
                stack.extend(reversed(self._container_work(current, kind, current_path)))

        return "".join(out)

    def _container_work(self, value: Any, kind: JsonType, path: str) -> list[tuple]:
        """Work items for a container, in output order."""
        marker = id(value)
        if marker in self._active:
            raise CircularRefError(path)
        self._active.add(marker)

        if kind is JsonType.ARRAY:
            work = [(self._TEXT, "[")]
            for i, item in enumerate(value):
                if i:
                    work.append((self._TEXT, ","))
                work.append((self._VALUE, item, f"{path}[{i}]"))
            work.append((self._TEXT, "]"))
        else:
            work = [(self._TEXT, "{")]
            for i, key in enumerate(sorted(value, key=str)):
                if i:
                    work.append((self._TEXT, ","))
                work.append((self._TEXT, json.dumps(str(key), ensure_ascii=False) + ":"))
                work.append((self._VALUE, value[key], f"{path}.{key}" if path else str(key)))
            work.append((self._TEXT, "}"))

        work.append((self._LEAVE, marker))
        return work


def _encode_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value)
