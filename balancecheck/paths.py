"""Field path discovery across JSON documents."""

from __future__ import annotations

from typing import Any, Iterable

from .exceptions import CircularRefError
from .models import Document, JsonType
from .utils import get_json_type, join_path


def has_object_template(value: Any) -> bool:
    """Check if a value is a non-empty array whose first element is an object."""
    return (
        isinstance(value, (list, tuple))
        and len(value) > 0
        and isinstance(value[0], dict)
    )


class PathEnumerator:
    """
    Collects the dotted field paths reachable inside a JSON value.

    Rules:
    - scalars and null are leaves: they yield the prefix itself
    - arrays are transparent; the first element is the template for the
      whole array, and arrays without an object template are leaves
    - objects contribute one path per key, descending into nested objects
      and arrays of objects; an empty object is a leaf

    The walk uses an explicit stack, so nesting depth is bounded only by
    memory, not by the interpreter's recursion limit.
    """

    _VISIT = "visit"
    _LEAVE = "leave"

    def __init__(self):
        self._active: set[int] = set()

    def enumerate(self, value: Any, prefix: str = "") -> set[str]:
        self._active = set()
        paths: set[str] = set()
        stack: list[tuple] = [(self._VISIT, value, prefix)]

        while stack:
            entry = stack.pop()
            if entry[0] == self._LEAVE:
                self._active.discard(entry[1])
                continue

            _, current, path = entry
            kind = get_json_type(current)

            if kind is JsonType.ARRAY and has_object_template(current):
                children = [(current[0], path)]
            elif kind is JsonType.OBJECT and current:
                children = self._object_children(current, path, paths)
            else:
                paths.add(path)
                continue

            self._enter(current, path)
            stack.append((self._LEAVE, id(current)))
            stack.extend((self._VISIT, child, child_path) for child, child_path in reversed(children))

        return paths

    def _object_children(self, obj: dict, prefix: str, paths: set[str]) -> list[tuple[Any, str]]:
        """Add the leaf keys of an object to ``paths``; return the keys to descend into."""
        children = []

        for key, child in obj.items():
            child_prefix = join_path(prefix, str(key))
            kind = get_json_type(child)

            if kind is JsonType.OBJECT or has_object_template(child):
                children.append((child, child_prefix))
            else:
                paths.add(child_prefix)

        return children

    def _enter(self, container: Any, path: str):
        """Mark a container as being walked; a repeat visit means a cycle."""
        marker = id(container)
        if marker in self._active:
            raise CircularRefError(path)
        self._active.add(marker)


def enumerate_paths(value: Any, prefix: str = "") -> set[str]:
    """
    Return the set of field paths reachable in a JSON value.

    Args:
        value: Parsed JSON value
        prefix: Path of ``value`` inside its enclosing document

    Returns:
        Non-empty set of dotted paths
    """
    return PathEnumerator().enumerate(value, prefix)


def get_all_fields(documents: Iterable[Document]) -> list[str]:
    """Sorted, de-duplicated union of the field paths of every document."""
    fields: set[str] = set()
    for document in documents:
        fields.update(enumerate_paths(document.data))
    return sorted(fields)
