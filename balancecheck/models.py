"""Data models for the balance checker."""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import dataclass, field, fields as dataclass_fields
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from .exceptions import ConfigError


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class JsonType(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    MISSING = "missing"


class _Missing:
    """Marker for a value that is absent, as opposed to an explicit null."""

    _instance: Optional[_Missing] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


@dataclass
class CheckerConfig:
    """Configuration for loading and comparing balance files."""
    missing_as_null: bool = False
    ignored_fields: list[str] = field(default_factory=list)
    extensions: list[str] = field(default_factory=lambda: [".json"])
    log_level: LogLevel = LogLevel.INFO
    show_consistent: bool = True

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> CheckerConfig:
        """Build a config from a plain mapping (e.g. a parsed YAML file)."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(
                "Configuration must be a mapping",
                {"type": type(data).__name__}
            )

        known = {f.name for f in dataclass_fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                {"keys": unknown}
            )

        config = cls()
        for key in ("missing_as_null", "show_consistent"):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ConfigError(f"'{key}' must be a boolean", {"key": key})
                setattr(config, key, data[key])

        for key in ("ignored_fields", "extensions"):
            if key in data:
                value = data[key] or []
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"'{key}' must be a list of strings", {"key": key})
                setattr(config, key, list(value))

        if "log_level" in data:
            try:
                config.log_level = LogLevel(str(data["log_level"]).upper())
            except ValueError:
                raise ConfigError(
                    f"Invalid log_level: {data['log_level']}",
                    {"choices": [level.value for level in LogLevel]}
                )

        return config

    def to_dict(self) -> dict:
        return {
            "missing_as_null": self.missing_as_null,
            "ignored_fields": list(self.ignored_fields),
            "extensions": list(self.extensions),
            "log_level": self.log_level.value,
            "show_consistent": self.show_consistent,
        }


@dataclass(frozen=True, eq=False)
class Document:
    """A loaded balance file. Immutable once created."""
    id: str
    data: Any
    source_name: Optional[str] = None

    @classmethod
    def create(
        cls,
        data: Any,
        source_name: Optional[str] = None,
        copy: bool = True
    ) -> Document:
        """
        Create a document with a fresh id.

        Args:
            data: JSON value
            source_name: File name the value came from, if any
            copy: Keep a private deep copy of ``data``. Values fresh out of
                the JSON parser are not shared and are stored as they are.
        """
        if copy:
            data = deepcopy(data)
        return cls(id=uuid4().hex, data=data, source_name=source_name)

    @property
    def field_count(self) -> int:
        """Number of top-level entries in the document."""
        if isinstance(self.data, (dict, list)):
            return len(self.data)
        return 0

    def label(self, index: int) -> str:
        """Display name: the source file name, or the 1-based position."""
        return self.source_name or f"Item {index + 1}"

    def pretty(self) -> str:
        return json.dumps(self.data, indent=2, ensure_ascii=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source_name": self.source_name,
            "field_count": self.field_count,
        }


@dataclass
class FieldValue:
    """The value one document holds at a field path."""
    index: int
    document_id: str
    value: Any
    canonical: str

    @property
    def is_missing(self) -> bool:
        return self.value is MISSING

    def to_dict(self) -> dict:
        result = {
            "index": self.index,
            "document_id": self.document_id,
            "value": _export_value(self.value),
            "canonical": self.canonical,
        }
        if self.is_missing:
            result["missing"] = True
        return result


@dataclass
class ComparisonResult:
    """Outcome of comparing one field path across every loaded document."""
    path: str
    is_consistent: bool
    values: list[FieldValue] = field(default_factory=list)
    failing_items: list[int] = field(default_factory=list)
    reference_value: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "is_consistent": self.is_consistent,
            "reference_value": self.reference_value,
            "failing_items": list(self.failing_items),
            "values": [v.to_dict() for v in self.values],
        }


@dataclass
class FieldState:
    """A discovered field path and whether the user ignores it."""
    path: str
    ignored: bool = False

    def to_dict(self) -> dict:
        return {"path": self.path, "ignored": self.ignored}


def _export_value(value: Any) -> Any:
    """Replace MISSING with None so a value can be written as JSON."""
    if value is MISSING:
        return None
    if isinstance(value, list):
        return [_export_value(v) for v in value]
    return value
