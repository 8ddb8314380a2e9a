"""
Balance Check - find the fields that disagree across JSON documents

Discovers every field path present in a set of heterogeneous JSON
documents ("balance files") and compares the value at each path across
all of them.
"""

from .models import (
    CheckerConfig,
    ComparisonResult,
    Document,
    FieldState,
    FieldValue,
    JsonType,
    LogLevel,
    MISSING,
)
from .exceptions import (
    BalanceCheckError,
    CircularRefError,
    ConfigError,
    DocumentNotFoundError,
    InvalidValueError,
    ParseError,
)
from .paths import PathEnumerator, enumerate_paths, get_all_fields
from .extractor import value_at_path
from .canonical import canonical_form
from .comparator import FieldComparator, compare_field, compare_fields
from .loader import LoadResult, load_file, load_files, parse_document
from .report import CheckReport
from .session import BalanceChecker
from .runner import BalanceCheckRunner, load_config, run_check

__version__ = "1.0.0"
__all__ = [
    # Models
    "CheckerConfig",
    "ComparisonResult",
    "Document",
    "FieldState",
    "FieldValue",
    "JsonType",
    "LogLevel",
    "MISSING",
    # Errors
    "BalanceCheckError",
    "CircularRefError",
    "ConfigError",
    "DocumentNotFoundError",
    "InvalidValueError",
    "ParseError",
    # Core
    "PathEnumerator",
    "enumerate_paths",
    "get_all_fields",
    "value_at_path",
    "canonical_form",
    "FieldComparator",
    "compare_field",
    "compare_fields",
    # Loading
    "LoadResult",
    "load_file",
    "load_files",
    "parse_document",
    # Session & reports
    "BalanceChecker",
    "CheckReport",
    "BalanceCheckRunner",
    "load_config",
    "run_check",
]
