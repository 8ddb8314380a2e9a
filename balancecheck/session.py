"""Stateful checker session owning the loaded documents and field filters."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from .comparator import FieldComparator
from .exceptions import DocumentNotFoundError, ParseError
from .loader import LoadResult, load_file, load_files, parse_document
from .models import CheckerConfig, ComparisonResult, Document, FieldState
from .paths import get_all_fields
from .report import CheckReport

logger = logging.getLogger(__name__)

_DEFAULT = object()


class BalanceChecker:
    """
    Holds the documents a user has loaded and the fields they ignore.

    Field lists and comparisons are recomputed from scratch on every call;
    nothing is cached between document changes.

    Usage:
        checker = BalanceChecker()
        checker.add_text('{"name": "John", "age": 30}')
        checker.add_text('{"name": "John", "age": 31}')
        for result in checker.compare():
            print(result.path, result.is_consistent)
    """

    def __init__(self, config: Optional[CheckerConfig] = None):
        self.config = config or CheckerConfig()
        self._documents: list[Document] = []
        self._expanded: dict[str, bool] = {}
        self._ignored: set[str] = set(self.config.ignored_fields)
        self.errors: list[str] = []
        self.comparator = FieldComparator(self.config)

    # Documents

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._documents)

    @property
    def last_error(self) -> Optional[str]:
        return self.errors[-1] if self.errors else None

    def add_text(self, text: str, source_name: Optional[str] = None) -> Document:
        """
        Parse JSON text and append it as a new document.

        Raises:
            ParseError: If the text is not valid JSON; the message is also
                kept in ``errors``
        """
        self.errors = []
        try:
            document = parse_document(text, source_name)
        except ParseError as e:
            self.errors.append(e.message)
            raise
        return self._append(document)

    def add_value(self, data: Any, source_name: Optional[str] = None) -> Document:
        """Append an already parsed JSON value as a new document."""
        self.errors = []
        return self._append(Document.create(data, source_name))

    def load_file(self, path: str | Path) -> Document:
        self.errors = []
        try:
            document = load_file(path)
        except ParseError as e:
            self.errors.append(e.message)
            raise
        return self._append(document)

    def load_files(
        self,
        paths: Iterable[str | Path],
        extensions: Optional[Sequence[str]] = _DEFAULT
    ) -> LoadResult:
        """
        Load several files; a file that fails to parse does not stop the rest.

        Args:
            paths: Files to load
            extensions: Accepted suffixes; defaults to ``config.extensions``,
                ``None`` accepts every file
        """
        if extensions is _DEFAULT:
            extensions = self.config.extensions

        result = load_files(paths, extensions)
        for document in result.documents:
            self._append(document)
        self.errors = [e.message for e in result.errors]
        return result

    def remove(self, document_id: str) -> Document:
        document = self._find(document_id)
        self._documents.remove(document)
        self._expanded.pop(document_id, None)
        logger.debug("Removed document %s", document_id)
        return document

    def clear(self):
        self._documents = []
        self._expanded = {}
        self.errors = []

    def toggle_expanded(self, document_id: str) -> bool:
        self._find(document_id)
        self._expanded[document_id] = not self._expanded.get(document_id, False)
        return self._expanded[document_id]

    def is_expanded(self, document_id: str) -> bool:
        self._find(document_id)
        return self._expanded.get(document_id, False)

    def _append(self, document: Document) -> Document:
        self._documents.append(document)
        self._expanded[document.id] = False
        return document

    def _find(self, document_id: str) -> Document:
        for document in self._documents:
            if document.id == document_id:
                return document
        raise DocumentNotFoundError(document_id)

    # Field filters

    @property
    def ignored_fields(self) -> frozenset[str]:
        return frozenset(self._ignored)

    def ignore(self, path: str):
        self._ignored.add(path)

    def unignore(self, path: str):
        self._ignored.discard(path)

    def toggle_ignored(self, path: str) -> bool:
        """Flip the ignored flag of a field; returns the new flag."""
        if path in self._ignored:
            self._ignored.remove(path)
            return False
        self._ignored.add(path)
        return True

    # Comparison

    def fields(self) -> list[str]:
        return get_all_fields(self._documents)

    def field_states(self) -> list[FieldState]:
        return [FieldState(path, path in self._ignored) for path in self.fields()]

    def active_fields(self) -> list[str]:
        return [path for path in self.fields() if path not in self._ignored]

    def compare_field(self, path: str) -> ComparisonResult:
        return self.comparator.compare(self._documents, path)

    def compare(self) -> list[ComparisonResult]:
        """Compare every field that is not ignored."""
        return self.comparator.compare_all(self._documents, self.active_fields())

    def report(self) -> CheckReport:
        fields = self.fields()
        return CheckReport(
            documents=list(self._documents),
            fields=fields,
            ignored_fields=sorted(self._ignored.intersection(fields)),
            results=self.compare(),
            expanded=[d.id for d in self._documents if self._expanded.get(d.id)]
        )
