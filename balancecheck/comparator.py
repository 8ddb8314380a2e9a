"""Field comparison across loaded documents."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .canonical import canonical_form
from .extractor import value_at_path
from .models import CheckerConfig, ComparisonResult, Document, FieldValue


class FieldComparator:
    """
    Compares the value at a field path across an ordered set of documents.

    The first document is the reference; every document whose canonical
    form differs from it is reported by its 0-based position.
    """

    def __init__(self, config: Optional[CheckerConfig] = None):
        self.config = config or CheckerConfig()

    def compare(self, documents: Sequence[Document], path: str) -> ComparisonResult:
        # Nothing to disagree with
        if len(documents) <= 1:
            return ComparisonResult(path=path, is_consistent=True)

        values = []
        for index, document in enumerate(documents):
            value = value_at_path(document.data, path)
            values.append(FieldValue(
                index=index,
                document_id=document.id,
                value=value,
                canonical=canonical_form(value, self.config.missing_as_null)
            ))

        reference = values[0].canonical
        failing_items = [v.index for v in values if v.canonical != reference]

        return ComparisonResult(
            path=path,
            is_consistent=not failing_items,
            values=values,
            failing_items=failing_items,
            reference_value=reference
        )

    def compare_all(
        self,
        documents: Sequence[Document],
        paths: Iterable[str]
    ) -> list[ComparisonResult]:
        return [self.compare(documents, path) for path in paths]


def compare_field(
    documents: Sequence[Document],
    path: str,
    config: Optional[CheckerConfig] = None
) -> ComparisonResult:
    """
    Compare one field path across all documents.

    Args:
        documents: Loaded documents, in load order
        path: Dotted field path
        config: Optional checker configuration

    Returns:
        ComparisonResult for the path
    """
    return FieldComparator(config).compare(documents, path)


def compare_fields(
    documents: Sequence[Document],
    paths: Iterable[str],
    config: Optional[CheckerConfig] = None
) -> list[ComparisonResult]:
    """Compare several field paths, keeping the order of ``paths``."""
    return FieldComparator(config).compare_all(documents, paths)
