"""Comparison report across all active fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .models import ComparisonResult, Document


@dataclass
class CheckReport:
    """Field comparison results for one set of loaded documents."""
    documents: list[Document] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)
    ignored_fields: list[str] = field(default_factory=list)
    results: list[ComparisonResult] = field(default_factory=list)
    expanded: list[str] = field(default_factory=list)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')

    @property
    def consistent(self) -> list[ComparisonResult]:
        return [r for r in self.results if r.is_consistent]

    @property
    def inconsistent(self) -> list[ComparisonResult]:
        return [r for r in self.results if not r.is_consistent]

    @property
    def is_consistent(self) -> bool:
        return not self.inconsistent

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "summary": {
                "documents": len(self.documents),
                "total_fields": len(self.fields),
                "ignored_fields": len(self.ignored_fields),
                "checked_fields": len(self.results),
                "consistent": len(self.consistent),
                "inconsistent": len(self.inconsistent),
            },
            "documents": [d.to_dict() for d in self.documents],
            "ignored_fields": list(self.ignored_fields),
            "results": [r.to_dict() for r in self.results],
        }

    def print_summary(self, show_consistent: bool = True):
        print(f"\nBalance Files ({len(self.documents)})")
        for index, document in enumerate(self.documents):
            print(f"  {index + 1}. {document.label(index)} ({document.field_count} fields)")
            if document.id in self.expanded:
                for line in document.pretty().splitlines():
                    print(f"       {line}")

        if self.ignored_fields:
            print(f"\nIgnored fields: {', '.join(self.ignored_fields)}")

        print(f"\nField Comparison Results: {len(self.consistent)}/{len(self.results)} consistent")
        for result in self.results:
            if result.is_consistent:
                if show_consistent:
                    reference = result.reference_value if result.reference_value is not None else "-"
                    print(f"  OK    {result.path}: {reference}")
                continue

            print(f"  DIFF  {result.path}")
            for value in result.values:
                document = self.documents[value.index]
                marker = "x" if value.index in result.failing_items else " "
                print(f"    [{marker}] {document.label(value.index)}: {value.canonical}")
