"""Loading balance files and pasted JSON text into documents."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .exceptions import ParseError
from .models import Document

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of loading a batch of files."""
    documents: list[Document] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "loaded": [d.to_dict() for d in self.documents],
            "errors": [
                {"source_name": e.source_name, "message": e.message}
                for e in self.errors
            ],
            "skipped": list(self.skipped),
        }


def parse_document(text: str, source_name: Optional[str] = None) -> Document:
    """
    Parse JSON text into a new document.

    Args:
        text: Raw JSON text (pasted or read from a file)
        source_name: File name the text came from, if any

    Returns:
        Document with a freshly generated id

    Raises:
        ParseError: If the text is not valid JSON
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(
            _parse_message(source_name, str(e)),
            source_name=source_name,
            reason=e.msg,
            line=e.lineno,
            column=e.colno
        ) from e
    except RecursionError as e:
        raise ParseError(
            _parse_message(source_name, "nesting too deep"),
            source_name=source_name,
            reason=str(e)
        ) from e

    document = Document.create(data, source_name, copy=False)
    logger.debug("Parsed document %s from %s", document.id, source_name or "text")
    return document


def load_file(path: str | Path) -> Document:
    """Read and parse a balance file; the file name becomes the source name."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(
            _parse_message(path.name, str(e)),
            source_name=path.name,
            reason=str(e)
        ) from e
    return parse_document(text, source_name=path.name)


def load_files(
    paths: Iterable[str | Path],
    extensions: Optional[Sequence[str]] = None
) -> LoadResult:
    """
    Load several balance files, continuing past files that fail.

    Args:
        paths: Files to load, in order
        extensions: When given, files with any other suffix are skipped

    Returns:
        LoadResult with the loaded documents, parse errors and skipped files
    """
    result = LoadResult()
    accepted = {ext.lower() for ext in extensions} if extensions else None

    for path in paths:
        path = Path(path)
        if accepted is not None and path.suffix.lower() not in accepted:
            logger.info("Skipping %s: not a JSON file", path.name)
            result.skipped.append(str(path))
            continue

        try:
            document = load_file(path)
        except ParseError as e:
            logger.warning("%s", e.message)
            result.errors.append(e)
            continue

        result.documents.append(document)
        logger.info("Loaded %s (%d fields)", path.name, document.field_count)

    return result


def _parse_message(source_name: Optional[str], reason: str) -> str:
    if source_name:
        return f"Error parsing {source_name}: {reason}"
    return f"Invalid JSON: {reason}"
