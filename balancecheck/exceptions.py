"""Custom exceptions for the balance checker."""

from typing import Any, Optional


class BalanceCheckError(Exception):
    """Base exception for balance checker errors."""
    pass


class ParseError(BalanceCheckError):
    """Raised when a balance file or pasted text is not valid JSON."""
    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        reason: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.source_name = source_name
        self.reason = reason
        self.line = line
        self.column = column


class ConfigError(BalanceCheckError):
    """Raised when the checker configuration is invalid."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CircularRefError(BalanceCheckError):
    """Raised when a value refers back to one of its own containers."""
    def __init__(self, path: str):
        super().__init__(f"Circular reference detected at: {path or '<root>'}")
        self.path = path


class InvalidValueError(BalanceCheckError):
    """Raised when a host value is not part of the JSON domain."""
    def __init__(self, value: Any):
        super().__init__(f"Not a JSON value: {type(value).__name__}")
        self.value = value


class DocumentNotFoundError(BalanceCheckError, KeyError):
    """Raised when a document id is not loaded in the session."""
    def __init__(self, document_id: str):
        super().__init__(f"No document with id: {document_id}")
        self.document_id = document_id

    def __str__(self) -> str:
        return self.args[0]
