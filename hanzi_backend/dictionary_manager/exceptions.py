"""
Exceptions raised while building or querying the character knowledge base.
"""

from typing import Any, Dict, Optional


class DictionaryError(Exception):
    """Base exception for knowledge base errors."""
    pass


class DatabaseError(DictionaryError):
    """Raised when the database engine cannot be opened."""
    pass


class ImportFailure(DictionaryError):
    """Base exception for errors that abort an import run."""
    pass


class SourceReadError(ImportFailure):
    """Raised when a source file is missing or unreadable."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ParseError(ImportFailure):
    """Raised when a source line (or the reference table) is not valid JSON."""

    def __init__(self, message: str, path: Optional[str] = None, line_number: Optional[int] = None):
        super().__init__(message)
        self.path = path
        self.line_number = line_number


class ValidationError(ImportFailure):
    """Raised when a decoded record violates the record schema."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        messages: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.line_number = line_number
        self.messages = messages or {}


class LoadError(ImportFailure):
    """Raised when the batch insert fails; nothing was committed."""
    pass
