"""
Custom Exceptions for the Chunking Service.

The splitter itself never raises; these errors belong to the service
boundary around it (reading files, enforcing the document size budget).

Exception Hierarchy:
    ChunkingError (base)
    ├── DocumentNotFoundError
    ├── DocumentDecodeError
    └── DocumentTooLargeError
"""

from __future__ import annotations

from typing import Optional


class ChunkingError(Exception):
    """
    Base exception for chunking service errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A chunking error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class DocumentNotFoundError(ChunkingError):
    """
    Raised when a text file to chunk cannot be found.

    Attributes:
        path: Path to the missing file
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Document not found: {path}")


class DocumentTooLargeError(ChunkingError):
    """
    Raised when a document exceeds the configured size budget and
    truncation is disabled.

    Attributes:
        length: Length of the rejected document in characters
        limit: Configured maximum length
    """

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Document too large: {length} characters (limit {limit})"
        )


class DocumentDecodeError(ChunkingError):
    """
    Raised when a text file is not valid UTF-8.

    Attributes:
        path: Path to the file
        original_error: The underlying UnicodeDecodeError
    """

    def __init__(self, path: str, original_error: Optional[Exception] = None):
        self.path = path
        self.original_error = original_error
        super().__init__(
            f"Document is not valid UTF-8: {path}",
            details=str(original_error) if original_error else None,
        )
