"""
Custom Exceptions for the Topic Intelligence collaborators.

These wrap failures of the language-model calls made after chunking
(classification, entity extraction, embeddings). The chunker itself never
raises them.

Exception Hierarchy:
    TopicIntelligenceError (base)
    ├── APIError
    │   ├── APIConnectionError
    │   ├── APIRateLimitError
    │   └── APIResponseError
    └── RetryExhaustedError

Usage:
    from topic_intelligence.exceptions import APIError, APIRateLimitError

    try:
        topics = classifier.classify_topics(chunk.content)
    except APIRateLimitError as e:
        print(f"Rate limited, retry after {e.retry_after}s")
    except APIError as e:
        print(f"Model call failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class TopicIntelligenceError(Exception):
    """
    Base exception for all topic intelligence errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A topic intelligence error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# API ERRORS
# =============================================================================


class APIError(TopicIntelligenceError):
    """
    Base class for OpenAI API errors.

    Attributes:
        original_error: The underlying API exception
        status_code: HTTP status code if available
    """

    def __init__(
        self,
        message: str = "API error",
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
    ):
        self.original_error = original_error
        self.status_code = status_code

        details = None
        if original_error:
            details = str(original_error)
        if status_code:
            message = f"{message} (HTTP {status_code})"

        super().__init__(message, details)


class APIConnectionError(APIError):
    """
    Raised when the API cannot be reached.

    This includes network errors, DNS failures, and timeouts.
    """

    def __init__(
        self,
        message: str = "Cannot connect to OpenAI API",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error)


class APIRateLimitError(APIError):
    """
    Raised when the API rate limit or quota is exceeded.

    Attributes:
        retry_after: Suggested wait time in seconds (if provided by API)
    """

    def __init__(
        self,
        retry_after: Optional[float] = None,
        original_error: Optional[Exception] = None,
    ):
        self.retry_after = retry_after
        message = "OpenAI API rate limit exceeded"
        if retry_after:
            message = f"{message} (retry after {retry_after}s)"
        super().__init__(message, original_error, status_code=429)


class APIResponseError(APIError):
    """
    Raised when the API returns an unexpected or invalid response.

    Attributes:
        response_content: Raw response content if available
    """

    def __init__(
        self,
        message: str = "Invalid API response",
        response_content: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.response_content = response_content
        super().__init__(message, original_error)
        if response_content:
            self.details = response_content[:500]  # Truncate long responses


# =============================================================================
# RETRY ERRORS
# =============================================================================


class RetryExhaustedError(TopicIntelligenceError):
    """
    Raised when every attempt of a retry policy failed with a retryable
    error.

    Attributes:
        attempts: Number of attempts made
        last_error: The error raised by the final attempt
    """

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        self.attempts = attempts
        self.last_error = last_error
        self.original_error = last_error
        details = str(last_error) if last_error else None
        super().__init__(f"Giving up after {attempts} attempts", details)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None) is not None:
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
