"""
Retry policy for language-model calls.

Models retry-with-exponential-backoff as a value: maximum attempts, base
delay, multiplicative factor, a delay cap and a predicate that separates
retryable errors (rate limits, quota) from fatal ones. A fatal error is
re-raised on the spot and does not consume retry budget.

Usage:
    policy = RetryPolicy(max_attempts=4, base_delay=1.0)
    content = policy.call(lambda: client.chat.completions.create(...))
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

import openai

from .exceptions import APIRateLimitError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RATE_LIMIT_MARKERS = ("429", "RATELIMIT_EXCEEDED")
_RATE_LIMIT_PHRASES = ("quota", "rate limit")


def is_rate_limit_error(error: BaseException) -> bool:
    """True for rate-limit and quota errors, whatever layer raised them."""
    if isinstance(error, (openai.RateLimitError, APIRateLimitError)):
        return True
    if getattr(error, "status_code", None) == 429:
        return True
    message = str(error)
    if any(marker in message for marker in _RATE_LIMIT_MARKERS):
        return True
    lowered = message.lower()
    return any(phrase in lowered for phrase in _RATE_LIMIT_PHRASES)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 8
    base_delay: float = 2.0
    factor: float = 2.0
    max_delay: float = 128.0
    is_retryable: Callable[[BaseException], bool] = field(default=is_rate_limit_error)

    def delay_for(self, attempt: int) -> float:
        """Delay in seconds after the given failed attempt (1-indexed)."""
        return min(self.base_delay * self.factor ** (attempt - 1), self.max_delay)

    def call(self, fn: Callable[[], T], sleep: Callable[[float], None] = time.sleep) -> T:
        """
        Run ``fn`` under this policy.

        Raises:
            RetryExhaustedError: Every attempt failed with a retryable error.
            Exception: The first non-retryable error, unchanged.
        """
        attempts = max(1, self.max_attempts)
        last_error: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                return fn()
            except Exception as exc:
                if not self.is_retryable(exc):
                    raise
                last_error = exc
                if attempt == attempts:
                    break
                delay = self.delay_for(attempt)
                logger.warning(
                    "Retryable error on attempt %d/%d, waiting %.1fs: %s",
                    attempt, attempts, delay, exc,
                )
                sleep(delay)

        raise RetryExhaustedError(attempts, last_error) from last_error
