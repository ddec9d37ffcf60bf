"""Tests for topic_intelligence.retry."""

import pytest

import topic_intelligence
from topic_intelligence.exceptions import (
    APIConnectionError,
    APIError,
    APIRateLimitError,
    RetryExhaustedError,
)
from topic_intelligence.retry import RetryPolicy, is_rate_limit_error


class Flaky:
    """Callable that fails a fixed number of times, then returns."""

    def __init__(self, errors, result="ok"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


class TestIsRateLimitError:
    @pytest.mark.parametrize("message", [
        "HTTP 429 Too Many Requests",
        "RATELIMIT_EXCEEDED for project",
        "You exceeded your current quota",
        "Rate limit reached for requests",
    ])
    def test_rate_limit_messages(self, message):
        assert is_rate_limit_error(RuntimeError(message))

    def test_local_rate_limit_error(self):
        assert is_rate_limit_error(APIRateLimitError())

    def test_status_code_attribute(self):
        error = RuntimeError("too many")
        error.status_code = 429
        assert is_rate_limit_error(error)

    @pytest.mark.parametrize("message", ["Invalid request", "Bad gateway", ""])
    def test_other_errors(self, message):
        assert not is_rate_limit_error(RuntimeError(message))

    @pytest.mark.parametrize("error", [
        APIConnectionError(),
        APIError("Bad gateway", status_code=502),
        APIError("Bad request", status_code=400),
    ])
    def test_connection_and_server_errors_are_fatal(self, error):
        assert not is_rate_limit_error(error)
        assert not hasattr(topic_intelligence, "is_retryable")


class TestRetryPolicy:
    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_attempts == 8
        assert policy.base_delay == 2.0
        assert policy.factor == 2.0
        assert policy.max_delay == 128.0

    def test_delay_schedule(self):
        policy = RetryPolicy()
        assert [policy.delay_for(n) for n in range(1, 9)] == [
            2.0, 4.0, 8.0, 16.0, 32.0, 64.0, 128.0, 128.0,
        ]

    def test_success_first_try(self):
        sleeps = []
        fn = Flaky([])
        assert RetryPolicy().call(fn, sleep=sleeps.append) == "ok"
        assert fn.calls == 1
        assert sleeps == []

    def test_retries_rate_limits(self):
        sleeps = []
        fn = Flaky([RuntimeError("429"), RuntimeError("quota")])
        assert RetryPolicy().call(fn, sleep=sleeps.append) == "ok"
        assert fn.calls == 3
        assert sleeps == [2.0, 4.0]

    def test_fatal_error_not_retried(self):
        sleeps = []
        fn = Flaky([ValueError("bad input")])
        with pytest.raises(ValueError, match="bad input"):
            RetryPolicy().call(fn, sleep=sleeps.append)
        assert fn.calls == 1
        assert sleeps == []

    def test_fatal_after_retryable(self):
        fn = Flaky([RuntimeError("rate limit"), KeyError("boom")])
        with pytest.raises(KeyError):
            RetryPolicy().call(fn, sleep=lambda _: None)
        assert fn.calls == 2

    def test_exhausted(self):
        sleeps = []
        errors = [RuntimeError(f"429 #{i}") for i in range(3)]
        fn = Flaky(errors)
        policy = RetryPolicy(max_attempts=3, base_delay=1.0)

        with pytest.raises(RetryExhaustedError) as exc_info:
            policy.call(fn, sleep=sleeps.append)

        assert fn.calls == 3
        assert sleeps == [1.0, 2.0]
        assert exc_info.value.attempts == 3
        assert str(exc_info.value.last_error) == "429 #2"
        assert exc_info.value.__cause__ is exc_info.value.last_error

    def test_custom_predicate(self):
        policy = RetryPolicy(max_attempts=2, base_delay=0.0, is_retryable=lambda e: True)
        fn = Flaky([ValueError("anything")])
        assert policy.call(fn, sleep=lambda _: None) == "ok"

    def test_zero_attempts_still_calls_once(self):
        fn = Flaky([])
        assert RetryPolicy(max_attempts=0).call(fn, sleep=lambda _: None) == "ok"
        assert fn.calls == 1
