"""
tests/test_retry_policy.py

Pytest unit tests for RetryPolicy.

Operations are in-memory callables; backoff delays are zero except where a
cancellation must interrupt a long wait.

Coverage
--------
- Exponential delay schedule
- Which requests errors are retried
- Success, retry, exhaustion and zero-retry attempt counts
- Non-retryable errors propagating on the first attempt
- Cancellation during backoff
"""

from __future__ import annotations

import pytest
import requests

from app.connectors import CancellationToken, OperationCancelledError, RetryExhaustedError, RetryPolicy


class _Flaky:
    def __init__(self, failures: list[Exception], result: str = "ok") -> None:
        self._failures = list(failures)
        self._result = result
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self._failures:
            raise self._failures.pop(0)
        return self._result


def test_delay_grows_exponentially_from_base() -> None:
    policy = RetryPolicy(max_retries=4, base_delay_seconds=2.0)

    assert [policy.delay_for(n) for n in range(1, 5)] == [2.0, 4.0, 8.0, 16.0]


def test_delay_rejects_zero_based_retry_numbers() -> None:
    with pytest.raises(ValueError):
        RetryPolicy().delay_for(0)


def test_success_on_first_attempt_makes_one_call() -> None:
    operation = _Flaky([])

    result = RetryPolicy(max_retries=3, base_delay_seconds=0.0).execute(
        operation, cancel_token=CancellationToken()
    )

    assert result == "ok"
    assert operation.calls == 1


def test_retryable_errors_are_retried() -> None:
    operation = _Flaky([requests.ConnectionError("reset"), requests.Timeout("slow")])

    result = RetryPolicy(max_retries=3, base_delay_seconds=0.0).execute(
        operation, cancel_token=CancellationToken()
    )

    assert result == "ok"
    assert operation.calls == 3


def test_non_retryable_error_propagates_immediately() -> None:
    operation = _Flaky([KeyError("boom")])

    with pytest.raises(KeyError):
        RetryPolicy(max_retries=3, base_delay_seconds=0.0).execute(
            operation, cancel_token=CancellationToken()
        )
    assert operation.calls == 1


def test_exhaustion_reports_every_attempt() -> None:
    errors = [requests.ConnectionError(f"attempt {n}") for n in range(3)]
    operation = _Flaky(list(errors))

    with pytest.raises(RetryExhaustedError) as exc_info:
        RetryPolicy(max_retries=2, base_delay_seconds=0.0).execute(
            operation, cancel_token=CancellationToken()
        )

    assert exc_info.value.attempts == 3
    assert exc_info.value.history == errors
    assert exc_info.value.last_error is errors[-1]


def test_zero_retries_means_single_attempt() -> None:
    operation = _Flaky([requests.ConnectionError("reset")])

    with pytest.raises(RetryExhaustedError):
        RetryPolicy(max_retries=0, base_delay_seconds=0.0).execute(
            operation, cancel_token=CancellationToken()
        )
    assert operation.calls == 1


def test_cancellation_stops_backoff() -> None:
    token = CancellationToken()

    def operation() -> str:
        token.cancel()
        raise requests.ConnectionError("reset")

    with pytest.raises(OperationCancelledError):
        RetryPolicy(max_retries=3, base_delay_seconds=30.0).execute(operation, cancel_token=token)


@pytest.mark.parametrize(
    "error, retryable",
    [
        (requests.ConnectionError("reset"), True),
        (requests.Timeout("slow"), True),
        (requests.exceptions.ChunkedEncodingError("body ended early"), True),
        (requests.exceptions.ContentDecodingError("bad gzip stream"), True),
        (requests.TooManyRedirects("redirect loop"), False),
        (requests.exceptions.InvalidURL("no host"), False),
        (ValueError("not json"), False),
    ],
)
def test_transport_errors_are_classified(error: Exception, retryable: bool) -> None:
    assert RetryPolicy().is_retryable(error) is retryable
