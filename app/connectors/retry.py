"""Retry policy for transport-level request failures.

Retries on connection errors, timeouts and bodies that broke off or could not
be decompressed in transit. HTTP status handling, decoding and cancellation
are left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import List, TypeVar

import requests

from app.connectors.cancellation import CancellationToken

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_TRANSPORT_ERRORS: tuple[type[Exception], ...] = (
    requests.ConnectionError,
    requests.Timeout,
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ContentDecodingError,
)


class RetryExhaustedError(Exception):
    """Raised when every attempt failed with a retryable error.

    Attributes:
        attempts: Total number of attempts made (initial + retries).
        last_error: The error raised by the final attempt.
        history: Errors from every failed attempt.
    """

    def __init__(
        self,
        attempts: int,
        last_error: Exception,
        history: List[Exception],
    ) -> None:
        self.attempts = attempts
        self.last_error = last_error
        self.history = history
        super().__init__(
            f"Request failed after {attempts} attempt(s). Last error: {last_error}"
        )


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff policy.

    The wait before retry ``n`` (1-based) is ``base_delay_seconds * 2 ** (n - 1)``.

    Args:
        max_retries: Additional attempts after the first failure.
            Total attempts = 1 + max_retries.
        base_delay_seconds: Wait before the first retry.
        retryable_errors: Exception types that trigger a retry.
    """

    max_retries: int = 3
    base_delay_seconds: float = 2.0
    retryable_errors: tuple[type[Exception], ...] = TRANSIENT_TRANSPORT_ERRORS

    def delay_for(self, retry_number: int) -> float:
        if retry_number < 1:
            raise ValueError("retry_number is 1-based.")
        return self.base_delay_seconds * (2 ** (retry_number - 1))

    def is_retryable(self, exc: Exception) -> bool:
        return isinstance(exc, self.retryable_errors)

    def execute(
        self,
        operation: Callable[[], T],
        *,
        cancel_token: CancellationToken,
        description: str = "request",
    ) -> T:
        """Run ``operation`` until it succeeds or the retry budget is spent.

        Non-retryable errors propagate immediately. Backoff waits go through
        ``cancel_token`` so a cancellation aborts the remaining attempts.

        Raises:
            RetryExhaustedError: If all attempts fail with retryable errors.
            OperationCancelledError: If the token is cancelled between attempts.
        """
        errors: List[Exception] = []
        total_attempts = 1 + max(0, self.max_retries)

        for attempt in range(1, total_attempts + 1):
            cancel_token.raise_if_cancelled()
            try:
                return operation()
            except Exception as exc:
                if not self.is_retryable(exc):
                    raise
                errors.append(exc)

            if attempt >= total_attempts:
                break

            wait_seconds = self.delay_for(attempt)
            logger.warning(
                "Retry attempt %d/%d for %s wait_seconds=%.2f error=%s",
                attempt,
                self.max_retries,
                description,
                wait_seconds,
                errors[-1],
            )
            cancel_token.wait(wait_seconds)

        raise RetryExhaustedError(
            attempts=total_attempts,
            last_error=errors[-1],
            history=errors,
        )
