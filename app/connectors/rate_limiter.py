"""
app/connectors/rate_limiter.py

Request gate and pacing helpers for outbound feed requests.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from app.connectors.cancellation import CancellationToken

MILLISECONDS_PER_MINUTE = 60_000


def pacing_interval_ms(max_requests_per_minute: int) -> int:
    """
    Delay between consecutive page requests for a requests-per-minute budget.
    """

    if max_requests_per_minute <= 0:
        raise ValueError("max_requests_per_minute must be a positive integer.")
    return MILLISECONDS_PER_MINUTE // max_requests_per_minute


class RequestGate:
    """
    Single-slot gate allowing at most one in-flight request at a time.

    One gate is owned by each connector instance; pass the same gate to
    several connectors to serialize requests across all of them.
    """

    def __init__(self, *, poll_interval_seconds: float = 0.05) -> None:
        self._lock = threading.Lock()
        self._poll_interval_seconds = max(0.001, poll_interval_seconds)

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self, cancel_token: CancellationToken | None = None) -> Iterator[None]:
        """
        Acquire the gate for the duration of the ``with`` block.

        Waiting for the gate is interrupted by cancellation. The gate is
        released on every exit path.
        """

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        while not self._lock.acquire(timeout=self._poll_interval_seconds):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
        try:
            yield
        finally:
            self._lock.release()
