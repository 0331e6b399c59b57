"""
app/connectors/cancellation.py

Cooperative cancellation shared by connector waits and pagination loops.
"""

from __future__ import annotations

import threading


class OperationCancelledError(RuntimeError):
    """
    Raised when a connector operation observes a cancelled token.
    """


class CancellationToken:
    """
    Thread-safe cancellation flag.

    Waits made through the token wake up as soon as ``cancel()`` is called,
    so pacing and backoff sleeps never outlive a cancellation request.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled.")

    def wait(self, seconds: float) -> None:
        """
        Sleep for ``seconds`` unless cancelled first.

        Raises OperationCancelledError when the token is cancelled before or
        during the wait.
        """

        self.raise_if_cancelled()
        if seconds <= 0:
            return
        if self._event.wait(timeout=seconds):
            raise OperationCancelledError("Operation was cancelled while waiting.")
