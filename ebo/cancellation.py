"""A cancellable context with an optional deadline."""

from __future__ import annotations

import threading
import time
from typing import Optional

from .errors import Cancelled, DeadlineExceeded, RetryError


class Context:
    """Carries cancellation and an optional deadline to retry loops.

    A context is done once :meth:`cancel` is called or ``timeout`` seconds
    have passed since it was created, whichever comes first. Used as a
    context manager, it is cancelled on exit.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._error: Optional[RetryError] = None
        self._deadline = None if timeout is None else time.monotonic() + timeout

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def _refresh_locked(self) -> None:
        if (
            self._error is None
            and self._deadline is not None
            and time.monotonic() >= self._deadline
        ):
            self._error = DeadlineExceeded()
            self._done.set()

    def cancel(self) -> None:
        """Mark the context as cancelled unless it is already done."""
        with self._lock:
            self._refresh_locked()
            if self._error is None:
                self._error = Cancelled()
            self._done.set()

    def cancelled(self) -> bool:
        """Return True once the context is cancelled or past its deadline."""
        return self.error() is not None

    def error(self) -> Optional[RetryError]:
        """Return why the context is done, or None while it is still live."""
        with self._lock:
            self._refresh_locked()
            return self._error

    def check(self) -> None:
        """Raise the context's error if it is done."""
        error = self.error()
        if error is not None:
            raise error.with_traceback(None)

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True if the context ended first."""
        if self.cancelled():
            return True
        limit = max(seconds, 0.0)
        if self._deadline is not None:
            limit = min(limit, max(self._deadline - time.monotonic(), 0.0))
        self._done.wait(limit)
        return self.cancelled()