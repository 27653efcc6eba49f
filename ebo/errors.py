"""Exceptions used by the retry helpers."""

from __future__ import annotations


class RetryError(Exception):
    """Base class for errors raised by the retry machinery."""


class PermanentError(RetryError):
    """Wraps an error that must not be retried."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"non-retryable error: {error}")
        self.error = error
        self.__cause__ = error


class RetryableStatusError(RetryError):
    """An HTTP response whose status code calls for another attempt."""

    def __init__(self, status: int) -> None:
        super().__init__(f"retryable status: {status}")
        self.status = status


class Cancelled(RetryError):
    """The operation's context was cancelled."""

    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class DeadlineExceeded(RetryError):
    """The operation's context ran past its deadline."""

    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)