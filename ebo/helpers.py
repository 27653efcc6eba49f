"""Retry variants with cancellation, logging and custom conditions."""

from __future__ import annotations

import itertools
import logging
from typing import Callable, TypeVar

from .cancellation import Context
from .config import Option
from .errors import PermanentError
from .retry import retry

T = TypeVar("T")


def retry_with_context(ctx: Context, fn: Callable[[], T], *options: Option) -> T:
    """Retry ``fn``, failing an attempt with the context's error once it ends."""

    def attempt() -> T:
        ctx.check()
        return fn()

    return retry(attempt, *options)


def retry_with_logging(
    fn: Callable[[], T], logger: logging.Logger, *options: Option
) -> T:
    """Retry ``fn``, logging a warning for every failed attempt."""
    counter = itertools.count(1)

    def attempt() -> T:
        number = next(counter)
        try:
            return fn()
        except Exception as exc:
            logger.warning("Attempt %d failed: %s", number, exc)
            raise

    return retry(attempt, *options)


def retry_with_condition(
    fn: Callable[[], T],
    condition: Callable[[BaseException], bool],
    *options: Option,
) -> T:
    """Retry ``fn`` only while ``condition`` accepts the error it raised."""

    def attempt() -> T:
        try:
            return fn()
        except Exception as exc:
            if not condition(exc):
                raise PermanentError(exc) from exc
            raise

    return retry(attempt, *options)