"""Retry callables with exponential backoff.

Basic use::

    retry(do_something)
    retry(do_something, tries(5), initial(1.0))
    retry(call_api, api())
"""

from __future__ import annotations

import time
from typing import Callable, Optional, TypeVar

from .config import Option, RetryConfig, next_interval
from .errors import PermanentError
from .options import initial, jitter, max_interval, multiplier, tries

T = TypeVar("T")


def _permanent_cause(exc: Optional[BaseException]) -> Optional[PermanentError]:
    seen = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, PermanentError):
            return exc
        seen.add(id(exc))
        exc = exc.__cause__
    return None


def retry(fn: Callable[[], T], *options: Option) -> T:
    """Call ``fn`` until it returns, backing off between failed attempts.

    Returns what ``fn`` returned. When attempts or time run out, the last
    exception is raised. A :class:`PermanentError` stops retrying at once and
    the error it wraps is raised.
    """
    config = RetryConfig.from_options(*options)
    start = time.monotonic()
    attempts = 0
    current = config.initial_interval

    while True:
        try:
            return fn()
        except Exception as exc:
            permanent = _permanent_cause(exc)
            if permanent is not None:
                raise permanent.error from None
            attempts += 1
            if config.max_retries > 0 and attempts >= config.max_retries:
                raise
            if config.max_elapsed_time > 0 and time.monotonic() - start >= config.max_elapsed_time:
                raise
        upcoming = min(current * config.multiplier, config.max_interval)
        if config.randomize_factor > 0:
            upcoming = next_interval(upcoming, config.randomize_factor)
        time.sleep(current)
        current = upcoming


def quick_retry(fn: Callable[[], T]) -> T:
    """Retry with short intervals: 0.1s start, 5s cap, 5 tries, 30% jitter."""
    return retry(
        fn,
        initial(0.1),
        max_interval(5.0),
        tries(5),
        multiplier(2.0),
        jitter(0.3),
    )


def retry_with_backoff(fn: Callable[[], T], max_retries: int) -> Optional[T]:
    """Try ``fn`` up to ``max_retries`` times, doubling a 0.1s delay up to 10s."""
    backoff = 0.1
    limit = 10.0
    for attempt in range(max_retries):
        try:
            return fn()
        except Exception:
            if attempt == max_retries - 1:
                raise
        time.sleep(backoff)
        backoff = min(backoff * 2, limit)
    return None