"""Iterate over retry attempts with exponential backoff between them."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, TypeVar

from .cancellation import Context
from .config import Option, RetryConfig, next_interval
from .errors import RetryError
from .retry import _permanent_cause

T = TypeVar("T")


@dataclass
class Attempt:
    """One retry attempt; durations are in seconds."""

    number: int
    delay: float = 0.0
    elapsed: float = 0.0
    last_error: Optional[BaseException] = None
    context: Context = field(default_factory=Context)


def _generate(config: RetryConfig, ctx: Context) -> Iterator[Attempt]:
    start = time.monotonic()
    current = config.initial_interval
    elapsed = 0.0
    index = 0

    while True:
        if ctx.cancelled():
            return
        if config.max_retries > 0 and index >= config.max_retries:
            return
        if config.max_elapsed_time > 0 and elapsed > config.max_elapsed_time:
            return

        attempt = Attempt(
            number=index + 1,
            delay=0.0 if index == 0 else current,
            elapsed=elapsed,
            context=ctx,
        )

        if index > 0:
            if ctx.wait(current):
                return
            elapsed = time.monotonic() - start

        yield attempt

        if config.multiplier > 0:
            current = current * config.multiplier
        if current > config.max_interval:
            current = config.max_interval
        if config.randomize_factor > 0:
            current = next_interval(current, config.randomize_factor)
        index += 1


def attempts(*options: Option) -> Iterator[Attempt]:
    """Yield attempts, sleeping with backoff before each one after the first."""
    return _generate(RetryConfig.from_options(*options), Context())


def attempts_with_context(ctx: Context, *options: Option) -> Iterator[Attempt]:
    """Like :func:`attempts`, stopping as soon as ``ctx`` is done."""
    return _generate(RetryConfig.from_options(*options), ctx)


def _run(fn: Callable[[Attempt], T], sequence: Iterator[Attempt]) -> tuple:
    last_error: Optional[BaseException] = None
    for attempt in sequence:
        try:
            return True, fn(attempt), None
        except Exception as exc:
            last_error = exc
            permanent = _permanent_cause(exc)
            if permanent is not None:
                raise permanent.error from None
            attempt.last_error = exc
    return False, None, last_error


def do_with_attempts(fn: Callable[[Attempt], T], *options: Option) -> T:
    """Call ``fn`` with each attempt until it returns; return its result.

    Raises the last error once attempts run out, or the wrapped error of a
    :class:`PermanentError` at once.
    """
    succeeded, result, last_error = _run(fn, attempts(*options))
    if succeeded:
        return result
    if last_error is not None:
        raise last_error
    raise RetryError("all retry attempts failed")


def do_with_attempts_context(
    ctx: Context, fn: Callable[[Attempt], T], *options: Option
) -> T:
    """Like :func:`do_with_attempts`, raising the context's error if it ends."""
    succeeded, result, last_error = _run(fn, attempts_with_context(ctx, *options))
    if succeeded:
        return result
    ctx_error = ctx.error()
    if ctx_error is not None:
        raise ctx_error.with_traceback(None) from last_error
    if last_error is not None:
        raise last_error
    raise RetryError("all retry attempts failed")