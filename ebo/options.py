"""Options that adjust a :class:`RetryConfig`; durations are in seconds."""

from __future__ import annotations

from .config import Option, RetryConfig


def initial(seconds: float) -> Option:
    """Set the delay before the first retry."""

    def apply(config: RetryConfig) -> None:
        config.initial_interval = seconds

    return apply


def max_interval(seconds: float) -> Option:
    """Cap the delay between retries."""

    def apply(config: RetryConfig) -> None:
        config.max_interval = seconds

    return apply


def max_time(seconds: float) -> Option:
    """Limit the total time spent retrying (0 for no limit)."""

    def apply(config: RetryConfig) -> None:
        config.max_elapsed_time = seconds

    return apply


def tries(n: int) -> Option:
    """Limit the number of attempts (0 for no limit)."""

    def apply(config: RetryConfig) -> None:
        config.max_retries = n

    return apply


def multiplier(factor: float) -> Option:
    """Set the factor the delay grows by after each attempt."""

    def apply(config: RetryConfig) -> None:
        config.multiplier = factor

    return apply


def jitter(factor: float) -> Option:
    """Set the randomization factor (0 to 1)."""

    def apply(config: RetryConfig) -> None:
        config.randomize_factor = factor

    return apply


def no_jitter() -> Option:
    """Disable randomization of delays."""

    def apply(config: RetryConfig) -> None:
        config.randomize_factor = 0

    return apply


def forever() -> Option:
    """Remove the attempt limit; only time stops retrying."""

    def apply(config: RetryConfig) -> None:
        config.max_retries = 0

    return apply


def _preset(**values: float) -> Option:
    def apply(config: RetryConfig) -> None:
        for name, value in values.items():
            setattr(config, name, value)

    return apply


def aggressive() -> Option:
    """Fast retries, many attempts."""
    return _preset(
        initial_interval=0.1,
        max_interval=5.0,
        max_retries=20,
        multiplier=1.5,
        randomize_factor=0.1,
    )


def gentle() -> Option:
    """Slow retries, few attempts."""
    return _preset(
        initial_interval=2.0,
        max_interval=30.0,
        max_retries=5,
        multiplier=2.0,
        randomize_factor=0.5,
    )


def linear() -> Option:
    """Keep a constant delay between attempts."""
    return _preset(multiplier=1.0, randomize_factor=0)


def exponential(factor: float) -> Option:
    """Grow the delay by ``factor`` with 25% jitter."""
    return _preset(multiplier=factor, randomize_factor=0.25)


def http_status() -> Option:
    """Settings suited to retrying HTTP requests."""
    return _preset(
        initial_interval=0.5,
        max_interval=10.0,
        max_retries=5,
        multiplier=2.0,
        randomize_factor=0.25,
    )


def database() -> Option:
    """Settings suited to database connections and queries."""
    return _preset(
        initial_interval=1.0,
        max_interval=30.0,
        max_retries=10,
        multiplier=2.0,
        randomize_factor=0.5,
        max_elapsed_time=120.0,
    )


def api() -> Option:
    """Settings suited to external API calls."""
    return _preset(
        initial_interval=0.2,
        max_interval=5.0,
        max_retries=3,
        multiplier=2.0,
        randomize_factor=0.3,
    )


def quick() -> Option:
    """Settings for fast operations that should fail quickly."""
    return _preset(
        initial_interval=0.05,
        max_interval=1.0,
        max_retries=3,
        multiplier=2.0,
        randomize_factor=0.1,
    )


def timeout(seconds: float) -> Option:
    """Retry without an attempt limit until ``seconds`` have passed."""
    return _preset(max_elapsed_time=seconds, max_retries=0)