"""Retry configuration and interval computation."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

DEFAULT_INITIAL_INTERVAL = 0.5
DEFAULT_MAX_INTERVAL = 30.0
DEFAULT_MAX_RETRIES = 10
DEFAULT_MULTIPLIER = 2.0
DEFAULT_MAX_ELAPSED_TIME = 5 * 60.0
DEFAULT_RANDOMIZE_FACTOR = 0.5


@dataclass
class RetryConfig:
    """Settings for retry with exponential backoff; durations are in seconds."""

    initial_interval: float = DEFAULT_INITIAL_INTERVAL
    max_interval: float = DEFAULT_MAX_INTERVAL
    max_retries: int = DEFAULT_MAX_RETRIES
    multiplier: float = DEFAULT_MULTIPLIER
    max_elapsed_time: float = DEFAULT_MAX_ELAPSED_TIME
    randomize_factor: float = DEFAULT_RANDOMIZE_FACTOR

    @classmethod
    def from_options(cls, *options: "Option") -> "RetryConfig":
        """Build a config from the defaults with each option applied in order."""
        config = cls()
        for option in options:
            option(config)
        return config


Option = Callable[[RetryConfig], None]


def next_interval(current: float, randomize_factor: float) -> float:
    """Return ``current`` spread uniformly by +/- ``randomize_factor``."""
    if randomize_factor == 0:
        return current
    delta = randomize_factor * current
    low = current - delta
    high = current + delta
    return low + random.random() * (high - low)