"""Exponential backoff retries with presets, attempt iterators and HTTP helpers."""

__version__ = "0.1.0"

__all__ = [
    "cancellation",
    "config",
    "errors",
    "helpers",
    "httpretry",
    "iterator",
    "options",
    "retry",
]