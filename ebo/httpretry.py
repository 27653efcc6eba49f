"""HTTP requests through ``urllib`` that are retried on failure.

A request is tried again when opening it raises, or when the server answers
with a 5xx status or 429 (Too Many Requests).
"""

from __future__ import annotations

import urllib.error
import urllib.request
from typing import Any, Iterable, Optional, Union

from .config import Option
from .errors import RetryableStatusError
from .retry import retry

Request = Union[str, urllib.request.Request]


def is_retryable_status(code: int) -> bool:
    """Return True for 5xx statuses and 429."""
    return code >= 500 or code == 429


def _status_of(response: Any) -> int:
    status = getattr(response, "status", None)
    if status is None:
        status = response.getcode()
    return int(status)


def _open_with_retry(opener: Any, request: Request, options: Iterable[Option]) -> Any:
    def attempt() -> Any:
        try:
            response = opener.open(request)
        except urllib.error.HTTPError as exc:
            response = exc
        status = _status_of(response)
        if is_retryable_status(status):
            response.close()
            raise RetryableStatusError(status)
        return response

    return retry(attempt, *options)


class HTTPRetryTransport:
    """Opens requests with an opener, retrying failed attempts.

    Responses with a status that is not retried, including client errors
    such as 404, are returned rather than raised. When attempts run out, the
    last error is raised; for a retryable status that is
    :class:`RetryableStatusError`.
    """

    def __init__(self, opener: Optional[Any] = None, options: Iterable[Option] = ()) -> None:
        self.opener = opener
        self.options = tuple(options)

    def open(self, request: Request) -> Any:
        """Open ``request`` (a URL or ``urllib.request.Request``) with retries."""
        opener = self.opener if self.opener is not None else urllib.request.build_opener()
        return _open_with_retry(opener, request, self.options)


def new_http_client(*options: Option) -> HTTPRetryTransport:
    """Return a transport over a default ``urllib`` opener using ``options``."""
    return HTTPRetryTransport(urllib.request.build_opener(), options)


def http_do(request: Request, opener: Optional[Any], *options: Option) -> Any:
    """Open ``request`` once with retries; ``opener`` None means the default."""
    if opener is None:
        opener = urllib.request.build_opener()
    return _open_with_retry(opener, request, options)