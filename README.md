# ebo

A small exponential backoff library. It runs an operation again when it fails and
waits longer between tries each time, with optional jitter. Every duration is
given in seconds.

It gives you three ways in:

1. `retry` with sensible defaults.
2. `retry` with options and presets that change the defaults.
3. Attempt iterators for retry loops you write yourself.

On top of these there are helpers for cancellation, logging, custom retry
conditions and outgoing HTTP requests.

## Basic retry

```python
from ebo.retry import retry

result = retry(do_something)
```

`retry` calls the function and returns what it returned. If it raises, the
function is tried again after a delay. The first delay is the initial interval.
Each later delay is the previous one times the multiplier, capped at the maximum
interval and varied by the jitter factor. Retrying stops when the number of
tries or the total time limit is reached; the last exception is then raised.

The defaults are:

| setting            | default |
|--------------------|---------|
| initial interval   | 0.5 s   |
| maximum interval   | 30 s    |
| tries              | 10      |
| multiplier         | 2.0     |
| maximum total time | 5 min   |
| jitter             | 0.5     |

Two shortcuts are also available. `quick_retry(fn)` uses 0.1 s initial, 5 s
maximum, 5 tries, multiplier 2.0 and jitter 0.3. `retry_with_backoff(fn,
max_retries)` tries up to `max_retries` times with a fixed doubling delay from
0.1 s up to 10 s, and raises the last exception if every try fails.

## Options

Pass options after the function. They are applied in order, so a later option
overrides an earlier one.

```python
from ebo.options import initial, jitter, max_interval, tries
from ebo.retry import retry

retry(do_something, tries(5), initial(1.0), max_interval(10.0), jitter(0.2))
```

| option                  | effect                                              |
|-------------------------|-----------------------------------------------------|
| `initial(seconds)`      | delay before the first retry                        |
| `max_interval(seconds)` | upper bound for a single delay                      |
| `max_time(seconds)`     | upper bound for the whole retry run; `0` no limit   |
| `tries(n)`              | maximum number of attempts; `0` means no limit      |
| `multiplier(factor)`    | growth factor between delays                        |
| `jitter(factor)`        | randomisation factor from 0 to 1                    |
| `no_jitter()`           | turns jitter off                                    |
| `forever()`             | no limit on attempts; use together with `max_time`  |
| `linear()`              | constant delay (multiplier 1.0, no jitter)          |
| `exponential(factor)`   | given multiplier with jitter 0.25                   |
| `timeout(seconds)`      | only a time limit, no limit on attempts             |

### Presets

| preset          | initial | maximum | tries | multiplier | jitter | total time |
|-----------------|---------|---------|-------|------------|--------|------------|
| `quick()`       | 0.05 s  | 1 s     | 3     | 2.0        | 0.1    |            |
| `api()`         | 0.2 s   | 5 s     | 3     | 2.0        | 0.3    |            |
| `http_status()` | 0.5 s   | 10 s    | 5     | 2.0        | 0.25   |            |
| `database()`    | 1 s     | 30 s    | 10    | 2.0        | 0.5    | 2 min      |
| `aggressive()`  | 0.1 s   | 5 s     | 20    | 1.5        | 0.1    |            |
| `gentle()`      | 2 s     | 30 s    | 5     | 2.0        | 0.5    |            |

A preset only sets the values in its row; the total time limit keeps its
current value where the row is empty. Presets combine with other options:

```python
from ebo.options import database, max_time, no_jitter, tries
from ebo.retry import retry

retry(connect_db, database(), tries(20), no_jitter(), max_time(300))
```

`RetryConfig.from_options(...)` in `ebo.config` builds the resulting
configuration from the defaults and a list of options, so you can inspect it.
`next_interval(current, randomize_factor)` returns a delay spread uniformly
within plus or minus that factor.

## Stopping early

Raise `PermanentError(exc)` from `ebo.errors` to stop retrying at once; the
wrapped exception is raised to the caller. `retry_with_condition` in
`ebo.helpers` does the same through a predicate. Exceptions for which the
predicate returns false are not retried:

```python
from ebo.helpers import retry_with_condition
from ebo.options import tries

retry_with_condition(call_api, lambda exc: not isinstance(exc, PermissionError), tries(3))
```

All errors the library raises itself derive from `RetryError`:
`PermanentError`, `RetryableStatusError`, `Cancelled` and `DeadlineExceeded`.

## Cancellation

`Context` from `ebo.cancellation` can be cancelled by hand with `cancel()` or
given a timeout; used in a `with` block it is cancelled on exit. `error()`
returns `Cancelled` or `DeadlineExceeded` once the context is done, and
`check()` raises it.

`retry_with_context` checks the context before each attempt. Once the context
is done, every further attempt fails with its error without calling the
function, so the run ends with that error when tries or time run out:

```python
from ebo.cancellation import Context
from ebo.helpers import retry_with_context
from ebo.options import initial, tries

ctx = Context(timeout=30)
retry_with_context(ctx, perform_long_operation, tries(10), initial(1.0))
```

## Logging

```python
import logging

from ebo.helpers import retry_with_logging
from ebo.options import tries

retry_with_logging(connect_to_database, logging.getLogger("retry"), tries(5))
```

Each failed attempt is logged at warning level as `Attempt N failed: <error>`.

## Attempt iterators

`attempts` in `ebo.iterator` yields one `Attempt` per try, with its `number`,
`delay`, `elapsed` time, `last_error` and `context`. It sleeps the backoff delay
between tries. The first attempt has no delay. You decide when to stop:

```python
from ebo.iterator import attempts
from ebo.options import tries

for attempt in attempts(tries(3)):
    if do_work():
        break
    print(f"attempt {attempt.number} failed")
```

`attempts_with_context(ctx, ...)` also stops when the context is done, even in
the middle of a delay. `do_with_attempts(fn, ...)` calls `fn(attempt)` for each
attempt until one returns and gives back its result, raising the last error if
none does. `do_with_attempts_context(ctx, fn, ...)` does the same and raises the
context's error if the context ended the run.

## HTTP

`ebo.httpretry` retries outgoing requests made with `urllib`. A request is
tried again when opening it raises, or when the status is 5xx or 429
(`is_retryable_status`). Other responses, including client errors such as 404,
are returned. When attempts run out on a retryable status,
`RetryableStatusError` is raised.

```python
import urllib.request

from ebo.httpretry import http_do, new_http_client
from ebo.options import api, http_status

client = new_http_client(http_status())
response = client.open("http://localhost:8080/data")

request = urllib.request.Request("http://localhost:8080/data")
response = http_do(request, None, api())
```

`HTTPRetryTransport(opener, options)` wraps any opener with an `open` method
and applies the same retry rules to every request sent through it; with no
opener it builds the default `urllib` one.

## What it does not do

The library retries calls made by your own code. It does not wrap server-side
request handlers: there is no middleware that replays an incoming request to an
application until its response succeeds.