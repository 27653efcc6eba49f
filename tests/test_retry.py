import time
from unittest import mock

import pytest

from ebo.errors import PermanentError
from ebo.options import (
    api,
    initial,
    jitter,
    max_interval,
    max_time,
    multiplier,
    no_jitter,
    tries,
)
from ebo.retry import quick_retry, retry, retry_with_backoff


def flaky(fail_times, message="temporary error", result=None):
    calls = []

    def fn():
        calls.append(1)
        if len(calls) <= fail_times:
            raise RuntimeError(message)
        return result

    return fn, calls


def test_successful_after_retries():
    fn, calls = flaky(2)
    with mock.patch("time.sleep"):
        assert retry(fn) is None
    assert len(calls) == 3


def test_returns_function_result():
    fn, calls = flaky(1, result=42)
    with mock.patch("time.sleep"):
        assert retry(fn, initial(0.01)) == 42
    assert len(calls) == 2


def test_max_retries_exceeded():
    fn, calls = flaky(100, message="permanent error")
    with pytest.raises(RuntimeError, match="permanent error"):
        retry(fn, initial(0.01), max_interval(0.05), tries(3), multiplier(2.0))
    assert len(calls) == 3


def test_sleep_sequence_without_jitter():
    fn, _ = flaky(100)
    with mock.patch("time.sleep") as sleep:
        with pytest.raises(RuntimeError):
            retry(fn, initial(0.01), max_interval(0.05), tries(3), multiplier(2.0), no_jitter())
    assert [c.args[0] for c in sleep.call_args_list] == pytest.approx([0.01, 0.02])


def test_interval_capped_by_max():
    fn, _ = flaky(100)
    with mock.patch("time.sleep") as sleep:
        with pytest.raises(RuntimeError):
            retry(fn, initial(1.0), multiplier(10.0), max_interval(2.0), tries(4), no_jitter())
    assert [c.args[0] for c in sleep.call_args_list] == pytest.approx([1.0, 2.0, 2.0])


def test_jitter_keeps_delays_in_range():
    fn, _ = flaky(100)
    with mock.patch("time.sleep") as sleep:
        with pytest.raises(RuntimeError):
            retry(fn, initial(0.1), multiplier(2.0), jitter(0.5), tries(3))
    delays = [c.args[0] for c in sleep.call_args_list]
    assert delays[0] == pytest.approx(0.1)
    assert 0.1 <= delays[1] <= 0.3


def test_with_timeout():
    start = time.monotonic()
    with pytest.raises(RuntimeError, match="timeout test"):
        retry(lambda: (_ for _ in ()).throw(RuntimeError("timeout test")),
              initial(0.1), max_time(0.3))
    elapsed = time.monotonic() - start
    assert 0.1 <= elapsed <= 1.5


def test_with_jitter_succeeds():
    fn, calls = flaky(1, message="jitter test", result="jittered")
    with mock.patch("time.sleep"):
        assert retry(fn, initial(0.1), jitter(0.5)) == "jittered"
    assert len(calls) == 2


def test_no_jitter_succeeds():
    fn, calls = flaky(1, message="no jitter test", result="steady")
    with mock.patch("time.sleep"):
        assert retry(fn, initial(0.1), jitter(0)) == "steady"
    assert len(calls) == 2


def test_permanent_error_is_not_retried():
    inner = ValueError("fatal")
    calls = []

    def fn():
        calls.append(1)
        raise PermanentError(inner)

    with pytest.raises(ValueError) as info:
        retry(fn, tries(5))
    assert info.value is inner
    assert len(calls) == 1


def test_permanent_error_found_in_cause_chain():
    inner = ValueError("fatal")
    calls = []

    def fn():
        calls.append(1)
        raise RuntimeError("wrapped") from PermanentError(inner)

    with pytest.raises(ValueError) as info:
        retry(fn, tries(5))
    assert info.value is inner
    assert len(calls) == 1


def test_single_try_runs_once():
    printed = []

    def fn():
        printed.append("Attempting operation...")
        raise RuntimeError("temporary failure")

    with pytest.raises(RuntimeError, match="^temporary failure$"):
        retry(fn, tries(1))
    assert printed == ["Attempting operation..."]


def test_initial_configuration_succeeds_at_once():
    fn, calls = flaky(0, result="ok")
    assert retry(fn, initial(1.0), tries(3), no_jitter()) == "ok"
    assert len(calls) == 1


def test_api_preset():
    fn, calls = flaky(0, result="API preset works")
    assert retry(fn, api()) == "API preset works"
    assert len(calls) == 1


def test_quick_retry_success():
    fn, calls = flaky(1, message="not ready", result="ready")
    with mock.patch("time.sleep"):
        assert quick_retry(fn) == "ready"
    assert len(calls) == 2


def test_quick_retry_gives_up_after_five():
    fn, calls = flaky(100)
    with mock.patch("time.sleep"):
        with pytest.raises(RuntimeError):
            quick_retry(fn)
    assert len(calls) == 5


def test_retry_with_backoff_success():
    fn, calls = flaky(1, result="done")
    with mock.patch("time.sleep") as sleep:
        assert retry_with_backoff(fn, 5) == "done"
    assert len(calls) == 2
    assert [c.args[0] for c in sleep.call_args_list] == pytest.approx([0.1])


def test_retry_with_backoff_exhausted():
    fn, calls = flaky(100)
    with mock.patch("time.sleep") as sleep:
        with pytest.raises(RuntimeError, match="temporary error"):
            retry_with_backoff(fn, 3)
    assert len(calls) == 3
    assert [c.args[0] for c in sleep.call_args_list] == pytest.approx([0.1, 0.2])


def test_retry_with_backoff_returns_result():
    fn, calls = flaky(0, result=7)
    assert retry_with_backoff(fn, 3) == 7
    assert len(calls) == 1


def test_retry_with_backoff_zero_retries_never_calls():
    fn, calls = flaky(0, result=7)
    assert retry_with_backoff(fn, 0) is None
    assert calls == []