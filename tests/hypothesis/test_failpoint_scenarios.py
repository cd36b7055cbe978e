import pytest

from chaoskit import (
    FailpointAssertionError,
    InjectedError,
    is_failpoint_enabled,
    maybe_fail,
    maybe_panic,
    maybe_sleep,
    with_failpoint,
)


def example() -> str:
    maybe_fail("fail_test")
    return "ok"


def risky() -> None:
    maybe_panic("panic_test")


def slow() -> None:
    maybe_sleep("sleep_test", 50)


@pytest.mark.hypothesis
def test_fail_scenario_uses_default_registry():
    assert example() == "ok"

    error = with_failpoint("fail_test", "error", example)

    assert isinstance(error, InjectedError)
    assert is_failpoint_enabled("fail_test") is False
    assert example() == "ok"


@pytest.mark.hypothesis
def test_panic_scenario_uses_default_registry():
    risky()

    with_failpoint("panic_test", "panic", risky)

    assert is_failpoint_enabled("panic_test") is False


@pytest.mark.hypothesis
def test_panic_scenario_reports_missing_panic():
    with pytest.raises(FailpointAssertionError) as exc_info:
        with_failpoint("panic_test", "panic", lambda: None)
    assert str(exc_info.value) == "expected panic from failpoint 'panic_test', none occurred"


@pytest.mark.hypothesis
@pytest.mark.slow
def test_sleep_scenario_within_tolerance():
    elapsed = with_failpoint("sleep_test", (50, 10), slow)

    assert 40 <= elapsed <= 60
    assert is_failpoint_enabled("sleep_test") is False
