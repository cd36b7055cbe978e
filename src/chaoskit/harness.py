"""Assertion harness for failpoints.

Each harness mode runs the same protocol: enable the tag, run the caller's
code, disable the tag, then check that the injected effect was observed. The
tag is disabled on every exit path, including unexpected exceptions, which
propagate unchanged after the tag is cleared.

Examples:
    with_failpoint("panic_test", "panic", risky)
    with_failpoint("fail_test", "error", lambda: load_user("alice"))
    with_failpoint("sleep_test", (200, 50), slow)
    await with_failpoint_async("sleep_test", 200, 50, slow_async())

When the chaos capability flag is off the harness entry points do nothing and
the code is not run, since none of the primitives it would exercise can fire.
"""

from __future__ import annotations

import inspect
import time
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError

from . import config
from .exceptions import FailpointAssertionError, InjectedError, InjectedPanic
from .logging_config import get_logger
from .models import DelayWindow, HarnessMode
from .registry import FailpointRegistry, disable_failpoint, enable_failpoint

logger = get_logger(__name__)

Mode = HarnessMode | DelayWindow | tuple[int, int]


@contextmanager
def failpoint_enabled(tag: str, *, registry: FailpointRegistry | None = None) -> Iterator[None]:
    """Enable ``tag`` for the duration of the block.

    The tag is disabled when the block exits, however it exits.
    """
    enable_failpoint(tag, registry=registry)
    try:
        yield
    finally:
        disable_failpoint(tag, registry=registry)


def _fail(message: str, *, tag: str, mode: str) -> FailpointAssertionError:
    logger.warning("failpoint_harness_failed", tag=tag, mode=mode, reason=message)
    return FailpointAssertionError(message, tag=tag, mode=mode)


def _delay_window(mode: Any) -> DelayWindow:
    if isinstance(mode, DelayWindow):
        return mode
    if isinstance(mode, tuple) and len(mode) == 2:
        min_ms, tolerance_ms = mode
        return DelayWindow(min_ms=min_ms, tolerance_ms=tolerance_ms)
    raise ValueError(
        f"mode must be 'panic', 'error', a DelayWindow or (min_ms, tolerance_ms), got: {mode!r}"
    )


def _check_window(tag: str, window: DelayWindow, elapsed_ms: float) -> float:
    if not window.contains(elapsed_ms):
        raise _fail(
            f"expected sleep between {window.lower_ms}ms and {window.upper_ms}ms "
            f"from failpoint '{tag}', got {elapsed_ms:.3f}ms",
            tag=tag,
            mode="delay",
        )
    logger.debug("failpoint_harness_passed", tag=tag, mode="delay", elapsed_ms=elapsed_ms)
    return elapsed_ms


def _expect_panic(
    tag: str, code: Callable[[], Any], registry: FailpointRegistry | None
) -> BaseException:
    captured: BaseException | None = None
    with failpoint_enabled(tag, registry=registry):
        try:
            code()
        except InjectedError:
            # an injected error is an error result, not a termination
            captured = None
        except (InjectedPanic, Exception) as exc:
            captured = exc

    if captured is None:
        raise _fail(f"expected panic from failpoint '{tag}', none occurred", tag=tag, mode="panic")
    logger.debug("failpoint_harness_passed", tag=tag, mode="panic", captured=repr(captured))
    return captured


def _expect_error(
    tag: str, code: Callable[[], Any], registry: FailpointRegistry | None
) -> Exception:
    result: Any = None
    error: Exception | None = None
    with failpoint_enabled(tag, registry=registry):
        try:
            result = code()
        except Exception as exc:
            error = exc

    if error is None:
        raise _fail(
            f"expected error from failpoint '{tag}', got success: {result!r}",
            tag=tag,
            mode="error",
        )
    logger.debug("failpoint_harness_passed", tag=tag, mode="error", error=repr(error))
    return error


def _expect_delay(
    tag: str, window: DelayWindow, code: Callable[[], Any], registry: FailpointRegistry | None
) -> float:
    with failpoint_enabled(tag, registry=registry):
        start = time.perf_counter()
        code()
        elapsed_ms = (time.perf_counter() - start) * 1000
    return _check_window(tag, window, elapsed_ms)


def _with_failpoint(
    tag: str,
    mode: Mode,
    code: Callable[[], Any],
    *,
    registry: FailpointRegistry | None = None,
) -> Any:
    """Run ``code`` with failpoint ``tag`` enabled and verify its effect.

    Args:
        tag: Failpoint identifier
        mode: ``"panic"``, ``"error"``, a DelayWindow, or ``(min_ms, tolerance_ms)``
        code: Zero-argument callable exercising the failpoint
        registry: Registry to toggle (defaults to the process-wide registry)

    Returns:
        The captured exception for ``"panic"`` and ``"error"`` modes, or the
        elapsed milliseconds for delay modes

    Raises:
        FailpointAssertionError: If the expected effect was not observed
        ValueError: If ``mode`` is not recognised
        pydantic.ValidationError: If a delay window has negative bounds
    """
    if mode == "panic":
        return _expect_panic(tag, code, registry)
    if mode == "error":
        return _expect_error(tag, code, registry)
    return _expect_delay(tag, _delay_window(mode), code, registry)


async def _with_failpoint_async(
    tag: str,
    min_ms: int,
    tolerance_ms: int,
    code: Awaitable[Any] | Callable[[], Awaitable[Any]],
    *,
    registry: FailpointRegistry | None = None,
) -> float:
    """Await ``code`` with failpoint ``tag`` enabled and verify it was delayed.

    Args:
        tag: Failpoint identifier
        min_ms: Expected delay in milliseconds
        tolerance_ms: Accepted deviation from ``min_ms`` in either direction
        code: Awaitable, or zero-argument callable returning one
        registry: Registry to toggle (defaults to the process-wide registry)

    Returns:
        Elapsed milliseconds

    Raises:
        FailpointAssertionError: If the elapsed time is outside the window
        pydantic.ValidationError: If the window has negative bounds
    """
    try:
        window = DelayWindow(min_ms=min_ms, tolerance_ms=tolerance_ms)
    except ValidationError:
        if inspect.iscoroutine(code):
            code.close()
        raise
    with failpoint_enabled(tag, registry=registry):
        start = time.perf_counter()
        await (code if inspect.isawaitable(code) else code())
        elapsed_ms = (time.perf_counter() - start) * 1000
    return _check_window(tag, window, elapsed_ms)


def _harness_disabled(tag: str, mode: Mode, code: Callable[[], Any], **kwargs: Any) -> None:
    logger.debug("failpoint_harness_skipped", tag=tag)


async def _harness_disabled_async(
    tag: str, min_ms: int, tolerance_ms: int, code: Any, **kwargs: Any
) -> None:
    if inspect.iscoroutine(code):
        code.close()
    logger.debug("failpoint_harness_skipped", tag=tag)


if config.CHAOS_ENABLED:
    with_failpoint = _with_failpoint
    with_failpoint_async = _with_failpoint_async
else:
    with_failpoint = _harness_disabled
    with_failpoint_async = _harness_disabled_async
