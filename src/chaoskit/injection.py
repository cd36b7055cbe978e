"""Call-site fault injection primitives.

Each primitive checks a single tag against the registry and, when the tag is
enabled, produces its effect: an error, a panic, or a delay. With the tag
disabled every primitive returns without side effects.

Which implementation the public names refer to is decided once, at import
time, from the ``CHAOSKIT_ENABLED`` capability flag. When the flag is off the
public names are bound to no-op functions that never touch the registry, so a
production process pays for a function call and nothing else.

Example:
    def load_user(user_id: str) -> User:
        maybe_fail("db_error", ConnectionError("database unreachable"))
        maybe_sleep("slow_db", 200)
        return db.fetch(user_id)
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

from . import config
from .exceptions import InjectedError, InjectedPanic
from .logging_config import get_logger
from .models import Outcome
from .registry import FailpointRegistry, is_failpoint_enabled

logger = get_logger(__name__)


def _build_error(tag: str, error: Any) -> BaseException:
    if error is None:
        return InjectedError(tag)
    if isinstance(error, BaseException):
        return error
    if isinstance(error, type) and issubclass(error, BaseException):
        return error(tag)
    return InjectedError(tag, detail=error)


def _maybe_fail(tag: str, error: Any = None, *, registry: FailpointRegistry | None = None) -> None:
    """Raise an error if the failpoint ``tag`` is enabled.

    Args:
        tag: Failpoint identifier
        error: Optional custom error. An exception instance is raised as-is, an
            exception class is instantiated with the tag, and any other value is
            carried on ``InjectedError.detail``.
        registry: Registry to consult (defaults to the process-wide registry)

    Raises:
        InjectedError: If the tag is enabled and no exception was supplied
    """
    if is_failpoint_enabled(tag, registry=registry):
        logger.info("failpoint_triggered", tag=tag, outcome=Outcome.ERROR.value)
        raise _build_error(tag, error)


def _maybe_panic(tag: str, *, registry: FailpointRegistry | None = None) -> None:
    """Raise InjectedPanic carrying the tag if the failpoint ``tag`` is enabled."""
    if is_failpoint_enabled(tag, registry=registry):
        logger.info("failpoint_triggered", tag=tag, outcome=Outcome.PANIC.value)
        raise InjectedPanic(tag)


def _maybe_sleep(tag: str, millis: int, *, registry: FailpointRegistry | None = None) -> None:
    """Block the calling thread for ``millis`` milliseconds if ``tag`` is enabled."""
    if is_failpoint_enabled(tag, registry=registry):
        logger.info("failpoint_triggered", tag=tag, outcome=Outcome.DELAY.value, millis=millis)
        time.sleep(millis / 1000)


async def _maybe_sleep_async(
    tag: str, millis: int, *, registry: FailpointRegistry | None = None
) -> None:
    """Suspend the calling task for ``millis`` milliseconds if ``tag`` is enabled.

    The event loop keeps running other tasks while this one is suspended.
    """
    if is_failpoint_enabled(tag, registry=registry):
        logger.info("failpoint_triggered", tag=tag, outcome=Outcome.DELAY.value, millis=millis)
        await asyncio.sleep(millis / 1000)


def _noop(*args: Any, **kwargs: Any) -> None:
    return None


async def _noop_async(*args: Any, **kwargs: Any) -> None:
    return None


if config.CHAOS_ENABLED:
    maybe_fail = _maybe_fail
    maybe_panic = _maybe_panic
    maybe_sleep = _maybe_sleep
    maybe_sleep_async = _maybe_sleep_async
else:
    maybe_fail = _noop
    maybe_panic = _noop
    maybe_sleep = _noop
    maybe_sleep_async = _noop_async
