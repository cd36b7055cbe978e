"""Exception classes raised by chaoskit.

Three kinds of failure flow out of this library:
- InjectedError: the deliberate, caller-visible failure produced by ``maybe_fail``
- InjectedPanic: the deliberate abnormal termination produced by ``maybe_panic``
- FailpointAssertionError: the harness did not observe the expected behavior

InjectedPanic derives from BaseException so that ``except Exception`` blocks in the
code under test do not absorb it.
"""

from __future__ import annotations

from typing import Any


class ChaosError(Exception):
    """Base exception class for all chaoskit errors."""

    pass


class InjectedError(ChaosError):
    """Raised by an enabled ``maybe_fail`` failpoint."""

    def __init__(self, tag: str, detail: Any = None) -> None:
        self.tag = tag
        self.detail = detail
        message = tag if detail is None else f"{tag}: {detail}"
        super().__init__(message)


class InjectedPanic(BaseException):
    """Raised by an enabled ``maybe_panic`` failpoint."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(tag)


class FailpointAssertionError(AssertionError):
    """Raised when the harness does not observe the effect of a failpoint."""

    def __init__(self, message: str, *, tag: str, mode: str) -> None:
        self.tag = tag
        self.mode = mode
        super().__init__(message)
