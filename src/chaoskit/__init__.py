from .config import CHAOS_ENABLED, chaos_enabled
from .exceptions import (
    ChaosError,
    FailpointAssertionError,
    InjectedError,
    InjectedPanic,
)
from .harness import failpoint_enabled, with_failpoint, with_failpoint_async
from .injection import maybe_fail, maybe_panic, maybe_sleep, maybe_sleep_async
from .models import DelayWindow, HarnessMode, Outcome
from .registry import (
    FailpointRegistry,
    disable_failpoint,
    enable_failpoint,
    get_registry,
    is_failpoint_enabled,
)

__all__ = [
    # Models
    "DelayWindow",
    "FailpointRegistry",
    "HarnessMode",
    "Outcome",
    # Configuration
    "CHAOS_ENABLED",
    "chaos_enabled",
    # Functions
    "disable_failpoint",
    "enable_failpoint",
    "failpoint_enabled",
    "get_registry",
    "is_failpoint_enabled",
    "maybe_fail",
    "maybe_panic",
    "maybe_sleep",
    "maybe_sleep_async",
    "with_failpoint",
    "with_failpoint_async",
    # Exceptions
    "ChaosError",
    "FailpointAssertionError",
    "InjectedError",
    "InjectedPanic",
]

__version__ = "0.1.0"
