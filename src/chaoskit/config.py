"""Environment configuration for chaoskit.

The capability flag is read once, when this module is first imported. Flipping
``CHAOSKIT_ENABLED`` afterwards has no effect on the running process.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

CHAOS_ENV_VAR: Final = "CHAOSKIT_ENABLED"
LOG_LEVEL_ENV_VAR: Final = "LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


def chaos_enabled(environ: Mapping[str, str] | None = None) -> bool:
    """Return True if the chaos capability flag is set.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        True when ``CHAOSKIT_ENABLED`` holds a truthy value, False otherwise
    """
    env = os.environ if environ is None else environ
    value = env.get(CHAOS_ENV_VAR, "")
    return value.strip().lower() in _TRUTHY


def log_level(environ: Mapping[str, str] | None = None) -> str:
    """Return the configured log level name, upper-cased."""
    env = os.environ if environ is None else environ
    return env.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL


CHAOS_ENABLED: Final = chaos_enabled()
