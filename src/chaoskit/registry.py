"""Process-wide registry of active failpoint tags.

The default registry is created lazily on first access and lives for the rest
of the process. It is never torn down; tags leave it only through explicit
``disable`` calls. Code that prefers explicit context can build its own
:class:`FailpointRegistry` and pass it through the ``registry=`` keyword.
"""

from __future__ import annotations

import threading

from .logging_config import get_logger

logger = get_logger(__name__)


class FailpointRegistry:
    """Thread-safe set of enabled failpoint tags.

    Concurrent enable/disable calls on different tags never lose updates.
    Racing calls on the same tag leave whichever landed last.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tags: set[str] = set()

    def is_enabled(self, tag: str) -> bool:
        with self._lock:
            return tag in self._tags

    def enable(self, tag: str) -> None:
        with self._lock:
            self._tags.add(tag)
        logger.debug("failpoint_enabled", tag=tag)

    def disable(self, tag: str) -> None:
        with self._lock:
            self._tags.discard(tag)
        logger.debug("failpoint_disabled", tag=tag)

    def active_tags(self) -> frozenset[str]:
        """Return a point-in-time snapshot of the enabled tags."""
        with self._lock:
            return frozenset(self._tags)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.is_enabled(tag)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tags)

    def __repr__(self) -> str:
        return f"FailpointRegistry(active={sorted(self.active_tags())!r})"


# Module-level cache (initialized once per process)
_registry: FailpointRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> FailpointRegistry:
    """Get the process-wide failpoint registry.

    Creates the registry on first call and reuses it for every later call,
    from any thread.
    """
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = FailpointRegistry()
    return _registry


def _resolve(registry: FailpointRegistry | None) -> FailpointRegistry:
    return get_registry() if registry is None else registry


def is_failpoint_enabled(tag: str, *, registry: FailpointRegistry | None = None) -> bool:
    """Return True if the failpoint ``tag`` is currently enabled."""
    return _resolve(registry).is_enabled(tag)


def enable_failpoint(tag: str, *, registry: FailpointRegistry | None = None) -> None:
    """Enable the failpoint ``tag``. Enabling an enabled tag is a no-op."""
    _resolve(registry).enable(tag)


def disable_failpoint(tag: str, *, registry: FailpointRegistry | None = None) -> None:
    """Disable the failpoint ``tag``. Disabling an absent tag is a no-op."""
    _resolve(registry).disable(tag)
