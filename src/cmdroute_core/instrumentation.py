"""Instrumentation hooks — wrap history and routing operations with filtering."""

from __future__ import annotations

import fnmatch
import logging
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("cmdroute.instrumentation")

_MATCH_CACHE_MAX_SIZE = 512


@runtime_checkable
class InstrumentationHook(Protocol):
    """Protocol for instrumentation hooks (tracing, metrics, auditing)."""

    def __call__(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Any],
    ) -> Any:
        """Wrap an operation. Must call ``next_handler()`` exactly once."""
        ...


class HookRegistration:
    """A registered hook with operation filtering and priority."""

    def __init__(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        operations: list[str] | None = None,
        enabled: bool = True,
    ) -> None:
        self.hook = hook
        self.priority = priority
        self.operations = operations or []
        self.enabled = enabled
        self._match_cache: dict[str, bool] = {}

    def matches(self, operation: str) -> bool:
        """Check if this registration applies to *operation*."""
        if not self.enabled:
            return False
        if not self.operations:
            return True
        if operation in self._match_cache:
            return self._match_cache[operation]
        matched = any(
            fnmatch.fnmatch(operation, pattern) for pattern in self.operations
        )
        if len(self._match_cache) >= _MATCH_CACHE_MAX_SIZE:
            self._match_cache.clear()
        self._match_cache[operation] = matched
        return matched

    def clear_cache(self) -> None:
        self._match_cache.clear()


class HookRegistry:
    """Ordered collection of hooks run around each instrumented operation.

    Operation names emitted by this package:

    - ``history.execute`` / ``history.undo``
    - ``routing.register`` / ``routing.unregister`` / ``routing.send``

    Usage::

        def timing_hook(operation, attributes, next_handler):
            start = time.monotonic()
            try:
                return next_handler()
            finally:
                print(operation, time.monotonic() - start)

        get_hook_registry().register(timing_hook, operations=["routing.*"])
    """

    def __init__(self) -> None:
        self._registrations: list[HookRegistration] = []

    def register(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        operations: list[str] | None = None,
        enabled: bool = True,
    ) -> HookRegistration:
        """Register *hook*; lower priority values run outermost."""
        registration = HookRegistration(
            hook, priority=priority, operations=operations, enabled=enabled
        )
        self._registrations.append(registration)
        self._registrations.sort(key=lambda r: r.priority)
        logger.debug(
            "Registered instrumentation hook %s (priority=%d, operations=%s)",
            type(hook).__name__,
            priority,
            registration.operations or ["*"],
        )
        return registration

    def unregister(self, registration: HookRegistration) -> None:
        if registration in self._registrations:
            self._registrations.remove(registration)

    def execute_all(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Any],
    ) -> Any:
        """Run *next_handler* wrapped by every matching hook, in priority order."""
        matching = [r for r in self._registrations if r.matches(operation)]
        if not matching:
            return next_handler()

        def pipeline(index: int = 0) -> Any:
            if index >= len(matching):
                return next_handler()
            return matching[index].hook(
                operation,
                attributes,
                lambda: pipeline(index + 1),
            )

        return pipeline()

    def clear(self) -> None:
        """Remove all registrations and clear caches."""
        for registration in self._registrations:
            registration.clear_cache()
        self._registrations.clear()


_hook_registry_var: ContextVar[HookRegistry | None] = ContextVar(
    "cmdroute_hook_registry", default=None
)


def get_hook_registry() -> HookRegistry:
    """Get the hook registry for the current context.

    Creates a fresh ``HookRegistry`` on first access within each context so
    tests do not leak hooks into each other.
    """
    registry = _hook_registry_var.get()
    if registry is None:
        registry = HookRegistry()
        _hook_registry_var.set(registry)
    return registry


def set_hook_registry(registry: HookRegistry) -> None:
    """Set a custom hook registry in the current context."""
    _hook_registry_var.set(registry)
