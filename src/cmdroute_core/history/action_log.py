"""ActionLog — bounded, most-recent-first history of reversible actions."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import TYPE_CHECKING, Any, TypeVar, cast

from ..instrumentation import get_hook_registry
from ..primitives.exceptions import (
    ConfigurationError,
    EmptyHistoryError,
    NilActionError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..config import ActionLogSettings
    from ..instrumentation import HookRegistry
    from ..ports.action import IReversibleAction

logger = logging.getLogger("cmdroute.history")

TResult = TypeVar("TResult")


class ActionLog:
    """Executes reversible actions and keeps the last *capacity* for undo.

    The newest action sits at the front of :attr:`entries`. When an
    ``execute`` pushes the history past *capacity*, the oldest entry is
    dropped **without** calling ``revert()`` on it: whatever it did to its
    device can no longer be undone through this log.

    All operations are serialized by one re-entrant lock, and ``apply`` /
    ``revert`` run while it is held so that history order always matches
    the order in which devices were mutated. Instrumentation hooks run
    outside the lock, once per public call.

    Usage::

        log = ActionLog(capacity=2)
        log.execute(light.turn_on())
        log.execute(door.open())
        log.undo_last()        # door closed again
        log.undo_multiple(5)   # -> 1, light off again
    """

    def __init__(
        self,
        capacity: int,
        *,
        hooks: HookRegistry | None = None,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ConfigurationError(
                f"ActionLog capacity must be an int, got {type(capacity).__name__}"
            )
        if capacity <= 0:
            raise ConfigurationError(
                f"ActionLog capacity must be positive, got {capacity}"
            )
        self._capacity = capacity
        self._entries: deque[IReversibleAction] = deque()
        self._lock = threading.RLock()
        self._hooks = hooks

    @classmethod
    def from_settings(
        cls,
        settings: ActionLogSettings | None = None,
        *,
        hooks: HookRegistry | None = None,
    ) -> ActionLog:
        """Build a log from :class:`ActionLogSettings` (environment by default)."""
        if settings is None:
            from ..config import ActionLogSettings

            settings = ActionLogSettings()
        return cls(settings.capacity, hooks=hooks)

    # ── Public API ───────────────────────────────────────────────

    def execute(self, action: IReversibleAction | None) -> IReversibleAction:
        """Apply *action* and record it at the front of the history.

        If ``apply()`` raises, nothing is recorded and the error propagates.

        Raises:
            NilActionError: If *action* is ``None``.
        """
        if action is None:
            raise NilActionError

        def _execute() -> IReversibleAction:
            with self._lock:
                action.apply()
                self._entries.appendleft(action)
                if len(self._entries) > self._capacity:
                    evicted = self._entries.pop()
                    logger.debug(
                        "History full (capacity=%d); dropped oldest action %r "
                        "without reverting it",
                        self._capacity,
                        evicted,
                    )
                logger.debug(
                    "Executed %r (history depth %d/%d)",
                    action,
                    len(self._entries),
                    self._capacity,
                )
            return action

        return self._instrumented(
            "history.execute", {"action.type": type(action).__name__}, _execute
        )

    def undo_last(self) -> IReversibleAction:
        """Remove the most recent action and revert it.

        Returns:
            The action that was reverted.

        Raises:
            EmptyHistoryError: If there is nothing left to undo.
        """

        def _undo() -> IReversibleAction:
            with self._lock:
                if not self._entries:
                    raise EmptyHistoryError
                return self._revert_front()

        return self._instrumented("history.undo", {"undo.count": 1}, _undo)

    def undo_multiple(self, count: int) -> int:
        """Undo up to *count* actions, newest first.

        Stops quietly once the history is empty. ``count <= 0`` is a no-op.
        The whole batch runs under the lock and reports once to the hooks as
        a single ``history.undo``.

        If a ``revert()`` fails part-way, the error propagates. Actions undone
        before it stay undone and off the history; the failing one stays at
        the front. ``len(log)`` tells the caller where it stopped.

        Returns:
            The number of actions actually reverted.
        """
        if count <= 0:
            return 0

        def _undo() -> int:
            undone = 0
            with self._lock:
                while undone < count and self._entries:
                    self._revert_front()
                    undone += 1
            if undone < count:
                logger.debug(
                    "Requested %d undo(s), history held only %d", count, undone
                )
            return undone

        return self._instrumented("history.undo", {"undo.count": count}, _undo)

    # ── Introspection ────────────────────────────────────────────

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> list[IReversibleAction]:
        """Snapshot of the history, most recently executed first."""
        with self._lock:
            return list(self._entries)

    def peek(self) -> IReversibleAction | None:
        """Return the action :meth:`undo_last` would revert, or ``None``."""
        with self._lock:
            return self._entries[0] if self._entries else None

    def clear(self) -> None:
        """Forget every entry without reverting any of them."""
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        logger.debug("Cleared %d history entries without reverting", dropped)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        # An empty log is still a valid log.
        return True

    def __repr__(self) -> str:
        return f"ActionLog(capacity={self._capacity}, depth={len(self)})"

    # ── Internals ────────────────────────────────────────────────

    def _revert_front(self) -> IReversibleAction:
        # Caller holds the lock and has checked the history is non-empty.
        action = self._entries.popleft()
        try:
            action.revert()
        except Exception:
            self._entries.appendleft(action)
            logger.exception("Failed to revert %r", action)
            raise
        logger.debug(
            "Reverted %r (history depth %d/%d)",
            action,
            len(self._entries),
            self._capacity,
        )
        return action

    def _instrumented(
        self,
        operation: str,
        attributes: dict[str, Any],
        run: Callable[[], TResult],
    ) -> TResult:
        hooks = self._hooks if self._hooks is not None else get_hook_registry()
        attributes = {"history.capacity": self._capacity, **attributes}
        result = hooks.execute_all(operation, attributes, run)
        return cast("TResult", result)
