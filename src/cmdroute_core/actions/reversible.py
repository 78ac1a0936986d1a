"""Closure-backed reversible actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ..ports.action import IReversibleAction

logger = logging.getLogger("cmdroute.actions")


@dataclass(frozen=True, eq=False)
class ReversibleAction:
    """An ``apply``/``revert`` pair built from two callables.

    Device-specific behaviour lives in the closures, so one type covers
    every device. Instances compare by identity.

    Usage::

        action = ReversibleAction(
            light.on, light.off, label="light on"
        )
        log.execute(action)
    """

    on_apply: Callable[[], object]
    on_revert: Callable[[], object]
    label: str = field(default="action")

    def apply(self) -> None:
        self.on_apply()

    def revert(self) -> None:
        self.on_revert()

    def __repr__(self) -> str:
        return f"ReversibleAction({self.label!r})"


class CompositeAction:
    """Applies child actions in order and reverts them in reverse order.

    If a child fails to apply, the children already applied are reverted
    (newest first) before the error is re-raised, so the composite is
    all-or-nothing from the caller's point of view.
    """

    def __init__(
        self, actions: Sequence[IReversibleAction], *, label: str = "composite"
    ) -> None:
        if any(a is None for a in actions):
            raise ValueError("CompositeAction children must not be None")
        self._actions = tuple(actions)
        self.label = label

    @property
    def actions(self) -> tuple[IReversibleAction, ...]:
        return self._actions

    def apply(self) -> None:
        applied: list[IReversibleAction] = []
        for action in self._actions:
            try:
                action.apply()
            except Exception:
                logger.warning(
                    "Composite %r: child %r failed to apply, rolling back %d",
                    self.label,
                    action,
                    len(applied),
                )
                for done in reversed(applied):
                    done.revert()
                raise
            applied.append(action)

    def revert(self) -> None:
        for action in reversed(self._actions):
            action.revert()

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:
        return f"CompositeAction({self.label!r}, size={len(self._actions)})"
