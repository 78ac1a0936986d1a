"""IReversibleAction — the capability pair recorded by the action history."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IReversibleAction(Protocol):
    """
    Port for an action bound to one target device that can be undone.

    :class:`~cmdroute_core.history.ActionLog` only sequences these calls; it
    never inspects device state. ``revert()`` is assumed to be the true
    inverse of the most recent ``apply()`` on the same instance.
    """

    def apply(self) -> None:
        """Perform the action against the target device."""
        ...

    def revert(self) -> None:
        """Undo the effect of the most recent :meth:`apply`."""
        ...
