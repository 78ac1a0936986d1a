"""IEndpoint — the participant side of a router registration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..routing.message import Message
    from ..routing.router import Router


@runtime_checkable
class IEndpoint(Protocol):
    """
    Port for a named participant that messages are delivered to.

    ``receive`` is a terminal sink: the router does not expect a result and
    treats any exception it raises as the receiver's own failure.

    ``attach`` / ``detach`` are called only by the router, inside
    ``register`` / ``unregister``, to keep the back-reference in step with
    the registry. Implementations must hold the router weakly.
    """

    @property
    def name(self) -> str:
        """Identifier, unique within one router at a time."""
        ...

    @property
    def router(self) -> Router | None:
        """The router currently serving this endpoint, if any."""
        ...

    def receive(self, message: Message) -> None:
        """Accept one delivered message."""
        ...

    def attach(self, router: Router) -> None: ...

    def detach(self) -> None: ...
