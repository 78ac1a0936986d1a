"""Endpoint — a named participant with a weak back-reference to its router."""

from __future__ import annotations

import logging
import threading
import weakref
from collections import deque
from typing import TYPE_CHECKING

from ..primitives.exceptions import ConfigurationError, NotConnectedError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .message import DeliveryReport, Message
    from .router import Router

logger = logging.getLogger("cmdroute.routing")

DEFAULT_INBOX_SIZE = 100


class Endpoint:
    """A named participant that sends through, and receives from, one router.

    Each received message is first handed to the optional *on_message*
    callback and, once that returns, appended to a bounded inbox (oldest
    dropped first). A message whose callback raised is not kept. The inbox
    may be read and drained while other threads deliver to it.

    The endpoint is owned by whoever created it. The router it is registered
    with is held through a ``weakref``, so neither keeps the other alive.

    Usage::

        router = Router()
        alice = Endpoint("Alice")
        bob = Endpoint("Bob", on_message=print)
        router.register(alice)
        router.register(bob)

        alice.send("hi")              # broadcast to everyone but Alice
        alice.send("psst", to="Bob")  # directed
    """

    def __init__(
        self,
        name: str,
        *,
        on_message: Callable[[Message], object] | None = None,
        inbox_size: int | None = DEFAULT_INBOX_SIZE,
    ) -> None:
        if not name:
            raise ConfigurationError("Endpoint name must be a non-empty string")
        if inbox_size is not None and inbox_size <= 0:
            raise ConfigurationError(
                f"Endpoint inbox_size must be positive or None, got {inbox_size}"
            )
        self._name = name
        self._router_ref: weakref.ref[Router] | None = None
        self._inbox: deque[Message] = deque(maxlen=inbox_size)
        self._inbox_lock = threading.Lock()
        self._on_message = on_message

    # ── Identity & binding ───────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def router(self) -> Router | None:
        if self._router_ref is None:
            return None
        return self._router_ref()

    @property
    def is_connected(self) -> bool:
        return self.router is not None

    def attach(self, router: Router) -> None:
        self._router_ref = weakref.ref(router)

    def detach(self) -> None:
        self._router_ref = None

    # ── Messaging ────────────────────────────────────────────────

    def send(self, payload: str, to: str | None = None) -> DeliveryReport:
        """Send *payload* through the bound router.

        Broadcasts when *to* is empty, otherwise sends a directed message.

        Raises:
            NotConnectedError: If this endpoint has no router.
            SenderNotRegisteredError: If the router no longer lists it.
        """
        router = self.router
        if router is None:
            logger.debug("%s attempted to send while disconnected", self._name)
            raise NotConnectedError(self._name)
        return router.send(payload, self, to)

    def receive(self, message: Message) -> None:
        if self._on_message is not None:
            self._on_message(message)
        with self._inbox_lock:
            self._inbox.append(message)

    @property
    def inbox(self) -> list[Message]:
        """Received messages, oldest first."""
        with self._inbox_lock:
            return list(self._inbox)

    def drain(self) -> list[Message]:
        """Return and clear the inbox."""
        with self._inbox_lock:
            messages = list(self._inbox)
            self._inbox.clear()
        return messages

    def __repr__(self) -> str:
        state = "connected" if self.is_connected else "disconnected"
        return f"Endpoint({self._name!r}, {state})"
