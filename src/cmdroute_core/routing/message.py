"""Message value objects delivered by the router."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..primitives.exceptions import RecipientNotFoundError


class MessageKind(str, Enum):
    """How a message reached its receiver."""

    SYSTEM = "system"
    BROADCAST = "broadcast"
    DIRECTED = "directed"


class Notice(str, Enum):
    """Reason carried by a :attr:`MessageKind.SYSTEM` message."""

    JOINED = "joined"
    LEFT = "left"
    RECIPIENT_NOT_FOUND = "recipient_not_found"


class Message(BaseModel):
    """One delivered message. Immutable; equality is structural.

    For system messages, ``notice`` says what happened and ``subject`` names
    the endpoint it happened to (the one that joined or left, or the
    recipient that could not be found).
    """

    model_config = ConfigDict(frozen=True)

    kind: MessageKind
    payload: str
    sender: str
    recipient: str | None = None
    notice: Notice | None = None
    subject: str | None = None

    @classmethod
    def system(cls, notice: Notice, *, subject: str, sender: str) -> Message:
        if notice is Notice.RECIPIENT_NOT_FOUND:
            payload = f"recipient {subject!r} not found"
        else:
            payload = f"{subject} {notice.value}"
        return cls(
            kind=MessageKind.SYSTEM,
            payload=payload,
            sender=sender,
            notice=notice,
            subject=subject,
        )

    @property
    def is_directed(self) -> bool:
        return self.kind is MessageKind.DIRECTED

    @property
    def error(self) -> RecipientNotFoundError | None:
        """The routing failure this notice reports, if any."""
        if self.notice is Notice.RECIPIENT_NOT_FOUND and self.subject is not None:
            return RecipientNotFoundError(self.subject)
        return None


class DeliveryReport(BaseModel):
    """Outcome of :meth:`Router.send`: the message and who received it."""

    model_config = ConfigDict(frozen=True)

    message: Message
    delivered_to: tuple[str, ...] = ()

    @property
    def delivered(self) -> bool:
        return bool(self.delivered_to)
