"""Named-endpoint message routing."""

from .endpoint import Endpoint
from .message import DeliveryReport, Message, MessageKind, Notice
from .router import Router

__all__ = [
    "DeliveryReport",
    "Endpoint",
    "Message",
    "MessageKind",
    "Notice",
    "Router",
]
