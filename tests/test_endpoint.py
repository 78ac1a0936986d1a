"""Tests for Endpoint and Message value objects."""

from __future__ import annotations

import sys
import threading

import pydantic
import pytest

from cmdroute_core.ports import IEndpoint
from cmdroute_core.primitives.exceptions import ConfigurationError, NotConnectedError
from cmdroute_core.routing import (
    DeliveryReport,
    Endpoint,
    Message,
    MessageKind,
    Notice,
    Router,
)


def _broadcast(payload: str, sender: str = "Alice") -> Message:
    return Message(kind=MessageKind.BROADCAST, payload=payload, sender=sender)


class TestEndpoint:
    def test_satisfies_endpoint_port(self) -> None:
        assert isinstance(Endpoint("Alice"), IEndpoint)

    @pytest.mark.parametrize("inbox_size", [0, -3])
    def test_rejects_bad_inbox_size(self, inbox_size: int) -> None:
        with pytest.raises(ConfigurationError):
            Endpoint("Alice", inbox_size=inbox_size)

    def test_rejects_empty_name(self) -> None:
        with pytest.raises(ConfigurationError):
            Endpoint("")

    def test_starts_disconnected(self) -> None:
        alice = Endpoint("Alice")
        assert alice.router is None
        assert not alice.is_connected
        assert repr(alice) == "Endpoint('Alice', disconnected)"
        with pytest.raises(NotConnectedError, match="'Alice' is not connected"):
            alice.send("hello")

    def test_connected_repr(self) -> None:
        router = Router()
        alice = Endpoint("Alice")
        router.register(alice)
        assert alice.is_connected
        assert repr(alice) == "Endpoint('Alice', connected)"

    def test_receive_fills_inbox_and_calls_back(self) -> None:
        seen: list[Message] = []
        bob = Endpoint("Bob", on_message=seen.append)

        bob.receive(_broadcast("one"))
        bob.receive(_broadcast("two"))

        assert [m.payload for m in bob.inbox] == ["one", "two"]
        assert seen == bob.inbox

    def test_inbox_is_bounded(self) -> None:
        bob = Endpoint("Bob", inbox_size=2)
        for payload in ("a", "b", "c"):
            bob.receive(_broadcast(payload))
        assert [m.payload for m in bob.inbox] == ["b", "c"]

    def test_unbounded_inbox(self) -> None:
        bob = Endpoint("Bob", inbox_size=None)
        for i in range(500):
            bob.receive(_broadcast(str(i)))
        assert len(bob.inbox) == 500

    def test_drain_empties_inbox(self) -> None:
        bob = Endpoint("Bob")
        bob.receive(_broadcast("x"))
        assert [m.payload for m in bob.drain()] == ["x"]
        assert bob.inbox == []

    def test_failed_callback_keeps_nothing(self) -> None:
        def reject(message: Message) -> None:
            raise RuntimeError("rejected")

        bob = Endpoint("Bob", on_message=reject)
        with pytest.raises(RuntimeError, match="rejected"):
            bob.receive(_broadcast("x"))
        assert bob.inbox == []

    def test_drain_while_receiving_loses_nothing(self) -> None:
        bob = Endpoint("Bob", inbox_size=None)
        total = 20_000
        drained: list[Message] = []
        done = threading.Event()

        def deliver() -> None:
            message = _broadcast("m")
            for _ in range(total):
                bob.receive(message)
            done.set()

        interval = sys.getswitchinterval()
        sys.setswitchinterval(1e-6)
        try:
            sender = threading.Thread(target=deliver)
            sender.start()
            while not done.is_set():
                drained.extend(bob.drain())
                assert len(bob.inbox) <= total
            sender.join()
        finally:
            sys.setswitchinterval(interval)
        drained.extend(bob.drain())

        assert len(drained) == total


class TestMessage:
    def test_is_immutable(self) -> None:
        message = _broadcast("hi")
        with pytest.raises(pydantic.ValidationError):
            message.payload = "changed"  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        assert _broadcast("hi") == _broadcast("hi")
        assert _broadcast("hi") != _broadcast("hi", sender="Bob")

    def test_payload_must_be_text(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Message(
                kind=MessageKind.BROADCAST,
                payload=None,  # type: ignore[arg-type]
                sender="Alice",
            )

    @pytest.mark.parametrize(
        ("notice", "payload"),
        [
            (Notice.JOINED, "Bob joined"),
            (Notice.LEFT, "Bob left"),
            (Notice.RECIPIENT_NOT_FOUND, "recipient 'Bob' not found"),
        ],
    )
    def test_system_notices(self, notice: Notice, payload: str) -> None:
        message = Message.system(notice, subject="Bob", sender="router")
        assert message.kind is MessageKind.SYSTEM
        assert message.payload == payload
        assert not message.is_directed

    def test_only_recipient_notice_carries_error(self) -> None:
        joined = Message.system(Notice.JOINED, subject="Bob", sender="router")
        assert joined.error is None
        assert _broadcast("hi").error is None

    def test_delivery_report(self) -> None:
        report = DeliveryReport(message=_broadcast("hi"))
        assert not report.delivered
        report = DeliveryReport(message=_broadcast("hi"), delivered_to=("Bob",))
        assert report.delivered
