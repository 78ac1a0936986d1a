"""Demo: remote-control undo history and a three-way chat.

Run with ``python -m cmdroute_core.demo`` (or the ``cmdroute-demo`` script).
"""

from __future__ import annotations

import logging

from .actions import Light, Thermostat
from .history import ActionLog
from .primitives.exceptions import EmptyHistoryError, NotConnectedError
from .routing import Endpoint, Message, MessageKind, Router


def _label(action: object) -> str:
    return str(getattr(action, "label", action))


def _describe(owner: str, message: Message) -> str:
    if message.kind is MessageKind.SYSTEM:
        return f"{owner} notified: {message.payload}"
    via = " (directly)" if message.is_directed else ""
    return f"{owner} receives from {message.sender}{via}: {message.payload}"


def run_remote_control(transcript: list[str]) -> None:
    light = Light("Light")
    thermostat = Thermostat("Thermostat", temperature=19.0)
    log = ActionLog(capacity=2)

    for action in (
        light.turn_on(),
        thermostat.set_temperature(22.5),
        light.turn_off(),
    ):
        log.execute(action)
        transcript.append(f"executed {action.label}")

    transcript.append(f"history: {[_label(a) for a in log.entries]}")
    while True:
        try:
            undone = log.undo_last()
        except EmptyHistoryError as exc:
            transcript.append(str(exc))
            break
        transcript.append(f"undid {_label(undone)}")
    transcript.append(
        f"light is {'ON' if light.is_on else 'OFF'}, "
        f"thermostat at {thermostat.temperature:g}"
    )


def run_chat(transcript: list[str]) -> None:
    router = Router()
    members = {
        name: Endpoint(
            name,
            on_message=lambda m, owner=name: transcript.append(_describe(owner, m)),
        )
        for name in ("Alice", "Bob", "Cathy")
    }
    for endpoint in members.values():
        router.register(endpoint)

    members["Alice"].send("Hi Bob")
    members["Bob"].send("Hello Alice", to="Alice")
    members["Bob"].send("anyone there?", to="Eve")
    router.unregister(members["Cathy"])

    dave = Endpoint("Dave")
    try:
        dave.send("let me in")
    except NotConnectedError as exc:
        transcript.append(str(exc))


def run_demo() -> list[str]:
    """Run both scenarios and return the transcript lines."""
    transcript: list[str] = []
    run_remote_control(transcript)
    run_chat(transcript)
    return transcript


def main() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    for line in run_demo():
        print(line)


if __name__ == "__main__":
    main()
