from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from .commands import Command
from .errors import ServerError


PlanKind = Literal[
    "connected",
    "disconnected",
    "okay",
    "names",
    "error",
]


@dataclass(frozen=True, kw_only=True)
class Plan:
    """What the delivery layer should send, and to whom.

    Notes:
    - `recipients` holds nicknames. It has set semantics; delivery order is not meaningful.
    - A plan is a value: the registry never delivers it.
    """

    kind: PlanKind
    recipients: frozenset[str] = field(default_factory=frozenset)

    @property
    def ok(self) -> bool:
        return self.kind != "error"


@dataclass(frozen=True, kw_only=True)
class Connected(Plan):
    kind: Literal["connected"] = "connected"
    nickname: str


@dataclass(frozen=True, kw_only=True)
class Disconnected(Plan):
    kind: Literal["disconnected"] = "disconnected"
    nickname: str


@dataclass(frozen=True, kw_only=True)
class Okay(Plan):
    kind: Literal["okay", "names"] = "okay"
    command: Command


@dataclass(frozen=True, kw_only=True)
class Names(Okay):
    """Success that also carries the channel owner, so a new member can render the roster."""

    kind: Literal["names"] = "names"
    owner: str


@dataclass(frozen=True, kw_only=True)
class Failure(Plan):
    kind: Literal["error"] = "error"
    command: Command
    error: ServerError


def connected(nickname: str) -> Connected:
    return Connected(nickname=nickname)


def disconnected(nickname: str, recipients: Iterable[str]) -> Disconnected:
    return Disconnected(nickname=nickname, recipients=frozenset(recipients))


def okay(command: Command, recipients: Iterable[str]) -> Okay:
    return Okay(command=command, recipients=frozenset(recipients))


def names(command: Command, recipients: Iterable[str], owner: str) -> Names:
    return Names(command=command, recipients=frozenset(recipients), owner=owner)


def error(command: Command, reason: ServerError) -> Failure:
    return Failure(command=command, error=reason)
