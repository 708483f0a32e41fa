from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal


CommandKind = Literal[
    "nickname",
    "create",
    "join",
    "leave",
    "message",
    "invite",
    "kick",
]


@dataclass(frozen=True, kw_only=True)
class Command:
    """A well-formed client action, already decoded by the dispatcher.

    Notes:
    - `sender_id` is the transport-assigned id of the connection that issued the action.
    - Commands carry no validation of their own; the registry decides the outcome.
    """

    kind: ClassVar[CommandKind]

    sender_id: int


@dataclass(frozen=True)
class NicknameCommand(Command):
    kind: ClassVar[CommandKind] = "nickname"
    new_nickname: str


@dataclass(frozen=True)
class CreateCommand(Command):
    kind: ClassVar[CommandKind] = "create"
    channel: str
    invite_only: bool = False


@dataclass(frozen=True)
class JoinCommand(Command):
    kind: ClassVar[CommandKind] = "join"
    channel: str


@dataclass(frozen=True)
class LeaveCommand(Command):
    kind: ClassVar[CommandKind] = "leave"
    channel: str


@dataclass(frozen=True)
class MessageCommand(Command):
    kind: ClassVar[CommandKind] = "message"
    channel: str
    message: str  # opaque to the registry


@dataclass(frozen=True)
class InviteCommand(Command):
    kind: ClassVar[CommandKind] = "invite"
    target: str  # nickname of the user being invited
    channel: str


@dataclass(frozen=True)
class KickCommand(Command):
    kind: ClassVar[CommandKind] = "kick"
    target: str  # nickname of the user being kicked
    channel: str


COMMAND_TYPES: dict[str, type[Command]] = {
    cls.kind: cls
    for cls in (
        NicknameCommand,
        CreateCommand,
        JoinCommand,
        LeaveCommand,
        MessageCommand,
        InviteCommand,
        KickCommand,
    )
}
