from __future__ import annotations

from .commands import (
    COMMAND_TYPES,
    Command,
    CreateCommand,
    InviteCommand,
    JoinCommand,
    KickCommand,
    LeaveCommand,
    MessageCommand,
    NicknameCommand,
)
from .errors import ServerError
from .names import is_valid_name
from .plans import Connected, Disconnected, Failure, Names, Okay, Plan

__all__ = [
    "COMMAND_TYPES",
    "Command",
    "NicknameCommand",
    "CreateCommand",
    "JoinCommand",
    "LeaveCommand",
    "MessageCommand",
    "InviteCommand",
    "KickCommand",
    "ServerError",
    "is_valid_name",
    "Plan",
    "Connected",
    "Disconnected",
    "Okay",
    "Names",
    "Failure",
]
