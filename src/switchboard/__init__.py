from __future__ import annotations

from .core.commands import (
    Command,
    CreateCommand,
    InviteCommand,
    JoinCommand,
    KickCommand,
    LeaveCommand,
    MessageCommand,
    NicknameCommand,
)
from .core.errors import ServerError
from .core.names import is_valid_name
from .core.plans import Connected, Disconnected, Failure, Names, Okay, Plan
from .core.registry import REGISTRY, InMemoryRegistry
from .runtime.server import SwitchboardServer, run
from .sdk.client import SwitchboardClient

__all__ = [
    "run",
    "SwitchboardServer",
    "SwitchboardClient",
    "InMemoryRegistry",
    "REGISTRY",
    "is_valid_name",
    "ServerError",
    "Command",
    "NicknameCommand",
    "CreateCommand",
    "JoinCommand",
    "LeaveCommand",
    "MessageCommand",
    "InviteCommand",
    "KickCommand",
    "Plan",
    "Connected",
    "Disconnected",
    "Okay",
    "Names",
    "Failure",
]
