from __future__ import annotations

from enum import Enum
from typing import Any


class ServerError(str, Enum):
    """Typed reasons a command can be rejected.

    These are ordinary outcomes, returned inside a `Failure` plan. They are never raised.
    """

    INVALID_NAME = "INVALID_NAME"
    NAME_ALREADY_IN_USE = "NAME_ALREADY_IN_USE"
    CHANNEL_ALREADY_EXISTS = "CHANNEL_ALREADY_EXISTS"
    NO_SUCH_CHANNEL = "NO_SUCH_CHANNEL"
    USER_NOT_IN_CHANNEL = "USER_NOT_IN_CHANNEL"
    NO_SUCH_USER = "NO_SUCH_USER"
    INVITE_TO_PUBLIC_CHANNEL = "INVITE_TO_PUBLIC_CHANNEL"
    USER_NOT_OWNER = "USER_NOT_OWNER"
    JOIN_PRIVATE_CHANNEL = "JOIN_PRIVATE_CHANNEL"

    @classmethod
    def from_any(cls, value: Any) -> "ServerError":
        if isinstance(value, cls):
            return value

        v = str(value).strip().upper().replace("-", "_")
        try:
            return cls(v)
        except ValueError:
            raise ValueError(f"Unknown server error: {value!r}") from None
