from __future__ import annotations

from .commands import (
    parse_bool,
    parse_command,
    parse_user_id,
    to_camel,
)

__all__ = [
    "parse_bool",
    "parse_command",
    "parse_user_id",
    "to_camel",
]
