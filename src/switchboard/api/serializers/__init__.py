from __future__ import annotations

from .plans import (
    command_to_dict,
    plan_from_dict,
    plan_to_dict,
)

__all__ = [
    "command_to_dict",
    "plan_to_dict",
    "plan_from_dict",
]
