from __future__ import annotations

import re
from typing import Any


_NAME_RE = re.compile(r"[A-Za-z0-9]+")


def is_valid_name(value: Any) -> bool:
    """Return True iff `value` is a non-empty string of ASCII letters and digits.

    Used for both nicknames and channel names.
    """

    if not isinstance(value, str):
        return False
    return _NAME_RE.fullmatch(value) is not None


def default_nickname(suffix: int) -> str:
    return f"User{int(suffix)}"
