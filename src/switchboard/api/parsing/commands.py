from __future__ import annotations

from dataclasses import MISSING, fields
from typing import Any

from ...core.commands import COMMAND_TYPES, Command


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def parse_bool(value: Any, *, name: str = "value") -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    v = str(value).strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def parse_user_id(value: Any, *, name: str = "senderId") -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{name} must be an integer")
    try:
        uid = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return uid


def _parse_text(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def parse_command(body: Any) -> Command:
    """Decode a JSON command body into a command object.

    Expected shape: `{"type": "<kind>", "senderId": <int>, ...}` with camelCase field names,
    e.g. `{"type": "create", "senderId": 1, "channel": "room", "inviteOnly": true}`.

    Names are not validated here; that is the registry's job, and it answers with a typed
    failure rather than an exception.
    """

    if not isinstance(body, dict):
        raise ValueError("Command body must be a JSON object")

    kind = str(body.get("type", "")).strip().lower()
    cls = COMMAND_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown command type: {body.get('type')!r}")

    if "senderId" not in body:
        raise ValueError("Missing field: senderId")
    kwargs: dict[str, Any] = {"sender_id": parse_user_id(body["senderId"])}

    for f in fields(cls):
        if f.name == "sender_id":
            continue
        key = to_camel(f.name)
        if key not in body:
            if f.default is not MISSING:
                continue
            raise ValueError(f"Missing field: {key}")
        if f.type == "bool":
            kwargs[f.name] = parse_bool(body[key], name=key)
        else:
            kwargs[f.name] = _parse_text(body[key], name=key)

    return cls(**kwargs)
