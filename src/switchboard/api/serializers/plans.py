from __future__ import annotations

from dataclasses import fields
from typing import Any

from ...core.commands import Command
from ...core.errors import ServerError
from ...core.plans import Connected, Disconnected, Failure, Names, Okay, Plan
from ..parsing import parse_command, to_camel


def command_to_dict(c: Command) -> dict[str, Any]:
    out: dict[str, Any] = {"type": c.kind}
    for f in fields(c):
        out[to_camel(f.name)] = getattr(c, f.name)
    return out


def plan_to_dict(p: Plan) -> dict[str, Any]:
    out: dict[str, Any] = {
        "ok": p.ok,
        "kind": p.kind,
        # Recipient sets have no order; sort so responses are stable.
        "recipients": sorted(p.recipients),
    }

    if isinstance(p, (Connected, Disconnected)):
        out["nickname"] = p.nickname
    if isinstance(p, (Okay, Failure)):
        out["command"] = command_to_dict(p.command)
    if isinstance(p, Names):
        out["owner"] = p.owner
    if isinstance(p, Failure):
        out["error"] = p.error.value
    return out


def plan_from_dict(data: dict[str, Any]) -> Plan:
    kind = str(data.get("kind", ""))
    recipients = frozenset(str(r) for r in data.get("recipients") or [])

    if kind == "connected":
        return Connected(nickname=str(data["nickname"]), recipients=recipients)
    if kind == "disconnected":
        return Disconnected(nickname=str(data["nickname"]), recipients=recipients)
    if kind == "okay":
        return Okay(command=parse_command(data["command"]), recipients=recipients)
    if kind == "names":
        return Names(command=parse_command(data["command"]), recipients=recipients, owner=str(data["owner"]))
    if kind == "error":
        return Failure(command=parse_command(data["command"]), error=ServerError.from_any(data["error"]))
    raise ValueError(f"Unknown plan kind: {kind!r}")
