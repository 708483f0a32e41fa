from __future__ import annotations

from fastapi import FastAPI, HTTPException

from ..core.registry import REGISTRY, InMemoryRegistry
from .parsing import parse_command
from .serializers import plan_to_dict


def create_api_app(registry: InMemoryRegistry | None = None) -> FastAPI:
    """JSON control plane over a registry.

    The app only translates HTTP into registry calls; delivering the returned plans to chat
    connections is left to whoever calls it.
    """

    reg = registry if registry is not None else REGISTRY
    app = FastAPI(title="switchboard", version="0.1.0")

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/events")
    def events() -> dict[str, int]:
        # Minimal polling endpoint.
        return {"globalRevision": reg.global_revision()}

    @app.post("/api/reset")
    def reset() -> dict[str, bool]:
        reg.reset()
        return {"ok": True}

    @app.post("/api/connections/{user_id}")
    def connect(user_id: int) -> dict:
        plan = reg.connect(user_id)
        if plan is None:
            raise HTTPException(status_code=409, detail=f"User {user_id} is already connected")
        return plan_to_dict(plan)

    @app.delete("/api/connections/{user_id}")
    def disconnect(user_id: int) -> dict:
        plan = reg.disconnect(user_id)
        if plan is None:
            raise HTTPException(status_code=404, detail=f"User {user_id} is not connected")
        return plan_to_dict(plan)

    @app.post("/api/commands")
    def command(body: dict) -> dict:
        try:
            cmd = parse_command(body)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        plan = reg.handle(cmd)
        if plan is None:
            raise HTTPException(status_code=404, detail=f"Unknown sender: {cmd.sender_id}")
        return plan_to_dict(plan)

    @app.get("/api/users")
    def list_users() -> list[str]:
        return sorted(reg.registered_users())

    @app.get("/api/users/{nickname}")
    def get_user(nickname: str) -> dict:
        view = reg.user_view(nickname)
        if view is None:
            raise HTTPException(status_code=404, detail=f"Unknown user: {nickname}")
        return {
            "id": view.user_id,
            "nickname": view.nickname,
            "channels": sorted(view.channels),
            "owns": sorted(view.owns),
        }

    @app.get("/api/channels")
    def list_channels() -> list[dict]:
        return [
            {
                "name": view.name,
                "owner": view.owner,
                "inviteOnly": view.invite_only,
                "memberCount": len(view.members),
            }
            for view in reg.channel_views()
        ]

    @app.get("/api/channels/{name}")
    def get_channel(name: str) -> dict:
        view = reg.channel_view(name)
        if view is None:
            raise HTTPException(status_code=404, detail=f"Unknown channel: {name}")
        return {
            "name": view.name,
            "owner": view.owner,
            "inviteOnly": view.invite_only,
            "members": sorted(view.members),
        }

    return app


__all__ = ["create_api_app"]
