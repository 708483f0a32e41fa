from __future__ import annotations

from typing import Any

import httpx

from ..api.serializers import command_to_dict, plan_from_dict
from ..core.commands import Command
from ..core.plans import Connected, Disconnected, Plan


class SwitchboardClient:
    """HTTP client for a running switchboard server.

    Contract (current):
    - POST   /api/connections/{userId}    connect
    - DELETE /api/connections/{userId}    disconnect
    - POST   /api/commands                any command, JSON body

    Plans come back as the same `Plan` objects the registry returns in-process. The two
    no-op cases (duplicate connect, unknown sender) come back as `None`.

    Pass `http_client` to reuse a connection pool, or to drive an in-process app through
    `fastapi.testclient.TestClient`. An injected client keeps its own timeout; `timeout_s`
    only applies to the per-call clients created here.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", *, http_client: httpx.Client | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = http_client

    def _request(self, method: str, path: str, *, timeout_s: float, **kwargs: Any) -> httpx.Response:
        if self._http is not None:
            # TestClient deprecates per-request `timeout`.
            return self._http.request(method, path, **kwargs)
        with httpx.Client(base_url=self.base_url, timeout=timeout_s) as client:
            return client.request(method, path, **kwargs)

    @staticmethod
    def _raise_for_status(res: httpx.Response, what: str) -> None:
        if res.status_code >= 400:
            raise RuntimeError(f"{what} failed: {res.status_code} {res.text}")

    def health(self, *, timeout_s: float = 0.2) -> bool:
        try:
            r = self._request("GET", "/healthz", timeout_s=timeout_s)
        except httpx.HTTPError:
            return False
        if r.status_code != 200:
            return False
        return bool(r.json().get("ok"))

    def reset(self, *, timeout_s: float = 10.0) -> None:
        res = self._request("POST", "/api/reset", timeout_s=timeout_s)
        self._raise_for_status(res, "Reset")

    def global_revision(self, *, timeout_s: float = 10.0) -> int:
        res = self._request("GET", "/api/events", timeout_s=timeout_s)
        self._raise_for_status(res, "Events request")
        return int(res.json()["globalRevision"])

    def connect(self, user_id: int, *, timeout_s: float = 10.0) -> Connected | None:
        res = self._request("POST", f"/api/connections/{int(user_id)}", timeout_s=timeout_s)
        if res.status_code == 409:
            return None
        self._raise_for_status(res, "Connect")
        return plan_from_dict(res.json())  # type: ignore[return-value]

    def disconnect(self, user_id: int, *, timeout_s: float = 10.0) -> Disconnected | None:
        res = self._request("DELETE", f"/api/connections/{int(user_id)}", timeout_s=timeout_s)
        if res.status_code == 404:
            return None
        self._raise_for_status(res, "Disconnect")
        return plan_from_dict(res.json())  # type: ignore[return-value]

    def send(self, command: Command, *, timeout_s: float = 10.0) -> Plan | None:
        """Submit a command. Rejections come back as `Failure` plans, not exceptions."""

        res = self._request("POST", "/api/commands", json=command_to_dict(command), timeout_s=timeout_s)
        if res.status_code == 404:
            return None
        self._raise_for_status(res, f"Command {command.kind!r}")
        return plan_from_dict(res.json())

    def users(self, *, timeout_s: float = 10.0) -> list[str]:
        res = self._request("GET", "/api/users", timeout_s=timeout_s)
        self._raise_for_status(res, "User listing")
        return [str(n) for n in res.json()]

    def user(self, nickname: str, *, timeout_s: float = 10.0) -> dict | None:
        res = self._request("GET", f"/api/users/{nickname}", timeout_s=timeout_s)
        if res.status_code == 404:
            return None
        self._raise_for_status(res, "User lookup")
        return res.json()

    def channels(self, *, timeout_s: float = 10.0) -> list[dict]:
        res = self._request("GET", "/api/channels", timeout_s=timeout_s)
        self._raise_for_status(res, "Channel listing")
        return list(res.json())

    def channel(self, name: str, *, timeout_s: float = 10.0) -> dict | None:
        res = self._request("GET", f"/api/channels/{name}", timeout_s=timeout_s)
        if res.status_code == 404:
            return None
        self._raise_for_status(res, "Channel lookup")
        return res.json()
