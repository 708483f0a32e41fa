from __future__ import annotations

import contextlib
import logging
import os
import socket
import threading
import time
from dataclasses import dataclass, field

import uvicorn

from ..core.commands import Command
from ..core.plans import Connected, Disconnected, Plan
from ..core.registry import REGISTRY
from ..sdk.client import SwitchboardClient
from .app import create_app

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwitchboardServer:
    host: str
    port: int
    url: str
    _uvicorn: uvicorn.Server | None = field(default=None, repr=False, compare=False)
    _thread: threading.Thread | None = field(default=None, repr=False, compare=False)

    def client(self) -> SwitchboardClient:
        return SwitchboardClient(self.url.rstrip("/"))

    # In-process calls go straight to the registry the server is serving.

    def connect(self, user_id: int) -> Connected | None:
        return REGISTRY.connect(user_id)

    def disconnect(self, user_id: int) -> Disconnected | None:
        return REGISTRY.disconnect(user_id)

    def send(self, command: Command) -> Plan | None:
        return REGISTRY.handle(command)

    def stop(self, *, timeout_s: float = 5.0) -> None:
        """Ask uvicorn to exit and wait (best-effort) for it to do so."""
        if self._uvicorn is None:
            return
        self._uvicorn.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=timeout_s)


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def _is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    """Best-effort check whether a switchboard server is reachable."""

    return SwitchboardClient(base_url).health(timeout_s=timeout_s)


def run(
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    log_level: str = "info",
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
    startup_timeout_s: float = 5.0,
) -> SwitchboardServer | SwitchboardClient:
    """Start switchboard with a single Python call, or attach to one that is already running.

    Behavior:
    - If SWITCHBOARD_URL is set, we *attach* to that server (client mode) unless
      `new_server=True`.
    - Otherwise, if `port != 0` and a server is already reachable at http://{host}:{port},
      we attach to it unless `new_server=True`.
    - Otherwise we start uvicorn in a daemon thread and return a `SwitchboardServer`.

    `port=0` means "pick a free port", so there's nothing to attach to.
    """

    env_url = _normalize_base_url(os.getenv("SWITCHBOARD_URL", ""))

    # 1) Try attaching to an explicitly provided server.
    if env_url and not new_server:
        if _is_server_alive(env_url, timeout_s=connect_timeout_s):
            logger.info("Attaching to switchboard at %s", env_url)
            return SwitchboardClient(env_url)
        logger.warning("SWITCHBOARD_URL=%s is not reachable; starting a new server", env_url)

    # 2) Try attaching to host/port if they are explicitly chosen.
    if port != 0 and not new_server:
        default_url = _normalize_base_url(f"http://{host}:{port}")
        if _is_server_alive(default_url, timeout_s=connect_timeout_s):
            logger.info("Attaching to switchboard at %s", default_url)
            return SwitchboardClient(default_url)

    # 3) Start a fresh server.
    if port == 0:
        port = _find_free_port(host)

    config = uvicorn.Config(create_app(), host=host, port=port, log_level=log_level, access_log=access_log)
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    # Wait for the socket to be bound so an immediate health check doesn't race startup.
    deadline = time.monotonic() + startup_timeout_s
    while not server.started and thread.is_alive() and time.monotonic() < deadline:
        time.sleep(0.01)
    if not server.started:
        raise RuntimeError(f"switchboard failed to start on {host}:{port}")

    url = f"http://{host}:{port}/"
    logger.info("switchboard listening on %s", url)
    return SwitchboardServer(host=host, port=port, url=url, _uvicorn=server, _thread=thread)
