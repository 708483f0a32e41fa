from __future__ import annotations

import argparse
import logging

from .runtime.server import run
from .sdk.client import SwitchboardClient


def main() -> None:
    p = argparse.ArgumentParser(prog="switchboard", description="switchboard: chat membership and routing registry")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--log-level", default="info", choices=["critical", "error", "warning", "info", "debug"])
    p.add_argument("--access-log", action="store_true")
    args = p.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    srv = run(host=args.host, port=args.port, log_level=args.log_level, access_log=args.access_log)
    if isinstance(srv, SwitchboardClient):
        print(f"switchboard is already running at {srv.base_url}")
        return
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    import time

    while True:
        time.sleep(3600)


if __name__ == "__main__":
    main()
