from __future__ import annotations

from fastapi import FastAPI

from ..api import create_api_app
from ..core.registry import InMemoryRegistry


def create_app(registry: InMemoryRegistry | None = None) -> FastAPI:
    """Create the full app. Uses the process-wide `REGISTRY` unless one is passed."""

    return create_api_app(registry)


# Convenience for uvicorn: `uvicorn switchboard.runtime.app:app`
app = create_app()
