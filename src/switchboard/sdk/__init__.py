from __future__ import annotations

from .client import SwitchboardClient

__all__ = ["SwitchboardClient"]
