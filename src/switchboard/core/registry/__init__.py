from __future__ import annotations

from .service import InMemoryRegistry, REGISTRY
from .state import Channel, ChannelView, User, UserView

__all__ = ["InMemoryRegistry", "REGISTRY", "Channel", "ChannelView", "User", "UserView"]
