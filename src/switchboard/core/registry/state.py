from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class User:
    user_id: int
    nickname: str


@dataclass
class Channel:
    """A named channel.

    Notes:
    - Ownership is recorded by user id, so renaming the owner never touches this record.
    - `owner_id` need not be in `member_ids` (an owner can be kicked from their own channel).
    """

    name: str
    owner_id: int
    invite_only: bool = False
    member_ids: set[int] = field(default_factory=set)


@dataclass(frozen=True)
class ChannelView:
    """Consistent read of one channel, taken under a single lock acquisition."""

    name: str
    owner: str
    invite_only: bool
    members: frozenset[str]


@dataclass(frozen=True)
class UserView:
    user_id: int
    nickname: str
    channels: frozenset[str]
    owns: frozenset[str]
