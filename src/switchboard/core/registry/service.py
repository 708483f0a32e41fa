from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import replace

from .. import plans
from ..commands import (
    Command,
    CreateCommand,
    InviteCommand,
    JoinCommand,
    KickCommand,
    LeaveCommand,
    MessageCommand,
    NicknameCommand,
)
from ..errors import ServerError
from ..names import default_nickname, is_valid_name
from ..plans import Plan
from .state import Channel, ChannelView, User, UserView

logger = logging.getLogger(__name__)


class InMemoryRegistry:
    """Users, channels and memberships for a single chat server process.

    Every public method holds `_lock` for its whole validate/mutate/return sequence, so
    concurrent callers observe each operation as atomic. Nothing here performs I/O:
    operations return a `Plan` describing who must be told what, or `None` when the call
    is a no-op (duplicate connect, unknown sender).
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[int, User] = {}
        self._ids_by_nickname: dict[str, int] = {}
        self._channels: dict[str, Channel] = {}
        self._global_revision = 0
        # Keyed by `Command.kind`, so subclasses route like their parent command.
        self._handlers: dict[str, Callable[..., Plan | None]] = {
            NicknameCommand.kind: self.rename,
            CreateCommand.kind: self.create_channel,
            JoinCommand.kind: self.join,
            LeaveCommand.kind: self.leave,
            MessageCommand.kind: self.send_message,
            InviteCommand.kind: self.invite,
            KickCommand.kind: self.kick,
        }

    is_valid_name = staticmethod(is_valid_name)

    def global_revision(self) -> int:
        with self._lock:
            return self._global_revision

    def reset(self) -> None:
        with self._lock:
            self._users.clear()
            self._ids_by_nickname.clear()
            self._channels.clear()
            self._global_revision += 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def user_id_for(self, nickname: str) -> int | None:
        with self._lock:
            return self._ids_by_nickname.get(nickname)

    def nickname_for(self, user_id: int) -> str | None:
        with self._lock:
            user = self._users.get(user_id)
            return user.nickname if user is not None else None

    def registered_users(self) -> set[str]:
        with self._lock:
            return {u.nickname for u in self._users.values()}

    def channel_names(self) -> set[str]:
        with self._lock:
            return set(self._channels)

    def members_of(self, channel: str) -> set[str]:
        with self._lock:
            ch = self._channels.get(channel)
            if ch is None:
                return set()
            return self._members_locked(ch)

    def owner_of(self, channel: str) -> str | None:
        with self._lock:
            ch = self._channels.get(channel)
            if ch is None:
                return None
            return self._owner_nickname_locked(ch)

    def is_invite_only(self, channel: str) -> bool | None:
        with self._lock:
            ch = self._channels.get(channel)
            return ch.invite_only if ch is not None else None

    def channels_of(self, user_id: int) -> set[str]:
        with self._lock:
            return {name for name, ch in self._channels.items() if user_id in ch.member_ids}

    def channels_owned_by(self, user_id: int) -> set[str]:
        with self._lock:
            return {name for name, ch in self._channels.items() if ch.owner_id == user_id}

    def channel_view(self, channel: str) -> ChannelView | None:
        with self._lock:
            ch = self._channels.get(channel)
            if ch is None:
                return None
            return self._channel_view_locked(ch)

    def channel_views(self) -> list[ChannelView]:
        """Every channel, sorted by name, read in one pass."""
        with self._lock:
            return [self._channel_view_locked(self._channels[name]) for name in sorted(self._channels)]

    def user_view(self, nickname: str) -> UserView | None:
        with self._lock:
            uid = self._ids_by_nickname.get(nickname)
            if uid is None:
                return None
            return UserView(
                user_id=uid,
                nickname=nickname,
                channels=frozenset(name for name, ch in self._channels.items() if uid in ch.member_ids),
                owns=frozenset(name for name, ch in self._channels.items() if ch.owner_id == uid),
            )

    def _channel_view_locked(self, ch: Channel) -> ChannelView:
        return ChannelView(
            name=ch.name,
            owner=self._owner_nickname_locked(ch),
            invite_only=ch.invite_only,
            members=frozenset(self._members_locked(ch)),
        )

    def _members_locked(self, ch: Channel) -> set[str]:
        return {self._users[uid].nickname for uid in ch.member_ids}

    def _owner_nickname_locked(self, ch: Channel) -> str:
        # Channels are deleted when their owner disconnects, so the owner is always registered.
        return self._users[ch.owner_id].nickname

    def _unique_nickname_locked(self) -> str:
        suffix = 0
        while default_nickname(suffix) in self._ids_by_nickname:
            suffix += 1
        return default_nickname(suffix)

    @staticmethod
    def _reject(command: Command, reason: ServerError) -> plans.Failure:
        logger.debug("Rejected %s from user %d: %s", command.kind, command.sender_id, reason.value)
        return plans.error(command, reason)

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self, user_id: int) -> plans.Connected | None:
        uid = int(user_id)
        with self._lock:
            if uid in self._users:
                logger.warning("Ignoring duplicate connect for user %d", uid)
                return None
            nickname = self._unique_nickname_locked()
            self._users[uid] = User(user_id=uid, nickname=nickname)
            self._ids_by_nickname[nickname] = uid
            self._global_revision += 1

        logger.info("User %d connected as %s", uid, nickname)
        return plans.connected(nickname)

    def disconnect(self, user_id: int) -> plans.Disconnected | None:
        uid = int(user_id)
        with self._lock:
            user = self._users.get(uid)
            if user is None:
                return None

            # Membership is dropped before each roster is read, so the departing user is
            # never among the recipients.
            recipients: set[str] = set()
            for ch in self._channels.values():
                if uid in ch.member_ids:
                    ch.member_ids.discard(uid)
                    recipients |= self._members_locked(ch)

            owned = [name for name, ch in self._channels.items() if ch.owner_id == uid]
            for name in owned:
                del self._channels[name]

            del self._ids_by_nickname[user.nickname]
            del self._users[uid]
            self._global_revision += 1

        if owned:
            logger.info("Deleted channels owned by %s: %s", user.nickname, ", ".join(sorted(owned)))
        logger.info("User %d (%s) disconnected", uid, user.nickname)
        return plans.disconnected(user.nickname, recipients)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def rename(self, command: NicknameCommand) -> Plan | None:
        with self._lock:
            user = self._users.get(command.sender_id)
            if user is None:
                return None

            new_nickname = command.new_nickname
            if not is_valid_name(new_nickname):
                return self._reject(command, ServerError.INVALID_NAME)
            if new_nickname in self._ids_by_nickname:
                return self._reject(command, ServerError.NAME_ALREADY_IN_USE)

            # Recipients use the pre-rename nicknames. A sender in no channel notifies nobody.
            recipients: set[str] = set()
            for ch in self._channels.values():
                if user.user_id in ch.member_ids:
                    recipients |= self._members_locked(ch)

            del self._ids_by_nickname[user.nickname]
            self._ids_by_nickname[new_nickname] = user.user_id
            self._users[user.user_id] = replace(user, nickname=new_nickname)
            self._global_revision += 1

        logger.info("User %d renamed %s -> %s", user.user_id, user.nickname, new_nickname)
        return plans.okay(command, recipients)

    # ------------------------------------------------------------------
    # Channels and membership
    # ------------------------------------------------------------------

    def create_channel(self, command: CreateCommand) -> Plan | None:
        with self._lock:
            owner = self._users.get(command.sender_id)
            if owner is None:
                return None

            name = command.channel
            if not is_valid_name(name):
                return self._reject(command, ServerError.INVALID_NAME)
            if name in self._channels:
                return self._reject(command, ServerError.CHANNEL_ALREADY_EXISTS)

            self._channels[name] = Channel(
                name=name,
                owner_id=owner.user_id,
                invite_only=bool(command.invite_only),
                member_ids={owner.user_id},
            )
            self._global_revision += 1

        logger.info(
            "%s created %s channel %s",
            owner.nickname,
            "invite-only" if command.invite_only else "public",
            name,
        )
        return plans.okay(command, {owner.nickname})

    def join(self, command: JoinCommand) -> Plan | None:
        with self._lock:
            user = self._users.get(command.sender_id)
            if user is None:
                return None

            ch = self._channels.get(command.channel)
            if ch is not None:
                if ch.invite_only:
                    return self._reject(command, ServerError.JOIN_PRIVATE_CHANNEL)
                if user.user_id not in ch.member_ids:
                    ch.member_ids.add(user.user_id)
                    self._global_revision += 1
                    return plans.names(command, self._members_locked(ch), self._owner_nickname_locked(ch))

            # A sender who is already a member also lands here.
            return self._reject(command, ServerError.NO_SUCH_CHANNEL)

    def leave(self, command: LeaveCommand) -> Plan | None:
        with self._lock:
            user = self._users.get(command.sender_id)
            if user is None:
                return None

            ch = self._channels.get(command.channel)
            if ch is None:
                return self._reject(command, ServerError.NO_SUCH_CHANNEL)
            if user.user_id not in ch.member_ids:
                return self._reject(command, ServerError.USER_NOT_IN_CHANNEL)

            recipients = self._members_locked(ch)
            ch.member_ids.discard(user.user_id)
            self._global_revision += 1
            return plans.okay(command, recipients)

    def send_message(self, command: MessageCommand) -> Plan | None:
        with self._lock:
            user = self._users.get(command.sender_id)
            if user is None:
                return None

            ch = self._channels.get(command.channel)
            if ch is None:
                return self._reject(command, ServerError.NO_SUCH_CHANNEL)
            if user.user_id not in ch.member_ids:
                return self._reject(command, ServerError.USER_NOT_IN_CHANNEL)

            return plans.okay(command, self._members_locked(ch))

    # ------------------------------------------------------------------
    # Privacy administration
    # ------------------------------------------------------------------

    def invite(self, command: InviteCommand) -> Plan | None:
        with self._lock:
            sender = self._users.get(command.sender_id)
            if sender is None:
                return None

            target_id = self._ids_by_nickname.get(command.target)
            if target_id is None:
                return self._reject(command, ServerError.NO_SUCH_USER)
            ch = self._channels.get(command.channel)
            if ch is None:
                return self._reject(command, ServerError.NO_SUCH_CHANNEL)
            if not ch.invite_only:
                return self._reject(command, ServerError.INVITE_TO_PUBLIC_CHANNEL)
            if ch.owner_id != sender.user_id:
                return self._reject(command, ServerError.USER_NOT_OWNER)

            if target_id not in ch.member_ids:
                ch.member_ids.add(target_id)
                self._global_revision += 1
            return plans.names(command, self._members_locked(ch), sender.nickname)

    def kick(self, command: KickCommand) -> Plan | None:
        with self._lock:
            sender = self._users.get(command.sender_id)
            if sender is None:
                return None

            target_id = self._ids_by_nickname.get(command.target)
            if target_id is None:
                return self._reject(command, ServerError.NO_SUCH_USER)
            ch = self._channels.get(command.channel)
            if ch is None:
                return self._reject(command, ServerError.NO_SUCH_CHANNEL)
            if target_id not in ch.member_ids:
                return self._reject(command, ServerError.USER_NOT_IN_CHANNEL)
            if ch.owner_id != sender.user_id:
                return self._reject(command, ServerError.USER_NOT_OWNER)

            recipients = self._members_locked(ch)
            ch.member_ids.discard(target_id)
            self._global_revision += 1

        logger.info("%s kicked %s from %s", sender.nickname, command.target, command.channel)
        return plans.okay(command, recipients)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(self, command: Command) -> Plan | None:
        """Route a command to the matching operation."""

        handler = self._handlers.get(getattr(command, "kind", None))
        if handler is None:
            raise TypeError(f"Unsupported command type: {type(command).__name__}")
        return handler(command)


REGISTRY = InMemoryRegistry()
