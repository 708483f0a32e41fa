from __future__ import annotations

from switchboard.core.commands import CreateCommand, JoinCommand, NicknameCommand
from switchboard.core.errors import ServerError
from switchboard.core.plans import Failure, Okay
from switchboard.core.registry import InMemoryRegistry


def _two_users() -> InMemoryRegistry:
    reg = InMemoryRegistry()
    reg.connect(1)
    reg.connect(2)
    return reg


def test_rename_updates_both_indices() -> None:
    reg = _two_users()
    cmd = NicknameCommand(sender_id=1, new_nickname="alice")

    p = reg.rename(cmd)

    assert isinstance(p, Okay)
    assert p.command == cmd
    assert reg.nickname_for(1) == "alice"
    assert reg.user_id_for("alice") == 1
    assert reg.user_id_for("User0") is None
    assert reg.registered_users() == {"alice", "User1"}


def test_rename_with_no_channels_notifies_nobody() -> None:
    reg = _two_users()

    p = reg.rename(NicknameCommand(sender_id=1, new_nickname="alice"))

    assert isinstance(p, Okay)
    assert p.recipients == frozenset()


def test_rename_notifies_union_of_channel_members_with_old_nicknames() -> None:
    reg = _two_users()
    reg.connect(3)
    reg.connect(4)
    reg.create_channel(CreateCommand(sender_id=1, channel="a"))
    reg.create_channel(CreateCommand(sender_id=3, channel="b"))
    reg.join(JoinCommand(sender_id=2, channel="a"))
    reg.join(JoinCommand(sender_id=1, channel="b"))

    p = reg.rename(NicknameCommand(sender_id=1, new_nickname="alice"))

    assert isinstance(p, Okay)
    assert p.recipients == frozenset({"User0", "User1", "User2"})
    assert reg.members_of("a") == {"alice", "User1"}
    assert reg.owner_of("a") == "alice"


def test_rename_to_taken_nickname_changes_nothing() -> None:
    reg = _two_users()

    p = reg.rename(NicknameCommand(sender_id=1, new_nickname="User1"))

    assert isinstance(p, Failure)
    assert p.error is ServerError.NAME_ALREADY_IN_USE
    assert p.recipients == frozenset()
    assert reg.nickname_for(1) == "User0"
    assert reg.nickname_for(2) == "User1"


def test_rename_to_own_nickname_is_rejected() -> None:
    reg = _two_users()

    p = reg.rename(NicknameCommand(sender_id=1, new_nickname="User0"))

    assert isinstance(p, Failure)
    assert p.error is ServerError.NAME_ALREADY_IN_USE


def test_rename_to_invalid_nickname() -> None:
    reg = _two_users()
    rev = reg.global_revision()

    for bad in ("", "al ice", "al!ce"):
        p = reg.rename(NicknameCommand(sender_id=1, new_nickname=bad))
        assert isinstance(p, Failure)
        assert p.error is ServerError.INVALID_NAME

    assert reg.nickname_for(1) == "User0"
    assert reg.global_revision() == rev


def test_invalid_name_is_checked_before_collision() -> None:
    reg = _two_users()
    p = reg.rename(NicknameCommand(sender_id=1, new_nickname=""))
    assert isinstance(p, Failure)
    assert p.error is ServerError.INVALID_NAME


def test_rename_from_unknown_sender_is_a_noop() -> None:
    reg = _two_users()
    assert reg.rename(NicknameCommand(sender_id=42, new_nickname="ghost")) is None
    assert reg.user_id_for("ghost") is None


def test_freed_nickname_can_be_taken_again() -> None:
    reg = _two_users()
    reg.rename(NicknameCommand(sender_id=1, new_nickname="alice"))

    p = reg.rename(NicknameCommand(sender_id=2, new_nickname="User0"))

    assert isinstance(p, Okay)
    assert reg.user_id_for("User0") == 2
