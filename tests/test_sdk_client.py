from __future__ import annotations

import warnings

import pytest

from switchboard.core.commands import CreateCommand, InviteCommand, JoinCommand, MessageCommand
from switchboard.core.errors import ServerError
from switchboard.core.plans import Connected, Disconnected, Failure, Names, Okay
from switchboard.core.registry import InMemoryRegistry
from switchboard.runtime.app import create_app
from switchboard.sdk.client import SwitchboardClient


@pytest.fixture
def sdk() -> tuple[SwitchboardClient, InMemoryRegistry]:
    testclient = pytest.importorskip("fastapi.testclient")
    reg = InMemoryRegistry()
    http = testclient.TestClient(create_app(reg))
    return SwitchboardClient("http://testserver", http_client=http), reg


def test_client_round_trips_plans(sdk: tuple[SwitchboardClient, InMemoryRegistry]) -> None:
    client, reg = sdk

    assert client.health()
    a = client.connect(1)
    assert isinstance(a, Connected)
    assert a.nickname == "User0"
    assert client.connect(1) is None
    client.connect(2)

    created = client.send(CreateCommand(sender_id=1, channel="vip", invite_only=True))
    assert isinstance(created, Okay)
    assert created.recipients == frozenset({"User0"})

    denied = client.send(JoinCommand(sender_id=2, channel="vip"))
    assert isinstance(denied, Failure)
    assert denied.error is ServerError.JOIN_PRIVATE_CHANNEL

    invited = client.send(InviteCommand(sender_id=1, target="User1", channel="vip"))
    assert isinstance(invited, Names)
    assert invited.owner == "User0"
    assert invited.recipients == frozenset({"User0", "User1"})

    msg = MessageCommand(sender_id=2, channel="vip", message="thanks")
    sent = client.send(msg)
    assert isinstance(sent, Okay)
    assert sent.command == msg

    assert client.send(JoinCommand(sender_id=99, channel="vip")) is None

    gone = client.disconnect(1)
    assert isinstance(gone, Disconnected)
    assert gone.recipients == frozenset({"User1"})
    assert client.disconnect(1) is None
    assert reg.channel_names() == set()


def test_client_views(sdk: tuple[SwitchboardClient, InMemoryRegistry]) -> None:
    client, _ = sdk
    client.connect(1)
    client.send(CreateCommand(sender_id=1, channel="room"))
    rev = client.global_revision()

    assert client.users() == ["User0"]
    assert client.user("User0") == {"id": 1, "nickname": "User0", "channels": ["room"], "owns": ["room"]}
    assert client.user("ghost") is None
    assert client.channels() == [{"name": "room", "owner": "User0", "inviteOnly": False, "memberCount": 1}]
    assert client.channel("room")["members"] == ["User0"]  # type: ignore[index]
    assert client.channel("nowhere") is None

    client.reset()
    assert client.users() == []
    assert client.global_revision() > rev


def test_injected_client_gets_no_per_request_timeout(sdk: tuple[SwitchboardClient, InMemoryRegistry]) -> None:
    client, _ = sdk
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        assert client.health(timeout_s=0.5)
        client.connect(1)
        client.channels(timeout_s=1.0)

    assert not [w for w in caught if "timeout" in str(w.message).lower()]


def test_health_is_false_when_nothing_listens() -> None:
    # Port 9 (discard) is essentially never served over HTTP locally.
    assert SwitchboardClient("http://127.0.0.1:9").health(timeout_s=0.2) is False
