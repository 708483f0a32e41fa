from __future__ import annotations

import pytest

from switchboard.core.names import default_nickname, is_valid_name
from switchboard.core.registry import InMemoryRegistry


@pytest.mark.parametrize("name", ["a", "Z", "0", "User0", "room42", "ABCxyz789"])
def test_letters_and_digits_are_valid(name: str) -> None:
    assert is_valid_name(name)


@pytest.mark.parametrize(
    "name",
    ["", " ", "room 1", "room-1", "room_1", "#room", "café", "名前", "tab\t", "line\n", None, 7],
)
def test_everything_else_is_invalid(name: object) -> None:
    assert not is_valid_name(name)


def test_registry_exposes_name_check() -> None:
    assert InMemoryRegistry.is_valid_name("room")
    assert not InMemoryRegistry().is_valid_name("no way")


def test_default_nickname_format() -> None:
    assert default_nickname(0) == "User0"
    assert default_nickname(12) == "User12"
