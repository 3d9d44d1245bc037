"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from uuid import UUID, uuid4

import pytest

from src.wordle.lobby import LobbyRegistry
from src.wordle.session import SessionStore


class MockWordProvider:
    """Hands out a fixed word (or per-lobby words) and remembers which lobbies asked."""

    def __init__(self, word: str = "crane", per_lobby: dict[str, str] | None = None) -> None:
        self.word = word
        self.per_lobby = per_lobby or {}
        self.requested: list[str] = []

    def choose_word(self, lobby_id: str) -> str:
        self.requested.append(lobby_id)
        return self.per_lobby.get(lobby_id, self.word)


@pytest.fixture
def word_provider() -> MockWordProvider:
    return MockWordProvider()


@pytest.fixture
def sessions() -> SessionStore:
    return SessionStore()


@pytest.fixture
def registry(sessions: SessionStore) -> LobbyRegistry:
    """Registry sharing the `sessions` fixture, so tests can inspect both sides of membership."""
    return LobbyRegistry(sessions)


@pytest.fixture
def player_id(sessions: SessionStore) -> UUID:
    """A player that already has a session."""
    new_id = uuid4()
    sessions.init_player(new_id)
    return new_id
