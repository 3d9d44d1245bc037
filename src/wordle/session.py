"""Per-player session records, keyed by the opaque handle from the userid cookie."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Optional, Protocol
from uuid import UUID

from src.core.exceptions import UnknownPlayerError
from src.wordle.guess import WordGuess


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LobbyLookup(Protocol):
    """Anything that can tell whether a lobby id is still registered."""

    def does_lobby_exist(self, lobby_id: str) -> bool: ...


@dataclass
class PlayerSession:
    id: UUID
    name: str = ""
    is_owner: bool = False
    lobby_id: Optional[str] = None
    guesses: list[WordGuess] = field(default_factory=list)
    last_seen: datetime = field(default_factory=utc_now)

    def touch(self, now: Optional[datetime] = None) -> None:
        self.last_seen = now or utc_now()


class SessionStore:
    """In-memory store of PlayerSessions. Not thread-safe on its own: the GameService lock guards it."""

    def __init__(self) -> None:
        self._sessions: dict[UUID, PlayerSession] = {}

    def init_player(self, player_id: UUID) -> PlayerSession:
        """Insert a fresh session. Overwrites an existing one, so callers check is_valid first."""
        session = PlayerSession(id=player_id)
        self._sessions[player_id] = session
        return session

    def is_valid(self, player_id: UUID) -> bool:
        return player_id in self._sessions

    def get_player(self, player_id: UUID) -> PlayerSession:
        """Look up a session which the caller already validated. Raises UnknownPlayerError otherwise."""
        session = self._sessions.get(player_id)
        if session is None:
            raise UnknownPlayerError(f"Player with {player_id=} not found.")
        return session

    # Sessions are mutable objects, so both lookups hand out the same record.
    get_player_mut = get_player

    def has_lobby(self, player_id: UUID, lobbies: LobbyLookup) -> bool:
        """Player is affiliated with a lobby that still exists. Unknown players and stale references give False."""
        session = self._sessions.get(player_id)
        if session is None or session.lobby_id is None:
            return False
        return lobbies.does_lobby_exist(session.lobby_id)

    def remove_player(self, player_id: UUID) -> Optional[PlayerSession]:
        return self._sessions.pop(player_id, None)

    def players(self) -> Iterator[PlayerSession]:
        return iter(list(self._sessions.values()))

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
