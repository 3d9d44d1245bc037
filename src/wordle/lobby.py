"""
Lobby registry.

The registry owns lobby membership in both directions: a lobby's member list and each member session's lobby_id
are only ever changed together, here.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from src.core.exceptions import UnknownLobbyError
from src.core.shared_types import LobbyStatus
from src.wordle.session import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class Lobby:
    id: str
    secret_word: str
    status: LobbyStatus = LobbyStatus.WAITING_FOR_PLAYERS
    members: list[UUID] = field(default_factory=list)
    # Distinguishes this game from earlier lobbies that used the same id.
    game_id: UUID = field(default_factory=uuid4)

    @property
    def started(self) -> bool:
        return self.status != LobbyStatus.WAITING_FOR_PLAYERS

    @property
    def ended(self) -> bool:
        return self.status == LobbyStatus.ENDED

    def start(self) -> None:
        if self.status == LobbyStatus.WAITING_FOR_PLAYERS:
            self.status = LobbyStatus.IN_PROGRESS


class LobbyRegistry:
    """Active lobbies by id, plus the membership bookkeeping on the matching sessions."""

    def __init__(self, sessions: SessionStore, allow_late_join: bool = False) -> None:
        self.sessions = sessions
        self.allow_late_join = allow_late_join
        self._lobbies: dict[str, Lobby] = {}

    def create_lobby(self, lobby_id: str, secret_word: str) -> Lobby:
        """Install a new lobby. An existing lobby with the same id is replaced and its members detached."""
        if lobby_id in self._lobbies:
            logger.warning("Lobby %r already exists, replacing it.", lobby_id)
            self._detach_all(self._lobbies[lobby_id])
        lobby = Lobby(id=lobby_id, secret_word=secret_word)
        self._lobbies[lobby_id] = lobby
        return lobby

    def does_lobby_exist(self, lobby_id: str) -> bool:
        return lobby_id in self._lobbies

    def get_lobby(self, lobby_id: str) -> Lobby:
        lobby = self._lobbies.get(lobby_id)
        if lobby is None:
            raise UnknownLobbyError(f"Lobby with {lobby_id=} not found.")
        return lobby

    def lobby_of(self, player_id: UUID) -> Optional[Lobby]:
        """The lobby a known player is currently in, if any."""
        if not self.sessions.is_valid(player_id):
            return None
        lobby_id = self.sessions.get_player(player_id).lobby_id
        return self._lobbies.get(lobby_id) if lobby_id is not None else None

    def join_lobby(self, player_id: UUID, lobby_id: str) -> bool:
        """
        Attach a player to a lobby.

        Fails (returns False, nothing changed) for an unknown player or lobby, or a lobby that already started
        unless late joins are allowed. A player in another lobby is moved over.
        """
        if not self.sessions.is_valid(player_id) or lobby_id not in self._lobbies:
            return False

        lobby = self._lobbies[lobby_id]
        session = self.sessions.get_player_mut(player_id)
        if session.lobby_id == lobby_id and player_id in lobby.members:
            return True
        if lobby.started and not self.allow_late_join:
            logger.info(
                "Player %s cannot join lobby %r: status is %s.",
                player_id,
                lobby_id,
                lobby.status,
            )
            return False

        self.leave_lobby(player_id)
        lobby.members.append(player_id)
        session.lobby_id = lobby_id
        return True

    def leave_lobby(self, player_id: UUID) -> Optional[str]:
        """
        Detach a player from its lobby (if any). Returns the id of the lobby that was left.

        A game in progress that loses its last member can no longer be joined or won, so it is dropped.
        """
        session = self.sessions.get_player_mut(player_id)
        lobby_id = session.lobby_id
        if lobby_id is None:
            return None
        lobby = self._lobbies.get(lobby_id)
        session.lobby_id = None
        session.is_owner = False
        if lobby is None:
            return lobby_id
        if player_id in lobby.members:
            lobby.members.remove(player_id)
        if lobby.status == LobbyStatus.IN_PROGRESS and not lobby.members:
            lobby.status = LobbyStatus.ENDED
            del self._lobbies[lobby_id]
            logger.info("Lobby %r abandoned by its last player, removed.", lobby_id)
        return lobby_id

    def end_game(self, lobby_id: str) -> Lobby:
        """Mark the lobby ended, detach every member and drop the lobby from the registry."""
        lobby = self.get_lobby(lobby_id)
        lobby.status = LobbyStatus.ENDED
        self._detach_all(lobby)
        del self._lobbies[lobby_id]
        return lobby

    def _detach_all(self, lobby: Lobby) -> None:
        for player_id in lobby.members:
            if not self.sessions.is_valid(player_id):
                continue
            session = self.sessions.get_player_mut(player_id)
            if session.lobby_id == lobby.id:
                session.lobby_id = None
                session.is_owner = False
        lobby.members.clear()

    def __len__(self) -> int:
        return len(self._lobbies)
