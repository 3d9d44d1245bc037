"""Orchestration of communication from API router to the session/lobby state (and the reverse direction)."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from src.api.models import (
    CreateLobbyRequest,
    GuessResponse,
    JoinLobbyRequest,
    LobbyResponse,
    PlayerResponse,
    SetNameRequest,
    SubmitGuessRequest,
    SubmitResponse,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import LetterPolicy, WinRule
from src.wordle.guess import WordGuess
from src.wordle.lobby import Lobby, LobbyRegistry
from src.wordle.session import PlayerSession, SessionStore, utc_now
from src.wordle.win import has_won
from src.wordle.words import WordProvider

logger = logging.getLogger(__name__)


class GameService:
    """
    Owns the session store and lobby registry for the lifetime of the process.

    Every public method runs under one lock covering sessions and lobbies together, so actions never interleave.
    """

    def __init__(
        self,
        word_provider: WordProvider,
        letter_policy: LetterPolicy = LetterPolicy.CHARACTER_SET,
        win_rule: WinRule = WinRule.LATEST_GUESS,
        allow_late_join: bool = False,
        session_ttl: Optional[timedelta] = None,
    ) -> None:
        self.word_provider = word_provider
        self.letter_policy = letter_policy
        self.win_rule = win_rule
        self.session_ttl = session_ttl
        self.sessions = SessionStore()
        self.lobbies = LobbyRegistry(self.sessions, allow_late_join=allow_late_join)
        self._lock = threading.Lock()

    # -- API routes logic ---
    def init_player(self, player_id: Optional[UUID] = None) -> tuple[UUID, bool]:
        """
        Return the handle to use for this client, and whether it was newly created.

        A known handle is kept as is. Anything else (no handle, or one this process never issued) gets a fresh one.
        """
        with self._lock:
            if player_id is not None and self.sessions.is_valid(player_id):
                self.sessions.get_player_mut(player_id).touch()
                return player_id, False
            new_id = uuid4()
            self.sessions.init_player(new_id)
            logger.info("Initialised player %s", new_id)
            return new_id, True

    def is_valid_player(self, player_id: UUID) -> bool:
        with self._lock:
            return self.sessions.is_valid(player_id)

    def create_lobby(self, request: CreateLobbyRequest) -> LobbyResponse:
        """Create (or replace) a lobby. A known requesting player becomes its owner and joins it."""
        # Picking the word may touch the file system or a remote source, so it happens before taking the lock.
        secret_word = self.word_provider.choose_word(request.lobby_id)
        with self._lock:
            lobby = self.lobbies.create_lobby(request.lobby_id, secret_word)
            logger.info("Created lobby %r", lobby.id)
            if request.owner_id is not None and self.sessions.is_valid(
                request.owner_id
            ):
                owner = self.sessions.get_player_mut(request.owner_id)
                owner.touch()
                # joining detaches the player from any earlier lobby, which resets is_owner
                self.lobbies.join_lobby(owner.id, lobby.id)
                owner.is_owner = True
            return self._create_lobby_response(lobby)

    def join_lobby(self, request: JoinLobbyRequest) -> bool:
        """Attach a player to a lobby. False if the player or lobby is unknown, or the lobby no longer accepts players."""
        with self._lock:
            joined = self.lobbies.join_lobby(request.player_id, request.lobby_id)
            if joined:
                self.sessions.get_player_mut(request.player_id).touch()
                logger.info(
                    "Player %s joined lobby %r", request.player_id, request.lobby_id
                )
            else:
                logger.info(
                    "Player %s could not join lobby %r",
                    request.player_id,
                    request.lobby_id,
                )
            return joined

    def set_name(self, request: SetNameRequest) -> bool:
        with self._lock:
            if not self.sessions.is_valid(request.player_id):
                return False
            player = self.sessions.get_player_mut(request.player_id)
            player.name = request.name
            player.touch()
            return True

    def submit_move(self, request: SubmitGuessRequest) -> SubmitResponse:
        """
        Evaluate a guess for a player in a lobby and check the lobby for a winner.

        Raises InvalidRequestError when the player has no (existing) lobby, and GuessLengthError when the guess
        does not match the secret word's length. Nothing is recorded in either case.
        """
        with self._lock:
            if not self.sessions.has_lobby(request.player_id, self.lobbies):
                raise InvalidRequestError(
                    f"Player {request.player_id} is not in an active lobby."
                )
            player = self.sessions.get_player_mut(request.player_id)
            player.touch()
            lobby = self.lobbies.get_lobby(player.lobby_id)

            word_guess = WordGuess.evaluated(
                lobby.secret_word,
                request.guess,
                self.letter_policy,
                game_id=lobby.game_id,
            )
            player.guesses.append(word_guess)
            lobby.start()
            logger.debug("Player %s in lobby %r: %s", player.id, lobby.id, word_guess)

            winner = self._find_winner(lobby)
            if winner is None:
                return SubmitResponse(guess=self._create_guess_response(word_guess))

            self.lobbies.end_game(lobby.id)
            logger.info(
                "Player %s (%r) won lobby %r, game ended.",
                winner.id,
                winner.name,
                lobby.id,
            )
            return SubmitResponse(
                win=winner.name, guess=self._create_guess_response(word_guess)
            )

    def end_game(self, lobby_id: str) -> None:
        """Tear down a lobby, detaching all of its players."""
        with self._lock:
            self.lobbies.end_game(lobby_id)
            logger.info("Ended lobby %r", lobby_id)

    def get_player(self, player_id: UUID) -> PlayerResponse:
        with self._lock:
            return self._create_player_response(self.sessions.get_player(player_id))

    def get_lobby(self, lobby_id: str) -> LobbyResponse:
        with self._lock:
            return self._create_lobby_response(self.lobbies.get_lobby(lobby_id))

    def expire_sessions(self, now: Optional[datetime] = None) -> list[UUID]:
        """Drop sessions idle for longer than the session TTL. No-op without a TTL."""
        if self.session_ttl is None:
            return []
        cutoff = (now or utc_now()) - self.session_ttl
        with self._lock:
            expired = [
                player.id
                for player in self.sessions.players()
                if player.last_seen < cutoff
            ]
            for player_id in expired:
                self.lobbies.leave_lobby(player_id)
                self.sessions.remove_player(player_id)
        if expired:
            logger.info("Expired %d idle session(s)", len(expired))
        return expired

    # -- Internal helpers --
    def _find_winner(self, lobby: Lobby) -> Optional[PlayerSession]:
        """First member, in join order, whose guesses in this game satisfy the win rule."""
        for player_id in lobby.members:
            member = self.sessions.get_player(player_id)
            if has_won(member, self.win_rule, game_id=lobby.game_id):
                return member
        return None

    def _create_guess_response(self, guess: WordGuess) -> GuessResponse:
        return GuessResponse(
            word=guess.word, colors=list(guess.char_states), codes=guess.codes
        )

    def _create_player_response(self, player: PlayerSession) -> PlayerResponse:
        return PlayerResponse(
            player_id=player.id,
            name=player.name,
            is_owner=player.is_owner,
            lobby_id=player.lobby_id,
            guesses=[self._create_guess_response(guess) for guess in player.guesses],
        )

    def _create_lobby_response(self, lobby: Lobby) -> LobbyResponse:
        """Lobby view for clients. Never includes the secret word."""
        return LobbyResponse(
            lobby_id=lobby.id,
            status=lobby.status,
            word_length=len(lobby.secret_word),
            members=list(lobby.members),
        )
