"""Unit tests for src/wordle/lobby.py"""

from uuid import UUID, uuid4

import pytest

from src.core.exceptions import UnknownLobbyError
from src.core.shared_types import LobbyStatus
from src.wordle.lobby import Lobby, LobbyRegistry
from src.wordle.session import SessionStore


def _new_player(sessions: SessionStore) -> UUID:
    new_id = uuid4()
    sessions.init_player(new_id)
    return new_id


# -- create / lookup --
def test_create_lobby(registry: LobbyRegistry) -> None:
    lobby = registry.create_lobby("L1", "crane")
    assert isinstance(lobby, Lobby)
    assert registry.does_lobby_exist("L1")
    assert registry.get_lobby("L1").secret_word == "crane"
    assert lobby.status == LobbyStatus.WAITING_FOR_PLAYERS
    assert not lobby.started
    assert not lobby.ended
    assert lobby.members == []


def test_unknown_lobby(registry: LobbyRegistry) -> None:
    assert not registry.does_lobby_exist("nope")
    with pytest.raises(UnknownLobbyError):
        registry.get_lobby("nope")


def test_create_lobby_overwrites_and_detaches_members(
    sessions: SessionStore, registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.join_lobby(player_id, "L1")

    replacement = registry.create_lobby("L1", "robot")
    assert registry.get_lobby("L1") is replacement
    assert replacement.secret_word == "robot"
    assert replacement.members == []
    assert sessions.get_player(player_id).lobby_id is None


def test_lobby_status_flags() -> None:
    lobby = Lobby(id="L1", secret_word="crane")
    lobby.start()
    assert lobby.status == LobbyStatus.IN_PROGRESS
    assert lobby.started and not lobby.ended
    lobby.status = LobbyStatus.ENDED
    lobby.start()
    assert lobby.status == LobbyStatus.ENDED
    assert lobby.started and lobby.ended


# -- join --
def test_join_updates_both_sides(
    sessions: SessionStore, registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    assert registry.join_lobby(player_id, "L1")
    assert sessions.get_player(player_id).lobby_id == "L1"
    assert registry.get_lobby("L1").members == [player_id]
    assert registry.lobby_of(player_id) is registry.get_lobby("L1")


def test_join_unknown_lobby_leaves_player_unchanged(
    sessions: SessionStore, registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.join_lobby(player_id, "L1")

    assert not registry.join_lobby(player_id, "nope")
    assert sessions.get_player(player_id).lobby_id == "L1"
    assert registry.get_lobby("L1").members == [player_id]


def test_join_unknown_player(registry: LobbyRegistry) -> None:
    registry.create_lobby("L1", "crane")
    assert not registry.join_lobby(uuid4(), "L1")
    assert registry.get_lobby("L1").members == []


def test_rejoin_same_lobby_is_noop(
    registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    assert registry.join_lobby(player_id, "L1")
    assert registry.join_lobby(player_id, "L1")
    assert registry.get_lobby("L1").members == [player_id]


def test_join_other_lobby_moves_player(
    sessions: SessionStore, registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.create_lobby("L2", "robot")
    registry.join_lobby(player_id, "L1")

    assert registry.join_lobby(player_id, "L2")
    assert sessions.get_player(player_id).lobby_id == "L2"
    assert registry.get_lobby("L1").members == []
    assert registry.get_lobby("L2").members == [player_id]


def test_members_keep_join_order(
    sessions: SessionStore, registry: LobbyRegistry
) -> None:
    registry.create_lobby("L1", "crane")
    players = [_new_player(sessions) for _ in range(3)]
    for p in players:
        registry.join_lobby(p, "L1")
    assert registry.get_lobby("L1").members == players


def test_join_started_lobby_rejected(
    sessions: SessionStore, registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane").start()
    assert not registry.join_lobby(player_id, "L1")
    assert sessions.get_player(player_id).lobby_id is None
    assert registry.get_lobby("L1").members == []


def test_join_started_lobby_with_late_join(sessions: SessionStore) -> None:
    registry = LobbyRegistry(sessions, allow_late_join=True)
    late = _new_player(sessions)
    registry.create_lobby("L1", "crane").start()
    assert registry.join_lobby(late, "L1")
    assert registry.get_lobby("L1").members == [late]


def test_member_of_started_lobby_can_rejoin_it(
    registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.join_lobby(player_id, "L1")
    registry.get_lobby("L1").start()
    assert registry.join_lobby(player_id, "L1")


# -- leave / end --
def test_leave_lobby(
    sessions: SessionStore, registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.join_lobby(player_id, "L1")
    assert registry.leave_lobby(player_id) == "L1"
    assert sessions.get_player(player_id).lobby_id is None
    assert registry.get_lobby("L1").members == []
    assert registry.leave_lobby(player_id) is None


def test_end_game_clears_every_member(
    sessions: SessionStore, registry: LobbyRegistry
) -> None:
    registry.create_lobby("L1", "crane")
    registry.create_lobby("L2", "robot")
    in_l1 = [_new_player(sessions) for _ in range(3)]
    in_l2 = _new_player(sessions)
    for p in in_l1:
        registry.join_lobby(p, "L1")
    registry.join_lobby(in_l2, "L2")

    ended = registry.end_game("L1")
    assert ended.status == LobbyStatus.ENDED
    assert not registry.does_lobby_exist("L1")
    for p in in_l1:
        assert sessions.get_player(p).lobby_id is None
        assert not sessions.has_lobby(p, registry)
    assert sessions.get_player(in_l2).lobby_id == "L2"
    assert len(registry) == 1


def test_end_unknown_game(registry: LobbyRegistry) -> None:
    with pytest.raises(UnknownLobbyError):
        registry.end_game("nope")


def test_recreated_lobby_is_a_new_game(registry: LobbyRegistry) -> None:
    first = registry.create_lobby("L1", "crane")
    second = registry.create_lobby("L1", "crane")
    assert first.game_id != second.game_id


# -- abandoned lobbies --
def test_game_in_progress_dropped_when_last_member_leaves(
    registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.create_lobby("L2", "robot")
    registry.join_lobby(player_id, "L1")
    lobby = registry.get_lobby("L1")
    lobby.start()

    assert registry.join_lobby(player_id, "L2")
    assert not registry.does_lobby_exist("L1")
    assert lobby.status == LobbyStatus.ENDED


def test_game_in_progress_kept_while_members_remain(
    sessions: SessionStore, registry: LobbyRegistry
) -> None:
    leaving, staying = _new_player(sessions), _new_player(sessions)
    registry.create_lobby("L1", "crane")
    registry.join_lobby(leaving, "L1")
    registry.join_lobby(staying, "L1")
    registry.get_lobby("L1").start()

    registry.leave_lobby(leaving)
    assert registry.get_lobby("L1").members == [staying]


def test_waiting_lobby_kept_when_empty(
    registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.join_lobby(player_id, "L1")
    registry.leave_lobby(player_id)
    assert registry.does_lobby_exist("L1")
    assert registry.get_lobby("L1").status == LobbyStatus.WAITING_FOR_PLAYERS


# -- ownership --
def test_leaving_clears_ownership(
    sessions: SessionStore, registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.create_lobby("L2", "robot")
    registry.join_lobby(player_id, "L1")
    sessions.get_player_mut(player_id).is_owner = True

    registry.join_lobby(player_id, "L2")
    assert not sessions.get_player(player_id).is_owner


def test_end_game_clears_ownership(
    sessions: SessionStore, registry: LobbyRegistry, player_id: UUID
) -> None:
    registry.create_lobby("L1", "crane")
    registry.join_lobby(player_id, "L1")
    sessions.get_player_mut(player_id).is_owner = True

    registry.end_game("L1")
    assert not sessions.get_player(player_id).is_owner
