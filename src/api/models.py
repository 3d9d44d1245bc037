"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import CharColor, LobbyStatus

MAX_LOBBY_ID_LENGTH = 64
MAX_NAME_LENGTH = 32


def _validate_lobby_id(value: str) -> str:
    if not value or len(value) > MAX_LOBBY_ID_LENGTH:
        raise InvalidRequestError(
            f"Lobby id must have between 1 and {MAX_LOBBY_ID_LENGTH} characters."
        )
    if not all(c.isalnum() or c in "-_" for c in value):
        raise InvalidRequestError(
            f"Cannot use {value!r} as lobby id: only letters, digits, '-' and '_' allowed."
        )
    return value


# --- REQUEST MODELS ---
class CreateLobbyRequest(BaseModel):
    lobby_id: str
    owner_id: Optional[UUID] = None

    @field_validator("lobby_id")
    @classmethod
    def validate_lobby_id(cls, value: str) -> str:
        return _validate_lobby_id(value)


class JoinLobbyRequest(BaseModel):
    player_id: UUID
    lobby_id: str

    @field_validator("lobby_id")
    @classmethod
    def validate_lobby_id(cls, value: str) -> str:
        return _validate_lobby_id(value)


class SubmitGuessRequest(BaseModel):
    player_id: UUID
    guess: str

    @field_validator("guess")
    @classmethod
    def validate_guess(cls, value: str) -> str:
        # Case is significant when comparing against the secret word, so the guess is kept as typed.
        if not value or any(c.isspace() for c in value):
            raise InvalidRequestError(
                f"Guess must be a single non-empty word, got {value!r}."
            )
        return value


class SetNameRequest(BaseModel):
    player_id: UUID
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value or len(value) > MAX_NAME_LENGTH:
            raise InvalidRequestError(
                f"Name must have between 1 and {MAX_NAME_LENGTH} characters."
            )
        return value


# --- RESPONSE MODELS ---
class GuessResponse(BaseModel):
    word: str
    colors: list[CharColor]
    codes: list[str]


class SubmitResponse(BaseModel):
    win: str = ""
    error: bool = False
    guess: Optional[GuessResponse] = None
    message: Optional[str] = None


class PlayerResponse(BaseModel):
    player_id: UUID
    name: str
    is_owner: bool
    lobby_id: Optional[str]
    guesses: list[GuessResponse]


class LobbyResponse(BaseModel):
    lobby_id: str
    status: LobbyStatus
    word_length: int
    members: list[UUID]
