"""
HTTP routes.

The player handle travels in the "userid" cookie. A missing or malformed cookie is treated as "no session",
which the routes report inline (false / error: true) rather than as an HTTP error.
"""

import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse

from src.api.models import (
    CreateLobbyRequest,
    JoinLobbyRequest,
    LobbyResponse,
    PlayerResponse,
    SetNameRequest,
    SubmitGuessRequest,
    SubmitResponse,
)
from src.core.exceptions import (
    GuessLengthError,
    InvalidRequestError,
    UnknownLobbyError,
    UnknownPlayerError,
)
from src.services.game_service import GameService

logger = logging.getLogger(__name__)

COOKIE_NAME = "userid"

router = APIRouter()


def get_service(request: Request) -> GameService:
    return request.app.state.game_service


def get_player_id(userid: Annotated[Optional[str], Cookie()] = None) -> Optional[UUID]:
    """Parse the handle from the cookie, None if absent or not a UUID."""
    if userid is None:
        return None
    try:
        return UUID(userid)
    except ValueError:
        logger.info("Ignoring malformed %s cookie: %r", COOKIE_NAME, userid)
        return None


ServiceDep = Annotated[GameService, Depends(get_service)]
PlayerIdDep = Annotated[Optional[UUID], Depends(get_player_id)]


def _bool_response(value: bool) -> PlainTextResponse:
    return PlainTextResponse("true" if value else "false")


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/init")
def init(service: ServiceDep, player_id: PlayerIdDep) -> Response:
    """Hand out a player handle unless the client already holds a valid one."""
    service.expire_sessions()
    handle, created = service.init_player(player_id)
    response = Response(status_code=200)
    if created:
        response.set_cookie(COOKIE_NAME, str(handle))
    return response


@router.get("/join/{lobby_id}", response_class=PlainTextResponse)
def join_lobby(lobby_id: str, service: ServiceDep, player_id: PlayerIdDep) -> Response:
    if player_id is None:
        return _bool_response(False)
    try:
        request = JoinLobbyRequest(player_id=player_id, lobby_id=lobby_id)
    except InvalidRequestError as exc:
        logger.info("Rejected join request: %s", exc)
        return _bool_response(False)
    return _bool_response(service.join_lobby(request))


@router.get("/submit/{guess}")
def submit_guess(
    guess: str, service: ServiceDep, player_id: PlayerIdDep
) -> SubmitResponse:
    if player_id is None:
        return SubmitResponse(error=True, message="No player session.")
    try:
        request = SubmitGuessRequest(player_id=player_id, guess=guess)
        return service.submit_move(request)
    except (InvalidRequestError, GuessLengthError) as exc:
        logger.info("Rejected guess from %s: %s", player_id, exc)
        return SubmitResponse(error=True, message=str(exc))


@router.get("/name/{name}", response_class=PlainTextResponse)
def set_name(name: str, service: ServiceDep, player_id: PlayerIdDep) -> Response:
    if player_id is None:
        return _bool_response(False)
    try:
        request = SetNameRequest(player_id=player_id, name=name)
    except InvalidRequestError as exc:
        logger.info("Rejected name change: %s", exc)
        return _bool_response(False)
    return _bool_response(service.set_name(request))


@router.get("/player")
def get_player(service: ServiceDep, player_id: PlayerIdDep) -> PlayerResponse:
    if player_id is None:
        raise HTTPException(status_code=404, detail="No player session.")
    try:
        return service.get_player(player_id)
    except UnknownPlayerError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/lobby/{lobby_id}")
def create_lobby(
    lobby_id: str, service: ServiceDep, player_id: PlayerIdDep
) -> LobbyResponse:
    """Create a lobby with a fresh secret word. The calling player (if known) owns and joins it."""
    try:
        request = CreateLobbyRequest(lobby_id=lobby_id, owner_id=player_id)
    except InvalidRequestError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return service.create_lobby(request)


@router.get("/lobby/{lobby_id}")
def get_lobby(lobby_id: str, service: ServiceDep) -> LobbyResponse:
    try:
        return service.get_lobby(lobby_id)
    except UnknownLobbyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
