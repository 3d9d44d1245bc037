"""Process bootstrap: build the GameService from settings and serve the HTTP routes."""

import logging
from datetime import timedelta
from typing import Optional

import uvicorn
from fastapi import FastAPI

from src.api.routes import router
from src.core.config import Settings, configure_logging
from src.services.game_service import GameService
from src.wordle.words import RandomWordProvider, WordProvider

logger = logging.getLogger(__name__)


def build_service(
    settings: Settings, word_provider: Optional[WordProvider] = None
) -> GameService:
    if word_provider is None:
        word_provider = (
            RandomWordProvider.from_file(settings.word_list)
            if settings.word_list
            else RandomWordProvider()
        )
    ttl = (
        timedelta(seconds=settings.session_ttl_seconds)
        if settings.session_ttl_seconds > 0
        else None
    )
    return GameService(
        word_provider,
        letter_policy=settings.letter_policy,
        win_rule=settings.win_rule,
        allow_late_join=settings.allow_late_join,
        session_ttl=ttl,
    )


def create_app(
    settings: Optional[Settings] = None, word_provider: Optional[WordProvider] = None
) -> FastAPI:
    """One GameService per app, created here and reachable from routes through app.state."""
    settings = settings or Settings.from_env()
    app = FastAPI(title="Multiplayer Wordle", version="0.1.0")
    app.state.settings = settings
    app.state.game_service = build_service(settings, word_provider)
    app.include_router(router)
    return app


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info(
        "Starting server on %s:%d (letters: %s, win: %s)",
        settings.host,
        settings.port,
        settings.letter_policy,
        settings.win_rule,
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
