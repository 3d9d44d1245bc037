"""
Application settings.

Everything is read from environment variables (a local .env file is loaded first, if present), with defaults suited to local play.
"""

import logging
import os
from dataclasses import dataclass
from typing import Self

from dotenv import load_dotenv

from src.core.exceptions import ConfigurationError
from src.core.shared_types import LetterPolicy, WinRule

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

TRUTHY = {"1", "true", "yes", "on"}


def _option(raw: str) -> str:
    """Enum values may be written as e.g. CHARACTER_SET in the environment."""
    return raw.strip().lower().replace("_", " ")


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8080
    word_list: str = ""  # empty: use the built-in word list
    letter_policy: LetterPolicy = LetterPolicy.CHARACTER_SET
    win_rule: WinRule = WinRule.LATEST_GUESS
    allow_late_join: bool = False
    session_ttl_seconds: int = 0  # 0: sessions never expire
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Self:
        """Build settings from WORDLE_* environment variables."""
        load_dotenv()
        defaults = cls()
        log_level = os.getenv("WORDLE_LOG_LEVEL", defaults.log_level).strip().upper()
        if log_level not in logging.getLevelNamesMapping():
            raise ConfigurationError(f"Unknown WORDLE_LOG_LEVEL: {log_level!r}")
        try:
            return cls(
                host=os.getenv("WORDLE_HOST", defaults.host),
                port=int(os.getenv("WORDLE_PORT", str(defaults.port))),
                word_list=os.getenv("WORDLE_WORD_LIST", defaults.word_list),
                letter_policy=LetterPolicy(
                    _option(os.getenv("WORDLE_LETTER_POLICY", defaults.letter_policy))
                ),
                win_rule=WinRule(
                    _option(os.getenv("WORDLE_WIN_RULE", defaults.win_rule))
                ),
                allow_late_join=os.getenv("WORDLE_ALLOW_LATE_JOIN", "false").lower()
                in TRUTHY,
                session_ttl_seconds=int(
                    os.getenv(
                        "WORDLE_SESSION_TTL_SECONDS", str(defaults.session_ttl_seconds)
                    )
                ),
                log_level=log_level,
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid WORDLE_* setting: {exc}") from exc


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""
    logging.basicConfig(
        level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True
    )
