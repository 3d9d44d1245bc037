"""
Type definitions used across layers
"""

from enum import StrEnum


class CharColor(StrEnum):
    """Feedback for a single guessed character."""

    GREEN = "green"
    YELLOW = "yellow"
    GRAY = "gray"

    @property
    def code(self) -> str:
        return COLOR_CODES[self]


COLOR_CODES: dict[CharColor, str] = {
    CharColor.GREEN: "G",
    CharColor.YELLOW: "Y",
    CharColor.GRAY: "Gr",
}


class LobbyStatus(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    ENDED = "ended"


# --- NOTE both policies are kept selectable. CHARACTER_SET marks every occurrence of a letter present in the
# --- secret word, COUNTED only marks as many occurrences as remain unmatched (the usual Wordle rule).
class LetterPolicy(StrEnum):
    CHARACTER_SET = "character set"
    COUNTED = "counted"


class WinRule(StrEnum):
    LATEST_GUESS = "latest guess"
    FULL_HISTORY = "full history"
