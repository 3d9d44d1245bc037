"""Custom exceptions shared by the domain, service and API layers."""


class GameError(Exception):
    """Top-level exception for anything going wrong while playing a game."""


class ConfigurationError(GameError):
    """Settings could not be parsed from the environment."""


class InvalidRequestError(GameError):
    """Request cannot be handled (missing session, no lobby, malformed input)."""


class UnknownPlayerError(GameError):
    """No session recorded for this player handle."""


class UnknownLobbyError(GameError):
    """No lobby registered under this id."""


class GuessLengthError(GameError):
    """Guess and secret word do not have the same number of characters."""

    def __init__(self, guess: str, expected_length: int) -> None:
        self.guess = guess
        self.expected_length = expected_length
        super().__init__(
            f"Guess {guess!r} has {len(guess)} characters, expected {expected_length}."
        )
