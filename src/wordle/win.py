"""Win detection over a player's guess history."""

from typing import Callable, Optional, Sequence
from uuid import UUID

from src.core.shared_types import WinRule
from src.wordle.guess import WordGuess
from src.wordle.session import PlayerSession


def won_with_latest_guess(guesses: Sequence[WordGuess]) -> bool:
    """Most recent guess matched the secret word."""
    return bool(guesses) and guesses[-1].is_correct


def won_with_full_history(guesses: Sequence[WordGuess]) -> bool:
    """
    Every guess is all Green.

    Once a player has submitted a guess with a Yellow or Gray, this can never become true again for that game.
    """
    return bool(guesses) and all(guess.is_correct for guess in guesses)


WIN_RULES: dict[WinRule, Callable[[Sequence[WordGuess]], bool]] = {
    WinRule.LATEST_GUESS: won_with_latest_guess,
    WinRule.FULL_HISTORY: won_with_full_history,
}


def has_won(
    session: PlayerSession,
    rule: WinRule = WinRule.LATEST_GUESS,
    game_id: Optional[UUID] = None,
) -> bool:
    """Apply the win rule to the session's guesses, restricted to one game when game_id is given."""
    guesses = (
        session.guesses
        if game_id is None
        else [guess for guess in session.guesses if guess.game_id == game_id]
    )
    return WIN_RULES[rule](guesses)
