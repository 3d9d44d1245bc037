"""A single evaluated guess, as stored in a player's history."""

from dataclasses import dataclass
from typing import Optional, Self
from uuid import UUID

from src.core.shared_types import CharColor, LetterPolicy
from src.wordle.evaluator import evaluate


@dataclass(frozen=True)
class WordGuess:
    word: str
    char_states: tuple[CharColor, ...]
    game_id: Optional[UUID] = None  # game (lobby instance) the guess was made in

    def __post_init__(self) -> None:
        if len(self.word) != len(self.char_states):
            raise ValueError(
                f"Need one color per character: {self.word!r} has {len(self.word)} characters, got {len(self.char_states)} colors."
            )

    @classmethod
    def evaluated(
        cls,
        secret_word: str,
        guess: str,
        policy: LetterPolicy = LetterPolicy.CHARACTER_SET,
        game_id: Optional[UUID] = None,
    ) -> Self:
        """Evaluate the guess against the secret word and capture the outcome."""
        return cls(
            word=guess,
            char_states=tuple(evaluate(secret_word, guess, policy)),
            game_id=game_id,
        )

    @property
    def is_correct(self) -> bool:
        return all(color == CharColor.GREEN for color in self.char_states)

    @property
    def codes(self) -> list[str]:
        return [color.code for color in self.char_states]

    def __str__(self) -> str:
        return " ".join(
            f"{color.code}:{char}" for color, char in zip(self.char_states, self.word)
        )
