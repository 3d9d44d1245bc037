"""
Guess evaluation: map a guess onto per-character feedback against the secret word.

Both functions are pure. They raise GuessLengthError instead of evaluating a guess with the wrong number of characters.
"""

from collections import Counter
from typing import Callable

from src.core.exceptions import GuessLengthError
from src.core.shared_types import CharColor, LetterPolicy

Evaluator = Callable[[str, str], list[CharColor]]


def _check_length(secret_word: str, guess: str) -> None:
    if len(guess) != len(secret_word):
        raise GuessLengthError(guess, len(secret_word))


def evaluate_character_set(secret_word: str, guess: str) -> list[CharColor]:
    """
    Green on an exact position match, Yellow if the character occurs anywhere in the secret word, Gray otherwise.

    Presence is checked against the set of distinct characters, so a repeated letter is Yellow on every occurrence
    even if the secret word holds it fewer times.
    """
    _check_length(secret_word, guess)
    letters = set(secret_word)
    colors = []
    for guessed, expected in zip(guess, secret_word):
        if guessed == expected:
            colors.append(CharColor.GREEN)
        elif guessed in letters:
            colors.append(CharColor.YELLOW)
        else:
            colors.append(CharColor.GRAY)
    return colors


def evaluate_counted(secret_word: str, guess: str) -> list[CharColor]:
    """
    Same colors as evaluate_character_set, except a letter only turns Yellow while the secret word still has
    occurrences of it that were not matched already (Greens are assigned first).
    """
    _check_length(secret_word, guess)
    colors = [CharColor.GRAY] * len(guess)
    remaining: Counter[str] = Counter()
    for i, (guessed, expected) in enumerate(zip(guess, secret_word)):
        if guessed == expected:
            colors[i] = CharColor.GREEN
        else:
            remaining[expected] += 1

    for i, guessed in enumerate(guess):
        if colors[i] == CharColor.GREEN:
            continue
        if remaining[guessed] > 0:
            colors[i] = CharColor.YELLOW
            remaining[guessed] -= 1
    return colors


EVALUATORS: dict[LetterPolicy, Evaluator] = {
    LetterPolicy.CHARACTER_SET: evaluate_character_set,
    LetterPolicy.COUNTED: evaluate_counted,
}


def evaluate(
    secret_word: str, guess: str, policy: LetterPolicy = LetterPolicy.CHARACTER_SET
) -> list[CharColor]:
    """Evaluate a guess with the given duplicate-letter policy."""
    return EVALUATORS[policy](secret_word, guess)
