"""Word providers: where a new lobby gets its secret word from."""

import logging
import random
from collections import Counter
from pathlib import Path
from typing import Optional, Protocol, Self

logger = logging.getLogger(__name__)

DEFAULT_WORDS = (
    "about",
    "apple",
    "beach",
    "brave",
    "bread",
    "chair",
    "crane",
    "dance",
    "eagle",
    "flame",
    "ghost",
    "grape",
    "heart",
    "house",
    "juice",
    "light",
    "money",
    "music",
    "night",
    "ocean",
    "piano",
    "plant",
    "queen",
    "river",
    "robot",
    "smile",
    "stone",
    "tiger",
    "water",
    "zebra",
)


class WordProvider(Protocol):
    """Collaborator handing out secret words for new lobbies."""

    def choose_word(self, lobby_id: str) -> str:
        """Secret word for the lobby being created."""
        ...


class RandomWordProvider:
    """Uniform random choice from a fixed list of same-length, lowercase words."""

    def __init__(
        self,
        words: tuple[str, ...] | list[str] = DEFAULT_WORDS,
        rng: Optional[random.Random] = None,
    ) -> None:
        cleaned = [word.strip().lower() for word in words if word.strip()]
        if not cleaned:
            raise ValueError("Word list is empty.")

        # Keep only the most common length so every lobby plays words of the same size.
        length, _ = Counter(len(word) for word in cleaned).most_common(1)[0]
        self.words = sorted({word for word in cleaned if len(word) == length})
        self.word_length = length
        self.rng = rng or random.Random()

    @classmethod
    def from_file(cls, path: str | Path, rng: Optional[random.Random] = None) -> Self:
        """One word per line; blank lines ignored."""
        lines = Path(path).read_text(encoding="utf-8").splitlines()
        provider = cls(lines, rng=rng)
        logger.info(
            "Loaded %d words of length %d from %s",
            len(provider.words),
            provider.word_length,
            path,
        )
        return provider

    def choose_word(self, lobby_id: str) -> str:
        return self.rng.choice(self.words)
