"""Unit tests for src/wordle/words.py"""

import random
from pathlib import Path

import pytest

from src.wordle.words import DEFAULT_WORDS, RandomWordProvider


def test_default_words_are_five_letters() -> None:
    provider = RandomWordProvider()
    assert provider.word_length == 5
    assert set(provider.words) == set(DEFAULT_WORDS)


def test_choose_word_from_list() -> None:
    provider = RandomWordProvider(rng=random.Random(7))
    for lobby_id in ["a", "b", "c"]:
        assert provider.choose_word(lobby_id) in provider.words


def test_seeded_choice_is_reproducible() -> None:
    first = RandomWordProvider(rng=random.Random(42))
    second = RandomWordProvider(rng=random.Random(42))
    assert [first.choose_word("L") for _ in range(5)] == [
        second.choose_word("L") for _ in range(5)
    ]


def test_words_are_cleaned_and_filtered_to_one_length() -> None:
    provider = RandomWordProvider([" Crane", "robot\n", "", "cat", "TIGER", "crane"])
    assert provider.words == ["crane", "robot", "tiger"]
    assert provider.word_length == 5


def test_empty_word_list() -> None:
    with pytest.raises(ValueError):
        RandomWordProvider(["", "  "])


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("apple\n\nmango\nlemon\n", encoding="utf-8")
    provider = RandomWordProvider.from_file(path)
    assert provider.words == ["apple", "lemon", "mango"]
    assert provider.choose_word("L1") in {"apple", "lemon", "mango"}
