"""Shared helpers for building games with predictable letters."""

from typing import List, Optional

import pytest
from pydantic import Field

from letterdrop.engine import LetterDropGame, LetterSource
from letterdrop.lexicon import WordList, WordValidator


FILLER = "X"


class ScriptedLetters(LetterSource):
    """Letter source that deals a fixed sequence, then a filler letter."""

    script: List[str] = Field(default_factory=list)
    _position: int = 0

    def draw(self) -> str:
        if self._position < len(self.script):
            letter = self.script[self._position]
            self._position += 1
            return letter
        return FILLER


class UnreadyValidator(WordValidator):
    """A dictionary that never finishes loading."""

    def is_valid(self, word: str) -> bool:
        raise AssertionError("queried before ready")

    def ready(self) -> bool:
        return False


WORDS = ["cat", "cab", "zoo", "tag", "act"]


def build_game(letters: str = "", validator: Optional[WordValidator] = None) -> LetterDropGame:
    """A game whose drops place `letters` in order."""
    if validator is None:
        validator = WordList(WORDS)
    return LetterDropGame(validator=validator, letters=ScriptedLetters(script=list(letters)))


def drop_all(game: LetterDropGame, columns: List[int]) -> None:
    for column in columns:
        result = game.drop(column)
        assert result.ok, result.message


def select_path(game: LetterDropGame, cells) -> None:
    first, *rest = cells
    assert game.begin_selection(*first).ok
    for cell in rest:
        assert game.extend_selection(*cell).ok
    game.end_selection()


@pytest.fixture
def game() -> LetterDropGame:
    return build_game()
