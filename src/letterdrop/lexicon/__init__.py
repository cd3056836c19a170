"""Word lists the game validates submissions against."""

from .wordlist import (
    WordValidator,
    WordList,
    AsyncWordList,
    LexiconNotReadyError,
    load_word_list,
    load_word_list_async,
    default_word_list,
)
from .dawg import DawgWordList

__all__ = [
    "WordValidator",
    "WordList",
    "AsyncWordList",
    "LexiconNotReadyError",
    "load_word_list",
    "load_word_list_async",
    "default_word_list",
    "DawgWordList",
]
