"""
Word validators: the dictionary the game checks submitted words against.

A validator answers `is_valid(word)` case-insensitively and reports through
`ready()` whether it can answer yet. Word lists loaded in the background are
not ready until their load completes; the game refuses submissions until then.
"""

import json
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Mapping, Optional

# Bundled demo dictionary
_DATA_FILE = Path(__file__).parent / "data" / "words.json"

DAWG_SUFFIXES = {".bin", ".dawg"}


class LexiconNotReadyError(RuntimeError):
    """Raised when a word list is queried before it has finished loading."""


class WordValidator(ABC):
    """Interface for anything the game can check words against."""

    @abstractmethod
    def is_valid(self, word: str) -> bool:
        """Return True if `word` is in the dictionary (case-insensitive)."""

    @abstractmethod
    def ready(self) -> bool:
        """Return True once the validator can answer queries."""


class WordList(WordValidator):
    """In-memory word list. Always ready."""

    def __init__(self, words: Iterable[str] = ()):
        self.words = frozenset(w.strip().lower() for w in words if w.strip())

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "WordList":
        """Build from a word -> flag mapping; only truthy entries are words."""
        return cls(word for word, present in mapping.items() if present)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self.words

    def __len__(self) -> int:
        return len(self.words)

    def is_valid(self, word: str) -> bool:
        return word.lower() in self.words

    def ready(self) -> bool:
        return True


def _parse_json(text: str, path: Path) -> WordList:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON word list {path}: {e}") from e

    if isinstance(data, dict):
        return WordList.from_mapping(data)
    if isinstance(data, list) and all(isinstance(w, str) for w in data):
        return WordList(data)
    raise ValueError(
        f"JSON word list {path} must be an object of word -> bool or an array of words"
    )


def _parse_text(text: str) -> WordList:
    words = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith('#'):
            words.append(line)
    return WordList(words)


def load_word_list(path: str | Path) -> WordValidator:
    """
    Load a word list from disk.

    Supported formats, chosen by suffix:
    - .json: object mapping word -> bool, or an array of words
    - .bin / .dawg: compressed DAWG (TWL06 layout)
    - anything else: plain text, one word per line, '#' comments allowed

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file content is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Word list not found: {path}")

    suffix = path.suffix.lower()
    if suffix in DAWG_SUFFIXES:
        from .dawg import DawgWordList
        return DawgWordList.from_path(path)

    text = path.read_text(encoding="utf-8")
    if suffix == ".json":
        return _parse_json(text, path)
    return _parse_text(text)


def default_word_list() -> WordList:
    """The small dictionary bundled with the package."""
    return load_word_list(_DATA_FILE)


class AsyncWordList(WordValidator):
    """
    A word list that is still loading.

    Wraps a future resolving to another validator. Queries before the
    future has completed successfully raise LexiconNotReadyError.
    """

    def __init__(self, future: "Future[WordValidator]"):
        self.future = future

    def ready(self) -> bool:
        if not self.future.done() or self.future.cancelled():
            return False
        return self.future.exception() is None and self.future.result().ready()

    @property
    def error(self) -> Optional[BaseException]:
        """The exception the load failed with, if it has failed."""
        if self.future.done() and not self.future.cancelled():
            return self.future.exception()
        return None

    def wait(self, timeout: Optional[float] = None) -> WordValidator:
        """Block until loaded and return the underlying validator."""
        return self.future.result(timeout=timeout)

    def is_valid(self, word: str) -> bool:
        if not self.ready():
            raise LexiconNotReadyError("Word list has not finished loading")
        return self.future.result().is_valid(word)


def load_word_list_async(
    path: Optional[str | Path] = None,
    executor: Optional[Executor] = None,
) -> AsyncWordList:
    """
    Start loading a word list in the background.

    Args:
        path: Word list to load (bundled list if None)
        executor: Executor to run the load on (a one-shot thread pool if None)

    Returns:
        AsyncWordList that becomes ready when the load completes
    """
    loader = (lambda: load_word_list(path)) if path is not None else default_word_list

    if executor is not None:
        return AsyncWordList(executor.submit(loader))

    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="wordlist")
    future = pool.submit(loader)
    pool.shutdown(wait=False)
    return AsyncWordList(future)
