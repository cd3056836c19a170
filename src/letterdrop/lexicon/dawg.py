# Reader for word lists stored as a compressed DAWG in the TWL06 binary layout.
# Format described at: https://github.com/fogleman/TWL06

import itertools
import struct
import zlib
from pathlib import Path
from typing import NamedTuple, Optional

from .wordlist import WordValidator

END = '$'


class Record(NamedTuple):
    """One packed 32-bit node entry."""
    more: bool
    letter: str
    link: int


def decode_record(data: bytes, index: int) -> Record:
    '''
    Unpack the record at `index`.

    Bit 31 flags another sibling after this one, bits 24-30 hold the
    letter and the low 24 bits link to the first child.
    '''
    x = struct.unpack_from('<I', data, index * 4)[0]
    return Record(
        more=bool(x & 0x80000000),
        letter=chr((x >> 24) & 0x7f),
        link=int(x & 0xffffff),
    )


class DawgWordList(WordValidator):
    """Word validator backed by a zlib-compressed DAWG."""

    def __init__(self, compressed: bytes):
        try:
            self.data = zlib.decompress(compressed)
        except zlib.error as e:
            raise ValueError(f"Word list is not a compressed DAWG: {e}") from e
        if len(self.data) % 4:
            raise ValueError("DAWG data is not a whole number of records")

    @classmethod
    def from_path(cls, path: str | Path) -> "DawgWordList":
        return cls(Path(path).read_bytes())

    def _get_child(self, index: int, letter: str) -> Optional[int]:
        while index * 4 < len(self.data):
            record = decode_record(self.data, index)
            if record.letter == letter:
                return record.link
            if not record.more:
                return None
            index += 1
        return None

    def __contains__(self, word: str) -> bool:
        index = 0
        for letter in itertools.chain(word, END):
            index = self._get_child(index, letter)
            if index is None:
                return False
        return True

    def is_valid(self, word: str) -> bool:
        return word.lower() in self

    def ready(self) -> bool:
        return True
