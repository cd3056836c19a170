import random
from typing import Dict, Optional, Tuple
from pydantic import BaseModel, Field, field_validator

from .constants import LETTER_FREQUENCIES


class LetterSource(BaseModel):
    """
    Weighted random letter generator.

    Builds a bag holding each letter as many times as its frequency weight
    and draws uniformly from it. Draws are independent; the bag is never
    depleted.

    Attributes:
        frequencies: Letter -> positive integer weight
        seed: Optional random seed for reproducibility
    """

    frequencies: Dict[str, int] = Field(default_factory=lambda: dict(LETTER_FREQUENCIES))
    seed: Optional[int] = None
    _rng: random.Random = None
    _bag: Tuple[str, ...] = ()

    @field_validator("frequencies")
    @classmethod
    def _check_frequencies(cls, value: Dict[str, int]) -> Dict[str, int]:
        if not value:
            raise ValueError("Frequency table is empty")
        for letter, weight in value.items():
            if len(letter) != 1 or not "A" <= letter <= "Z":
                raise ValueError(f"Invalid letter '{letter}' in frequency table")
            if weight <= 0:
                raise ValueError(f"Weight for '{letter}' must be positive, got {weight}")
        return value

    def model_post_init(self, __context) -> None:
        """Initialize the random generator and letter bag after model creation."""
        self._rng = random.Random(self.seed)
        bag = []
        for letter, weight in self.frequencies.items():
            bag.extend([letter] * weight)
        self._bag = tuple(bag)

    @property
    def bag_size(self) -> int:
        """Total weight of the distribution."""
        return len(self._bag)

    def draw(self) -> str:
        """Draw one letter from the frequency distribution."""
        return self._rng.choice(self._bag)
