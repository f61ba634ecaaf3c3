from __future__ import annotations
import random
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


class ColorCycler(Generic[T]):
    """
    Fixed palette plus a current index. advance() always lands on a
    different entry, so every flash is a visible change.
    """

    def __init__(self, colors: Sequence[T], index: int = 0, rng: Optional[random.Random] = None):
        if len(colors) < 2:
            raise ValueError(f"palette needs at least 2 colors, got {len(colors)}")
        if not 0 <= index < len(colors):
            raise IndexError(f"start index {index} outside palette of {len(colors)}")
        self.colors = list(colors)
        self.index = index
        self.rng = rng or random.Random()

    @property
    def current(self) -> T:
        return self.colors[self.index]

    def advance(self) -> T:
        # draw from the n-1 other slots, then skip over the current one
        new_index = self.rng.randrange(len(self.colors) - 1)
        if new_index >= self.index:
            new_index += 1
        self.index = new_index
        return self.current

    def __len__(self) -> int:
        return len(self.colors)
