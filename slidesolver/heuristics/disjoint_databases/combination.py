from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple

from slidesolver.domains.coordinates import BoardCoordinates

COORD_WIDTH = 4
COORD_MASK = (1 << COORD_WIDTH) - 1


@dataclass(frozen=True)
class Combination:
    """
    Cells occupied by one group of tracked tiles, one 4-bit cell index per tile
    (tile i in bits [4i, 4i+4)). The blank is not part of the key.
    """
    value: int

    @classmethod
    def from_readable(cls, coordinates: Sequence[BoardCoordinates], ignore_last: bool) -> "Combination":
        return cls.from_indices([c.index() for c in coordinates], ignore_last)

    @classmethod
    def from_indices(cls, indices: Sequence[int], ignore_last: bool) -> "Combination":
        if ignore_last:
            indices = indices[:-1]
        value = 0
        for i, cell in enumerate(indices):
            value |= cell << (COORD_WIDTH * i)
        return cls(value)

    def indices(self, count: int) -> Tuple[int, ...]:
        return tuple((self.value >> (COORD_WIDTH * i)) & COORD_MASK for i in range(count))
