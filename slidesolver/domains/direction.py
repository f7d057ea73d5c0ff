from __future__ import annotations
from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Direction in which the blank travels."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    def as_coordinates(self) -> Tuple[int, int]:
        return self.value

    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    def __repr__(self) -> str:
        return self.name.capitalize()


_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}
