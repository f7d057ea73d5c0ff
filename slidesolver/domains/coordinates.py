from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from slidesolver.domains.direction import Direction
from slidesolver.domains.errors import CoordinatesError


@dataclass(frozen=True)
class BoardCoordinates:
    """(row, column) on a size×size board."""
    row: int
    column: int
    size: int

    def __post_init__(self):
        if not (0 <= self.row < self.size and 0 <= self.column < self.size):
            raise CoordinatesError(
                f"Coordinates not on puzzle board: ({self.row}, {self.column}) "
                f"for puzzle size: {self.size}"
            )

    @classmethod
    def from_index(cls, index: int, size: int) -> "BoardCoordinates":
        r, c = divmod(index, size)
        return cls(r, c, size)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.column)

    def index(self) -> int:
        """Row-major cell index."""
        return self.row * self.size + self.column

    # ---------- Distances ----------
    def manhattan_distance(self, other: "BoardCoordinates") -> int:
        return abs(self.row - other.row) + abs(self.column - other.column)

    def blank_manhattan_distance(self) -> int:
        """Distance from the bottom-right cell, where the blank sits when solved."""
        last = self.size - 1
        return (last - self.row) + (last - self.column)

    # ---------- Edges ----------
    def at_upper_edge(self) -> bool:
        return self.row == 0

    def at_bottom_edge(self) -> bool:
        return self.row == self.size - 1

    def at_left_edge(self) -> bool:
        return self.column == 0

    def at_right_edge(self) -> bool:
        return self.column == self.size - 1

    def moved(self, direction: Direction) -> "BoardCoordinates":
        dr, dc = direction.as_coordinates()
        return BoardCoordinates(self.row + dr, self.column + dc, self.size)
