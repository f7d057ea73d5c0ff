from __future__ import annotations
from typing import Dict, List

from slidesolver.domains.coordinates import BoardCoordinates
from slidesolver.domains.puzzle_state import (
    BLANK_NUMBER,
    DEFAULT_PUZZLE_SIZE,
    MAX_NUMBER_WIDTH,
    PuzzleState,
)


class ManhattanDistance:
    """Sum of Manhattan distances of every tile to its goal cell (blank ignored)."""

    def __init__(self, size: int = DEFAULT_PUZZLE_SIZE):
        self.size = size
        self.solved_positions: Dict[int, BoardCoordinates] = {
            t: BoardCoordinates.from_index(t - 1, size) for t in range(1, size * size)
        }
        # distances[tile - 1][cell], so estimate() works on the packed nibbles directly
        cells = [BoardCoordinates.from_index(i, size) for i in range(size * size)]
        self._distances: List[List[int]] = [
            [cell.manhattan_distance(self.solved_positions[t]) for cell in cells]
            for t in range(1, size * size)
        ]

    def estimate(self, puzzle_state: PuzzleState) -> int:
        if puzzle_state.size != self.size:
            raise ValueError(f"Heuristic built for size {self.size}, got {puzzle_state.size}")
        dist = 0
        numbers = puzzle_state.numbers
        for idx in range(self.size * self.size):
            internal = numbers & BLANK_NUMBER
            if internal != BLANK_NUMBER:
                dist += self._distances[internal][idx]
            numbers >>= MAX_NUMBER_WIDTH
        return dist
