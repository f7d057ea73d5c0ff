from __future__ import annotations
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from slidesolver.domains.puzzle_state import PuzzleState


class Heuristic(Protocol):
    """Anything that can estimate the remaining cost of a configuration."""

    def estimate(self, puzzle_state: "PuzzleState") -> int:
        ...


class DumbHeuristic:
    """Sums tile values. Not admissible; only used to check search bookkeeping."""

    def estimate(self, puzzle_state: "PuzzleState") -> int:
        return sum(x for x in puzzle_state.flat() if x is not None)
