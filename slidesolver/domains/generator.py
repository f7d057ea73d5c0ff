from __future__ import annotations
import random
from typing import Optional

from slidesolver.domains.puzzle_state import DEFAULT_PUZZLE_SIZE, PuzzleState, blank_moves


def generate_random_puzzle_state(steps_back: int, size: int = DEFAULT_PUZZLE_SIZE,
                                 seed: Optional[int] = None) -> PuzzleState:
    """Random walk of the blank from the goal with no immediate backtrack (always solvable)."""
    rng = random.Random(seed)
    s = PuzzleState.solved(size)
    nei = blank_moves(size)
    last_blank = None
    for _ in range(steps_back):
        z = s.blank_index()
        cand = [j for _, j in nei[z]]
        if last_blank in cand and len(cand) > 1:
            cand.remove(last_blank)
        j = rng.choice(cand)
        s = s.swap_blank(z, j)
        last_blank = z
    return s
