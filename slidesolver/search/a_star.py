from __future__ import annotations
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict, List, Optional, Tuple

from slidesolver.domains.direction import Direction
from slidesolver.domains.puzzle_state import Move, PuzzleState
from slidesolver.heuristics.base import Heuristic

log = logging.getLogger(__name__)

# Configuration -> direction that first finalized it (None for the start).
LastDirections = Dict[PuzzleState, Optional[Direction]]

TIE_BREAKS = ("h", "g", "fifo", "lifo")


class InitialStateNotSolvable(Exception):
    pass


class MissingProvenanceError(RuntimeError):
    """Route reconstruction reached a configuration that was never finalized."""


@dataclass(frozen=True)
class AstarState:
    f_value: int
    h_value: int
    distance_from_start: int
    last_direction: Optional[Direction]
    puzzle_state: PuzzleState

    @classmethod
    def initial(cls, puzzle_state: PuzzleState, heuristic: Heuristic) -> "AstarState":
        if not puzzle_state.is_solvable():
            raise InitialStateNotSolvable(f"{puzzle_state} cannot reach the goal")
        h = puzzle_state.calculate_heuristic(heuristic)
        return cls(f_value=h, h_value=h, distance_from_start=0, last_direction=None,
                   puzzle_state=puzzle_state)

    def moved_to_neighbour(self, direction: Direction, obtained_state: PuzzleState,
                           heuristic: Heuristic) -> "AstarState":
        g = self.distance_from_start + 1
        h = obtained_state.calculate_heuristic(heuristic)
        return AstarState(f_value=g + h, h_value=h, distance_from_start=g,
                          last_direction=direction, puzzle_state=obtained_state)

    def neighbours(self) -> List[Move]:
        return self.puzzle_state.neighbours()

    def is_solved(self) -> bool:
        return self.puzzle_state.is_solved()

    def create_route(self, last_directions: LastDirections) -> List[Direction]:
        """Walks back from this state through `last_directions` and returns the forward route."""
        state = self.puzzle_state
        direction = self.last_direction
        reversed_route: List[Direction] = []
        while direction is not None:
            reversed_route.append(direction)
            state = state.create_neighbour_move_state(direction.opposite())
            try:
                direction = last_directions[state]
            except KeyError:
                raise MissingProvenanceError(f"No recorded direction for {state}") from None
        reversed_route.reverse()
        return reversed_route


@dataclass
class Solution:
    steps: List[Direction]
    no_of_visited_states: int
    generated: int = 0
    time: float = 0.0
    peak_open: int = field(default=0, repr=False)

    def __len__(self) -> int:
        return len(self.steps)


def _priority(tie_break: str, node: AstarState, ctr: int) -> Tuple[int, int, int]:
    if tie_break == "h":    return (node.f_value, node.h_value, ctr)
    if tie_break == "g":    return (node.f_value, -node.distance_from_start, ctr)
    if tie_break == "fifo": return (node.f_value, 0, ctr)
    if tie_break == "lifo": return (node.f_value, 0, -ctr)
    raise ValueError(f"Unknown tie_break {tie_break!r}, expected one of {TIE_BREAKS}")


def solve_with_heuristic(initial_state: PuzzleState, heuristic: Heuristic,
                         tie_break: str = "h") -> Optional[Solution]:
    """
    A* over puzzle configurations. Returns None when the start cannot reach the goal.

    A configuration is finalized (recorded in `last_directions`) on its first pop;
    later copies of it are skipped. Visited states = number of finalized configurations.
    """
    if tie_break not in TIE_BREAKS:
        raise ValueError(f"Unknown tie_break {tie_break!r}, expected one of {TIE_BREAKS}")
    t0 = perf_counter()
    try:
        node = AstarState.initial(initial_state, heuristic)
    except InitialStateNotSolvable:
        log.debug("Initial state %s is not solvable", initial_state)
        return None

    counter = itertools.count()
    open_heap: List[Tuple[Tuple[int, int, int], AstarState]] = []
    heapq.heappush(open_heap, (_priority(tie_break, node, next(counter)), node))
    last_directions: LastDirections = {}
    generated = 0
    peak_open = 1

    while True:
        # An unsolved, solvable start always leaves something to pop.
        peak_open = max(peak_open, len(open_heap))
        _, node = heapq.heappop(open_heap)
        if node.puzzle_state in last_directions:
            continue
        last_directions[node.puzzle_state] = node.last_direction
        if node.is_solved():
            break

        for direction, s2 in node.neighbours():
            if s2 in last_directions:
                continue
            child = node.moved_to_neighbour(direction, s2, heuristic)
            generated += 1
            heapq.heappush(open_heap, (_priority(tie_break, child, next(counter)), child))

    solution = Solution(
        steps=node.create_route(last_directions),
        no_of_visited_states=len(last_directions),
        generated=generated,
        time=perf_counter() - t0,
        peak_open=peak_open,
    )
    log.debug("Solved %s in %d steps, %d visited states, %.3fs", initial_state,
              len(solution.steps), solution.no_of_visited_states, solution.time)
    return solution


solve = solve_with_heuristic
