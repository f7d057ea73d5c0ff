from __future__ import annotations
import logging
from time import perf_counter
from typing import List, Optional

import numpy as np

from slidesolver.domains.puzzle_state import DEFAULT_PUZZLE_SIZE
from slidesolver.heuristics.disjoint_databases.board_state import GroupBoard, GroupState
from slidesolver.heuristics.disjoint_databases.combination import COORD_WIDTH, Combination

log = logging.getLogger(__name__)

UNREACHED = np.iinfo(np.uint8).max


class Database:
    """
    Exact number of group-tile moves needed to bring one group home, for every
    reachable combination of that group's cells.

    `distances` is a uint8 table indexed by combination value; UNREACHED marks
    combinations the enumeration never produced.
    """

    def __init__(self, distances: np.ndarray, ignore_last: bool = False):
        self.distances = distances
        self.ignore_last = ignore_last

    @classmethod
    def build(cls, first_element_index: int, ignore_last: bool,
              size: int = DEFAULT_PUZZLE_SIZE) -> "Database":
        """
        0/1 breadth-first enumeration from the solved arrangement. Blank moves that
        displace a tracked tile cost 1 and go to the next level; the others cost 0
        and stay in the current one. States are finalized on first pop, so each
        combination is recorded at its minimum move count.
        """
        t0 = perf_counter()
        board = GroupBoard(size, ignore_last)
        distances = np.full(1 << (COORD_WIDTH * board.tracked), UNREACHED, dtype=np.uint8)
        visited = np.zeros(1 << (COORD_WIDTH * (board.tracked + 1)), dtype=bool)

        current: List[GroupState] = [board.initial(first_element_index)]
        shifts = 0
        while current:
            if shifts >= UNREACHED:
                raise OverflowError(f"Move count {shifts} does not fit the distance table")
            following: List[GroupState] = []
            while current:
                state = current.pop()
                if visited[state]:
                    continue
                visited[state] = True
                key = state & board.key_mask
                if distances[key] == UNREACHED:
                    distances[key] = shifts
                for s2, moved in board.neighbours(state):
                    if visited[s2]:
                        continue
                    if moved:
                        following.append(s2)
                    else:
                        current.append(s2)
            current = following
            shifts += 1

        db = cls(distances, ignore_last)
        log.info("Built pattern database (first element %d, ignore_last=%s): %d entries, "
                 "max distance %d, %.2fs", first_element_index, ignore_last, len(db),
                 db.max_distance(), perf_counter() - t0)
        return db

    def get_distance(self, combination: Combination) -> Optional[int]:
        if not 0 <= combination.value < len(self.distances):
            return None
        d = self.distances[combination.value]
        return None if d == UNREACHED else int(d)

    def max_distance(self) -> int:
        reached = self.distances[self.distances != UNREACHED]
        return int(reached.max()) if reached.size else 0

    def __len__(self) -> int:
        return int(np.count_nonzero(self.distances != UNREACHED))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Database):
            return NotImplemented
        return self.ignore_last == other.ignore_last and np.array_equal(self.distances, other.distances)
