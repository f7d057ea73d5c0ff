from __future__ import annotations
from typing import List, Sequence, Tuple

from slidesolver.domains.puzzle_state import blank_moves
from slidesolver.heuristics.disjoint_databases.combination import COORD_MASK, COORD_WIDTH

GroupState = int  # tracked cells in the low fields, blank cell in the field above them


class GroupBoard:
    """
    Rules of the reduced board seen while building one pattern database: the
    tracked tiles of a group plus the blank, every other tile indistinguishable.

    States are packed ints, so the combination key of a state is just its low
    `4 * tracked` bits. With `ignore_last` the group's final member is the
    blank's home cell, which is never displaced, so it is not tracked at all.
    """

    def __init__(self, size: int, ignore_last: bool = False):
        self.size = size
        self.ignore_last = ignore_last
        self.tracked = size - 1 if ignore_last else size
        self.blank_shift = COORD_WIDTH * self.tracked
        self.key_mask = (1 << self.blank_shift) - 1
        self._moves = blank_moves(size)

    def pack(self, elements: Sequence[int], blank: int) -> GroupState:
        if len(elements) != self.tracked:
            raise ValueError(f"Expected {self.tracked} tracked cells, got {len(elements)}")
        state = blank << self.blank_shift
        for i, cell in enumerate(elements):
            state |= cell << (COORD_WIDTH * i)
        return state

    def unpack(self, state: GroupState) -> Tuple[Tuple[int, ...], int]:
        elements = tuple((state >> (COORD_WIDTH * i)) & COORD_MASK for i in range(self.tracked))
        return elements, state >> self.blank_shift

    def initial(self, first_element_index: int) -> GroupState:
        """Tracked tiles on their home cells, blank in the bottom-right corner."""
        elements = [first_element_index + i for i in range(self.tracked)]
        return self.pack(elements, self.size * self.size - 1)

    def combination(self, state: GroupState) -> int:
        return state & self.key_mask

    def neighbours(self, state: GroupState) -> List[Tuple[GroupState, bool]]:
        """(next_state, moved_element) for every legal blank move."""
        blank = state >> self.blank_shift
        key = state & self.key_mask
        out: List[Tuple[GroupState, bool]] = []
        for _, target in self._moves[blank]:
            new_key = key
            moved = False
            for i in range(self.tracked):
                shift = COORD_WIDTH * i
                if (key >> shift) & COORD_MASK == target:
                    new_key = key ^ ((target ^ blank) << shift)
                    moved = True
                    break
            out.append(((target << self.blank_shift) | new_key, moved))
        return out
