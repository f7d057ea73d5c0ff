from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from math import isqrt
from typing import TYPE_CHECKING, Dict, List, NamedTuple, Optional, Sequence, Tuple

from slidesolver.domains.coordinates import BoardCoordinates
from slidesolver.domains.direction import Direction
from slidesolver.domains.errors import (
    BoardSizeError,
    CoordinatesError,
    NoBracketsError,
    NotEnoughNumbersError,
    NotPermutationError,
    NumberParseError,
    TooManyNumbersError,
    TwoBlanksError,
)
from slidesolver.domains.parity import ParityCheckPermutation

if TYPE_CHECKING:
    from slidesolver.heuristics.base import Heuristic

Cell = Optional[int]  # None is the blank
Rows = Tuple[Tuple[Cell, ...], ...]

DEFAULT_PUZZLE_SIZE = 4
MIN_PUZZLE_SIZE = 2
MAX_PUZZLE_SIZE = 4  # 16 cells * 4 bits fill a 64-bit word

BLANK_NUMBER = 0b1111
MAX_NUMBER_WIDTH = 4


@lru_cache(maxsize=None)
def blank_moves(size: int) -> Dict[int, Tuple[Tuple[Direction, int], ...]]:
    """For every blank cell, the legal (direction, swapped cell) pairs in Up/Down/Left/Right order."""
    table: Dict[int, Tuple[Tuple[Direction, int], ...]] = {}
    for i in range(size * size):
        r, c = divmod(i, size)
        moves = []
        if r > 0:          moves.append((Direction.UP, i - size))
        if r < size - 1:   moves.append((Direction.DOWN, i + size))
        if c > 0:          moves.append((Direction.LEFT, i - 1))
        if c < size - 1:   moves.append((Direction.RIGHT, i + 1))
        table[i] = tuple(moves)
    return table


@lru_cache(maxsize=None)
def _goal_numbers(size: int) -> int:
    return PuzzleState.solved(size).numbers


class Move(NamedTuple):
    direction: Direction
    puzzle_state: "PuzzleState"


@dataclass(frozen=True)
class PuzzleState:
    """
    Full board configuration packed into one integer, 4 bits per cell (row-major,
    cell 0 in the lowest nibble). Tiles are stored as value-1, the blank as 0b1111.

    Build instances with `new`, `from_flat`, `parse` or `solved`; the raw
    constructor does no validation.
    """
    size: int
    numbers: int

    # ---------- Construction ----------
    @classmethod
    def new(cls, rows: Sequence[Sequence[Cell]]) -> "PuzzleState":
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise BoardSizeError(f"Board is not square: {[len(row) for row in rows]}")
        return cls.from_flat([x for row in rows for x in row], size)

    @classmethod
    def from_flat(cls, cells: Sequence[Cell], size: Optional[int] = None) -> "PuzzleState":
        if size is None:
            size = isqrt(len(cells))
        if size * size != len(cells):
            raise BoardSizeError(f"{len(cells)} cells do not fill a {size}x{size} board")
        if not (MIN_PUZZLE_SIZE <= size <= MAX_PUZZLE_SIZE):
            raise BoardSizeError(
                f"Puzzle size {size} not supported (must be {MIN_PUZZLE_SIZE}..{MAX_PUZZLE_SIZE})"
            )
        cls._check_numbers(cells, size)
        return cls(size, cls._numbers_from_readable(cells))

    @classmethod
    def solved(cls, size: int = DEFAULT_PUZZLE_SIZE) -> "PuzzleState":
        return cls.from_flat(list(range(1, size * size)) + [None], size)

    @staticmethod
    def _check_numbers(cells: Sequence[Cell], size: int) -> None:
        remaining = set(range(1, size * size))
        blank_found = False
        for x in cells:
            if x is None:
                if blank_found:
                    raise TwoBlanksError("More than one blank on the board")
                blank_found = True
            elif isinstance(x, int) and not isinstance(x, bool) and x in remaining:
                remaining.remove(x)
            else:
                raise NotPermutationError(f"Unexpected, repeated or non-integer tile value: {x!r}")
        if remaining:
            raise NotPermutationError(f"Missing tile values: {sorted(remaining)}")

    @staticmethod
    def _numbers_from_readable(cells: Sequence[Cell]) -> int:
        numbers = 0
        for idx, x in enumerate(cells):
            internal = BLANK_NUMBER if x is None else x - 1
            numbers |= internal << (MAX_NUMBER_WIDTH * idx)
        return numbers

    # ---------- Decoding ----------
    def cell(self, index: int) -> Cell:
        internal = (self.numbers >> (MAX_NUMBER_WIDTH * index)) & BLANK_NUMBER
        return None if internal == BLANK_NUMBER else internal + 1

    def flat(self) -> Tuple[Cell, ...]:
        return tuple(self.cell(i) for i in range(self.size * self.size))

    def readable_numbers(self) -> Rows:
        cells = self.flat()
        n = self.size
        return tuple(cells[r * n:(r + 1) * n] for r in range(n))

    def blank_index(self) -> int:
        numbers = self.numbers
        for i in range(self.size * self.size):
            if numbers & BLANK_NUMBER == BLANK_NUMBER:
                return i
            numbers >>= MAX_NUMBER_WIDTH
        raise AssertionError("Blank has to be found in numbers")

    def blank_position(self) -> BoardCoordinates:
        return BoardCoordinates.from_index(self.blank_index(), self.size)

    # ---------- Goal / solvability ----------
    def is_solved(self) -> bool:
        return self.numbers == _goal_numbers(self.size)

    def is_solvable(self) -> bool:
        """Permutation parity and blank-distance parity have to agree."""
        permutation_even = ParityCheckPermutation.from_numbers(self.readable_numbers()).is_even()
        distance_even = self.blank_position().blank_manhattan_distance() % 2 == 0
        return permutation_even == distance_even

    # ---------- Core dynamics ----------
    def swap_blank(self, blank: int, other: int) -> "PuzzleState":
        # XOR both nibbles with (tile ^ blank): the tile lands on `blank`, the blank on `other`.
        shift_blank = MAX_NUMBER_WIDTH * blank
        shift_other = MAX_NUMBER_WIDTH * other
        diff = ((self.numbers >> shift_other) & BLANK_NUMBER) ^ BLANK_NUMBER
        return PuzzleState(self.size, self.numbers ^ (diff << shift_blank) ^ (diff << shift_other))

    def create_neighbour_move_state(self, direction: Direction) -> "PuzzleState":
        """Configuration after moving the blank one cell in `direction`."""
        blank = self.blank_position()
        try:
            target = blank.moved(direction)
        except CoordinatesError as e:
            raise CoordinatesError(f"Blank at {blank.as_tuple()} cannot move {direction!r}") from e
        return self.swap_blank(blank.index(), target.index())

    def neighbours(self) -> List[Move]:
        z = self.blank_index()
        return [Move(d, self.swap_blank(z, j)) for d, j in blank_moves(self.size)[z]]

    def calculate_heuristic(self, heuristic: "Heuristic") -> int:
        return heuristic.estimate(self)

    # ---------- Text ----------
    @classmethod
    def parse(cls, text: str, size: int = DEFAULT_PUZZLE_SIZE) -> "PuzzleState":
        """Reads `[1, 2, ..., 15, ]`; an empty field is the blank."""
        s = text.strip()
        start, end = s.find("["), s.find("]")
        if start < 0 or end < 0 or end < start:
            raise NoBracketsError(f"No brackets around permutation: {text!r}")
        members = s[start + 1:end].split(",")
        if len(members) < size * size:
            raise NotEnoughNumbersError(f"Expected {size * size} fields, got {len(members)}")
        if len(members) > size * size:
            raise TooManyNumbersError(f"Expected {size * size} fields, got {len(members)}")

        cells: List[Cell] = []
        for member in members:
            member = member.strip()
            if member == "":
                cells.append(None)
                continue
            try:
                cells.append(int(member))
            except ValueError as e:
                raise NumberParseError(f"Not a number: {member!r}") from e
        return cls.from_flat(cells, size)

    def __str__(self) -> str:
        return "[" + ", ".join("" if x is None else str(x) for x in self.flat()) + "]"

    def __repr__(self) -> str:
        return f"PuzzleState({self})"
