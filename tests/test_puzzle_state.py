import itertools
import random

import pytest

from slidesolver.domains.direction import Direction
from slidesolver.domains.errors import (
    BoardSizeError,
    CoordinatesError,
    NoBracketsError,
    NotEnoughNumbersError,
    NotPermutationError,
    NumberParseError,
    PuzzleStateParseError,
    TooManyNumbersError,
    TwoBlanksError,
)
from slidesolver.domains.generator import generate_random_puzzle_state
from slidesolver.domains.parity import ParityCheckPermutation
from slidesolver.domains.puzzle_state import PuzzleState
from tests.conftest import bfs_distances

GOAL4_TEXT = "[1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, ]"


# ---------- Encoding ----------
def test_packed_encoding():
    s = PuzzleState.new([[1, 2], [3, None]])
    assert s.numbers == 0b1111_0010_0001_0000
    assert s.readable_numbers() == ((1, 2), (3, None))


def test_decode_encode_round_trip():
    rng = random.Random(7)
    for size in (2, 3, 4):
        cells = list(range(1, size * size)) + [None]
        for _ in range(20):
            rng.shuffle(cells)
            s = PuzzleState.from_flat(cells)
            assert list(s.flat()) == cells
            assert PuzzleState.new(s.readable_numbers()) == s


def test_equal_states_hash_equal():
    a = PuzzleState.new([[2, 1], [None, 3]])
    b = PuzzleState.from_flat([2, 1, None, 3])
    assert a == b and hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != PuzzleState.solved(2)


# ---------- Validation ----------
def test_not_permutation():
    with pytest.raises(NotPermutationError):
        PuzzleState.new([[1, 1], [2, None]])
    with pytest.raises(NotPermutationError):
        PuzzleState.new([[1, 5], [2, None]])
    with pytest.raises(NotPermutationError):
        PuzzleState.new([[1, 0], [2, None]])


def test_two_blanks():
    with pytest.raises(TwoBlanksError):
        PuzzleState.new([[1, 2], [None, None]])


def test_missing_blank_is_not_permutation():
    with pytest.raises(NotPermutationError):
        PuzzleState.new([[1, 2], [3, 4]])


@pytest.mark.parametrize("cells", [
    [2.0, 1, 3, None],
    [True, 2, 3, None],
    ["1", 2, 3, None],
])
def test_non_integer_tiles_rejected(cells):
    with pytest.raises(NotPermutationError):
        PuzzleState.from_flat(cells)


def test_board_size_limits():
    with pytest.raises(BoardSizeError):
        PuzzleState.from_flat(list(range(1, 25)) + [None])
    with pytest.raises(BoardSizeError):
        PuzzleState.from_flat([None])
    with pytest.raises(BoardSizeError):
        PuzzleState.new([[1, 2, 3], [None, 4]])
    with pytest.raises(BoardSizeError):
        PuzzleState.from_flat([1, 2, None], 2)


def test_valid_state_created():
    s = PuzzleState.new([[2, 1], [None, 3]])
    assert s.size == 2
    assert s.blank_position().as_tuple() == (1, 0)


# ---------- Goal ----------
def test_is_solved():
    assert PuzzleState.solved(4).is_solved()
    assert PuzzleState.parse(GOAL4_TEXT).is_solved()
    assert not PuzzleState.new([[1, 2], [None, 3]]).is_solved()
    assert not PuzzleState.new([[2, 1], [3, None]]).is_solved()


# ---------- Moves ----------
def test_neighbour_counts():
    assert len(PuzzleState.solved(4).neighbours()) == 2
    edge = PuzzleState.new([[1, 2, 3], [4, 5, None], [7, 8, 6]])
    assert len(edge.neighbours()) == 3
    centre = PuzzleState.new([[1, 2, 3], [4, None, 5], [7, 8, 6]])
    assert [m.direction for m in centre.neighbours()] == [
        Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]


def test_neighbour_states():
    goal = PuzzleState.solved(3)
    moves = dict(goal.neighbours())
    assert set(moves) == {Direction.UP, Direction.LEFT}
    assert moves[Direction.UP] == PuzzleState.new([[1, 2, 3], [4, 5, None], [7, 8, 6]])
    assert moves[Direction.LEFT] == PuzzleState.new([[1, 2, 3], [4, 5, 6], [7, None, 8]])
    for d, s in moves.items():
        assert goal.create_neighbour_move_state(d) == s
        assert s.create_neighbour_move_state(d.opposite()) == goal


def test_move_off_board_rejected():
    with pytest.raises(CoordinatesError):
        PuzzleState.solved(4).create_neighbour_move_state(Direction.DOWN)


# ---------- Solvability ----------
def test_parity_permutation():
    p = ParityCheckPermutation.from_numbers([[1, 2], [3, None]])
    assert p.permutation == [1, 2, 3, 4]
    assert p.is_even()
    p = ParityCheckPermutation.from_numbers([[2, 1], [3, None]])
    assert p.permutation == [2, 1, 3, 4]
    assert not p.is_even()
    p = ParityCheckPermutation.from_numbers(
        [[1, 2, 4, 3], [5, 6, 7, 8], [9, 10, 11, 12], [13, 14, None, 15]])
    assert p.is_even()


def test_solvability_matches_reachability_2x2():
    reachable = set(bfs_distances(2))
    for perm in itertools.permutations([1, 2, 3, None]):
        s = PuzzleState.from_flat(list(perm))
        assert s.is_solvable() == (s in reachable), s
    assert len(reachable) == 12


def test_solvability_matches_reachability_3x3(distances3):
    assert len(distances3) == 181440
    rng = random.Random(3)
    cells = list(range(1, 9)) + [None]
    for _ in range(2000):
        rng.shuffle(cells)
        s = PuzzleState.from_flat(cells)
        assert s.is_solvable() == (s in distances3), s


def test_single_swap_from_goal_unsolvable():
    s = PuzzleState.parse("[1,2,4,3,5,6,7,8,9,10,11,12,13,14,15,]")
    assert not s.is_solvable()
    assert PuzzleState.parse("[1,2,3,4,5,6,7,8,9,10,11,12,13,14,,15]").is_solvable()


def test_random_states_solvable():
    for seed in range(20):
        assert generate_random_puzzle_state(60, 4, seed).is_solvable()


# ---------- Text ----------
def test_render():
    assert str(PuzzleState.solved(4)) == GOAL4_TEXT
    assert str(PuzzleState.new([[None, 1], [2, 3]])) == "[, 1, 2, 3]"


def test_parse_compact_form():
    s = PuzzleState.parse("[,2,3,4,1,6,7,8,5,10,11,12,9,13,14,15]")
    assert s.readable_numbers()[0] == (None, 2, 3, 4)
    assert s.blank_position().as_tuple() == (0, 0)


def test_text_round_trip():
    for seed in range(10):
        s = generate_random_puzzle_state(40, 4, seed)
        assert PuzzleState.parse(str(s)) == s
    text = "[5, 1, 2, 3, , 6, 7, 4, 9, 10, 11, 8, 13, 14, 15, 12]"
    assert str(PuzzleState.parse(text)) == text
    assert PuzzleState.parse("[1, 2, 3, ]", size=2) == PuzzleState.solved(2)


@pytest.mark.parametrize("text,error", [
    ("1, 2, 3, ", NoBracketsError),
    ("]1, 2, 3, [", NoBracketsError),
    ("[1, 2, 3]", NotEnoughNumbersError),
    ("[1, 2, 3, , 4]", TooManyNumbersError),
    ("[1, x, 3, ]", NumberParseError),
    ("[1, 1, 3, ]", NotPermutationError),
    ("[1, , 3, ]", TwoBlanksError),
])
def test_parse_errors(text, error):
    with pytest.raises(error):
        PuzzleState.parse(text, size=2)


def test_parse_errors_are_value_errors():
    with pytest.raises(PuzzleStateParseError):
        PuzzleState.parse("[]")
    with pytest.raises(ValueError):
        PuzzleState.parse("no brackets")
