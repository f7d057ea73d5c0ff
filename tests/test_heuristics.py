import random

import pytest

from slidesolver.domains.generator import generate_random_puzzle_state
from slidesolver.domains.puzzle_state import PuzzleState
from slidesolver.heuristics.base import DumbHeuristic
from slidesolver.heuristics.manhattan import ManhattanDistance


def test_manhattan_values():
    h = ManhattanDistance(3)
    s = PuzzleState.new([[1, 4, 2], [3, None, 5], [6, 7, 8]])
    assert s.calculate_heuristic(h) == 12
    s = PuzzleState.new([[1, 4, 2], [6, None, 5], [7, 3, 8]])
    assert h.estimate(s) == 10


def test_manhattan_zero_only_at_goal(distances3):
    h = ManhattanDistance(3)
    assert h.estimate(PuzzleState.solved(3)) == 0
    for s in list(distances3)[1:500]:
        assert h.estimate(s) > 0


def test_manhattan_admissible(distances3):
    h = ManhattanDistance(3)
    rng = random.Random(11)
    for s in rng.sample(list(distances3), 3000):
        assert h.estimate(s) <= distances3[s]


def test_manhattan_six_step_board(manhattan4):
    s = PuzzleState.parse("[,2,3,4,1,6,7,8,5,10,11,12,9,13,14,15]")
    assert manhattan4.estimate(s) == 6
    assert manhattan4.estimate(PuzzleState.solved(4)) == 0


def test_manhattan_rejects_other_size(manhattan4):
    with pytest.raises(ValueError):
        manhattan4.estimate(PuzzleState.solved(3))


def test_manhattan_goal_positions():
    h = ManhattanDistance(4)
    assert h.solved_positions[1].as_tuple() == (0, 0)
    assert h.solved_positions[15].as_tuple() == (3, 2)
    assert len(h.solved_positions) == 15


def test_dumb_heuristic():
    s = generate_random_puzzle_state(20, 3, seed=1)
    assert DumbHeuristic().estimate(s) == sum(range(1, 9))
