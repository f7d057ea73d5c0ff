from __future__ import annotations
from collections import deque
from typing import Dict

import pytest

from slidesolver.domains.puzzle_state import PuzzleState
from slidesolver.heuristics.disjoint_databases.disjoint import DisjointDatabases
from slidesolver.heuristics.manhattan import ManhattanDistance


def bfs_distances(size: int) -> Dict[PuzzleState, int]:
    """Exact distance to the goal for every state reachable from it."""
    goal = PuzzleState.solved(size)
    dist = {goal: 0}
    q = deque([goal])
    while q:
        s = q.popleft()
        for _, s2 in s.neighbours():
            if s2 not in dist:
                dist[s2] = dist[s] + 1
                q.append(s2)
    return dist


@pytest.fixture(scope="session")
def distances3() -> Dict[PuzzleState, int]:
    return bfs_distances(3)


@pytest.fixture(scope="session")
def manhattan4() -> ManhattanDistance:
    return ManhattanDistance(4)


@pytest.fixture(scope="session")
def databases3() -> DisjointDatabases:
    return DisjointDatabases(3, database_path=None)


@pytest.fixture(scope="session")
def databases4(tmp_path_factory) -> DisjointDatabases:
    path = tmp_path_factory.mktemp("pdb") / "15_puzzle.npz"
    return DisjointDatabases(4, database_path=path)
