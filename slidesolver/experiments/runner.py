#!/usr/bin/env python3
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from slidesolver.domains.errors import PuzzleStateCreationError, PuzzleStateParseError
from slidesolver.domains.generator import generate_random_puzzle_state
from slidesolver.domains.puzzle_state import DEFAULT_PUZZLE_SIZE, MAX_PUZZLE_SIZE, MIN_PUZZLE_SIZE, PuzzleState
from slidesolver.heuristics.base import Heuristic
from slidesolver.heuristics.disjoint_databases.disjoint import DEFAULT_DATABASE_PATH, DisjointDatabases
from slidesolver.heuristics.manhattan import ManhattanDistance
from slidesolver.search.a_star import TIE_BREAKS, solve_with_heuristic

HEURISTICS = ("manhattan_distance", "disjoint_databases")
MAX_STEPS_BACK = 100


def make_heuristic(name: str, size: int = DEFAULT_PUZZLE_SIZE, fresh_databases: bool = False,
                   database_path: Optional[Path] = None) -> Heuristic:
    if name == "manhattan_distance":
        return ManhattanDistance(size)
    if name == "disjoint_databases":
        if database_path is None:
            database_path = DEFAULT_DATABASE_PATH
        return DisjointDatabases(size, generate_fresh_databases=fresh_databases,
                                 database_path=database_path)
    raise ValueError(f"Unknown heuristic {name!r}, expected one of {HEURISTICS}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Optimal sliding puzzle solver (A*)")
    ap.add_argument("puzzle_state", nargs="?", default=None,
                    help="Initial state, e.g. '[1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, , 15]'. "
                         "Random when omitted.")
    ap.add_argument("--heuristic", choices=HEURISTICS, required=True)
    ap.add_argument("--size", type=int, default=DEFAULT_PUZZLE_SIZE,
                    choices=range(MIN_PUZZLE_SIZE, MAX_PUZZLE_SIZE + 1))
    ap.add_argument("--steps_back", type=int, default=MAX_STEPS_BACK,
                    help="Random walk length for a random initial state")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--tie_break", choices=TIE_BREAKS, default="h")
    ap.add_argument("--fresh_databases", action="store_true", help="Rebuild pattern databases")
    ap.add_argument("--database_path", type=Path, default=None)
    ap.add_argument("--verbose", "-v", action="store_true")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.puzzle_state is not None:
        try:
            initial = PuzzleState.parse(args.puzzle_state, args.size)
        except (PuzzleStateParseError, PuzzleStateCreationError) as e:
            print(f"Couldn't parse puzzle state: {e}", file=sys.stderr)
            return 2
    else:
        initial = generate_random_puzzle_state(args.steps_back, args.size, args.seed)

    heuristic = make_heuristic(args.heuristic, args.size, args.fresh_databases, args.database_path)

    print(f"Initial puzzle state: {initial}")
    solution = solve_with_heuristic(initial, heuristic, tie_break=args.tie_break)
    if solution is None:
        print("State unsolvable.")
        return 0

    print(f"Solution steps: {solution.steps}")
    print(f"Solution len: {len(solution.steps)}")
    print(f"Number of visited states: {solution.no_of_visited_states}")
    print(f"Time: {solution.time:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
