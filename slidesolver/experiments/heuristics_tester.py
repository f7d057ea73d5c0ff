#!/usr/bin/env python3
"""Compares heuristics on random instances of increasing scramble depth."""
from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd

from slidesolver.domains.generator import generate_random_puzzle_state
from slidesolver.domains.puzzle_state import DEFAULT_PUZZLE_SIZE
from slidesolver.experiments.runner import HEURISTICS, make_heuristic
from slidesolver.heuristics.base import Heuristic
from slidesolver.search.a_star import solve_with_heuristic

log = logging.getLogger(__name__)

COLUMNS = ["heuristic", "depth", "seed", "length", "visited", "generated", "time_sec"]


def run_comparison(heuristics: Mapping[str, Heuristic], depths: Sequence[int], per_depth: int,
                   size: int = DEFAULT_PUZZLE_SIZE, start_seed: int = 0) -> pd.DataFrame:
    """One row per (instance, heuristic); every heuristic sees the same instances."""
    rows: List[Dict] = []
    seed = start_seed
    for depth in depths:
        for _ in range(per_depth):
            state = generate_random_puzzle_state(depth, size, seed)
            for name, h in heuristics.items():
                sol = solve_with_heuristic(state, h)
                if sol is None:
                    raise RuntimeError(f"Generated state {state} reported unsolvable")
                rows.append({
                    "heuristic": name, "depth": depth, "seed": seed,
                    "length": len(sol.steps), "visited": sol.no_of_visited_states,
                    "generated": sol.generated, "time_sec": sol.time,
                })
            seed += 1
        log.info("depth %d done (%d instances)", depth, per_depth)
    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    return (df.groupby(["heuristic", "depth"])[["length", "visited", "time_sec"]]
              .mean()
              .reset_index())


def length_mismatches(df: pd.DataFrame) -> pd.DataFrame:
    """Instances where the heuristics returned routes of different lengths."""
    spread = df.groupby(["depth", "seed"])["length"].agg(["min", "max"])
    return spread[spread["min"] != spread["max"]].reset_index()


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Heuristic comparison on random sliding puzzles")
    ap.add_argument("--heuristics", nargs="+", choices=HEURISTICS, default=list(HEURISTICS))
    ap.add_argument("--depths", type=int, nargs="+", default=list(range(10, 75, 5)))
    ap.add_argument("--per_depth", type=int, default=100)
    ap.add_argument("--size", type=int, default=DEFAULT_PUZZLE_SIZE)
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--database_path", type=Path, default=None)
    ap.add_argument("--out", type=Path, default=Path("results/heuristics.csv"))
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    heuristics = {name: make_heuristic(name, args.size, database_path=args.database_path)
                  for name in args.heuristics}
    df = run_comparison(heuristics, args.depths, args.per_depth, args.size, args.seed)

    args.out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.out, index=False)
    print(summarize(df).to_string(index=False))
    bad = length_mismatches(df)
    if not bad.empty:
        print(f"WARNING: {len(bad)} instances with differing solution lengths")
    print(f"Wrote {args.out} ({len(df)} rows)")


if __name__ == "__main__":
    main()
