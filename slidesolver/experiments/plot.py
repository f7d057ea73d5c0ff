#!/usr/bin/env python3
from __future__ import annotations
import argparse
import os
from pathlib import Path
from typing import Optional, Sequence

import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

METRICS = {
    "visited": "Visited states",
    "time_sec": "Runtime (s)",
    "length": "Solution length",
}


def plot_metric(ax, df: pd.DataFrame, metric: str, log_y: bool = True) -> None:
    grouped = df.groupby(["heuristic", "depth"])[metric].agg(["mean", "std"]).reset_index()
    for heur, part in grouped.groupby("heuristic"):
        part = part.sort_values("depth")
        ax.errorbar(part["depth"], part["mean"], yerr=part["std"].fillna(0.0),
                    marker="o", capsize=3, label=heur)
    ax.set_xlabel("Scramble depth")
    ax.set_ylabel(METRICS.get(metric, metric))
    if log_y:
        ax.set_yscale("log")
    ax.grid(True, alpha=0.3)
    ax.legend()


def plot_file(csv_path: Path, out_path: Path, metrics: Sequence[str] = ("visited", "time_sec")) -> Path:
    df = pd.read_csv(csv_path)
    fig, axes = plt.subplots(1, len(metrics), figsize=(5 * len(metrics), 4), squeeze=False)
    for ax, metric in zip(axes[0], metrics):
        plot_metric(ax, df, metric, log_y=metric != "length")
    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Plot heuristic comparison results")
    ap.add_argument("csv", type=Path)
    ap.add_argument("--out", type=Path, default=Path("results/heuristics.png"))
    ap.add_argument("--metrics", nargs="+", choices=list(METRICS), default=["visited", "time_sec"])
    ap.add_argument("--show", action="store_true")
    args = ap.parse_args(argv)

    out = plot_file(args.csv, args.out, args.metrics)
    print(f"Saved {out}")
    if args.show:
        img = plt.imread(out)
        plt.imshow(img)
        plt.axis("off")
        plt.show()


if __name__ == "__main__":
    main()
