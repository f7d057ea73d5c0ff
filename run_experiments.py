#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(cmd):
    print("Running:", cmd)
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("python -m slidesolver.experiments.heuristics_tester --depths 10 20 30 40 --per_depth 20 --out results/heuristics.csv")
    run("python -m slidesolver.experiments.plot results/heuristics.csv --out results/heuristics.png")

if __name__ == "__main__":
    main()
