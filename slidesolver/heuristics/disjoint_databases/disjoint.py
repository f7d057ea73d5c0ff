from __future__ import annotations
import logging
import os
import pickle
import zipfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional, Union

import numpy as np

from slidesolver.domains.puzzle_state import (
    BLANK_NUMBER,
    DEFAULT_PUZZLE_SIZE,
    MAX_NUMBER_WIDTH,
    PuzzleState,
)
from slidesolver.heuristics.disjoint_databases.combination import COORD_WIDTH
from slidesolver.heuristics.disjoint_databases.database import UNREACHED, Database

log = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

DATABASE_FORMAT_VERSION = 1
DATABASE_PATH_ENV = "SLIDESOLVER_DATABASE_PATH"


class InconsistentDatabaseError(RuntimeError):
    """A combination that has to be in a pattern database is missing."""


class DatabaseCacheError(ValueError):
    """Persisted databases exist but do not match what is being asked for."""


DEFAULT_DATABASE_PATH = Path("15_puzzle_heuristic_database.npz")


def default_database_path(size: int = DEFAULT_PUZZLE_SIZE) -> Path:
    env = os.environ.get(DATABASE_PATH_ENV)
    if env:
        return Path(env)
    return Path(f"{size * size - 1}_puzzle_heuristic_database.npz")


_LOAD_ERRORS = (OSError, ValueError, KeyError, EOFError, zipfile.BadZipFile, pickle.UnpicklingError)


class DisjointDatabases:
    """
    Disjoint pattern databases: one database per goal row, summed. The last
    row's final cell is the blank's home, so that group ignores its last member.

    Databases are read from `database_path` when possible; otherwise (or with
    `generate_fresh_databases`) they are rebuilt and saved there. Left at
    DEFAULT_DATABASE_PATH, the path comes from `default_database_path(size)`;
    `database_path=None` keeps everything in memory.
    """

    def __init__(self, size: int = DEFAULT_PUZZLE_SIZE, generate_fresh_databases: bool = False,
                 database_path: Optional[PathLike] = DEFAULT_DATABASE_PATH):
        self.size = size
        if database_path is DEFAULT_DATABASE_PATH:
            database_path = default_database_path(size)
        self.database_path: Optional[Path] = None if database_path is None else Path(database_path)

        databases = None
        if self.database_path is not None and not generate_fresh_databases:
            databases = self._try_load(self.database_path)
        if databases is None:
            databases = self.create_fresh_databases(size)
            if self.database_path is not None:
                self._try_save(self.database_path, databases)
        self.databases: List[Database] = databases

    # ---------- Building ----------
    @staticmethod
    def create_fresh_databases(size: int = DEFAULT_PUZZLE_SIZE) -> List[Database]:
        t0 = perf_counter()
        databases = []
        for row in range(size):
            ignore_last = row == size - 1
            databases.append(Database.build(row * size, ignore_last, size))
        log.info("Built %d pattern databases for size %d in %.2fs", size, size, perf_counter() - t0)
        return databases

    def _expected_table_length(self, row: int) -> int:
        tracked = self.size - 1 if row == self.size - 1 else self.size
        return 1 << (COORD_WIDTH * tracked)

    # ---------- Persistence ----------
    def _try_load(self, path: Path) -> Optional[List[Database]]:
        if not path.exists():
            log.info("No pattern databases at %s, building them", path)
            return None
        try:
            databases = self.load(path)
        except _LOAD_ERRORS as e:
            log.warning("Could not read pattern databases from %s (%s), rebuilding", path, e)
            return None
        log.info("Loaded pattern databases from %s", path)
        return databases

    def load(self, path: PathLike) -> List[Database]:
        with np.load(path, allow_pickle=False) as data:
            version = int(data["version"])
            if version != DATABASE_FORMAT_VERSION:
                raise DatabaseCacheError(f"format version {version}, expected {DATABASE_FORMAT_VERSION}")
            size = int(data["size"])
            if size != self.size:
                raise DatabaseCacheError(f"built for size {size}, expected {self.size}")
            databases = []
            for row in range(self.size):
                table = data[f"database_{row}"]
                if table.dtype != np.uint8 or table.shape != (self._expected_table_length(row),):
                    raise DatabaseCacheError(f"database {row} has shape {table.shape} and dtype {table.dtype}")
                databases.append(Database(table.copy(), ignore_last=row == self.size - 1))
        return databases

    def _try_save(self, path: Path, databases: List[Database]) -> None:
        try:
            self.save(path, databases)
        except OSError as e:
            log.warning("Could not save pattern databases to %s: %s", path, e)
            return
        log.info("Saved pattern databases to %s", path)

    def save(self, path: PathLike, databases: Optional[List[Database]] = None) -> None:
        databases = self.databases if databases is None else databases
        path = Path(path)
        if path.parent != Path("."):
            path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        tables = {f"database_{row}": db.distances for row, db in enumerate(databases)}
        # np.savez would append ".npz" to a bare path, so hand it an open file
        try:
            with open(tmp, "wb") as f:
                np.savez_compressed(f, version=np.int64(DATABASE_FORMAT_VERSION),
                                    size=np.int64(self.size), **tables)
            os.replace(tmp, path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

    # ---------- Heuristic ----------
    def estimate(self, puzzle_state: PuzzleState) -> int:
        """
        Sums, over goal rows, the database distance of the cells that row's tiles
        currently occupy. Tile t belongs to group (t-1) // size, field (t-1) % size,
        which is the Combination packing of the group's coordinates.
        """
        n = self.size
        if puzzle_state.size != n:
            raise ValueError(f"Heuristic built for size {n}, got {puzzle_state.size}")
        keys = [0] * n
        numbers = puzzle_state.numbers
        for cell in range(n * n):
            internal = numbers & BLANK_NUMBER
            if internal != BLANK_NUMBER:
                row, field = divmod(internal, n)
                keys[row] |= cell << (COORD_WIDTH * field)
            numbers >>= MAX_NUMBER_WIDTH

        total = 0
        for row, key in enumerate(keys):
            d = self.databases[row].distances[key]
            if d == UNREACHED:
                raise InconsistentDatabaseError(
                    f"Database {row} has no entry for combination {key:#x} of {puzzle_state}"
                )
            total += int(d)
        return total
