#!/usr/bin/env python3
"""
  ∞  L I F E  ∞
  Conway's Game of Life on a torus, with a census of its communities.

  The grid wraps around at every edge: walk off the top and you come back
  at the bottom, walk off the left and you come back at the right. Each
  generation follows the classic B3/S23 rule. Between generations the
  engine can tell you how many separate communities of live cells exist,
  where two live cells belong together if they touch, diagonals and
  wrapped edges included.

  Usage:
    python3 life.py                        # default 5x5 seed, 4 generations
    python3 life.py board.txt -g 20        # load a grid file
    python3 life.py --pattern glider --rows 8 --cols 8 -g 32
    python3 life.py --pattern blinker -g 100 --stop-on-cycle --log

  Grid files hold the row count, the column count, then rows*cols
  true/false values in row-major order, all whitespace separated.
"""

from __future__ import annotations

import argparse
import enum
import itertools
import sys
import time
from collections import deque
from collections.abc import Iterable
from pathlib import Path
from typing import IO, ClassVar

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.ndimage import convolve

from union_find import GridUnionFind


class CellState(enum.IntEnum):
    DEAD = 0
    ALIVE = 1


class CellOutOfRangeError(IndexError):
    """A direct cell lookup fell outside the grid (lookups never wrap)."""


class MalformedGridError(ValueError):
    """Grid data with bad dimensions or the wrong number of cell values."""


# ── Neighbourhood ───────────────────────────────────────────────────────
# The eight Moore offsets around a cell, (0, 0) excluded
MOORE_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)

NEIGHBOR_KERNEL: NDArray = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.int16)

# ── Default seed ────────────────────────────────────────────────────────
# Small 5×5 seed that stays clear of the edges and dies out on generation 4
DEFAULT_SIZE: tuple[int, int] = (5, 5)
DEFAULT_ALIVE: tuple[tuple[int, int], ...] = ((1, 1), (1, 3), (2, 2), (3, 2), (3, 3))

# ── Half-block characters ───────────────────────────────────────────────
UPPER_HALF = "\u2580"  # ▀  top pixel alive
LOWER_HALF = "\u2584"  # ▄  bottom pixel alive
FULL_BLOCK = "\u2588"  # █  both alive
# Indexed by top * 2 + bottom
HALF_BLOCKS: tuple[str, ...] = (" ", LOWER_HALF, UPPER_HALF, FULL_BLOCK)

# ── Pattern library ─────────────────────────────────────────────────────
PATTERNS: dict[str, list[tuple[int, int]]] = {
    "block": [(0, 0), (0, 1), (1, 0), (1, 1)],
    "beehive": [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)],
    "blinker": [(0, 0), (0, 1), (0, 2)],
    "toad": [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)],
    "beacon": [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)],
    "glider": [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)],
    "lwss": [
        (0, 1), (0, 4), (1, 0), (2, 0), (2, 4),
        (3, 0), (3, 1), (3, 2), (3, 3),
    ],
    "r_pentomino": [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
    "diehard": [(0, 6), (1, 0), (1, 1), (2, 1), (2, 5), (2, 6), (2, 7)],
    "pentadecathlon": [
        (0, 1), (1, 1), (2, 0), (2, 2), (3, 1), (4, 1),
        (5, 1), (6, 1), (7, 0), (7, 2), (8, 1), (9, 1),
    ],
}

CYCLE_WINDOW = 60  # grid hashes kept for cycle detection
MAX_CYCLE_PERIOD = 30

LOG_PATH = Path(__file__).resolve().parent / "life_stats.csv"


# ═══════════════════════════════════════════════════════════════════════
#  Stats logger
# ═══════════════════════════════════════════════════════════════════════

class StatsLogger:
    """Writes per-generation telemetry to CSV."""

    HEADER: ClassVar[str] = "gen,time_s,alive,communities,event\n"

    def __init__(self, path: Path) -> None:
        self._path = path
        self._fh: IO[str] | None = None
        self._t0: float = time.monotonic()

    def open(self) -> None:
        try:
            self._fh = open(self._path, "w")
            self._fh.write(self.HEADER)
            self._fh.flush()
        except OSError:
            self._fh = None

    def log(self, gen: int, alive: int, communities: int, event: str = "") -> None:
        if self._fh is None:
            return
        t = time.monotonic() - self._t0
        self._fh.write(f"{gen},{t:.3f},{alive},{communities},{event}\n")
        # Flush on events or periodically
        if event or gen % 50 == 0:
            try:
                self._fh.flush()
            except OSError:
                pass

    def close(self) -> None:
        if self._fh is not None:
            try:
                self._fh.close()
            except OSError:
                pass
            self._fh = None


# ═══════════════════════════════════════════════════════════════════════
#  The universe
# ═══════════════════════════════════════════════════════════════════════

def _check_dimensions(rows: object, cols: object) -> None:
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise MalformedGridError(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise MalformedGridError(f"{name} must be positive, got {value}")


class LifeEngine:
    """
    A fixed-size toroidal Game of Life.

    The engine owns its grid outright. Everything handed out is a copy, and
    the grid only ever changes by being replaced whole in
    ``next_generation``, so no caller can observe a half-computed step.

    Build one with ``LifeEngine()`` for the default 5×5 seed, or with
    ``from_cells``, ``from_array`` or ``from_pattern``.
    """

    def __init__(self) -> None:
        grid = np.zeros(DEFAULT_SIZE, dtype=np.int8)
        for row, col in DEFAULT_ALIVE:
            grid[row, col] = CellState.ALIVE
        self._adopt(grid)

    # ── Construction ────────────────────────────────────────────────

    @classmethod
    def _from_grid(cls, grid: NDArray[np.int8]) -> LifeEngine:
        engine = cls.__new__(cls)
        engine._adopt(grid)
        return engine

    def _adopt(self, grid: NDArray[np.int8]) -> None:
        self._grid: NDArray[np.int8] = grid
        self.generation: int = 0
        self._recount()

    @classmethod
    def from_cells(cls, rows: int, cols: int, values: Iterable[object]) -> LifeEngine:
        """
        Build from dimensions and exactly ``rows * cols`` cell values in
        row-major order. Truthy values are ALIVE, falsy values DEAD.
        """
        _check_dimensions(rows, cols)
        n = rows * cols
        # Read one past the end so surplus values are caught without
        # draining an unbounded iterator
        cells = [bool(v) for v in itertools.islice(values, n + 1)]
        if len(cells) < n:
            raise MalformedGridError(
                f"a {rows}x{cols} grid needs {n} cell values, got {len(cells)}"
            )
        if len(cells) > n:
            raise MalformedGridError(f"a {rows}x{cols} grid needs {n} cell values, got more")
        grid = np.array(cells, dtype=np.int8).reshape(rows, cols)
        return cls._from_grid(grid)

    @classmethod
    def from_array(cls, array: ArrayLike) -> LifeEngine:
        """Build from any 2-D array-like of booleans or 0/1 values."""
        try:
            cells = np.asarray(array, dtype=bool)
        except (TypeError, ValueError) as exc:
            raise MalformedGridError(f"cannot read grid values: {exc}") from exc
        if cells.ndim != 2:
            raise MalformedGridError(f"grid must be 2-D, got {cells.ndim} dimensions")
        _check_dimensions(*cells.shape)
        return cls._from_grid(cells.astype(np.int8))

    @classmethod
    def from_pattern(
        cls,
        name: str,
        rows: int,
        cols: int,
        top: int = 0,
        left: int = 0,
        rotation: int = 0,
    ) -> LifeEngine:
        """
        Stamp a pattern from ``PATTERNS`` onto a dead grid with its origin at
        (top, left). ``rotation`` counts quarter turns. Cells that fall past
        an edge wrap around like everything else on the torus.
        """
        cells = PATTERNS[name]
        _check_dimensions(rows, cols)
        grid = np.zeros((rows, cols), dtype=np.int8)
        for dy, dx in cells:
            for _ in range(rotation % 4):
                dy, dx = dx, -dy
            grid[(top + dy) % rows, (left + dx) % cols] = CellState.ALIVE
        return cls._from_grid(grid)

    # ── Accessors ───────────────────────────────────────────────────

    @property
    def rows(self) -> int:
        return self._grid.shape[0]

    @property
    def cols(self) -> int:
        return self._grid.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def total_alive_cells(self) -> int:
        return self._alive

    def grid(self) -> NDArray[np.int8]:
        """Read-only copy of the current grid."""
        snapshot = self._grid.copy()
        snapshot.flags.writeable = False
        return snapshot

    def cell_state(self, row: int, col: int) -> CellState:
        """State of one cell. Unlike neighbour lookups this does not wrap."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise CellOutOfRangeError(
                f"cell ({row}, {col}) is outside the {self.rows}x{self.cols} grid"
            )
        return CellState(int(self._grid[row, col]))

    def is_alive(self) -> bool:
        """True if any cell is ALIVE."""
        for line in self._grid:
            if (line == CellState.ALIVE).any():
                return True
        return False

    def alive_cells(self) -> list[tuple[int, int]]:
        """Coordinates of every ALIVE cell, row-major."""
        return [
            (int(r), int(c)) for r, c in np.argwhere(self._grid == CellState.ALIVE)
        ]

    def _recount(self) -> None:
        self._alive: int = int(np.count_nonzero(self._grid == CellState.ALIVE))

    # ── Neighbours ──────────────────────────────────────────────────

    def alive_neighbors(self, row: int, col: int) -> int:
        """Number of ALIVE cells among the eight toroidal neighbours of (row, col)."""
        rows, cols = self.shape
        g = self._grid
        return sum(
            1
            for dr, dc in MOORE_OFFSETS
            if g[(row + dr) % rows, (col + dc) % cols] == CellState.ALIVE
        )

    def neighbor_counts(self) -> NDArray[np.int16]:
        """``alive_neighbors`` for every cell at once."""
        # Wrap-pad by one cell so the kernel sees the torus, then crop.
        # np.pad repeats the grid as needed, so 1- and 2-wide tori alias
        # neighbours exactly like the modulo lookups do.
        padded = np.pad(self._grid, 1, mode="wrap").astype(np.int16)
        n = convolve(padded, NEIGHBOR_KERNEL, mode="constant", cval=0)
        return n[1:-1, 1:-1]

    # ── Simulation ──────────────────────────────────────────────────

    def compute_new_grid(self) -> NDArray[np.int8]:
        """
        The next generation as a new array; the engine is left untouched.

        Every count comes from the current generation:
          n <= 1  DEAD  (underpopulation)
          n >= 4  DEAD  (overpopulation)
          n == 3  ALIVE (survival or birth)
          n == 2  unchanged
        """
        n = self.neighbor_counts()
        new = self._grid.copy()
        new[n <= 1] = CellState.DEAD
        new[n >= 4] = CellState.DEAD
        new[n == 3] = CellState.ALIVE
        return new

    def next_generation(self, n: int = 1) -> None:
        """Advance ``n`` generations, one full step at a time."""
        if n < 0:
            raise ValueError(f"generation count must be non-negative, got {n}")
        for _ in range(n):
            self._grid = self.compute_new_grid()
            self.generation += 1
            self._recount()

    # ── Communities ─────────────────────────────────────────────────

    def _link_alive(self) -> tuple[GridUnionFind, list[tuple[int, int]]]:
        rows, cols = self.shape
        uf = GridUnionFind(rows, cols)
        alive = self._grid == CellState.ALIVE
        cells = self.alive_cells()
        for row, col in cells:
            for dr, dc in MOORE_OFFSETS:
                r, c = (row + dr) % rows, (col + dc) % cols
                if alive[r, c]:
                    uf.union(row, col, r, c)
        return uf, cells

    def num_communities(self) -> int:
        """Number of connected groups of ALIVE cells (8-connected, wrapping)."""
        uf, cells = self._link_alive()
        return len({uf.find(row, col) for row, col in cells})

    def communities(self) -> list[list[tuple[int, int]]]:
        """Member cells of each community, ordered by each group's first cell."""
        uf, cells = self._link_alive()
        groups: dict[int, list[tuple[int, int]]] = {}
        for row, col in cells:
            groups.setdefault(uf.find(row, col), []).append((row, col))
        return list(groups.values())

    def __repr__(self) -> str:
        return (
            f"LifeEngine({self.rows}x{self.cols}, generation={self.generation}, "
            f"alive={self._alive})"
        )


def detect_cycle(history: deque[int], max_period: int = MAX_CYCLE_PERIOD) -> int:
    """
    Period of the repeat ending at the newest grid hash, or 0 if none.

    ``history`` holds one hash per generation, newest last.
    """
    hh_len = len(history)
    if hh_len < 2:
        return 0
    latest = history[-1]
    for period in range(1, min(max_period + 1, hh_len)):
        if history[-(period + 1)] == latest:
            return period
    return 0


# ═══════════════════════════════════════════════════════════════════════
#  Rendering
# ═══════════════════════════════════════════════════════════════════════

def render_text(grid: ArrayLike) -> str:
    """Draw a grid with half-block characters, two grid rows per line."""
    alive = np.asarray(grid) == CellState.ALIVE
    rows = alive.shape[0]
    lines: list[str] = []
    for y in range(0, rows, 2):
        top = alive[y]
        bot = alive[y + 1] if y + 1 < rows else np.zeros_like(top)
        lines.append("".join(HALF_BLOCKS[t * 2 + b] for t, b in zip(top.tolist(), bot.tolist())))
    return "\n".join(lines)


def _status_line(engine: LifeEngine, event: str = "") -> str:
    line = (
        f"gen {engine.generation}  alive {engine.total_alive_cells}  "
        f"communities {engine.num_communities()}"
    )
    return f"{line}  [{event}]" if event else line


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Conway's Game of Life on a torus")
    parser.add_argument("file", nargs="?", default=None,
                        help="Grid file: rows, cols, then rows*cols true/false values")
    parser.add_argument("-g", "--generations", type=int, default=4,
                        help="Generations to run (default: 4)")
    parser.add_argument("--pattern", choices=sorted(PATTERNS), default=None,
                        help="Seed an empty grid with a named pattern")
    parser.add_argument("--rows", type=int, default=16,
                        help="Grid rows for --pattern (default: 16)")
    parser.add_argument("--cols", type=int, default=16,
                        help="Grid cols for --pattern (default: 16)")
    parser.add_argument("--at", type=int, nargs=2, default=(1, 1), metavar=("ROW", "COL"),
                        help="Where to place the pattern's origin (default: 1 1)")
    parser.add_argument("--delay", type=float, default=0.0,
                        help="Milliseconds to sleep between generations")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only print status lines, not the grid")
    parser.add_argument("--stop-on-cycle", action="store_true",
                        help="Stop as soon as a repeating state is detected")
    parser.add_argument("--log", type=Path, nargs="?", const=LOG_PATH, default=None,
                        help=f"Write per-generation stats as CSV (default path: {LOG_PATH.name})")
    args = parser.parse_args(argv)

    if args.file and args.pattern:
        parser.error("give either a grid file or --pattern, not both")
    if args.generations < 0:
        parser.error("--generations must be non-negative")

    # Imported here: life_io builds engines from this module
    from life_io import load_engine

    try:
        if args.file:
            engine = load_engine(args.file)
        elif args.pattern:
            top, left = args.at
            engine = LifeEngine.from_pattern(args.pattern, args.rows, args.cols, top, left)
        else:
            engine = LifeEngine()
    except (OSError, ValueError) as exc:
        # ValueError covers MalformedGridError whichever way this module was loaded
        print(f"life: {exc}", file=sys.stderr)
        return 1

    logger = StatsLogger(args.log) if args.log is not None else None
    if logger is not None:
        logger.open()

    history: deque[int] = deque(maxlen=CYCLE_WINDOW)
    history.append(hash(engine.grid().tobytes()))

    def show(event: str = "") -> None:
        if not args.quiet:
            print(render_text(engine.grid()))
        print(_status_line(engine, event))

    try:
        show()
        if logger is not None:
            logger.log(engine.generation, engine.total_alive_cells, engine.num_communities())

        for _ in range(args.generations):
            engine.next_generation()
            history.append(hash(engine.grid().tobytes()))

            event = ""
            if not engine.is_alive():
                event = "extinct"
            else:
                period = detect_cycle(history)
                if period:
                    event = f"cycle={period}"

            show(event)
            if logger is not None:
                logger.log(engine.generation, engine.total_alive_cells,
                           engine.num_communities(), event)

            if event == "extinct" or (event and args.stop_on_cycle):
                break
            if args.delay > 0:
                time.sleep(args.delay / 1000.0)
    finally:
        if logger is not None:
            logger.close()

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass
