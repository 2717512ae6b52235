"""
Reading and writing grid files.

A grid file holds the number of rows, the number of columns, then
rows*cols cell values in row-major order, all separated by whitespace.
Cells are ``true``/``false`` (any case) or ``1``/``0``; ``format_grid``
writes one grid row per line using ``true``/``false``.

    3
    3
    false true  false
    false true  false
    false true  false
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike

from life import CellState, LifeEngine, MalformedGridError

_TRUE_TOKENS = frozenset({"true", "1"})
_FALSE_TOKENS = frozenset({"false", "0"})


def _parse_cell(token: str, index: int) -> bool:
    word = token.lower()
    if word in _TRUE_TOKENS:
        return True
    if word in _FALSE_TOKENS:
        return False
    raise MalformedGridError(f"cell value #{index} is {token!r}, expected true or false")


def parse_grid(text: str) -> tuple[int, int, list[bool]]:
    """Split grid-file text into (rows, cols, row-major cell values)."""
    tokens = text.split()
    if len(tokens) < 2:
        raise MalformedGridError("grid data must start with the row and column counts")
    try:
        rows, cols = int(tokens[0]), int(tokens[1])
    except ValueError as exc:
        raise MalformedGridError(
            f"grid dimensions must be integers, got {tokens[0]!r} and {tokens[1]!r}"
        ) from exc
    if rows < 1 or cols < 1:
        raise MalformedGridError(f"grid dimensions must be positive, got {rows}x{cols}")

    values = [_parse_cell(tok, i) for i, tok in enumerate(tokens[2:])]
    if len(values) != rows * cols:
        raise MalformedGridError(
            f"a {rows}x{cols} grid needs {rows * cols} cell values, got {len(values)}"
        )
    return rows, cols, values


def load_engine(path: str | Path) -> LifeEngine:
    rows, cols, values = parse_grid(Path(path).read_text())
    return LifeEngine.from_cells(rows, cols, values)


def format_grid(grid: ArrayLike) -> str:
    alive = np.asarray(grid) == CellState.ALIVE
    rows, cols = alive.shape
    lines = [str(rows), str(cols)]
    for line in alive.tolist():
        lines.append(" ".join("true" if cell else "false" for cell in line))
    return "\n".join(lines) + "\n"


def save_grid(path: str | Path, grid: ArrayLike) -> None:
    Path(path).write_text(format_grid(grid))
