import pytest

from life import CellState, LifeEngine


@pytest.fixture
def make_engine():
    """Build an engine of the given size with ALIVE cells at the listed coordinates."""

    def build(rows, cols, alive=()):
        values = [CellState.DEAD] * (rows * cols)
        for row, col in alive:
            values[row * cols + col] = CellState.ALIVE
        return LifeEngine.from_cells(rows, cols, values)

    return build


@pytest.fixture
def default_engine():
    return LifeEngine()


BLINKER_FILE = """5
5
false false false false false
false false true  false false
false false true  false false
false false true  false false
false false false false false
"""


@pytest.fixture
def blinker_file(tmp_path):
    """A grid file holding a vertical blinker in a 5x5 torus."""
    path = tmp_path / "blinker.txt"
    path.write_text(BLINKER_FILE)
    return path
