import pytest

from starbattle.grid import GridModel

# Each row is its own region.
ROWS_10X10_TEXT = "\n".join(str(r) * 10 for r in range(10)) + "\n"

# Regions 1-9 hold exactly two cells each, so the solution below is the only one.
FORCED_10X10_TEXT = "\n".join([
    "0000000000",
    "0010000100",
    "0000200002",
    "0300003000",
    "0004000040",
    "5000050000",
    "0060000600",
    "0000700007",
    "0800008000",
    "0009000090",
]) + "\n"
FORCED_10X10_SOLUTION = [
    (0, 0), (0, 5), (1, 2), (1, 7), (2, 4), (2, 9), (3, 1), (3, 6), (4, 3), (4, 8),
    (5, 0), (5, 5), (6, 2), (6, 7), (7, 4), (7, 9), (8, 1), (8, 6), (9, 3), (9, 8),
]

# Region 0 is the single cell (0, 0), so it can never hold two stars.
UNSOLVABLE_10X10_TEXT = "\n".join(["0111111111", "1111111111"] + [str(r) * 10 for r in range(2, 10)]) + "\n"


@pytest.fixture
def scenario_a():
    """2x2, one star, regions [[A, B], [B, A]]: no solution."""
    return GridModel.from_rows([[0, 1], [1, 0]], 1)


@pytest.fixture
def scenario_b():
    """4x4, one star, one region per row."""
    return GridModel.from_rows([[r] * 4 for r in range(4)], 1)


@pytest.fixture
def rows_10x10_text():
    return ROWS_10X10_TEXT


@pytest.fixture
def forced_10x10_text():
    return FORCED_10X10_TEXT


@pytest.fixture
def forced_10x10_solution():
    return list(FORCED_10X10_SOLUTION)


@pytest.fixture
def unsolvable_10x10_text():
    return UNSOLVABLE_10X10_TEXT


@pytest.fixture
def puzzle_file(tmp_path):
    """Writes puzzle text to a file and returns its path."""
    def _write(text, name="input.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
