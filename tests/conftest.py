import random

import pytest

from maze_lib.generators import generate
from maze_lib.grid import Grid
from maze_lib.topology import Shape


@pytest.fixture
def make_maze():
    """Returns a factory building a generated grid with a fixed seed."""

    def _make(width, height, shape=Shape.QUAD, method="recursive-backtracker", seed=1, mask=None):
        grid = Grid.create(width, height, shape, mask)
        generate(grid, method, random.Random(seed))
        return grid

    return _make
