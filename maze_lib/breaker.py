# --- maze_lib/breaker.py ---
import logging
import random
from typing import List, Tuple

from .errors import ConfigurationError
from .grid import Grid
from .topology import Coordinate

log = logging.getLogger("maze.break")


def closed_inner_walls(grid: Grid) -> List[Tuple[int, int]]:
    """Lists every closed wall between two rooms once, in row-major order."""
    walls = []
    for index in grid.room_indices():
        for wall, other in grid.adjacent(index):
            if index < other and not grid.wall_open(index, wall):
                walls.append((index, wall))
    return walls


def break_walls(grid: Grid, rng: random.Random, count: int) -> List[Tuple[Coordinate, int]]:
    """
    Opens `count` closed inner walls chosen uniformly at random.

    Boundary walls are never candidates, and walls only ever go from closed to
    open, so connectivity can only grow.

    Returns:
        The opened walls as (coordinate, wall index).
    """
    if count < 0:
        raise ConfigurationError(f"Cannot break a negative number of walls: {count}")
    candidates = closed_inner_walls(grid)
    if count > len(candidates):
        log.warning(
            "Asked to break %d walls but only %d are closed; opening all of them.",
            count,
            len(candidates),
        )
        count = len(candidates)

    opened = []
    for index, wall in rng.sample(candidates, count):
        grid.open_wall(index, wall)
        opened.append((grid.coordinate(index), wall))
        log.debug("Opened wall %d of %s.", wall, grid.coordinate(index))
    log.info("Broke %d walls; %d walls are now open.", len(opened), grid.open_wall_count())
    return opened
