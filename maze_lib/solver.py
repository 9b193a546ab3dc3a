# --- maze_lib/solver.py ---
import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .errors import UnreachableError
from .grid import Grid
from .topology import Coordinate

log = logging.getLogger("maze.solve")


@dataclass(frozen=True)
class Path:
    """An ordered sequence of rooms joined by open walls."""

    rooms: Tuple[Coordinate, ...]

    def __len__(self):
        return len(self.rooms)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.rooms)

    def __getitem__(self, item):
        return self.rooms[item]

    @property
    def start(self) -> Coordinate:
        return self.rooms[0]

    @property
    def end(self) -> Coordinate:
        return self.rooms[-1]


def shortest_path(grid: Grid, start: Coordinate, end: Coordinate) -> Optional[List[int]]:
    """
    Runs a breadth-first search over open walls.

    Returns:
        The room indices from start to end, or None when end is unreachable.
    """
    source, target = grid.index_of(start), grid.index_of(end)
    came_from = {source: source}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        if current == target:
            break
        for other in grid.open_neighbors(current):
            if other not in came_from:
                came_from[other] = current
                queue.append(other)

    if target not in came_from:
        return None
    route = [target]
    while route[-1] != source:
        route.append(came_from[route[-1]])
    route.reverse()
    return route


def solve(grid: Grid, start: Coordinate, end: Coordinate) -> Path:
    """Returns the shortest path between two rooms; UnreachableError if none."""
    for label, coord in (("start", start), ("end", end)):
        if not grid.contains(coord):
            raise UnreachableError(f"The {label} room {coord} is not part of the maze")

    route = shortest_path(grid, start, end)
    if route is None:
        raise UnreachableError(f"No path from {start} to {end}")
    path = Path(tuple(grid.coordinate(i) for i in route))
    log.info("Solved maze from %s to %s in %d rooms.", start, end, len(path))
    return path


def default_endpoints(grid: Grid) -> Tuple[Coordinate, Coordinate]:
    """Returns the first and last rooms of the maze in row-major order."""
    indices = grid.room_indices()
    if not indices:
        raise UnreachableError("The maze has no rooms to solve")
    return grid.coordinate(indices[0]), grid.coordinate(indices[-1])
