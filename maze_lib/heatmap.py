# --- maze_lib/heatmap.py ---
import logging
from collections import deque
from typing import Dict, Iterable, Tuple

from .errors import ConfigurationError, TopologyError
from .grid import Grid
from .solver import shortest_path
from .topology import Coordinate

log = logging.getLogger("maze.heatmap")

HEATMAP_KINDS = ("distance", "vertical", "horizontal", "full")


def heatmap(grid: Grid, root: Coordinate) -> Dict[Coordinate, int]:
    """
    Computes the hop distance from root to every room reachable through open walls.

    Rooms in other, disconnected regions of the mask are absent from the result.
    """
    if not grid.contains(root):
        raise TopologyError(f"Heat map root {root} is not part of the maze")
    source = grid.index_of(root)
    distances = {source: 0}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        for other in grid.open_neighbors(current):
            if other not in distances:
                distances[other] = distances[current] + 1
                queue.append(other)
    log.info(
        "Distance field from %s covers %d rooms (max %d).",
        root,
        len(distances),
        max(distances.values()),
    )
    return {grid.coordinate(i): d for i, d in distances.items()}


def _edge_pairs(grid: Grid, kind: str) -> Iterable[Tuple[Coordinate, Coordinate]]:
    w, h = grid.width, grid.height
    if kind == "vertical":
        return [(Coordinate(c, 0), Coordinate(c, h - 1)) for c in range(w)]
    if kind == "horizontal":
        return [(Coordinate(0, r), Coordinate(w - 1, r)) for r in range(h)]
    # Every room on the top or left edge walks to its mirror image.
    return [
        (Coordinate(c, r), Coordinate(w - 1 - c, h - 1 - r))
        for r in range(h)
        for c in range(w)
        if c == 0 or r == 0
    ]


def traversal_heatmap(grid: Grid, kind: str) -> Dict[Coordinate, int]:
    """
    Counts how many edge-to-edge solutions pass through each room.

    Args:
        grid: The generated grid.
        kind: 'vertical' walks every column top to bottom, 'horizontal' every
            row left to right, 'full' every top/left edge room to the room
            mirrored through the center.

    Returns:
        A mapping from coordinate to traversal count, for every room.
    """
    if kind not in ("vertical", "horizontal", "full"):
        raise ConfigurationError(f"Unknown traversal heat map type: {kind}")
    counts = {index: 0 for index in grid.room_indices()}
    walked = skipped = 0
    for start, end in _edge_pairs(grid, kind):
        if not (grid.contains(start) and grid.contains(end)):
            skipped += 1
            continue
        route = shortest_path(grid, start, end)
        if route is None:
            skipped += 1
            continue
        walked += 1
        for index in route:
            counts[index] += 1
    log.info("Traversal heat map '%s': %d paths walked, %d skipped.", kind, walked, skipped)
    return {grid.coordinate(i): c for i, c in counts.items()}
