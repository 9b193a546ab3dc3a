# --- maze_lib/generators.py ---
"""
maze_lib/generators.py: Randomized maze generation algorithms.

Every algorithm opens walls of a fully closed grid until each connected region
of the (masked) room graph is connected through open walls. All random
choices are drawn from the ``random.Random`` passed in, and candidates are
always listed in row-major order, so a seed reproduces a maze exactly.
"""
import logging
import random
from collections import deque
from typing import Callable, Dict, List, Optional

import numpy as np

from .errors import ConfigurationError
from .grid import NO_ROOM, Grid

log = logging.getLogger("maze.generate")


def _allowed(grid: Grid, rooms: Optional[np.ndarray]) -> np.ndarray:
    """Returns the room flags an algorithm may carve, restricted to rooms if given."""
    present = grid.presence()
    return present if rooms is None else present & rooms


def _random_room(rng: random.Random, candidates: np.ndarray) -> Optional[int]:
    """Returns a random index whose candidate flag is set, or None."""
    remaining = np.flatnonzero(candidates)
    if remaining.size == 0:
        return None
    return int(remaining[rng.randrange(remaining.size)])


def recursive_backtracker(grid: Grid, rng: random.Random, rooms: Optional[np.ndarray] = None):
    """
    Carves long winding corridors with a depth-first walk.

    The walk keeps an explicit stack of rooms instead of recursing. When the
    stack runs dry while rooms remain, the mask is segmented and the walk
    restarts in a random unvisited room.
    """
    candidates = _allowed(grid, rooms)
    current = _random_room(rng, candidates)
    stack: List[int] = []
    while current is not None:
        candidates[current] = False
        options = [(wall, other) for wall, other in grid.adjacent(current) if candidates[other]]
        if options:
            wall, other = options[rng.randrange(len(options))]
            grid.open_wall(current, wall)
            stack.append(current)
            current = other
        elif stack:
            current = stack.pop()
        else:
            current = _random_room(rng, candidates)


def prim(grid: Grid, rng: random.Random, rooms: Optional[np.ndarray] = None):
    """
    Grows the maze from a seed room with the randomized Prim algorithm.

    The frontier holds rooms next to the carved area. A random frontier room
    is joined to a random carved neighbour, and its own uncarved neighbours
    join the frontier.
    """
    allowed = _allowed(grid, rooms)
    remaining = allowed.copy()
    carved = np.zeros_like(remaining)
    in_frontier = np.zeros_like(remaining)

    while True:
        start = _random_room(rng, remaining)
        if start is None:
            break
        carved[start] = True
        remaining[start] = False
        frontier: List[int] = []

        def extend(index):
            for _, other in grid.adjacent(index):
                if allowed[other] and not carved[other] and not in_frontier[other]:
                    in_frontier[other] = True
                    frontier.append(other)

        extend(start)
        while frontier:
            pick = rng.randrange(len(frontier))
            room = frontier[pick]
            frontier[pick] = frontier[-1]
            frontier.pop()
            links = [(wall, other) for wall, other in grid.adjacent(room) if carved[other]]
            wall, _ = links[rng.randrange(len(links))]
            grid.open_wall(room, wall)
            carved[room] = True
            remaining[room] = False
            extend(room)


def _region(grid: Grid, start: int, allowed: np.ndarray) -> List[int]:
    """Returns the allowed rooms reachable from start, BFS order."""
    seen = {start}
    order, queue = [], deque([start])
    while queue:
        current = queue.popleft()
        order.append(current)
        for _, other in grid.adjacent(current):
            if allowed[other] and other not in seen:
                seen.add(other)
                queue.append(other)
    return order


def wilson(grid: Grid, rng: random.Random, rooms: Optional[np.ndarray] = None):
    """
    Builds a uniform spanning tree with loop-erased random walks.

    From each room not yet in the tree a random walk runs until it hits the
    tree; only the last exit taken from every room is remembered, which erases
    the loops, and the remaining path is carved into the tree.
    """
    allowed = _allowed(grid, rooms)
    remaining = allowed.copy()
    in_tree = np.zeros_like(remaining)

    while True:
        root = _random_room(rng, remaining)
        if root is None:
            break
        in_tree[root] = True
        remaining[root] = False
        for start in _region(grid, root, allowed):
            if in_tree[start]:
                continue
            exits: Dict[int, tuple] = {}
            current = start
            while not in_tree[current]:
                options = [(w, o) for w, o in grid.adjacent(current) if allowed[o]]
                wall, other = options[rng.randrange(len(options))]
                exits[current] = (wall, other)
                current = other

            current = start
            while not in_tree[current]:
                wall, other = exits[current]
                grid.open_wall(current, wall)
                in_tree[current] = True
                remaining[current] = False
                current = other


def _inner_walls(grid: Grid, rooms: Optional[np.ndarray] = None) -> List[tuple]:
    """Lists each wall between two existing rooms once, as (index, wall)."""
    allowed = _allowed(grid, rooms)
    walls = []
    for index in np.flatnonzero(allowed):
        index = int(index)
        for wall, other in grid.adjacent(index):
            if index < other and allowed[other]:
                walls.append((index, wall))
    return walls


def clear(grid: Grid, rng: random.Random, rooms: Optional[np.ndarray] = None):
    """Opens every wall between two rooms of the maze."""
    for index, wall in _inner_walls(grid, rooms):
        grid.open_wall(index, wall)


def connect_all(grid: Grid, rng: random.Random, rooms: Optional[np.ndarray] = None):
    """
    Opens one random wall between every pair of adjacent, separated areas.

    Areas are the connected components over open walls. Pairs are visited in
    order of their lowest room index so the result is reproducible. With rooms
    given, only walls between two of those rooms are candidates.
    """
    area = {}
    for number, component in enumerate(grid.components()):
        for index in component:
            area[index] = number

    borders: Dict[tuple, List[tuple]] = {}
    for index, wall in _inner_walls(grid, rooms):
        other = grid.neighbor_index(index, wall)
        a, b = area[index], area[other]
        if a != b:
            borders.setdefault((min(a, b), max(a, b)), []).append((index, wall))

    for key in sorted(borders):
        index, wall = borders[key][rng.randrange(len(borders[key]))]
        grid.open_wall(index, wall)
    if borders:
        log.debug("Connected %d area borders.", len(borders))


def braid(grid: Grid, rng: random.Random, rooms: Optional[np.ndarray] = None):
    """
    Builds a maze with loops and no dead ends.

    Starts from a cleared grid, then closes walls in random order as long as
    both rooms keep more than two openings, and finally reconnects any areas
    the closing separated.
    """
    clear(grid, rng, rooms)
    walls = _inner_walls(grid, rooms)
    rng.shuffle(walls)
    for index, wall in walls:
        other = grid.neighbor_index(index, wall)
        if grid.open_walls_of(index) > 2 and grid.open_walls_of(other) > 2:
            grid.close_wall(index, wall)
    connect_all(grid, rng, rooms)


def partition(grid: Grid, count: int, rng: random.Random) -> np.ndarray:
    """
    Splits the rooms into count weighted Voronoi cells.

    Every cell gets a random centre inside the viewbox and a weight in
    [0.5, 1.5). A room joins the cell with the smallest squared distance from
    its center divided by the weight.

    Returns:
        The cell number of every arena index; NO_ROOM where no room exists.
    """
    min_x, min_y, width, height = grid.viewbox()
    seeds = np.array(
        [
            (min_x + rng.random() * width, min_y + rng.random() * height, rng.random() + 0.5)
            for _ in range(count)
        ]
    )
    labels = np.full(grid.width * grid.height, NO_ROOM, dtype=np.int32)
    indices = grid.room_indices()
    if not indices:
        return labels
    centers = np.array([(p.x, p.y) for p in map(grid.center, map(grid.coordinate, indices))])
    dx = centers[:, 0, None] - seeds[None, :, 0]
    dy = centers[:, 1, None] - seeds[None, :, 1]
    labels[indices] = np.argmin((dx * dx + dy * dy) / seeds[None, :, 2], axis=1)
    return labels


METHODS: Dict[str, Callable[..., None]] = {
    "recursive-backtracker": recursive_backtracker,
    "prim": prim,
    "wilson": wilson,
    "braid": braid,
    "clear": clear,
}

ALIASES = {
    "winding": "recursive-backtracker",
    "depth-first": "recursive-backtracker",
    "branching": "prim",
}

# Methods whose result contains no loops.
TREE_METHODS = frozenset({"recursive-backtracker", "prim", "wilson"})


def _canonical(part: str, name: str) -> str:
    key = part.strip().lower().replace("_", "-")
    key = ALIASES.get(key, key)
    if key not in METHODS:
        known = ", ".join(sorted(set(METHODS) | set(ALIASES)))
        raise ConfigurationError(
            f"Unknown method '{part.strip()}' in '{name}'. Known methods: {known}"
        )
    return key


def method_names(name: str) -> List[str]:
    """Splits a comma-separated method list into canonical names."""
    if not name or not name.strip():
        raise ConfigurationError("A generation method is required")
    return [_canonical(part, name) for part in name.split(",")]


def resolve_method(name: str) -> str:
    """
    Returns the canonical method name; ConfigurationError if unknown.

    A comma-separated list resolves to its canonical names joined by commas.
    """
    return ",".join(method_names(name))


def generate(grid: Grid, method: str, rng: random.Random) -> str:
    """
    Opens walls of a closed grid with the named algorithm.

    With several methods, the rooms are split into one Voronoi cell per
    method, each cell is carved by its own method, and the cells are then
    joined with connect_all.

    Args:
        grid: The grid to carve; walls already open are kept.
        method: A method name or alias, or a comma-separated list of them.
        rng: The seeded random source.

    Returns:
        The canonical method name that was run.
    """
    names = method_names(method)
    key = ",".join(names)
    if grid.room_count() < 2:
        log.info("Grid has %d room(s); nothing to generate.", grid.room_count())
        return key
    log.info("Generating maze with '%s' over %d rooms...", key, grid.room_count())
    if len(names) == 1:
        METHODS[key](grid, rng)
    else:
        labels = partition(grid, len(names), rng)
        for number, name in enumerate(names):
            cell = labels == number
            log.debug("Cell %d: '%s' over %d rooms.", number, name, int(np.count_nonzero(cell)))
            METHODS[name](grid, rng, cell)
        connect_all(grid, rng)
    log.info("Generation complete: %d open walls.", grid.open_wall_count())
    return key
