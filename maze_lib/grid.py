# --- maze_lib/grid.py ---
"""
maze_lib/grid.py: The room graph.

Rooms live in a flat arena indexed by ``row * width + col``. Wall state is a
bitmask per room; a logical wall is stored on both of its rooms and every
mutation writes both sides in the same call. Two lookup tables, built once,
map (room, wall) to the neighbouring room and to the wall index on the other
side.
"""
import logging
from collections import deque
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .errors import ConfigurationError, TopologyError
from .topology import Coordinate, Point, Shape, Topology

log = logging.getLogger("maze.grid")

NO_ROOM = -1


class Grid:
    """A rectangle of rooms of one shape, optionally restricted by a mask."""

    def __init__(self, topology: Topology, width: int, height: int, mask=None):
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Invalid maze size {width}x{height}")
        if mask is not None and (mask.width, mask.height) != (width, height):
            raise ConfigurationError(
                f"Mask size {mask.width}x{mask.height} does not match "
                f"maze size {width}x{height}"
            )
        self.topology = topology
        self.width = width
        self.height = height
        self.mask = mask

        size = width * height
        arity = topology.arity
        self._present = np.zeros(size, dtype=bool)
        for row in range(height):
            for col in range(width):
                coord = Coordinate(col, row)
                self._present[row * width + col] = mask is None or coord in mask

        self._walls = np.zeros(size, dtype=np.uint8)
        self._neighbors = np.full((size, arity), NO_ROOM, dtype=np.int32)
        self._back = np.full((size, arity), NO_ROOM, dtype=np.int8)
        for index in np.flatnonzero(self._present):
            coord = self.coordinate(int(index))
            for wall in range(arity):
                other, back = topology.back(coord, wall)
                if self._inside(other) and self._present[self._index(other)]:
                    self._neighbors[index, wall] = self._index(other)
                    self._back[index, wall] = back

        self._indices = [int(i) for i in np.flatnonzero(self._present)]
        log.info(
            "Allocated %dx%d %s grid with %d of %d rooms.",
            width,
            height,
            topology.shape.name,
            len(self._indices),
            size,
        )

    @classmethod
    def create(cls, width: int, height: int, shape=Shape.QUAD, mask=None) -> "Grid":
        """Allocates a grid with all walls closed."""
        return cls(Topology(shape), width, height, mask)

    @property
    def shape(self) -> Shape:
        return self.topology.shape

    # --- Index-level API used by the algorithms ---

    def _inside(self, coord: Coordinate) -> bool:
        return 0 <= coord.col < self.width and 0 <= coord.row < self.height

    def _index(self, coord: Coordinate) -> int:
        return coord.row * self.width + coord.col

    def index_of(self, coord: Coordinate) -> int:
        """Returns the arena index of a room; TopologyError if it does not exist."""
        if not self.contains(coord):
            raise TopologyError(f"No room at {coord}")
        return self._index(coord)

    def coordinate(self, index: int) -> Coordinate:
        return Coordinate(index % self.width, index // self.width)

    def room_indices(self) -> List[int]:
        """Returns the indices of all rooms in row-major order."""
        return list(self._indices)

    def presence(self) -> np.ndarray:
        """Returns a copy of the per-index room existence flags."""
        return self._present.copy()

    def adjacent(self, index: int) -> List[Tuple[int, int]]:
        """Returns (wall, neighbour index) for every existing neighbour."""
        return [
            (wall, int(other))
            for wall, other in enumerate(self._neighbors[index])
            if other != NO_ROOM
        ]

    def _check_wall(self, index: int, wall: int):
        if not 0 <= wall < self.topology.arity:
            raise TopologyError(
                f"{self.coordinate(index)} has no wall {wall}; "
                f"{self.shape.name} rooms have walls 0-{self.topology.arity - 1}"
            )

    def neighbor_index(self, index: int, wall: int) -> int:
        self._check_wall(index, wall)
        return int(self._neighbors[index, wall])

    def wall_open(self, index: int, wall: int) -> bool:
        self._check_wall(index, wall)
        return bool(self._walls[index] & (1 << wall))

    def open_wall(self, index: int, wall: int):
        self._set_wall(index, wall, True)

    def close_wall(self, index: int, wall: int):
        self._set_wall(index, wall, False)

    def _set_wall(self, index: int, wall: int, value: bool):
        self._check_wall(index, wall)
        other = int(self._neighbors[index, wall])
        if other == NO_ROOM:
            if value:
                raise TopologyError(
                    f"Wall {wall} of {self.coordinate(index)} is a boundary wall"
                )
            return
        # Plain ints: shifting an int8 scalar overflows under NumPy 2.
        back = int(self._back[index, wall])
        if value:
            self._walls[index] |= np.uint8(1 << wall)
            self._walls[other] |= np.uint8(1 << back)
        else:
            self._walls[index] &= np.uint8(~(1 << wall) & 0xFF)
            self._walls[other] &= np.uint8(~(1 << back) & 0xFF)

    def open_walls_of(self, index: int) -> int:
        """Returns the number of open walls of a room."""
        return bin(int(self._walls[index])).count("1")

    def open_neighbors(self, index: int) -> List[int]:
        """Returns the neighbour indices reachable through open walls."""
        bits = int(self._walls[index])
        return [
            int(other)
            for wall, other in enumerate(self._neighbors[index])
            if bits & (1 << wall)
        ]

    def wall_state(self) -> np.ndarray:
        """Returns a copy of the raw wall bitmasks."""
        return self._walls.copy()

    # --- Coordinate-level API ---

    def contains(self, coord: Coordinate) -> bool:
        return self._inside(coord) and bool(self._present[self._index(coord)])

    def __contains__(self, coord) -> bool:
        return self.contains(coord)

    def room_count(self) -> int:
        return len(self._indices)

    def coordinates(self) -> Iterator[Coordinate]:
        """Yields the coordinates of all rooms in row-major order."""
        for index in self._indices:
            yield self.coordinate(index)

    def neighbors(self, coord: Coordinate) -> List[Tuple[int, Coordinate]]:
        """Returns (wall index, neighbour) for every neighbour that exists."""
        index = self.index_of(coord)
        return [(wall, self.coordinate(other)) for wall, other in self.adjacent(index)]

    def is_boundary(self, coord: Coordinate, wall: int) -> bool:
        """Whether a wall has no room behind it (edge or masked out)."""
        index = self.index_of(coord)
        self._check_wall(index, wall)
        return self._neighbors[index, wall] == NO_ROOM

    def open(self, coord: Coordinate, wall: int):
        """Opens a wall on both of its sides; a no-op when already open."""
        self.open_wall(self.index_of(coord), wall)

    def close(self, coord: Coordinate, wall: int):
        self.close_wall(self.index_of(coord), wall)

    def is_open(self, coord: Coordinate, wall: int) -> bool:
        return self.wall_open(self.index_of(coord), wall)

    def doors(self, coord: Coordinate) -> List[Coordinate]:
        """Returns the neighbours reachable through open walls."""
        return [self.coordinate(i) for i in self.open_neighbors(self.index_of(coord))]

    def connecting_wall(self, a: Coordinate, b: Coordinate) -> Optional[int]:
        """Returns the wall of `a` that leads to `b`, or None if not adjacent."""
        target = self.index_of(b)
        for wall, other in self.adjacent(self.index_of(a)):
            if other == target:
                return wall
        return None

    def open_wall_count(self) -> int:
        """Returns the number of open logical walls."""
        total = sum(bin(int(bits)).count("1") for bits in self._walls)
        return total // 2

    def components(self, through_walls: bool = False) -> List[List[int]]:
        """
        Returns the connected components of the room graph as index lists.

        With through_walls the adjacency of the mask is used, otherwise only
        open walls connect rooms.
        """
        seen = np.zeros(self._present.size, dtype=bool)
        result = []
        for start in self._indices:
            if seen[start]:
                continue
            seen[start] = True
            component, queue = [], deque([start])
            while queue:
                current = queue.popleft()
                component.append(current)
                if through_walls:
                    nexts = [other for _, other in self.adjacent(current)]
                else:
                    nexts = self.open_neighbors(current)
                for other in nexts:
                    if not seen[other]:
                        seen[other] = True
                        queue.append(other)
            result.append(component)
        return result

    def verify(self):
        """Asserts that every wall agrees with its back and no boundary is open."""
        for index in self._indices:
            for wall in range(self.topology.arity):
                other = self._neighbors[index, wall]
                if other == NO_ROOM:
                    assert not self.wall_open(index, wall), (
                        f"Boundary wall {wall} of {self.coordinate(index)} is open"
                    )
                else:
                    assert self.wall_open(index, wall) == self.wall_open(
                        int(other), int(self._back[index, wall])
                    ), f"Asymmetric wall {wall} of {self.coordinate(index)}"

    # --- Geometry ---

    def center(self, coord: Coordinate) -> Point:
        return self.topology.center(coord)

    def corners(self, coord: Coordinate) -> List[Point]:
        return self.topology.corners(coord)

    def viewbox(self) -> Tuple[float, float, float, float]:
        return self.topology.viewbox(self.width, self.height)
