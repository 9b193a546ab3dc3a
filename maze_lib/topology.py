# --- maze_lib/topology.py ---
"""
maze_lib/topology.py: Room shapes, adjacency and geometry.

A topology answers two questions for a room at a given coordinate: which rooms
lie behind each of its walls, and where its center and corners are on the
plane. Three shapes are supported; each is described by a small geometry
record and a single Topology class dispatches on the shape.

Physical units: squares have unit sides, triangles and hexagons have unit
circumradius. The y axis points down, as in SVG.
"""
import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, List, Tuple

from .errors import ConfigurationError

log = logging.getLogger("maze.topology")

COS_30 = math.sqrt(3) / 2
SIN_30 = 0.5

# Corner positions are rounded so that the two rooms sharing a wall compute
# bit-identical endpoints.
_PRECISION = 6


class Shape(IntEnum):
    """The supported room shapes, identified by their number of walls."""

    TRI = 3
    QUAD = 4
    HEX = 6

    @classmethod
    def parse(cls, value) -> "Shape":
        """Converts a wall count (int or numeric string) to a Shape."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Unsupported number of walls: {value!r} (expected 3, 4 or 6)"
            ) from None


@dataclass(frozen=True, order=True)
class Coordinate:
    """The position of a room in the rectangle of rooms."""

    col: int
    row: int

    def __str__(self):
        return f"({self.col},{self.row})"


@dataclass(frozen=True)
class Point:
    """A physical position on the plane."""

    x: float
    y: float


@dataclass(frozen=True)
class Wall:
    """A wall of a room; (dx, dy) is the offset of the room behind it."""

    name: str
    dx: int
    dy: int


@dataclass(frozen=True)
class _ShapeGeometry:
    """Per-shape tables. Rooms of one shape come in one or two variants."""

    walls: Tuple[Tuple[Wall, ...], ...]
    corners: Tuple[Tuple[Tuple[float, float], ...], ...]
    variant: Callable[[int, int], int]
    center: Callable[[int, int, int], Tuple[float, float]]
    col_spacing: float
    row_spacing: float


_QUAD = _ShapeGeometry(
    walls=(
        (
            Wall("LEFT", -1, 0),
            Wall("UP", 0, -1),
            Wall("RIGHT", 1, 0),
            Wall("DOWN", 0, 1),
        ),
    ),
    corners=(((-0.5, 0.5), (-0.5, -0.5), (0.5, -0.5), (0.5, 0.5)),),
    variant=lambda col, row: 0,
    center=lambda col, row, variant: (col + 0.5, row + 0.5),
    col_spacing=1.0,
    row_spacing=1.0,
)

# Even rows are shifted right by half a room, so diagonal offsets depend on
# the row parity.
_HEX_CORNERS = tuple(
    (math.cos(math.radians(a)), math.sin(math.radians(a)))
    for a in (150, 210, 270, 330, 30, 90)
)
_HEX = _ShapeGeometry(
    walls=(
        (
            Wall("LEFT", -1, 0),
            Wall("UP_LEFT", 0, -1),
            Wall("UP_RIGHT", 1, -1),
            Wall("RIGHT", 1, 0),
            Wall("DOWN_RIGHT", 1, 1),
            Wall("DOWN_LEFT", 0, 1),
        ),
        (
            Wall("LEFT", -1, 0),
            Wall("UP_LEFT", -1, -1),
            Wall("UP_RIGHT", 0, -1),
            Wall("RIGHT", 1, 0),
            Wall("DOWN_RIGHT", 0, 1),
            Wall("DOWN_LEFT", -1, 1),
        ),
    ),
    corners=(_HEX_CORNERS, _HEX_CORNERS),
    variant=lambda col, row: row & 1,
    center=lambda col, row, variant: (
        (col + (0.5 if variant else 1.0)) * 2 * COS_30,
        row * 1.5 + 1.0,
    ),
    col_spacing=2 * COS_30,
    row_spacing=1.5,
)

# Adjacent triangles point in opposite directions: variant 0 points down and
# has a wall on top, variant 1 points up and has a wall at the bottom.
_TRI = _ShapeGeometry(
    walls=(
        (Wall("LEFT", -1, 0), Wall("UP", 0, -1), Wall("RIGHT", 1, 0)),
        (Wall("LEFT", -1, 0), Wall("RIGHT", 1, 0), Wall("DOWN", 0, 1)),
    ),
    corners=(
        ((0.0, 1.0), (-COS_30, -SIN_30), (COS_30, -SIN_30)),
        ((-COS_30, SIN_30), (0.0, -1.0), (COS_30, SIN_30)),
    ),
    variant=lambda col, row: (col + row) & 1,
    center=lambda col, row, variant: (
        (col + 0.5) * COS_30,
        row * 1.5 + (1.0 if variant else 0.5),
    ),
    col_spacing=COS_30,
    row_spacing=1.5,
)

_GEOMETRY: Dict[Shape, _ShapeGeometry] = {
    Shape.TRI: _TRI,
    Shape.QUAD: _QUAD,
    Shape.HEX: _HEX,
}


class Topology:
    """Adjacency and geometry for one room shape."""

    def __init__(self, shape):
        self.shape = Shape.parse(shape)
        self._geometry = _GEOMETRY[self.shape]
        self.arity = int(self.shape)
        log.debug("Created %s topology with %d walls per room.", self.shape.name, self.arity)

    def __repr__(self):
        return f"Topology({self.shape.name})"

    def variant(self, coord: Coordinate) -> int:
        return self._geometry.variant(coord.col, coord.row)

    def walls(self, coord: Coordinate) -> Tuple[Wall, ...]:
        """Returns the ordered walls of the room at coord."""
        return self._geometry.walls[self.variant(coord)]

    def neighbor(self, coord: Coordinate, wall_index: int) -> Coordinate:
        """Returns the coordinate of the room behind a wall."""
        wall = self.walls(coord)[wall_index]
        return Coordinate(coord.col + wall.dx, coord.row + wall.dy)

    def back(self, coord: Coordinate, wall_index: int) -> Tuple[Coordinate, int]:
        """Returns the same wall as seen from the room on the other side."""
        wall = self.walls(coord)[wall_index]
        other = Coordinate(coord.col + wall.dx, coord.row + wall.dy)
        for i, candidate in enumerate(self.walls(other)):
            if candidate.dx == -wall.dx and candidate.dy == -wall.dy:
                return other, i
        # Every wall table above pairs each direction with its negation.
        raise AssertionError(f"No back wall for {wall.name} of {coord}")

    def center(self, coord: Coordinate) -> Point:
        x, y = self._geometry.center(coord.col, coord.row, self.variant(coord))
        return Point(round(x, _PRECISION), round(y, _PRECISION))

    def corners(self, coord: Coordinate) -> List[Point]:
        """Returns the corners of a room; wall i runs from corner i to i + 1."""
        variant = self.variant(coord)
        cx, cy = self._geometry.center(coord.col, coord.row, variant)
        return [
            Point(round(cx + dx, _PRECISION), round(cy + dy, _PRECISION))
            for dx, dy in self._geometry.corners[variant]
        ]

    def wall_span(self, coord: Coordinate, wall_index: int) -> Tuple[Point, Point]:
        corners = self.corners(coord)
        return corners[wall_index], corners[(wall_index + 1) % len(corners)]

    def viewbox(self, width: int, height: int) -> Tuple[float, float, float, float]:
        """Returns (min_x, min_y, width, height) of a rectangle of rooms."""
        if width <= 0 or height <= 0:
            return 0.0, 0.0, 0.0, 0.0
        # Only the outer ring of rooms can contribute to the bounds.
        edge = set()
        for col in range(width):
            edge.add(Coordinate(col, 0))
            edge.add(Coordinate(col, height - 1))
        for row in range(height):
            edge.add(Coordinate(0, row))
            edge.add(Coordinate(width - 1, row))
        points = [p for coord in edge for p in self.corners(coord)]
        min_x, max_x = min(p.x for p in points), max(p.x for p in points)
        min_y, max_y = min(p.y for p in points), max(p.y for p in points)
        return min_x, min_y, max_x - min_x, max_y - min_y

    def dimensions_for(self, physical_width: float, physical_height: float) -> Tuple[int, int]:
        """Returns the (cols, rows) needed to cover a physical size."""
        cols = max(1, math.ceil(physical_width / self._geometry.col_spacing))
        rows = max(1, math.ceil(physical_height / self._geometry.row_spacing))
        return cols, rows
