# --- maze_lib/schema.py ---
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from .errors import ConfigurationError
from .grid import Grid
from .mask import Mask
from .topology import Coordinate, Shape

log = logging.getLogger("maze.schema")

SCHEMA_VERSION = "1.0"


@dataclass
class RoomRecord:
    """A room and the indices of its open walls."""

    col: int
    row: int
    openWalls: List[int] = field(default_factory=list)


@dataclass
class MazeSnapshot:
    """The root object of a saved maze."""

    mazeVersion: str
    shape: int
    width: int
    height: int
    method: str
    seed: Optional[int]
    rooms: List[RoomRecord]
    solution: Optional[List[List[int]]] = None

    def to_grid(self) -> Grid:
        """Rebuilds the grid, mask included, with the recorded walls opened."""
        coords = [Coordinate(r.col, r.row) for r in self.rooms]
        mask = None
        if len(coords) != self.width * self.height:
            mask = Mask.from_coordinates(self.width, self.height, coords)
        grid = Grid.create(self.width, self.height, Shape.parse(self.shape), mask)
        for record in self.rooms:
            coord = Coordinate(record.col, record.row)
            for wall in record.openWalls:
                if not 0 <= wall < grid.topology.arity:
                    raise ConfigurationError(f"Invalid wall index {wall} for room {coord}")
                grid.open(coord, wall)
        log.debug("Rebuilt grid with %d open walls.", grid.open_wall_count())
        return grid


def snapshot(result) -> MazeSnapshot:
    """Captures a MazeResult as a MazeSnapshot."""
    grid = result.grid
    rooms = []
    for index in grid.room_indices():
        coord = grid.coordinate(index)
        walls = [w for w in range(grid.topology.arity) if grid.wall_open(index, w)]
        rooms.append(RoomRecord(coord.col, coord.row, walls))
    solution = None
    if result.path is not None:
        solution = [[c.col, c.row] for c in result.path]
    return MazeSnapshot(
        mazeVersion=SCHEMA_VERSION,
        shape=int(grid.shape),
        width=grid.width,
        height=grid.height,
        method=result.method,
        seed=result.seed,
        rooms=rooms,
        solution=solution,
    )


def save_json(result, output_path: str) -> None:
    """
    Serializes a MazeResult to a JSON file.

    Args:
        result: The MazeResult to serialize.
        output_path: The path to the output .json file.
    """
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(asdict(snapshot(result)), f, indent=2)
    log.info("Saved maze snapshot to '%s'.", output_path)


def load_json(input_path: str) -> MazeSnapshot:
    """
    Deserializes a JSON file into a MazeSnapshot.

    Args:
        input_path: The path to the input .json file.

    Returns:
        A MazeSnapshot representing the content of the JSON file.
    """
    try:
        with open(input_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Snapshot not found: {input_path}") from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed snapshot {input_path}: {e}") from e

    try:
        data["rooms"] = [RoomRecord(**r) for r in data.get("rooms", [])]
        snap = MazeSnapshot(**data)
    except (AttributeError, TypeError) as e:
        raise ConfigurationError(f"Malformed snapshot {input_path}: {e}") from e
    log.info("Loaded snapshot of a %dx%d maze from '%s'.", snap.width, snap.height, input_path)
    return snap
