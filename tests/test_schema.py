import json

import numpy as np
import pytest

from maze_lib import schema
from maze_lib.errors import ConfigurationError
from maze_lib.mask import Mask
from maze_lib.pipeline import MazeResult
from maze_lib.solver import default_endpoints, solve
from maze_lib.topology import Coordinate, Shape


@pytest.mark.parametrize("shape", [Shape.TRI, Shape.QUAD, Shape.HEX])
def test_saved_maze_rebuilds_identically(tmp_path, make_maze, shape):
    grid = make_maze(5, 4, shape, seed=3)
    path = tmp_path / "maze.json"
    schema.save_json(MazeResult(grid=grid, method="recursive-backtracker", seed=3), str(path))

    snap = schema.load_json(str(path))
    assert (snap.shape, snap.width, snap.height, snap.seed) == (int(shape), 5, 4, 3)
    assert snap.solution is None
    rebuilt = snap.to_grid()
    assert np.array_equal(rebuilt.wall_state(), grid.wall_state())


def test_mask_and_solution_are_recorded(tmp_path, make_maze):
    coords = [Coordinate(c, r) for r in range(3) for c in range(3) if (c, r) != (1, 1)]
    grid = make_maze(3, 3, mask=Mask.from_coordinates(3, 3, coords))
    start, end = default_endpoints(grid)
    result = MazeResult(grid=grid, method="prim", seed=None, path=solve(grid, start, end))
    path = tmp_path / "maze.json"
    schema.save_json(result, str(path))

    data = json.loads(path.read_text())
    assert data["mazeVersion"] == schema.SCHEMA_VERSION
    assert len(data["rooms"]) == 8
    assert data["solution"][0] == [0, 0]

    rebuilt = schema.load_json(str(path)).to_grid()
    assert rebuilt.room_count() == 8
    assert Coordinate(1, 1) not in rebuilt


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        schema.load_json(str(tmp_path / "missing.json"))


@pytest.mark.parametrize("content", ["{not json", "[]", '{"shape": 4}'])
def test_load_malformed_file(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        schema.load_json(str(path))


def test_invalid_wall_index_is_rejected():
    snap = schema.MazeSnapshot(
        mazeVersion=schema.SCHEMA_VERSION,
        shape=4,
        width=1,
        height=1,
        method="prim",
        seed=1,
        rooms=[schema.RoomRecord(0, 0, [7])],
    )
    with pytest.raises(ConfigurationError):
        snap.to_grid()
