import pytest

from maze_lib.errors import ConfigurationError
from maze_lib.topology import Coordinate, Shape, Topology

ALL_SHAPES = [Shape.TRI, Shape.QUAD, Shape.HEX]


@pytest.mark.parametrize("value, expected", [(3, Shape.TRI), ("4", Shape.QUAD), (6, Shape.HEX)])
def test_shape_parse(value, expected):
    assert Shape.parse(value) is expected


@pytest.mark.parametrize("value", [5, "x", None, 8])
def test_shape_parse_rejects_unsupported(value):
    with pytest.raises(ConfigurationError):
        Shape.parse(value)


@pytest.mark.parametrize("shape", ALL_SHAPES)
def test_arity_matches_wall_tables(shape):
    topology = Topology(shape)
    assert topology.arity == int(shape)
    for row in range(3):
        for col in range(3):
            coord = Coordinate(col, row)
            assert len(topology.walls(coord)) == topology.arity
            assert len(topology.corners(coord)) == topology.arity


@pytest.mark.parametrize("shape", ALL_SHAPES)
def test_back_is_symmetric(shape):
    topology = Topology(shape)
    for row in range(1, 5):
        for col in range(1, 5):
            coord = Coordinate(col, row)
            for wall in range(topology.arity):
                other, back = topology.back(coord, wall)
                assert other == topology.neighbor(coord, wall)
                assert topology.back(other, back) == (coord, wall)


@pytest.mark.parametrize("shape", ALL_SHAPES)
def test_shared_walls_have_the_same_endpoints(shape):
    topology = Topology(shape)
    for row in range(1, 5):
        for col in range(1, 5):
            coord = Coordinate(col, row)
            for wall in range(topology.arity):
                other, back = topology.back(coord, wall)
                assert set(topology.wall_span(coord, wall)) == set(
                    topology.wall_span(other, back)
                )


def test_triangles_alternate_orientation():
    topology = Topology(Shape.TRI)
    down = [w.name for w in topology.walls(Coordinate(0, 0))]
    up = [w.name for w in topology.walls(Coordinate(1, 0))]
    assert down == ["LEFT", "UP", "RIGHT"]
    assert up == ["LEFT", "RIGHT", "DOWN"]


def test_hex_diagonals_depend_on_row_parity():
    topology = Topology(Shape.HEX)
    # Even rows are shifted right.
    assert topology.neighbor(Coordinate(2, 2), 2) == Coordinate(3, 1)
    assert topology.neighbor(Coordinate(2, 3), 2) == Coordinate(2, 2)


def test_quad_viewbox():
    assert Topology(Shape.QUAD).viewbox(3, 2) == (0.0, 0.0, 3.0, 2.0)


def test_empty_viewbox():
    assert Topology(Shape.HEX).viewbox(0, 3) == (0.0, 0.0, 0.0, 0.0)


def test_dimensions_for_quad():
    assert Topology(Shape.QUAD).dimensions_for(20.0, 10.0) == (20, 10)
    assert Topology(Shape.QUAD).dimensions_for(0.2, 0.2) == (1, 1)


def test_quad_center():
    center = Topology(Shape.QUAD).center(Coordinate(2, 1))
    assert (center.x, center.y) == (2.5, 1.5)
