import pytest

from maze_lib.config import HeatMapSpec
from maze_lib.errors import ConfigurationError
from maze_lib.grid import Grid
from maze_lib.heatmap import heatmap
from maze_lib.pipeline import MazeResult
from maze_lib.rendering.ascii_renderer import ASCIIRenderer
from maze_lib.rendering.color import Color
from maze_lib.rendering.svg_renderer import SVGRenderer, render_svg
from maze_lib.solver import default_endpoints, solve
from maze_lib.topology import Coordinate, Shape


class TestColor:
    def test_parse_rgb(self):
        assert Color.parse("#FF8000") == Color(255, 128, 0, 255)

    def test_parse_argb_has_alpha_first(self):
        assert Color.parse("#80FF0000") == Color(255, 0, 0, 128)

    @pytest.mark.parametrize("value", ["", "FF0000", "#F00", "#GG0000", "red"])
    def test_parse_rejects(self, value):
        with pytest.raises(ConfigurationError):
            Color.parse(value)

    def test_fade(self):
        white, black = Color(255, 255, 255), Color(0, 0, 0)
        assert white.fade(black, 1.0) == white
        assert white.fade(black, 0.0) == black
        assert white.fade(black, 0.5) == Color(127, 127, 127)

    def test_transparent_and_hex(self):
        color = Color(1, 2, 255).transparent()
        assert color.alpha == 0
        assert color.opacity == 0.0
        assert color.to_hex() == "#0102FF"


def _result(grid, **kwargs):
    return MazeResult(grid=grid, method="prim", seed=1, **kwargs)


def test_viewbox_is_scaled_and_expanded(make_maze):
    svg = render_svg(_result(make_maze(3, 2)), {"scale": 10, "margin": 5})
    assert svg.startswith("<svg")
    assert 'viewBox="-5.00 -5.00 40.00 30.00"' in svg
    assert svg.rstrip().endswith("</svg>")


def test_closed_wall_segments_count_each_wall_once():
    grid = Grid.create(2, 1)
    renderer = SVGRenderer(_result(grid), {})
    assert len(renderer.closed_wall_segments()) == 7
    grid.open(Coordinate(0, 0), 2)
    assert len(renderer.closed_wall_segments()) == 6


def test_walls_are_merged_into_one_path(make_maze):
    grid = make_maze(2, 1, method="clear")
    svg = render_svg(_result(grid), {"scale": 10})
    # The outline of an open 2x1 maze is a single closed line.
    assert svg.count("<path") == 1
    assert svg.count("M ") == 1


@pytest.mark.parametrize("shape", [Shape.TRI, Shape.QUAD, Shape.HEX])
def test_layers_are_ordered(make_maze, shape):
    grid = make_maze(5, 4, shape)
    start, end = default_endpoints(grid)
    result = _result(
        grid,
        path=solve(grid, start, end),
        heat=heatmap(grid, start),
        heat_spec=HeatMapSpec("distance", Color(0, 0, 255, 0), Color(255, 0, 0)),
        background=lambda c: Color(10, 20, 30),
        text=lambda c: c.col == 0,
    )
    svg = render_svg(result, {"solve_color": "#8000FF00"})
    order = [svg.index(f'<g id="{name}">') for name in ("background", "text", "heatmap", "solution", "walls")]
    assert order == sorted(order)
    assert svg.count("<polygon") == 2 * grid.room_count() + 4
    assert 'stroke="#00FF00" stroke-opacity="0.502"' in svg


def test_optional_layers_are_skipped(make_maze):
    svg = render_svg(_result(make_maze(3, 3)), {})
    assert '<g id="walls">' in svg
    assert "<polygon" not in svg
    assert "<polyline" not in svg


def test_ascii_view_of_open_corridor(make_maze):
    grid = make_maze(2, 1, method="clear")
    renderer = ASCIIRenderer()
    renderer.render_grid(grid)
    lines = renderer.get_output().splitlines()
    assert lines == [
        "      0   1  ",
        "    ┌───────┐",
        "  0|│ .   . │",
        "    └───────┘",
    ]


def test_ascii_view_marks_the_path(make_maze):
    grid = make_maze(3, 3, seed=6)
    start, end = default_endpoints(grid)
    path = solve(grid, start, end)
    renderer = ASCIIRenderer()
    renderer.render_grid(grid, path)
    for coord in grid.coordinates():
        assert renderer.room_at(coord) == (" * " if coord in path.rooms else " . ")


def test_ascii_view_skips_other_shapes(make_maze):
    renderer = ASCIIRenderer()
    renderer.render_grid(make_maze(3, 3, Shape.HEX))
    assert renderer.get_output() == ""
