import pytest

from maze_lib.config import (
    MazeConfig,
    load_settings,
    parse_break_count,
    parse_heatmap_spec,
    parse_mask_spec,
)
from maze_lib.errors import ConfigurationError
from maze_lib.rendering.color import Color
from maze_lib.topology import Shape


def test_parse_mask_spec():
    assert parse_mask_spec("shapes/heart.png,0.5") == ("shapes/heart.png", 0.5)
    assert parse_mask_spec("a,b.png,1") == ("a,b.png", 1.0)


@pytest.mark.parametrize("value", ["heart.png", ",0.5", "heart.png,bright", "heart.png,1.5"])
def test_parse_mask_spec_rejects(value):
    with pytest.raises(ConfigurationError):
        parse_mask_spec(value)


def test_parse_heatmap_spec_defaults():
    spec = parse_heatmap_spec("distance")
    assert spec.kind == "distance"
    assert spec.cold == Color(0, 0, 255, 0)
    assert spec.hot == Color(255, 0, 0)


def test_parse_heatmap_spec_single_color_fades_from_transparent():
    spec = parse_heatmap_spec("vertical,#00FF00")
    assert spec.hot == Color(0, 255, 0)
    assert spec.cold == Color(0, 255, 0, 0)


def test_parse_heatmap_spec_two_colors():
    spec = parse_heatmap_spec("full,#000000,#FFFFFF")
    assert (spec.cold, spec.hot) == (Color(0, 0, 0), Color(255, 255, 255))


@pytest.mark.parametrize("value", ["diagonal", "full,#12", "full,#000000,#FFFFFF,#000000"])
def test_parse_heatmap_spec_rejects(value):
    with pytest.raises(ConfigurationError):
        parse_heatmap_spec(value)


def test_parse_break_count():
    assert parse_break_count("3") == 3
    for bad in ("-1", "many", None):
        with pytest.raises(ConfigurationError):
            parse_break_count(bad)


def test_validate_normalizes_shape_and_method():
    config = MazeConfig(method="winding", width=4, height=3, shape="6").validate()
    assert config.shape is Shape.HEX
    assert config.method == "recursive-backtracker"


@pytest.mark.parametrize(
    "overrides",
    [
        {"shape": 5},
        {"method": "spiral"},
        {"width": None},
        {"height": 0},
        {"ratio": 10.0},
        {"ratio": -1.0, "background_path": "bg.png"},
        {"scale": 0},
        {"margin": -1},
        {"break_count": -2},
        {"text": ""},
        {"solve_color": "red"},
        {"mask_path": "m.png", "mask_threshold": 2.0},
    ],
)
def test_validate_rejects(overrides):
    options = {"method": "prim", "width": 4, "height": 4}
    options.update(overrides)
    with pytest.raises(ConfigurationError):
        MazeConfig(**options).validate()


def test_ratio_replaces_explicit_size():
    config = MazeConfig(method="prim", background_path="bg.png", ratio=8.0).validate()
    assert config.width is None


def test_load_settings_defaults():
    settings = load_settings()
    assert settings["render"]["solve_color"] == "#FF0000"
    assert settings["maze"]["walls"] == "4"


def test_load_settings_overrides(tmp_path):
    path = tmp_path / "maze.ini"
    path.write_text("[render]\nwall_color = #333333\n\n[maze]\nscale = 25\n")
    settings = load_settings(str(path))
    assert settings["render"]["wall_color"] == "#333333"
    assert settings["render"]["solve_color"] == "#FF0000"
    assert settings["maze"]["scale"] == "25"


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings(str(tmp_path / "missing.ini"))


def test_load_settings_malformed_file(tmp_path):
    path = tmp_path / "broken.ini"
    path.write_text("no section header\n")
    with pytest.raises(ConfigurationError):
        load_settings(str(path))
