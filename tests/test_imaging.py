import pytest
from PIL import Image, ImageDraw

from maze_lib.errors import ConfigurationError
from maze_lib.imaging import ImageSampler, load_image, render_text
from maze_lib.topology import Coordinate, Shape, Topology


@pytest.fixture
def half_white_image():
    """A 20x10 image, white on the left half and black on the right."""
    image = Image.new("RGB", (20, 10), "black")
    ImageDraw.Draw(image).rectangle([0, 0, 9, 9], fill="white")
    return image


def test_sampler_averages_pixels_per_room(half_white_image):
    sampler = ImageSampler(half_white_image, Topology(Shape.QUAD), 2, 1)
    assert sampler.luminosity(Coordinate(0, 0)) > 0.9
    assert sampler.luminosity(Coordinate(1, 0)) < 0.1
    assert sampler.color(Coordinate(0, 0)) == (255, 255, 255)


def test_sampler_handles_rooms_smaller_than_a_pixel():
    image = Image.new("RGB", (2, 2), (0, 0, 255))
    sampler = ImageSampler(image, Topology(Shape.HEX), 8, 8)
    for row in range(8):
        for col in range(8):
            assert sampler.color(Coordinate(col, row)) == (0, 0, 255)


def test_sampler_outside_coordinates_are_dark(half_white_image):
    sampler = ImageSampler(half_white_image, Topology(Shape.QUAD), 2, 1)
    assert sampler.luminosity(Coordinate(5, 5)) == 0.0


def test_open_reads_from_disk(tmp_path, half_white_image):
    path = tmp_path / "mask.png"
    half_white_image.save(path)
    sampler = ImageSampler.open(str(path), Topology(Shape.QUAD), 2, 1)
    assert sampler.luminosity(Coordinate(0, 0)) > 0.9


def test_load_image_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_image(str(tmp_path / "missing.png"))


def test_load_image_unreadable_file(tmp_path):
    path = tmp_path / "not-an-image.png"
    path.write_text("hello")
    with pytest.raises(ConfigurationError):
        load_image(str(path))


def test_render_text_draws_white_on_black():
    image = render_text("MAZE")
    assert image.mode == "L"
    low, high = image.getextrema()
    assert low == 0
    assert high > 128


def test_render_text_rejects_empty():
    with pytest.raises(ConfigurationError):
        render_text("")
