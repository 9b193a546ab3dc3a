# --- maze_lib/imaging.py ---
"""
maze_lib/imaging.py: Sampling of raster images per room.

The image is stretched over the physical extent of the maze, every room
polygon is rasterized into a label image, and the pixels under each label are
averaged. The rest of the engine only sees the resulting pure functions
``luminosity(coord)`` and ``color(coord)``.
"""
import logging
import math
from typing import Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from .errors import ConfigurationError
from .topology import Coordinate, Topology

log = logging.getLogger("maze.image")

TEXT_PADDING = 2


def load_image(path: str) -> Image.Image:
    """Opens an image file and converts it to RGB."""
    try:
        with Image.open(path) as img:
            img.load()
            rgb = img.convert("RGB")
    except FileNotFoundError:
        raise ConfigurationError(f"Image not found: {path}") from None
    except (UnidentifiedImageError, OSError) as e:
        raise ConfigurationError(f"Could not read image {path}: {e}") from e
    log.info("Loaded image '%s' (%dx%d).", path, rgb.width, rgb.height)
    return rgb


def render_text(text: str) -> Image.Image:
    """
    Rasterizes an overlay string as white on black.

    The string is wrapped into lines of ceil(sqrt(len)) characters so the
    result is roughly square.
    """
    if not text:
        raise ConfigurationError("The overlay text must not be empty")
    columns = max(1, math.ceil(math.sqrt(len(text))))
    block = "\n".join(text[i : i + columns] for i in range(0, len(text), columns))
    font = ImageFont.load_default()
    probe = ImageDraw.Draw(Image.new("L", (1, 1)))
    left, top, right, bottom = probe.multiline_textbbox((0, 0), block, font=font)
    size = (
        max(1, right - left) + 2 * TEXT_PADDING,
        max(1, bottom - top) + 2 * TEXT_PADDING,
    )
    image = Image.new("L", size, 0)
    ImageDraw.Draw(image).multiline_text(
        (TEXT_PADDING - left, TEXT_PADDING - top), block, fill=255, font=font
    )
    log.debug("Rendered %d characters of text into a %dx%d image.", len(text), *size)
    return image


class ImageSampler:
    """Average color of an image under every room of a rectangle of rooms."""

    def __init__(self, image: Image.Image, topology: Topology, width: int, height: int):
        self.width = width
        self.height = height
        pixels = np.asarray(image.convert("RGB"), dtype=np.float64)
        img_h, img_w = pixels.shape[:2]
        min_x, min_y, vb_w, vb_h = topology.viewbox(width, height)
        sx, sy = img_w / vb_w, img_h / vb_h

        # Label 0 is the background; room i gets label i + 1.
        labels = Image.new("I", (img_w, img_h), 0)
        draw = ImageDraw.Draw(labels)
        for row in range(height):
            for col in range(width):
                coord = Coordinate(col, row)
                polygon = [
                    ((p.x - min_x) * sx, (p.y - min_y) * sy) for p in topology.corners(coord)
                ]
                draw.polygon(polygon, fill=row * width + col + 1)

        flat = np.asarray(labels, dtype=np.int64).ravel()
        bins = width * height + 1
        counts = np.bincount(flat, minlength=bins)[1:]
        sums = np.stack(
            [
                np.bincount(flat, weights=pixels[..., c].ravel(), minlength=bins)[1:]
                for c in range(3)
            ],
            axis=1,
        )
        colors = sums / np.maximum(counts, 1)[:, None]

        # Rooms smaller than a pixel take the pixel under their center.
        for index in np.flatnonzero(counts == 0):
            center = topology.center(Coordinate(int(index) % width, int(index) // width))
            px = min(img_w - 1, max(0, int((center.x - min_x) * sx)))
            py = min(img_h - 1, max(0, int((center.y - min_y) * sy)))
            colors[index] = pixels[py, px]
        self._colors = colors
        log.debug(
            "Sampled %dx%d image over %d rooms (%d below one pixel).",
            img_w,
            img_h,
            width * height,
            int((counts == 0).sum()),
        )

    @classmethod
    def open(cls, path: str, topology: Topology, width: int, height: int) -> "ImageSampler":
        return cls(load_image(path), topology, width, height)

    def _lookup(self, coord: Coordinate) -> np.ndarray:
        if not (0 <= coord.col < self.width and 0 <= coord.row < self.height):
            return np.zeros(3)
        return self._colors[coord.row * self.width + coord.col]

    def luminosity(self, coord: Coordinate) -> float:
        """Returns the mean channel intensity under a room, in [0, 1]."""
        return float(self._lookup(coord).mean() / 255.0)

    def color(self, coord: Coordinate) -> Tuple[int, int, int]:
        r, g, b = (int(round(v)) for v in self._lookup(coord))
        return r, g, b
