# --- maze_lib/mask.py ---
import logging
from typing import Callable, Iterable, Iterator

import numpy as np

from .errors import ConfigurationError
from .topology import Coordinate

log = logging.getLogger("maze.mask")


class Mask:
    """An immutable set of the coordinates that take part in the maze."""

    def __init__(self, included: np.ndarray):
        included = np.array(included, dtype=bool)
        if included.ndim != 2:
            raise ConfigurationError("A mask must be a two-dimensional array")
        included.flags.writeable = False
        self._included = included
        self.height, self.width = included.shape

    @classmethod
    def full(cls, width: int, height: int) -> "Mask":
        """The identity mask: every coordinate is included."""
        return cls(np.ones((height, width), dtype=bool))

    @classmethod
    def from_coordinates(cls, width: int, height: int, coords: Iterable[Coordinate]) -> "Mask":
        included = np.zeros((height, width), dtype=bool)
        for coord in coords:
            if 0 <= coord.col < width and 0 <= coord.row < height:
                included[coord.row, coord.col] = True
        return cls(included)

    @classmethod
    def from_luminosity(
        cls,
        width: int,
        height: int,
        luminosity: Callable[[Coordinate], float],
        threshold: float,
        invert: bool = False,
    ) -> "Mask":
        """
        Builds a mask by thresholding a luminosity sampling function.

        Args:
            width: The number of columns.
            height: The number of rows.
            luminosity: Maps a coordinate to a value in [0, 1].
            threshold: Coordinates with luminosity >= threshold are included.
            invert: Include coordinates below the threshold instead.

        Returns:
            The resulting Mask.
        """
        if not 0.0 <= threshold <= 1.0:
            raise ConfigurationError(f"Mask threshold {threshold} is outside [0, 1]")
        included = np.zeros((height, width), dtype=bool)
        for row in range(height):
            for col in range(width):
                bright = luminosity(Coordinate(col, row)) >= threshold
                included[row, col] = bright != invert
        mask = cls(included)
        log.info(
            "Mask with threshold %.3f includes %d of %d rooms.",
            threshold,
            mask.count(),
            width * height,
        )
        return mask

    def contains(self, coord: Coordinate) -> bool:
        if not (0 <= coord.col < self.width and 0 <= coord.row < self.height):
            return False
        return bool(self._included[coord.row, coord.col])

    def __contains__(self, coord) -> bool:
        return self.contains(coord)

    def count(self) -> int:
        return int(self._included.sum())

    def coordinates(self) -> Iterator[Coordinate]:
        for row, col in zip(*np.nonzero(self._included)):
            yield Coordinate(int(col), int(row))

    def to_array(self) -> np.ndarray:
        return self._included.copy()
