# --- maze_lib/rendering/ascii_renderer.py ---
import logging
from typing import List

from maze_lib.topology import Coordinate, Shape

log = logging.getLogger("maze.render")

# Wall indices of square rooms.
_LEFT, _UP, _RIGHT, _DOWN = range(4)

_JUNCTIONS = {
    (0, 1, 1, 0): "┌",
    (0, 0, 1, 1): "┐",
    (1, 1, 0, 0): "└",
    (1, 0, 0, 1): "┘",
    (1, 1, 1, 0): "├",
    (1, 0, 1, 1): "┤",
    (0, 1, 1, 1): "┬",
    (1, 1, 0, 1): "┴",
    (1, 1, 1, 1): "┼",
    (0, 1, 0, 1): "─",
    (1, 0, 1, 0): "│",
}
_STUBS = {(1, 0, 0, 0): "╵", (0, 0, 1, 0): "╷", (0, 0, 0, 1): "╴", (0, 1, 0, 0): "╶"}


class ASCIIRenderer:
    """Renders a box-drawing view of a square-room maze for debugging."""

    def __init__(self):
        self.canvas: List[List[str]] = []
        self.width = 0
        self.height = 0
        self.cols = 0
        self.rows = 0

    def render_grid(self, grid, path=None):
        """Draws every room, closed wall and, optionally, the rooms of a path."""
        if grid.shape != Shape.QUAD:
            log.warning("ASCII view only supports square rooms, not %s.", grid.shape.name)
            self.canvas = []
            return

        self.cols, self.rows = grid.width, grid.height
        self.width = self.cols * 4 + 1
        self.height = self.rows * 2 + 1
        self.canvas = [[" " for _ in range(self.width)] for _ in range(self.height)]
        on_path = set(path) if path is not None else set()

        for coord in grid.coordinates():
            cx = coord.col * 4 + 2
            cy = coord.row * 2 + 1
            self.canvas[cy][cx - 1 : cx + 2] = list(" * " if coord in on_path else " . ")

        for coord in grid.coordinates():
            x, y = coord.col * 4, coord.row * 2
            if not grid.is_open(coord, _UP):
                self.canvas[y][x + 1 : x + 4] = list("───")
            if not grid.is_open(coord, _DOWN):
                self.canvas[y + 2][x + 1 : x + 4] = list("───")
            if not grid.is_open(coord, _LEFT):
                self.canvas[y + 1][x] = "│"
            if not grid.is_open(coord, _RIGHT):
                self.canvas[y + 1][x + 4] = "│"

        self._render_junctions()
        log.debug("Rendered %dx%d ASCII view.", self.cols, self.rows)

    def _render_junctions(self):
        for gy in range(self.rows + 1):
            for gx in range(self.cols + 1):
                cx, cy = gx * 4, gy * 2
                n = cy > 0 and self.canvas[cy - 1][cx] == "│"
                s = cy < self.height - 1 and self.canvas[cy + 1][cx] == "│"
                w = cx > 0 and self.canvas[cy][cx - 1] == "─"
                e = cx < self.width - 1 and self.canvas[cy][cx + 1] == "─"
                key = (int(n), int(e), int(s), int(w))
                char = _JUNCTIONS.get(key) or _STUBS.get(key)
                if char:
                    self.canvas[cy][cx] = char

    def get_output(self) -> str:
        """Returns the canvas with a column ruler on top and row numbers on the left."""
        if not self.canvas:
            return ""
        ruler = [" "] * self.width
        for col in range(self.cols):
            ruler[col * 4 + 2] = str(col % 10)
        lines = ["    " + "".join(ruler)]
        for cy, row in enumerate(self.canvas):
            label = f"{(cy - 1) // 2:>3}|" if cy % 2 == 1 else "    "
            lines.append(label + "".join(row))
        return "\n".join(lines)

    def room_at(self, coord: Coordinate) -> str:
        """Returns the three characters drawn inside a room."""
        cx, cy = coord.col * 4 + 2, coord.row * 2 + 1
        return "".join(self.canvas[cy][cx - 1 : cx + 2])
