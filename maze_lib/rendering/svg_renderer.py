# --- maze_lib/rendering/svg_renderer.py ---
import logging
from typing import Any, Dict, List, Tuple

from shapely.geometry import LineString
from shapely.ops import linemerge

from maze_lib.grid import NO_ROOM
from maze_lib.topology import Coordinate, Point
from .color import Color
from .constants import DEFAULT_MARGIN, DEFAULT_SCALE, DEFAULT_WALL_WIDTH, SOLUTION_WIDTH_RATIO

log = logging.getLogger("maze.render")


class SVGRenderer:
    """Orchestrates the generation of the SVG document for a maze."""

    def __init__(self, result, style_options: dict):
        self.result = result
        self.grid = result.grid
        self.style_options = style_options
        self.styles = self._initialize_styles()
        self.scale = float(self.styles["scale"])

    def _initialize_styles(self) -> Dict[str, Any]:
        """Sets up the default and user-provided styles."""
        styles = {
            "scale": DEFAULT_SCALE,
            "margin": DEFAULT_MARGIN,
            "wall_color": "black",
            "wall_width": DEFAULT_WALL_WIDTH,
            "solve_color": "#FF0000",
            "text_color": "#808080",
        }
        styles.update({k: v for k, v in self.style_options.items() if v is not None})
        log.debug("Using styles: %s", styles)
        return styles

    def _xy(self, p: Point) -> str:
        return f"{p.x * self.scale:.2f},{p.y * self.scale:.2f}"

    def _polygon(self, coord: Coordinate, color: Color) -> str:
        points = " ".join(self._xy(p) for p in self.grid.corners(coord))
        opacity = "" if color.alpha == 255 else f' fill-opacity="{color.opacity:.3f}"'
        return f'<polygon points="{points}" fill="{color.to_hex()}"{opacity}/>'

    def render(self) -> str:
        """Main method to generate the full SVG string."""
        min_x, min_y, vb_w, vb_h = self.grid.viewbox()
        margin = float(self.styles["margin"])
        x0 = min_x * self.scale - margin
        y0 = min_y * self.scale - margin
        width = vb_w * self.scale + 2 * margin
        height = vb_h * self.scale + 2 * margin
        log.debug("Calculated SVG canvas dimensions: %.2fx%.2f", width, height)

        svg = [
            f'<svg width="{width:.2f}" height="{height:.2f}" '
            f'viewBox="{x0:.2f} {y0:.2f} {width:.2f} {height:.2f}" '
            'xmlns="http://www.w3.org/2000/svg">',
        ]
        self._render_layers(svg)
        svg.append("</svg>")
        log.info("SVG rendering complete.")
        return "\n".join(svg)

    def _render_layers(self, svg: List[str]):
        """Appends the layers bottom to top."""
        if self.result.background is not None:
            self._render_group(svg, "background", self._background_fills())
        if self.result.text is not None:
            self._render_group(svg, "text", self._text_fills())
        if self.result.heat:
            self._render_group(svg, "heatmap", self._heat_fills())
        if self.result.path is not None:
            self._render_group(svg, "solution", [self._solution_line()])
        self._render_group(svg, "walls", self._wall_paths())

    def _render_group(self, svg: List[str], name: str, elements: List[str]):
        svg.append(f'<g id="{name}">')
        svg.extend(elements)
        svg.append("</g>")
        log.debug("Rendered layer '%s' with %d elements.", name, len(elements))

    def _background_fills(self) -> List[str]:
        return [self._polygon(c, self.result.background(c)) for c in self.grid.coordinates()]

    def _text_fills(self) -> List[str]:
        color = Color.parse(self.styles["text_color"])
        return [self._polygon(c, color) for c in self.grid.coordinates() if self.result.text(c)]

    def _heat_fills(self) -> List[str]:
        heat, spec = self.result.heat, self.result.heat_spec
        highest = max(heat.values()) or 1
        return [
            self._polygon(c, spec.hot.fade(spec.cold, heat[c] / highest))
            for c in self.grid.coordinates()
            if c in heat
        ]

    def _solution_line(self) -> str:
        points = " ".join(self._xy(self.grid.center(c)) for c in self.result.path)
        width = self.scale * SOLUTION_WIDTH_RATIO
        color = Color.parse(self.styles["solve_color"])
        opacity = "" if color.alpha == 255 else f' stroke-opacity="{color.opacity:.3f}"'
        return (
            f'<polyline points="{points}" fill="none" stroke="{color.to_hex()}"{opacity} '
            f'stroke-width="{width:.2f}" stroke-linecap="round" stroke-linejoin="round"/>'
        )

    def closed_wall_segments(self) -> List[Tuple[Point, Point]]:
        """Lists every closed wall once, boundary walls included."""
        grid = self.grid
        segments = []
        for index in grid.room_indices():
            coord = grid.coordinate(index)
            for wall in range(grid.topology.arity):
                other = grid.neighbor_index(index, wall)
                if other != NO_ROOM and (other < index or grid.wall_open(index, wall)):
                    continue
                segments.append(grid.topology.wall_span(coord, wall))
        return segments

    def _wall_paths(self) -> List[str]:
        segments = self.closed_wall_segments()
        if not segments:
            return []
        merged = linemerge([LineString([(a.x, a.y), (b.x, b.y)]) for a, b in segments])
        lines = getattr(merged, "geoms", [merged])
        data = []
        for line in lines:
            if line.is_empty:
                continue
            data.append(
                " ".join(
                    f"{'M' if i == 0 else 'L'} {x * self.scale:.2f} {y * self.scale:.2f}"
                    for i, (x, y) in enumerate(line.coords)
                )
            )
        log.debug("Merged %d wall segments into %d lines.", len(segments), len(data))
        return [
            f'<path d="{" ".join(data)}" fill="none" stroke="{self.styles["wall_color"]}" '
            f'stroke-width="{float(self.styles["wall_width"]):.2f}" stroke-linecap="round" '
            'stroke-linejoin="round"/>'
        ]


def render_svg(result, options: dict) -> str:
    """Renders a MazeResult to an SVG string."""
    return SVGRenderer(result, options).render()
