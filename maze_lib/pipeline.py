# --- maze_lib/pipeline.py ---
"""
maze_lib/pipeline.py: Runs one maze from configuration to renderable result.

The phases run strictly in order: dimensions, mask, grid, generation, wall
breaking, then the optional solution, heat map and image overlays. One
random.Random instance drives every random choice of a run.
"""
import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .breaker import break_walls
from .config import HeatMapSpec, MazeConfig
from .errors import ConfigurationError
from .generators import generate
from .grid import Grid
from .heatmap import heatmap, traversal_heatmap
from .imaging import ImageSampler, load_image, render_text
from .mask import Mask
from .rendering.color import Color
from .solver import Path, default_endpoints, solve
from .topology import Coordinate, Topology

log = logging.getLogger("maze.main")

# Rooms whose share of the rasterized text is at least this are lettering.
TEXT_THRESHOLD = 0.5


@dataclass
class MazeResult:
    """A generated maze plus everything the renderers draw on top of it."""

    grid: Grid
    method: str
    seed: Optional[int]
    path: Optional[Path] = None
    heat: Optional[Dict[Coordinate, int]] = None
    heat_spec: Optional[HeatMapSpec] = None
    background: Optional[Callable[[Coordinate], Color]] = None
    text: Optional[Callable[[Coordinate], bool]] = None


def make_rng(seed: Optional[int]) -> Tuple[random.Random, int]:
    """Returns a seeded generator and the seed, drawing a fresh one if needed."""
    if seed is None:
        seed = random.SystemRandom().randrange(2**32)
        log.info("No seed given; using seed %d.", seed)
    else:
        log.info("Using seed %d.", seed)
    return random.Random(seed), seed


def _dimensions(config: MazeConfig, topology: Topology, background) -> Tuple[int, int]:
    if config.ratio is None:
        return config.width, config.height
    cols, rows = topology.dimensions_for(
        background.width / config.ratio, background.height / config.ratio
    )
    log.info(
        "Background %dx%d at %.2f px per room gives %dx%d rooms.",
        background.width,
        background.height,
        config.ratio,
        cols,
        rows,
    )
    return cols, rows


def _build_mask(config: MazeConfig, topology: Topology, width: int, height: int) -> Optional[Mask]:
    if not config.mask_path:
        return None
    sampler = ImageSampler.open(config.mask_path, topology, width, height)
    return Mask.from_luminosity(
        width, height, sampler.luminosity, config.mask_threshold, config.mask_invert
    )


def run_pipeline(config: MazeConfig) -> MazeResult:
    """
    Generates a maze as described by a validated configuration.

    Args:
        config: The run configuration; validate() is called again here.

    Returns:
        A MazeResult ready for rendering or saving.
    """
    config.validate()
    rng, seed = make_rng(config.seed)
    topology = Topology(config.shape)

    background = load_image(config.background_path) if config.background_path else None
    width, height = _dimensions(config, topology, background)

    mask = _build_mask(config, topology, width, height)
    grid = Grid(topology, width, height, mask)

    method = generate(grid, config.method, rng)
    grid.verify()

    if config.break_count:
        break_walls(grid, rng, config.break_count)
        grid.verify()

    result = MazeResult(grid=grid, method=method, seed=seed)
    return annotate(result, config, background)


def annotate(result: MazeResult, config: MazeConfig, background=None) -> MazeResult:
    """Adds the solution, heat map and overlays requested by config to a result."""
    grid = result.grid
    if config.solve:
        start, end = default_endpoints(grid)
        result.path = solve(grid, start, end)

    if config.heatmap is not None:
        result.heat_spec = config.heatmap
        if config.heatmap.kind == "distance":
            rooms = grid.room_indices()
            if not rooms:
                raise ConfigurationError("Cannot build a heat map for a maze without rooms")
            result.heat = heatmap(grid, grid.coordinate(rooms[0]))
        else:
            result.heat = traversal_heatmap(grid, config.heatmap.kind)

    if config.background_path:
        if background is None:
            background = load_image(config.background_path)
        sampler = ImageSampler(background, grid.topology, grid.width, grid.height)
        result.background = lambda coord: Color.from_rgb(sampler.color(coord))
        log.info("Coloring rooms from background '%s'.", config.background_path)

    if config.text:
        text_sampler = ImageSampler(
            render_text(config.text), grid.topology, grid.width, grid.height
        )
        result.text = lambda coord: text_sampler.luminosity(coord) >= TEXT_THRESHOLD
        log.info("Overlaying text %r.", config.text)

    return result


def replay(snapshot, config: MazeConfig) -> MazeResult:
    """Rebuilds a result from a saved snapshot and applies the requested overlays."""
    config.shape = snapshot.shape
    config.width, config.height, config.ratio = snapshot.width, snapshot.height, None
    config.validate()
    grid = snapshot.to_grid()
    grid.verify()
    result = MazeResult(grid=grid, method=snapshot.method, seed=snapshot.seed)
    if snapshot.solution and not config.solve:
        result.path = Path(tuple(Coordinate(c, r) for c, r in snapshot.solution))
    return annotate(result, config)
