# --- maze_lib/config.py ---
"""
maze_lib/config.py: Run configuration and option parsing.

MazeConfig carries every option of a run. Style defaults come from an
optional INI settings file read with configparser; explicit command-line
values always win. Everything is validated eagerly, before any grid is
allocated.
"""
import configparser
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ConfigurationError
from .generators import resolve_method
from .heatmap import HEATMAP_KINDS
from .rendering.color import Color
from .rendering.constants import DEFAULT_MARGIN, DEFAULT_SCALE, DEFAULT_WALL_WIDTH
from .topology import Shape

log = logging.getLogger("maze.config")

DEFAULT_SETTINGS = {
    "maze": {
        "walls": "4",
        "scale": "10",
        "margin": "10",
    },
    "render": {
        "wall_color": "black",
        "wall_width": "2",
        "text_color": "#808080",
        "solve_color": "#FF0000",
        "heat_from": "#000000FF",
        "heat_to": "#FFFF0000",
    },
}


@dataclass
class HeatMapSpec:
    """The heat map kind and the colors of cold and hot rooms."""

    kind: str
    cold: Color
    hot: Color


@dataclass
class MazeConfig:
    """All options of a single maze run."""

    method: str
    width: Optional[int] = None
    height: Optional[int] = None
    shape: Shape = Shape.QUAD
    seed: Optional[int] = None
    mask_path: Optional[str] = None
    mask_threshold: float = 0.5
    mask_invert: bool = False
    solve: bool = False
    solve_color: str = "#FF0000"
    break_count: int = 0
    heatmap: Optional[HeatMapSpec] = None
    background_path: Optional[str] = None
    ratio: Optional[float] = None
    text: Optional[str] = None
    scale: float = DEFAULT_SCALE
    margin: float = DEFAULT_MARGIN
    wall_color: str = "black"
    wall_width: float = DEFAULT_WALL_WIDTH
    text_color: str = "#808080"

    def validate(self) -> "MazeConfig":
        """Checks every option; raises ConfigurationError on the first problem."""
        self.shape = Shape.parse(self.shape)
        self.method = resolve_method(self.method)
        if self.ratio is not None:
            if not self.background_path:
                raise ConfigurationError("--ratio requires --background")
            if self.ratio <= 0:
                raise ConfigurationError(f"The ratio must be positive, got {self.ratio}")
        elif self.width is None or self.height is None:
            raise ConfigurationError(
                "--width and --height are required unless --background and --ratio are given"
            )
        else:
            if self.width <= 0 or self.height <= 0:
                raise ConfigurationError(f"Invalid maze size {self.width}x{self.height}")
        if self.mask_path is not None and not 0.0 <= self.mask_threshold <= 1.0:
            raise ConfigurationError(
                f"Mask threshold {self.mask_threshold} is outside [0, 1]"
            )
        if self.break_count < 0:
            raise ConfigurationError(f"Invalid break count: {self.break_count}")
        if self.scale <= 0:
            raise ConfigurationError(f"The scale must be positive, got {self.scale}")
        if self.margin < 0:
            raise ConfigurationError(f"The margin must not be negative, got {self.margin}")
        if self.text is not None and not self.text:
            raise ConfigurationError("The overlay text must not be empty")
        Color.parse(self.solve_color)
        Color.parse(self.text_color)
        log.debug("Validated configuration: %s", self)
        return self


def parse_mask_spec(value: str) -> Tuple[str, float]:
    """
    Parses a mask description of the form 'path,threshold'.

    Returns:
        The image path and the threshold in [0, 1].
    """
    path, sep, threshold = (value or "").rpartition(",")
    path = path.strip()
    if not sep or not path:
        raise ConfigurationError(f"Invalid mask: {value!r} (expected PATH,THRESHOLD)")
    try:
        t = float(threshold)
    except ValueError:
        raise ConfigurationError(f"Invalid threshold: {threshold.strip()!r}") from None
    if not 0.0 <= t <= 1.0:
        raise ConfigurationError(f"Mask threshold {t} is outside [0, 1]")
    return path, t


def parse_heatmap_spec(value: str, settings: Optional[dict] = None) -> HeatMapSpec:
    """
    Parses 'kind', 'kind,color' or 'kind,from,to'.

    With one color, cold rooms use a transparent version of it. Without colors
    the settings' heat_from and heat_to are used.
    """
    render = (settings or DEFAULT_SETTINGS)["render"]
    parts = [p.strip() for p in (value or "").split(",")]
    kind = parts[0]
    if kind not in HEATMAP_KINDS:
        raise ConfigurationError(
            f"Unknown heat map type: {kind!r} (expected one of {', '.join(HEATMAP_KINDS)})"
        )
    if len(parts) == 1:
        return HeatMapSpec(kind, Color.parse(render["heat_from"]), Color.parse(render["heat_to"]))
    if len(parts) == 2:
        hot = Color.parse(parts[1])
        return HeatMapSpec(kind, hot.transparent(), hot)
    if len(parts) == 3:
        return HeatMapSpec(kind, Color.parse(parts[1]), Color.parse(parts[2]))
    raise ConfigurationError(f"Invalid heat map: {value!r}")


def parse_break_count(value) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid break count: {value!r}") from None
    if count < 0:
        raise ConfigurationError(f"Invalid break count: {count}")
    return count


def load_settings(config_path: Optional[str] = None) -> dict:
    """Reads the settings file, applying defaults for missing values."""
    config = configparser.ConfigParser()
    for section, values in DEFAULT_SETTINGS.items():
        config[section] = values

    if config_path:
        try:
            read = config.read(config_path)
        except configparser.Error as e:
            raise ConfigurationError(f"Malformed settings file {config_path}: {e}") from e
        if not read:
            raise ConfigurationError(f"Settings file not found: {config_path}")
        log.info("Loaded settings from %s", config_path)

    return {s: dict(config.items(s)) for s in config.sections()}
