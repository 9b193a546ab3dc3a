# --- maze_lib/rendering/color.py ---
import re
from dataclasses import dataclass, replace

from maze_lib.errors import ConfigurationError

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


@dataclass(frozen=True)
class Color:
    """An RGBA color with 8-bit components."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    @classmethod
    def parse(cls, value: str) -> "Color":
        """
        Parses '#RRGGBB' or '#AARRGGBB' (alpha first) hex notation.

        Args:
            value: The color string.

        Returns:
            The parsed Color.
        """
        value = value.strip() if value else ""
        if not _HEX_RE.match(value):
            raise ConfigurationError(f"Invalid color value: {value!r}")
        data = [int(value[i : i + 2], 16) for i in range(1, len(value), 2)]
        if len(data) == 3:
            return cls(*data)
        alpha, red, green, blue = data
        return cls(red, green, blue, alpha)

    @classmethod
    def from_rgb(cls, rgb) -> "Color":
        r, g, b = rgb
        return cls(int(r), int(g), int(b))

    def transparent(self) -> "Color":
        return replace(self, alpha=0)

    def fade(self, other: "Color", weight: float) -> "Color":
        """Interpolates towards `other`; weight 1 gives self, 0 gives other."""
        if weight >= 1.0:
            return self
        if weight <= 0.0:
            return other
        n = 1.0 - weight
        return Color(
            int(self.red * weight + other.red * n),
            int(self.green * weight + other.green * n),
            int(self.blue * weight + other.blue * n),
            int(self.alpha * weight + other.alpha * n),
        )

    @property
    def opacity(self) -> float:
        return self.alpha / 255.0

    def to_hex(self) -> str:
        """Returns '#RRGGBB'; the alpha component is carried separately as opacity."""
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"
