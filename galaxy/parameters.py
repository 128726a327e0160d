"""Immutable parameter set for one galaxy generation."""

import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .errors import InvalidParameter

RGB = Tuple[float, float, float]
ColorLike = Union[str, RGB]


def parse_color(value: ColorLike, name: str = "color") -> RGB:
    """
    Normalize a colour to an (r, g, b) tuple of floats in [0, 1].

    Accepts "#rrggbb", "#rgb" or a 3-sequence of floats.
    """
    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            raise InvalidParameter(name, value, "expected #rrggbb or #rgb")
        try:
            channels = [int(text[k:k + 2], 16) / 255.0 for k in (0, 2, 4)]
        except ValueError:
            raise InvalidParameter(name, value, "not a hex colour") from None
        return tuple(channels)

    try:
        r, g, b = (float(c) for c in value)
    except (TypeError, ValueError):
        raise InvalidParameter(name, value, "expected 3 colour channels") from None
    for c in (r, g, b):
        if not 0.0 <= c <= 1.0:
            raise InvalidParameter(name, value, "channels must lie in [0, 1]")
    return (r, g, b)


def color_to_hex(color: RGB) -> str:
    """Format an (r, g, b) float tuple as #rrggbb."""
    return "#" + "".join(f"{int(round(c * 255)):02x}" for c in color)


@dataclass(frozen=True)
class GalaxyParameters:
    """
    Everything one generation needs.

    Attributes:
        count: Number of particles
        size: Point size used by the renderer only
        radius: Maximum particle distance from the centre axis
        branches: Number of spiral arms
        spin: Angular twist per unit radius
        randomness: Legacy field, not used by the position math
        randomness_power: Exponent shaping the scatter around an arm
        inside_color / outside_color: Colour interpolation endpoints
        show_lines: Whether connection lines are built
        line_distance: Maximum distance between connected particles
        line_opacity / line_color: Renderer-only line styling
        max_connections: Cap on connections kept per particle
        seed: Optional seed for reproducible generation
    """
    count: int = 100_000
    size: float = 0.01
    radius: float = 5.0
    branches: int = 3
    spin: float = 1.0
    randomness: float = 0.2
    randomness_power: float = 3.0
    inside_color: ColorLike = "#ff6030"
    outside_color: ColorLike = "#1b3984"
    show_lines: bool = False
    line_distance: float = 0.05
    line_opacity: float = 0.3
    line_color: ColorLike = "#88aaff"
    max_connections: int = 3
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ("inside_color", "outside_color", "line_color"):
            object.__setattr__(self, name, parse_color(getattr(self, name), name))

    @classmethod
    def from_config(cls, cfg: dict) -> "GalaxyParameters":
        """Build parameters from a settings dict, ignoring unknown keys."""
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in cfg.items() if k in names})

    def replace(self, **changes) -> "GalaxyParameters":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        for name in ("inside_color", "outside_color", "line_color"):
            data[name] = color_to_hex(data[name])
        return data

    def validate(self):
        """Raise InvalidParameter if a structural precondition is violated."""
        if self.count < 1:
            raise InvalidParameter("count", self.count, "must be at least 1")
        if not self.radius > 0:
            raise InvalidParameter("radius", self.radius, "must be positive")
        if self.branches < 1:
            raise InvalidParameter("branches", self.branches, "must be at least 1")
        if not self.randomness_power > 0:
            raise InvalidParameter("randomness_power", self.randomness_power, "must be positive")
        if self.max_connections < 1:
            raise InvalidParameter("max_connections", self.max_connections, "must be at least 1")

    def validate_lines(self):
        """Preconditions that only matter when connection lines are built."""
        if not self.line_distance > 0:
            raise InvalidParameter("line_distance", self.line_distance, "must be positive")
        if self.max_connections < 1:
            raise InvalidParameter("max_connections", self.max_connections, "must be at least 1")
