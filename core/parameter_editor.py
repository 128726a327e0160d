"""Keyboard-driven editing of galaxy parameters."""

from typing import List, Optional

import numpy as np

from config import galaxy as config
from galaxy import GalaxyParameters
from galaxy.parameters import color_to_hex, parse_color

FIELDS = [
    "count",
    "size",
    "radius",
    "branches",
    "spin",
    "randomness",
    "randomness_power",
    "inside_color",
    "outside_color",
    "show_lines",
    "line_distance",
    "line_opacity",
    "line_color",
    "max_connections",
]

INT_FIELDS = {"count", "branches", "max_connections"}
COLOR_FIELDS = {"inside_color", "outside_color", "line_color"}
COARSE_FACTOR = 10
SEED_RANGE = 2 ** 32


def random_seed() -> int:
    """Fresh seed for the R key, drawn from OS entropy."""
    return int(np.random.default_rng().integers(SEED_RANGE))


def _decimals(step: float) -> int:
    text = f"{step:.10f}".rstrip("0")
    return len(text.split(".")[1]) if "." in text else 0


class ParameterEditor:
    """
    Holds the current parameter set and derives a new one per edit.

    Parameters are never mutated; every edit replaces `params` with a new value.
    """

    def __init__(self, params: GalaxyParameters, controls: Optional[dict] = None,
                 palette: Optional[list] = None):
        self.params = params
        self.controls = controls if controls is not None else config.CONTROLS
        self.palette = [parse_color(c) for c in (palette if palette is not None else config.PALETTE)]
        self.index = 0

    @property
    def selected(self) -> str:
        return FIELDS[self.index]

    def select_next(self):
        self.index = (self.index + 1) % len(FIELDS)

    def select_previous(self):
        self.index = (self.index - 1) % len(FIELDS)

    def adjust(self, direction: int, coarse: bool = False) -> GalaxyParameters:
        """Step the selected field up (direction > 0) or down."""
        name = self.selected
        value = getattr(self.params, name)

        if name == "show_lines":
            new_value = not value
        elif name in COLOR_FIELDS:
            new_value = self._cycle_color(value, direction)
        else:
            new_value = self._step_number(name, value, direction, coarse)

        self.params = self.params.replace(**{name: new_value})
        return self.params

    def toggle_lines(self) -> GalaxyParameters:
        self.params = self.params.replace(show_lines=not self.params.show_lines)
        return self.params

    def reseed(self, seed: Optional[int]) -> GalaxyParameters:
        self.params = self.params.replace(seed=seed)
        return self.params

    def _step_number(self, name: str, value, direction: int, coarse: bool):
        lo, hi, step = self.controls[name]
        step = step * (COARSE_FACTOR if coarse else 1)
        sign = 1 if direction > 0 else -1
        new_value = min(hi, max(lo, value + sign * step))
        if name in INT_FIELDS:
            return int(round(new_value))
        return round(new_value, _decimals(self.controls[name][2]))

    def _cycle_color(self, value, direction: int):
        try:
            pos = self.palette.index(tuple(value))
        except ValueError:
            pos = -1 if direction > 0 else 0
        return self.palette[(pos + (1 if direction > 0 else -1)) % len(self.palette)]

    def format_value(self, name: str) -> str:
        value = getattr(self.params, name)
        if name in COLOR_FIELDS:
            return color_to_hex(value)
        if name == "count":
            return f"{value:,}"
        if isinstance(value, bool):
            return "on" if value else "off"
        return f"{value:g}"

    def describe(self) -> List[str]:
        """One HUD line per field, the selected one marked."""
        lines = []
        for idx, name in enumerate(FIELDS):
            marker = ">" if idx == self.index else " "
            lines.append(f"{marker} {name:<17} {self.format_value(name)}")
        return lines
