"""
Spiral galaxy point field.

Particles are spread along `branches` spiral arms. Particle i belongs to arm
i % branches, sits at a uniformly drawn distance from the centre, is twisted
by `spin` radians per unit of that distance, and is scattered on every axis by
a signed offset whose magnitude is u ** randomness_power.
"""

from typing import Optional, Tuple

import numpy as np

from config import galaxy as config
from .errors import InvalidParameter, ResourceExhaustion
from .parameters import GalaxyParameters


def branch_angles(count: int, branches: int) -> np.ndarray:
    """Arm angle for each particle index (evenly populated arms)."""
    index = np.arange(count, dtype=np.int64)
    return (index % branches) / branches * (2.0 * np.pi)


def sample_radii(rng: np.random.Generator, count: int, radius: float) -> np.ndarray:
    """Distance from the centre axis, uniform in distance (not in area)."""
    return rng.random(count) * radius


def sample_offsets(rng: np.random.Generator, count: int, power: float) -> np.ndarray:
    """
    Signed per-axis scatter, shape (count, 3).

    Magnitudes are u ** power, so larger powers pull particles onto the arm.
    """
    magnitude = rng.random((count, 3)) ** power
    sign = np.where(rng.random((count, 3)) < 0.5, 1.0, -1.0)
    return magnitude * sign


def radial_colors(radii: np.ndarray, radius: float, inside, outside) -> np.ndarray:
    """Linear blend from inside to outside colour by radii / radius, shape (count, 3)."""
    t = np.clip(radii / radius, 0.0, 1.0)[:, None]
    inside = np.asarray(inside, dtype=np.float64)
    outside = np.asarray(outside, dtype=np.float64)
    return np.clip(inside + (outside - inside) * t, 0.0, 1.0)


class PointFieldGenerator:
    """
    Produces flat position and colour buffers for a galaxy.

    Unseeded parameters draw from a fresh entropy-seeded generator each call,
    a seed makes the result reproducible.
    """

    def __init__(self, max_points: Optional[int] = None):
        self.max_points = max_points if max_points is not None else config.SAFETY["max_points"]

    def _rng(self, params: GalaxyParameters) -> np.random.Generator:
        return np.random.default_rng(params.seed)

    def generate(self, params: GalaxyParameters) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate the point field.

        Returns:
            positions: float32 array of length 3 * count (x, y, z per particle)
            colors: float32 array of length 3 * count (r, g, b per particle)
        """
        params.validate()
        if params.count > self.max_points:
            raise ResourceExhaustion("points", params.count, self.max_points)

        n = int(params.count)
        rng = self._rng(params)

        radii = sample_radii(rng, n, params.radius)
        angles = branch_angles(n, params.branches) + radii * params.spin
        offsets = sample_offsets(rng, n, params.randomness_power)

        positions = np.empty((n, 3), dtype=np.float32)
        positions[:, 0] = np.cos(angles) * radii + offsets[:, 0]
        positions[:, 1] = offsets[:, 1]
        positions[:, 2] = np.sin(angles) * radii + offsets[:, 2]

        colors = radial_colors(
            radii, params.radius, params.inside_color, params.outside_color
        ).astype(np.float32)

        return positions.reshape(-1), colors.reshape(-1)


def as_points(positions: np.ndarray) -> np.ndarray:
    """View a flat xyz buffer as (count, 3)."""
    flat = np.asarray(positions)
    if flat.ndim != 1 or flat.shape[0] % 3 != 0:
        raise InvalidParameter("positions", flat.shape, "expected a flat buffer of length 3 * count")
    return flat.reshape(-1, 3)
