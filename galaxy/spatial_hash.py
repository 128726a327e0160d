"""Spatial hash over particle positions for fixed-radius neighbour queries."""

from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
from numba import njit

from .errors import InvalidParameter, ResourceExhaustion

Cell = Tuple[int, int, int]

# Cell coordinates must leave room for the +-1 neighbour offsets
MAX_CELL_COORD = 2 ** 62


@njit(cache=True)
def compare_cell(cell_coords: np.ndarray, row: int, x: int, y: int, z: int) -> int:
    """Lexicographic order of cell_coords[row] against (x, y, z): -1, 0 or 1."""
    if cell_coords[row, 0] != x:
        return -1 if cell_coords[row, 0] < x else 1
    if cell_coords[row, 1] != y:
        return -1 if cell_coords[row, 1] < y else 1
    if cell_coords[row, 2] != z:
        return -1 if cell_coords[row, 2] < z else 1
    return 0


@njit(cache=True)
def find_cell(cell_coords: np.ndarray, x: int, y: int, z: int) -> int:
    """Row of cell (x, y, z) in the sorted occupied cells, -1 if empty."""
    lo = 0
    hi = cell_coords.shape[0]
    while lo < hi:
        mid = (lo + hi) // 2
        if compare_cell(cell_coords, mid, x, y, z) < 0:
            lo = mid + 1
        else:
            hi = mid
    if lo < cell_coords.shape[0] and compare_cell(cell_coords, lo, x, y, z) == 0:
        return lo
    return -1


@dataclass(frozen=True)
class SpatialHashGrid:
    """
    Cubic cells of side `cell_size`, keyed by their (ix, iy, iz) coordinate.

    Only occupied cells are stored, sorted lexicographically, so memory and
    key range depend on the number of particles and not on how far apart they
    are. Lookup is a binary search over the three-integer key.

    Attributes:
        cell_size: Cell edge length
        cells: (count, 3) floor(p / cell_size) of every particle
        cell_coords: (occupied, 3) sorted unique cell coordinates
        cell_starts: Offset of each occupied cell's bucket in sorted_indices
        cell_counts: Number of particles in each occupied cell
        sorted_indices: Particle indices grouped by cell, ascending within a cell
    """
    cell_size: float
    cells: np.ndarray
    cell_coords: np.ndarray
    cell_starts: np.ndarray
    cell_counts: np.ndarray
    sorted_indices: np.ndarray

    @classmethod
    def build(cls, points: np.ndarray, cell_size: float) -> "SpatialHashGrid":
        """Bucket (count, 3) points into cells of the given size."""
        if not cell_size > 0:
            raise InvalidParameter("cell_size", cell_size, "must be positive")

        points = np.asarray(points, dtype=np.float64)
        n = points.shape[0]
        if n == 0:
            empty = np.zeros(0, dtype=np.int64)
            no_cells = np.zeros((0, 3), dtype=np.int64)
            return cls(float(cell_size), no_cells, no_cells, empty, empty, empty)
        if not np.all(np.isfinite(points)):
            raise InvalidParameter("positions", "non-finite", "positions must be finite")

        scaled = np.floor(points / cell_size)
        extent = float(np.abs(scaled).max())
        if extent >= MAX_CELL_COORD:
            raise ResourceExhaustion("cell coordinate", int(extent), MAX_CELL_COORD)
        cells = scaled.astype(np.int64)

        # lexsort is stable: equal cells keep ascending particle order
        order = np.lexsort((cells[:, 2], cells[:, 1], cells[:, 0]))
        sorted_cells = cells[order]

        changed = np.any(sorted_cells[1:] != sorted_cells[:-1], axis=1)
        cell_starts = np.concatenate(([0], np.nonzero(changed)[0] + 1)).astype(np.int64)
        cell_counts = np.diff(np.append(cell_starts, n)).astype(np.int64)

        return cls(
            float(cell_size),
            cells,
            np.ascontiguousarray(sorted_cells[cell_starts]),
            cell_starts,
            cell_counts,
            order.astype(np.int64),
        )

    @property
    def num_cells(self) -> int:
        return int(self.cell_coords.shape[0])

    def cell_of(self, point) -> Cell:
        """Integer cell coordinate of a point."""
        p = np.asarray(point, dtype=np.float64)
        return tuple(int(c) for c in np.floor(p / self.cell_size))

    def bucket(self, cell: Cell) -> np.ndarray:
        """Particle indices in a cell, ascending."""
        x, y, z = (int(c) for c in cell)
        row = find_cell(self.cell_coords, x, y, z) if self.num_cells else -1
        if row < 0:
            return np.zeros(0, dtype=np.int64)
        start = int(self.cell_starts[row])
        return self.sorted_indices[start:start + int(self.cell_counts[row])]

    def to_dict(self) -> Dict[Cell, List[int]]:
        """Mapping of occupied cell -> particle indices."""
        out = {}
        for coord, start, count in zip(self.cell_coords, self.cell_starts, self.cell_counts):
            cell = tuple(int(c) for c in coord)
            out[cell] = self.sorted_indices[start:start + count].tolist()
        return out
