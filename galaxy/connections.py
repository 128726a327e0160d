"""
Short-range connection lines between galaxy particles.

Particles are bucketed in a spatial hash with cells twice the line distance.
Each particle i scans the 3x3x3 block of cells around its own, keeps
neighbours j > i within the line distance, ranks them by (distance, j) and
retains the nearest `max_connections`. Only the lower index of a pair ever
selects it, so a particle can end up with more than `max_connections` lines
in total when several lower-index particles pick it.

Key optimizations:
- Numba JIT with prange over particles
- Two passes (count, then select) write into disjoint slices of one buffer,
  so the parallel result matches a sequential one exactly
- Bounded insertion sort per particle instead of sorting all candidates
- Neighbour cells found by binary search over the occupied cells only
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numba import njit, prange

from config import galaxy as config
from .errors import ResourceExhaustion
from .generator import as_points
from .parameters import GalaxyParameters
from .spatial_hash import SpatialHashGrid, find_cell


# ============================================================================
# NUMBA JIT-COMPILED NEIGHBOUR SCAN
# ============================================================================

@njit(cache=True)
def scan_point(
    i: int,
    points: np.ndarray,
    cells: np.ndarray,
    cell_coords: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    sorted_indices: np.ndarray,
    line_distance: float,
    out_j: np.ndarray,
    out_d: np.ndarray,
    out_start: int,
    keep: int
) -> int:
    """
    Scan the 27 cells around particle i for neighbours j > i.

    Returns the number of candidates within line_distance. When keep > 0 the
    nearest `keep` of them, ordered by (distance, j), are written to
    out_j / out_d starting at out_start.
    """
    cx = cells[i, 0]
    cy = cells[i, 1]
    cz = cells[i, 2]

    px = points[i, 0]
    py = points[i, 1]
    pz = points[i, 2]

    found = 0
    filled = 0
    last = out_start + keep - 1

    for dz in range(-1, 2):
        for dy in range(-1, 2):
            for dx in range(-1, 2):
                c = find_cell(cell_coords, cx + dx, cy + dy, cz + dz)
                if c == -1:
                    continue

                start = cell_starts[c]
                for k in range(cell_counts[c]):
                    j = sorted_indices[start + k]
                    if j <= i:
                        continue

                    ex = points[j, 0] - px
                    ey = points[j, 1] - py
                    ez = points[j, 2] - pz
                    dist = math.sqrt(ex * ex + ey * ey + ez * ez)
                    if dist > line_distance:
                        continue

                    found += 1
                    if keep == 0:
                        continue

                    # Insert (dist, j) into the sorted slice, dropping the worst
                    if filled == keep:
                        if dist > out_d[last] or (dist == out_d[last] and j > out_j[last]):
                            continue
                        pos = last
                    else:
                        pos = out_start + filled
                        filled += 1

                    while pos > out_start and (
                        out_d[pos - 1] > dist
                        or (out_d[pos - 1] == dist and out_j[pos - 1] > j)
                    ):
                        out_d[pos] = out_d[pos - 1]
                        out_j[pos] = out_j[pos - 1]
                        pos -= 1
                    out_d[pos] = dist
                    out_j[pos] = j

    return found


@njit(parallel=True, cache=True)
def count_connections(
    points: np.ndarray,
    cells: np.ndarray,
    cell_coords: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    sorted_indices: np.ndarray,
    line_distance: float,
    max_connections: int,
    counts: np.ndarray,
    num_points: int
):
    """Retained connection count per particle: min(candidates, max_connections)."""
    no_j = np.zeros(0, dtype=np.int64)
    no_d = np.zeros(0, dtype=np.float64)
    for i in prange(num_points):
        found = scan_point(
            i, points, cells, cell_coords, cell_starts, cell_counts,
            sorted_indices, line_distance, no_j, no_d, 0, 0
        )
        counts[i] = min(found, max_connections)


@njit(parallel=True, cache=True)
def select_connections(
    points: np.ndarray,
    cells: np.ndarray,
    cell_coords: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    sorted_indices: np.ndarray,
    line_distance: float,
    counts: np.ndarray,
    offsets: np.ndarray,
    out_j: np.ndarray,
    out_d: np.ndarray,
    num_points: int
):
    """Write each particle's nearest neighbours into its slice of out_j / out_d."""
    for i in prange(num_points):
        keep = counts[i]
        if keep == 0:
            continue
        scan_point(
            i, points, cells, cell_coords, cell_starts, cell_counts,
            sorted_indices, line_distance,
            out_j, out_d, offsets[i], keep
        )


# ============================================================================
# CONNECTION GRAPH
# ============================================================================

@dataclass(frozen=True)
class ConnectionGraph:
    """
    Retained connections as parallel arrays.

    pairs[k] = (i, j) with i < j; distances[k] is their Euclidean distance.
    Rows are grouped by ascending i, nearest first within a group.
    """
    pairs: np.ndarray
    distances: np.ndarray

    def __len__(self):
        return int(self.pairs.shape[0])

    def degree(self, num_points: int) -> np.ndarray:
        """Total lines touching each particle (both endpoints counted)."""
        return np.bincount(self.pairs.reshape(-1), minlength=num_points)

    def outgoing(self, num_points: int) -> np.ndarray:
        """Lines each particle selected as the lower index."""
        return np.bincount(self.pairs[:, 0], minlength=num_points)


def empty_graph() -> ConnectionGraph:
    return ConnectionGraph(np.zeros((0, 2), dtype=np.int64), np.zeros(0, dtype=np.float64))


class ConnectionGraphBuilder:
    """Builds line segments between nearby particles."""

    def __init__(self, max_segments: Optional[int] = None):
        self.max_segments = max_segments if max_segments is not None else config.SAFETY["max_segments"]

    def warmup(self):
        """Pre-compile the Numba kernels on a tiny input."""
        pts = np.array([[0.0, 0.0, 0.0], [0.5, 0.0, 0.0], [3.0, 0.0, 0.0]], dtype=np.float64)
        self.connect(pts, 1.0, 1)

    def connect(self, points: np.ndarray, line_distance: float, max_connections: int) -> ConnectionGraph:
        """
        Find retained connections between (count, 3) points.

        Raises:
            ResourceExhaustion: if more than max_segments would be retained
        """
        points = np.ascontiguousarray(points, dtype=np.float64)
        n = points.shape[0]
        if n < 2:
            return empty_graph()

        grid = SpatialHashGrid.build(points, 2.0 * line_distance)

        counts = np.zeros(n, dtype=np.int64)
        count_connections(
            points, grid.cells, grid.cell_coords, grid.cell_starts, grid.cell_counts,
            grid.sorted_indices, float(line_distance),
            int(max_connections), counts, n
        )

        total = int(counts.sum())
        if total > self.max_segments:
            raise ResourceExhaustion("line segments", total, self.max_segments)
        if total == 0:
            return empty_graph()

        offsets = np.zeros(n, dtype=np.int64)
        np.cumsum(counts[:-1], out=offsets[1:])

        out_j = np.empty(total, dtype=np.int64)
        out_d = np.empty(total, dtype=np.float64)
        select_connections(
            points, grid.cells, grid.cell_coords, grid.cell_starts, grid.cell_counts,
            grid.sorted_indices, float(line_distance),
            counts, offsets, out_j, out_d, n
        )

        pairs = np.empty((total, 2), dtype=np.int64)
        pairs[:, 0] = np.repeat(np.arange(n, dtype=np.int64), counts)
        pairs[:, 1] = out_j
        return ConnectionGraph(pairs, out_d)

    def build(self, positions: np.ndarray, params: GalaxyParameters) -> Tuple[np.ndarray, np.ndarray]:
        """
        Line segment buffers for a flat position buffer.

        Returns:
            line_positions: float32, 6 values per segment (i's xyz then j's xyz)
            line_colors: float32, line_color once per segment endpoint
        """
        if not params.show_lines:
            return np.zeros(0, dtype=np.float32), np.zeros(0, dtype=np.float32)

        params.validate_lines()
        points = as_points(positions)
        graph = self.connect(points, params.line_distance, params.max_connections)
        return segment_buffers(points, graph, params.line_color)


def segment_buffers(points: np.ndarray, graph: ConnectionGraph, line_color) -> Tuple[np.ndarray, np.ndarray]:
    """Flatten a connection graph into endpoint position and colour buffers."""
    total = len(graph)
    segments = np.empty((total, 2, 3), dtype=np.float32)
    segments[:, 0] = points[graph.pairs[:, 0]]
    segments[:, 1] = points[graph.pairs[:, 1]]

    colors = np.tile(np.asarray(line_color, dtype=np.float32), total * 2)
    return segments.reshape(-1), colors
