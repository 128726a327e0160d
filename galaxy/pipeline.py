"""Generation pipeline: point field, then optional connection lines."""

import time
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from config import galaxy as config
from .connections import ConnectionGraphBuilder
from .generator import PointFieldGenerator
from .parameters import GalaxyParameters


def _empty() -> np.ndarray:
    return np.zeros(0, dtype=np.float32)


@dataclass
class GalaxyBuffers:
    """
    Output of one generation, owned by the caller.

    Call release() (or use as a context manager) when the buffers are
    superseded; released buffers are empty.
    """
    params: GalaxyParameters
    positions: np.ndarray
    colors: np.ndarray
    line_positions: np.ndarray = field(default_factory=_empty)
    line_colors: np.ndarray = field(default_factory=_empty)
    elapsed: float = 0.0
    released: bool = False

    @property
    def point_count(self) -> int:
        return self.positions.shape[0] // 3

    @property
    def segment_count(self) -> int:
        return self.line_positions.shape[0] // 6

    def release(self):
        """Drop references to the generated arrays."""
        self.positions = _empty()
        self.colors = _empty()
        self.line_positions = _empty()
        self.line_colors = _empty()
        self.released = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


class GalaxyPipeline:
    """Runs the generator and connection builder for one parameter set."""

    def __init__(self, max_points: Optional[int] = None, max_segments: Optional[int] = None):
        self.generator = PointFieldGenerator(
            max_points if max_points is not None else config.SAFETY["max_points"]
        )
        self.builder = ConnectionGraphBuilder(
            max_segments if max_segments is not None else config.SAFETY["max_segments"]
        )

    def warmup(self):
        self.builder.warmup()

    def run(self, params: GalaxyParameters) -> GalaxyBuffers:
        """Generate a fresh galaxy. Either fully succeeds or raises."""
        # Fail before any buffer is allocated
        params.validate()
        if params.show_lines:
            params.validate_lines()

        start = time.perf_counter()

        positions, colors = self.generator.generate(params)
        line_positions, line_colors = self.builder.build(positions, params)

        buffers = GalaxyBuffers(
            params=params,
            positions=positions,
            colors=colors,
            line_positions=line_positions,
            line_colors=line_colors,
            elapsed=time.perf_counter() - start,
        )

        print(f"[Galaxy] Generated {buffers.point_count:,} points in {buffers.elapsed:.2f}s")
        if params.show_lines:
            print(f"[Lines] {buffers.segment_count:,} segments "
                  f"(distance {params.line_distance}, max {params.max_connections}/point)")
        return buffers

    def regenerate(self, params: GalaxyParameters, previous: Optional[GalaxyBuffers] = None) -> GalaxyBuffers:
        """
        Run the pipeline and release the superseded buffers.

        The previous buffers are only released once the new run succeeded.
        """
        buffers = self.run(params)
        if previous is not None and previous is not buffers:
            previous.release()
        return buffers
