import itertools

import numpy as np
import pytest

from galaxy import (
    ConnectionGraphBuilder,
    GalaxyParameters,
    InvalidParameter,
    PointFieldGenerator,
    ResourceExhaustion,
)
from galaxy.generator import as_points


@pytest.fixture(scope="module")
def builder():
    b = ConnectionGraphBuilder()
    b.warmup()
    return b


def brute_force(points, line_distance, max_connections):
    """Reference: per i, candidates j > i within distance, nearest by (d, j)."""
    pairs = []
    n = len(points)
    for i in range(n):
        cands = []
        for j in range(i + 1, n):
            d = float(np.sqrt(((points[j] - points[i]) ** 2).sum()))
            if d <= line_distance:
                cands.append((d, j))
        cands.sort()
        pairs.extend((i, j) for _, j in cands[:max_connections])
    return pairs


def test_lines_disabled_returns_empty(builder):
    positions = np.zeros(30, dtype=np.float32)
    line_positions, line_colors = builder.build(
        positions, GalaxyParameters(show_lines=False, line_distance=-1.0)
    )
    assert line_positions.size == 0
    assert line_colors.size == 0


def test_unit_square_keeps_all_six_pairs(builder):
    points = np.array([
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0],
        [1.0, 0.0, 1.0],
    ])
    graph = builder.connect(points, 1.5, 3)
    assert sorted(map(tuple, graph.pairs.tolist())) == list(itertools.combinations(range(4), 2))
    assert graph.distances.max() == pytest.approx(np.sqrt(2.0))


def test_far_pair_has_no_connection(builder):
    points = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    assert len(builder.connect(points, 1.0, 3)) == 0


def test_tiny_distance_over_wide_spread(builder):
    points = np.array([[0.0, 0.0, 0.0], [1e4, 1e4, 1e4]])
    assert len(builder.connect(points, 1e-3, 3)) == 0


def test_tiny_distance_on_default_galaxy(builder):
    params = GalaxyParameters(count=100, seed=1, show_lines=True, line_distance=1e-6)
    positions, _ = PointFieldGenerator().generate(params)
    line_positions, line_colors = builder.build(positions, params)
    assert line_positions.size == 0
    assert line_colors.size == 0


def test_distance_threshold_is_inclusive(builder):
    points = np.array([[0.0, 0.0, 0.0], [0.5, 0.0, 0.0]])
    assert builder.connect(points, 0.5, 1).pairs.tolist() == [[0, 1]]


def test_nearest_neighbours_preferred(builder):
    points = np.array([
        [0.0, 0.0, 0.0],
        [0.9, 0.0, 0.0],
        [0.1, 0.0, 0.0],
        [0.5, 0.0, 0.0],
    ])
    graph = builder.connect(points, 1.0, 2)
    outgoing = [tuple(p) for p in graph.pairs.tolist() if p[0] == 0]
    assert outgoing == [(0, 2), (0, 3)]


def test_ties_break_by_index(builder):
    points = np.array([
        [0.0, 0.0, 0.0],
        [0.0, 0.0, 0.3],
        [0.3, 0.0, 0.0],
        [0.0, 0.3, 0.0],
    ])
    graph = builder.connect(points, 1.0, 2)
    assert [tuple(p) for p in graph.pairs.tolist() if p[0] == 0] == [(0, 1), (0, 2)]


def test_cap_is_on_outgoing_edges_only(builder):
    # Hub is the highest index: every other point selects it as its nearest
    spokes = np.array([[np.cos(a), 0.0, np.sin(a)] for a in np.linspace(0, 2 * np.pi, 5, endpoint=False)])
    points = np.vstack([spokes * 0.4, [[0.0, 0.0, 0.0]]])
    graph = builder.connect(points, 0.45, 1)
    hub = len(points) - 1

    assert graph.outgoing(len(points)).max() <= 1
    assert graph.degree(len(points))[hub] == 5


def test_matches_brute_force_on_random_points(builder):
    rng = np.random.default_rng(21)
    points = rng.uniform(-1, 1, size=(400, 3))
    graph = builder.connect(points, 0.25, 3)
    assert [tuple(p) for p in graph.pairs.tolist()] == brute_force(points, 0.25, 3)


def test_retained_connections_satisfy_invariants(builder):
    params = GalaxyParameters(count=3000, radius=2.0, seed=8, show_lines=True,
                              line_distance=0.15, max_connections=2)
    positions, _ = PointFieldGenerator().generate(params)
    points = as_points(positions).astype(np.float64)
    graph = builder.connect(points, params.line_distance, params.max_connections)

    assert len(graph) > 0
    assert np.all(graph.pairs[:, 0] < graph.pairs[:, 1])
    assert len({tuple(p) for p in graph.pairs.tolist()}) == len(graph)
    assert graph.outgoing(params.count).max() <= params.max_connections

    d = np.linalg.norm(points[graph.pairs[:, 0]] - points[graph.pairs[:, 1]], axis=1)
    np.testing.assert_allclose(d, graph.distances)
    assert np.all(graph.distances <= params.line_distance)


def test_build_is_repeatable(builder):
    params = GalaxyParameters(count=2000, seed=2, show_lines=True, line_distance=0.2, max_connections=3)
    positions, _ = PointFieldGenerator().generate(params)
    first = builder.build(positions, params)
    second = builder.build(positions, params)
    np.testing.assert_array_equal(first[0], second[0])
    np.testing.assert_array_equal(first[1], second[1])


def test_segment_buffers_layout(builder):
    positions = np.array([0, 0, 0, 1, 0, 0, 5, 5, 5], dtype=np.float32)
    params = GalaxyParameters(show_lines=True, line_distance=1.5, max_connections=3, line_color="#ff0000")
    line_positions, line_colors = builder.build(positions, params)

    np.testing.assert_array_equal(line_positions, [0, 0, 0, 1, 0, 0])
    np.testing.assert_array_equal(line_colors, [1, 0, 0, 1, 0, 0])
    assert line_positions.dtype == np.float32


def test_everything_in_one_cell(builder):
    # line_distance larger than the whole cloud: every pair is a candidate
    rng = np.random.default_rng(3)
    points = rng.uniform(0, 1, size=(60, 3))
    graph = builder.connect(points, 10.0, 100)
    assert len(graph) == 60 * 59 // 2


def test_segment_ceiling(builder):
    points = np.random.default_rng(4).uniform(0, 1, size=(50, 3))
    with pytest.raises(ResourceExhaustion):
        ConnectionGraphBuilder(max_segments=10).connect(points, 10.0, 5)


def test_invalid_line_parameters(builder):
    positions = np.zeros(9, dtype=np.float32)
    with pytest.raises(InvalidParameter):
        builder.build(positions, GalaxyParameters(show_lines=True, line_distance=0.0))
    with pytest.raises(InvalidParameter):
        builder.build(positions, GalaxyParameters(show_lines=True, max_connections=0))
