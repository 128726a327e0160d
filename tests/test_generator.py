import numpy as np
import pytest

from galaxy import GalaxyParameters, InvalidParameter, PointFieldGenerator, ResourceExhaustion
from galaxy.generator import as_points, branch_angles, radial_colors, sample_offsets, sample_radii


@pytest.fixture
def generator():
    return PointFieldGenerator()


def test_buffer_lengths(generator):
    params = GalaxyParameters(count=1000, seed=3)
    positions, colors = generator.generate(params)
    assert positions.shape == (3000,)
    assert colors.shape == (3000,)
    assert positions.dtype == np.float32
    assert colors.dtype == np.float32


def test_colors_in_unit_range(generator):
    params = GalaxyParameters(count=5000, seed=4, inside_color="#ffffff", outside_color="#000000")
    _, colors = generator.generate(params)
    assert colors.min() >= 0.0
    assert colors.max() <= 1.0


def test_planar_radius_bounded_by_radius_plus_scatter(generator):
    params = GalaxyParameters(count=20_000, radius=3.0, seed=5)
    points = as_points(generator.generate(params)[0])
    planar = np.sqrt(points[:, 0] ** 2 + points[:, 2] ** 2)
    # Scatter is at most 1 per axis
    assert planar.max() <= 3.0 + np.sqrt(2.0) + 1e-5
    assert np.abs(points[:, 1]).max() <= 1.0


def test_seed_makes_generation_reproducible(generator):
    params = GalaxyParameters(count=2000, seed=42)
    a = generator.generate(params)
    b = generator.generate(params)
    np.testing.assert_array_equal(a[0], b[0])
    np.testing.assert_array_equal(a[1], b[1])

    c = generator.generate(params.replace(seed=43))
    assert not np.array_equal(a[0], c[0])


def test_branch_assignment_follows_index():
    angles = branch_angles(100_000, 3)
    buckets = np.rint(angles / (2 * np.pi) * 3).astype(int)
    np.testing.assert_array_equal(buckets, np.arange(100_000) % 3)


def test_points_lie_on_branch_when_scatter_vanishes(generator):
    # spin=0 and a huge power leave nearly every point almost exactly on its arm ray
    params = GalaxyParameters(count=3000, branches=3, spin=0.0, randomness_power=2000.0, seed=7)
    points = as_points(generator.generate(params)[0])
    planar = np.hypot(points[:, 0], points[:, 2])
    keep = planar > 0.5
    angle = np.mod(np.arctan2(points[:, 2], points[:, 0]), 2 * np.pi)
    expected = branch_angles(3000, 3)
    diff = np.angle(np.exp(1j * (angle - expected)))
    assert np.quantile(np.abs(diff[keep]), 0.99) < 0.05
    assert np.median(np.abs(diff[keep])) < 1e-3


def test_offset_magnitude_shrinks_with_power():
    rng = np.random.default_rng(0)
    tight = np.abs(sample_offsets(rng, 50_000, 10.0))
    loose = np.abs(sample_offsets(rng, 50_000, 1.0))
    assert np.median(tight) < 0.01
    # power 1: magnitudes uniform on [0, 1)
    assert abs(loose.mean() - 0.5) < 0.01
    assert loose.max() < 1.0


def test_offset_signs_are_balanced():
    signs = np.sign(sample_offsets(np.random.default_rng(1), 40_000, 1.0))
    assert abs(signs.mean()) < 0.02


def test_radii_uniform_within_radius():
    radii = sample_radii(np.random.default_rng(2), 50_000, 4.0)
    assert radii.min() >= 0.0
    assert radii.max() < 4.0
    assert abs(radii.mean() - 2.0) < 0.05


def test_radial_colors_interpolate_between_endpoints():
    radii = np.array([0.0, 1.0, 2.0, 5.0])
    colors = radial_colors(radii, 2.0, (1.0, 0.0, 0.0), (0.0, 0.0, 1.0))
    np.testing.assert_allclose(colors[0], [1.0, 0.0, 0.0])
    np.testing.assert_allclose(colors[1], [0.5, 0.0, 0.5])
    np.testing.assert_allclose(colors[2], [0.0, 0.0, 1.0])
    # beyond the radius the blend is clamped
    np.testing.assert_allclose(colors[3], [0.0, 0.0, 1.0])


@pytest.mark.parametrize("changes", [{"count": 0}, {"radius": 0.0}, {"branches": 0}])
def test_invalid_parameters_fail_fast(generator, changes):
    with pytest.raises(InvalidParameter):
        generator.generate(GalaxyParameters(**changes))


def test_point_ceiling():
    with pytest.raises(ResourceExhaustion):
        PointFieldGenerator(max_points=500).generate(GalaxyParameters(count=501))


def test_as_points_rejects_ragged_buffer():
    with pytest.raises(InvalidParameter):
        as_points(np.zeros(7, dtype=np.float32))
