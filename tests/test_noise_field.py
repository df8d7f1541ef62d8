import numpy as np
import pytest

from noise_field import NoiseField, PerlinNoise


@pytest.fixture
def coords():
    rng = np.random.default_rng(7)
    return rng.uniform(-50, 50, size=(40, 30)), rng.uniform(-50, 50, size=(40, 30))


def test_same_seed_same_values(coords):
    xs, ys = coords
    a = PerlinNoise(1234).sample_many(xs, ys)
    b = PerlinNoise(1234).sample_many(xs, ys)
    assert np.array_equal(a, b)


def test_different_seeds_differ(coords):
    xs, ys = coords
    a = PerlinNoise(1).sample_many(xs, ys)
    b = PerlinNoise(2).sample_many(xs, ys)
    assert not np.allclose(a, b)


def test_output_is_bounded(coords):
    xs, ys = coords
    values = PerlinNoise(99).sample_many(xs, ys)
    assert np.all(np.abs(values) <= 1.05)
    assert values.std() > 0.05


def test_zero_on_lattice_points():
    noise = PerlinNoise(42)
    for x, y in [(0, 0), (3, 5), (-2, 7), (255, 256), (-300, 12)]:
        assert noise.sample(x, y) == 0.0


def test_sample_matches_sample_many():
    noise = PerlinNoise(5)
    xs = np.array([0.3, 1.7, -4.25])
    ys = np.array([2.2, -0.6, 9.9])
    batch = noise.sample_many(xs, ys)
    for i in range(3):
        assert noise.sample(xs[i], ys[i]) == batch[i]


def test_sample_many_keeps_shape():
    noise = PerlinNoise(5)
    out = noise.sample_many(np.zeros((3, 4)) + 0.5, np.zeros((3, 4)) + 0.25)
    assert out.shape == (3, 4)
    assert out.dtype == np.float64


@pytest.mark.parametrize("x, y", [(0.37, 0.81), (12.5, -3.3), (-7.77, 40.01)])
def test_continuity(x, y):
    noise = PerlinNoise(11)
    for eps in (1e-1, 1e-2, 1e-3, 1e-4):
        diff = abs(noise.sample(x + eps, y + eps) - noise.sample(x, y))
        assert diff < 10 * eps


def test_satisfies_protocol():
    assert isinstance(PerlinNoise(0), NoiseField)


def test_seed_is_read_only():
    noise = PerlinNoise(8)
    assert noise.seed == 8
    with pytest.raises(AttributeError):
        noise.seed = 9


def test_hashes_select_four_distinct_diagonals():
    from noise_field import _gradient
    directions = {(_gradient(h, 1.0, 0.0), _gradient(h, 0.0, 1.0)) for h in range(4)}
    assert directions == {(1.0, 1.0), (-1.0, 1.0), (1.0, -1.0), (-1.0, -1.0)}


def test_hash_uses_low_two_bits():
    from noise_field import _gradient
    for h in range(4):
        assert _gradient(h + 4, 0.3, 0.7) == _gradient(h, 0.3, 0.7)
