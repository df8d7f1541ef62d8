import numpy as np
import pytest

from coloring import DrawRequest, build_draw_requests, color_for, screen_offset, wrap_hue
from noise_field import PerlinNoise
from particle import initialize_grid
from simulation import tick
from vector import Vector2


def test_screen_offset_centres_positions():
    assert screen_offset(Vector2(50.0, 25.0), 100.0, 100.0) == (0.0, -50.0)
    assert screen_offset(Vector2(0.0, 0.0), 200.0, 80.0) == (-200.0, -80.0)


def test_zero_noise_is_mid_hue(constant_noise):
    hue, saturation, lightness = color_for(Vector2(10.0, 20.0), constant_noise(0.0), 100.0, 100.0, 4.0, 1.1)
    assert hue == 0.5
    assert saturation == 1.0
    assert lightness == 0.5


def test_hue_follows_amplitude(constant_noise):
    hue, _, _ = color_for(Vector2(1.0, 1.0), constant_noise(1.0), 100.0, 100.0, 4.0, 1.1)
    assert hue == pytest.approx(1.05)
    assert wrap_hue(hue) == pytest.approx(0.05)


def test_color_lookup_coordinates(recording_noise):
    color_for(Vector2(75.0, 10.0), recording_noise, 100.0, 50.0, 4.0, 1.0)
    xs, ys = recording_noise.calls[-1]
    assert xs[0] == pytest.approx((75.0 * 2 - 100.0) / 100.0 * 4.0)
    assert ys[0] == pytest.approx((10.0 * 2 - 50.0) / 50.0 * 4.0)


@pytest.mark.parametrize("hue, expected", [(0.25, 0.25), (1.25, 0.25), (-0.25, 0.75), (-1e-17, 0.0), (1.0, 0.0)])
def test_wrap_hue(hue, expected):
    wrapped = wrap_hue(hue)
    assert wrapped == pytest.approx(expected)
    assert 0.0 <= wrapped < 1.0


def test_draw_requests_match_color_for():
    grid = initialize_grid(5, 120.0, 90.0, 0.1, seed=13)
    noise = PerlinNoise(13)
    params = {"color_noise_frequency": 4.0, "color_noise_amplitude": 1.1, "point_size": 3.0}

    requests = build_draw_requests(grid, noise, 120.0, 90.0, params)

    assert len(requests) == 25
    for request, particle in zip(requests, grid):
        assert isinstance(request, DrawRequest)
        sx, sy = screen_offset(particle.position, 120.0, 90.0)
        hue, saturation, lightness = color_for(particle.position, noise, 120.0, 90.0, 4.0, 1.1)
        assert request.screen_x == pytest.approx(sx)
        assert request.screen_y == pytest.approx(sy)
        assert request.hue == pytest.approx(hue)
        assert (request.saturation, request.lightness) == (saturation, lightness)
        assert (request.width, request.height) == (3.0, 3.0)


def test_draw_requests_are_row_major(constant_noise):
    grid = initialize_grid(2, 10.0, 10.0, 0.0, seed=1)
    requests = build_draw_requests(grid, constant_noise(0.0), 10.0, 10.0, {})
    centres = [(r.screen_x, r.screen_y) for r in requests]
    assert centres == [(-10.0, -10.0), (0.0, -10.0), (-10.0, 0.0), (0.0, 0.0)]
    assert requests[0].width == 2.0


def test_draw_requests_for_empty_grid(constant_noise):
    grid = initialize_grid(0, 10.0, 10.0, 0.1, seed=1)
    assert build_draw_requests(grid, constant_noise(0.0), 10.0, 10.0, {}) == []


def test_color_lookup_uses_screen_coordinates_not_heading(recording_noise):
    grid = initialize_grid(3, 100.0, 80.0, 0.1, seed=21)
    tick(grid, recording_noise, 100.0, 80.0, 15.0, 1.0, 0.25)
    heading_xs, heading_ys = recording_noise.calls[-1]
    moved = grid.positions.copy()

    build_draw_requests(grid, recording_noise, 100.0, 80.0, {"color_noise_frequency": 4.0})
    color_xs, color_ys = recording_noise.calls[-1]

    assert len(recording_noise.calls) == 2
    assert np.allclose(color_xs.ravel(), ((moved[..., 0] * 2 - 100.0) / 100.0 * 4.0).ravel())
    assert np.allclose(color_ys.ravel(), ((moved[..., 1] * 2 - 80.0) / 80.0 * 4.0).ravel())
    assert not np.allclose(color_xs.ravel(), heading_xs.ravel())


def test_hue_ignores_heading_parameters():
    noise = PerlinNoise(21)
    a = initialize_grid(3, 100.0, 100.0, 0.1, seed=21)
    b = initialize_grid(3, 100.0, 100.0, 0.1, seed=21)
    tick(a, noise, 100.0, 100.0, 10.0, 2.0, 0.0)
    tick(b, noise, 100.0, 100.0, 3.0, 0.5, 0.0)

    assert np.array_equal(a.positions, b.positions)
    assert not np.allclose(a.velocities, b.velocities)
    hues_a = [r.hue for r in build_draw_requests(a, noise, 100.0, 100.0, {})]
    hues_b = [r.hue for r in build_draw_requests(b, noise, 100.0, 100.0, {})]
    assert hues_a == hues_b


@pytest.mark.parametrize("point_size", [0.0, -3.0])
def test_non_positive_point_size_rejected(point_size, constant_noise):
    grid = initialize_grid(2, 10.0, 10.0, 0.0, seed=1)
    with pytest.raises(ValueError):
        build_draw_requests(grid, constant_noise(0.0), 10.0, 10.0, {"point_size": point_size})
