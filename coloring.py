# coloring.py
"""
Maps simulated particle positions to screen coordinates and colours.

This is the contract between the simulation and the renderer: for each
particle a centred screen offset and an HSL triple whose hue comes from a
second, independent lookup into the same noise field.
"""
import logging
from typing import Dict, Any, List, NamedTuple, Tuple

from constants import (
    POINT_SATURATION, POINT_LIGHTNESS, DEFAULT_COLOR_NOISE_FREQUENCY,
    DEFAULT_COLOR_NOISE_AMPLITUDE, DEFAULT_POINT_SIZE
)
from noise_field import NoiseField
from particle import FlowGrid
from vector import Vector2


class DrawRequest(NamedTuple):
    """One filled point for the renderer, in centred screen coordinates."""
    screen_x: float
    screen_y: float
    width: float
    height: float
    hue: float
    saturation: float
    lightness: float


def screen_offset(position: Vector2, viewport_width: float, viewport_height: float) -> Tuple[float, float]:
    return position.x * 2 - viewport_width, position.y * 2 - viewport_height


def color_for(
    position: Vector2,
    noise: NoiseField,
    viewport_width: float,
    viewport_height: float,
    color_noise_frequency: float,
    color_noise_amplitude: float,
) -> Tuple[float, float, float]:
    """
    Returns (hue, saturation, lightness) for a particle at `position`.

    The hue is not wrapped; see wrap_hue for the renderer's convention.
    """
    screen_x, screen_y = screen_offset(position, viewport_width, viewport_height)
    u = screen_x / viewport_width * color_noise_frequency
    v = screen_y / viewport_height * color_noise_frequency
    hue = (noise.sample(u, v) * color_noise_amplitude + 1) / 2
    return hue, POINT_SATURATION, POINT_LIGHTNESS


def wrap_hue(hue: float) -> float:
    """Wraps a hue into [0, 1)."""
    wrapped = hue % 1.0
    # Tiny negative hues wrap to exactly 1.0 under float modulo.
    return 0.0 if wrapped >= 1.0 else wrapped


def build_draw_requests(
    grid: FlowGrid,
    noise: NoiseField,
    viewport_width: float,
    viewport_height: float,
    params: Dict[str, Any],
) -> List[DrawRequest]:
    """
    Builds one DrawRequest per particle, in row-major order.

    Vectorized counterpart of color_for for a whole grid.

    Args:
        params (Dict[str, Any]): "visualization" section of config.json.
    """
    frequency = params.get('color_noise_frequency', DEFAULT_COLOR_NOISE_FREQUENCY)
    amplitude = params.get('color_noise_amplitude', DEFAULT_COLOR_NOISE_AMPLITUDE)
    point_size = float(params.get('point_size', DEFAULT_POINT_SIZE))
    if point_size <= 0:
        msg = f"Configuration error: point_size must be positive, got {point_size}."
        logging.critical(msg)
        raise ValueError(msg)

    positions = grid.positions.reshape(-1, 2)
    screen_x = positions[:, 0] * 2 - viewport_width
    screen_y = positions[:, 1] * 2 - viewport_height
    samples = noise.sample_many(
        screen_x / viewport_width * frequency,
        screen_y / viewport_height * frequency,
    )
    hues = (samples * amplitude + 1) / 2

    return [
        DrawRequest(float(x), float(y), point_size, point_size, float(h),
                    POINT_SATURATION, POINT_LIGHTNESS)
        for x, y, h in zip(screen_x, screen_y, hues)
    ]
