# simulation.py
"""
Handles the core simulation logic: the noise-driven update rule.

Every tick, each flow point samples the noise field at its own position
(normalized to the viewport and scaled by a frequency), turns the sample
into a heading angle, takes the unit vector of that heading as its new
velocity, and moves along it. Velocity is recomputed, never accumulated.
"""
import logging
import math
import numpy as np
from typing import Dict, Any
from numba import jit

from constants import (
    DEFAULT_HEADING_NOISE_FREQUENCY, DEFAULT_HEADING_NOISE_AMPLITUDE,
    DEFAULT_VELOCITY_SPEED
)
from noise_field import NoiseField
from particle import FlowGrid

# --- Data Contracts ---
#
# tick(grid, noise, viewport_width, viewport_height,
#      heading_noise_frequency, heading_noise_amplitude, velocity_speed) -> None:
#   - Inputs:
#     - grid: FlowGrid, mutated in place.
#     - noise: any NoiseField.
#     - viewport_width, viewport_height: float > 0, read fresh every call.
#   - Side Effects: Overwrites every velocity with (sin t, cos t) and adds
#     velocity * velocity_speed to every position.
#   - Invariants: Particle count and array shapes are unchanged. No
#     particle reads another particle's state. |velocity| == 1.
#
# class Simulation:
#   - __init__(self, grid: FlowGrid, noise: NoiseField, params: Dict[str, Any]):
#     - params: "simulation_parameters" section of config.json.
#       - "heading_noise_frequency": float
#       - "heading_noise_amplitude": float
#       - "velocity_speed": float
#   - step(self, viewport_width: float, viewport_height: float) -> None


@jit(nopython=True)
def _advance_numba(positions, velocities, noise_values, angle_scale, speed):
    """
    Numba-jitted function that turns heading samples into velocities and
    integrates positions.
    """
    rows, cols = noise_values.shape
    for r in range(rows):
        for c in range(cols):
            theta = noise_values[r, c] * angle_scale
            vx = np.sin(theta)
            vy = np.cos(theta)
            velocities[r, c, 0] = vx
            velocities[r, c, 1] = vy
            positions[r, c, 0] += vx * speed
            positions[r, c, 1] += vy * speed


def heading_coordinates(positions: np.ndarray, viewport_width: float, viewport_height: float,
                        frequency: float):
    """Noise-space coordinates at which each particle samples its heading."""
    u = positions[..., 0] / viewport_width * frequency
    v = positions[..., 1] / viewport_height * frequency
    return u, v


def tick(
    grid: FlowGrid,
    noise: NoiseField,
    viewport_width: float,
    viewport_height: float,
    heading_noise_frequency: float,
    heading_noise_amplitude: float,
    velocity_speed: float,
) -> None:
    """
    Advances every particle in the grid by one step.
    """
    if viewport_width <= 0 or viewport_height <= 0:
        raise ValueError(
            f"Viewport dimensions must be positive, got {viewport_width}x{viewport_height}."
        )
    if grid.particle_count == 0:
        return

    u, v = heading_coordinates(grid.positions, viewport_width, viewport_height, heading_noise_frequency)
    noise_values = np.ascontiguousarray(noise.sample_many(u, v), dtype=np.float64)

    _advance_numba(
        grid.positions, grid.velocities, noise_values,
        heading_noise_amplitude * 2.0 * math.pi, float(velocity_speed)
    )


class Simulation:
    """
    Owns the tick parameters and advances the flow grid once per frame.
    """
    def __init__(self, grid: FlowGrid, noise: NoiseField, params: Dict[str, Any]):
        """
        Initializes the simulation.

        Args:
            grid (FlowGrid): The particle grid to simulate.
            noise (NoiseField): The field headings are sampled from.
            params (Dict[str, Any]): Simulation parameters from config.
        """
        self.grid = grid
        self.noise = noise
        self.heading_noise_frequency = float(
            params.get('heading_noise_frequency', DEFAULT_HEADING_NOISE_FREQUENCY)
        )
        self.heading_noise_amplitude = float(
            params.get('heading_noise_amplitude', DEFAULT_HEADING_NOISE_AMPLITUDE)
        )
        self.velocity_speed = float(params.get('velocity_speed', DEFAULT_VELOCITY_SPEED))
        self.step_count = 0

        logging.info(
            f"Simulation initialized: heading frequency {self.heading_noise_frequency}, "
            f"amplitude {self.heading_noise_amplitude}, speed {self.velocity_speed}."
        )

    def step(self, viewport_width: float, viewport_height: float):
        """
        Executes one tick. Viewport dimensions are taken per call so that
        a resized window keeps the same grid.
        """
        tick(
            self.grid, self.noise, viewport_width, viewport_height,
            self.heading_noise_frequency, self.heading_noise_amplitude,
            self.velocity_speed,
        )
        self.step_count += 1
