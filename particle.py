# particle.py
"""
Manages the state of all flow points in the simulation.

This module defines the FlowGrid class, which stores the N x N grid of
particles (position and velocity) in NumPy arrays, and initialize_grid,
which lays the particles out across the viewport with a small random
jitter.
"""
import logging
import numpy as np
from typing import Dict, Any, Iterator, NamedTuple, Optional

from constants import DEFAULT_GRID_SIZE, DEFAULT_POSITION_JITTER
from utils import resolve_seed
from vector import Vector2

# --- Data Contracts ---
#
# initialize_grid(grid_size, viewport_width, viewport_height,
#                 position_jitter, seed=None) -> FlowGrid:
#   - Inputs:
#     - grid_size: int >= 0, number of points per row and column.
#     - viewport_width, viewport_height: float, world extent.
#     - position_jitter: float >= 0, jitter as a fraction of the viewport.
#     - seed: Optional[int]. None or 0 derives a seed from the clock.
#   - Outputs: A FlowGrid.
#   - Invariants:
#     - positions[row, col] lies in
#       [w*col/N, w*col/N + w*jitter) x [h*row/N, h*row/N + h*jitter).
#     - velocities are all zero.
#
# class FlowGrid:
#   - self.positions: np.ndarray, shape (N, N, 2), dtype float64.
#   - self.velocities: np.ndarray, shape (N, N, 2), dtype float64.
#   - Invariants: Shapes never change after creation. Row index follows
#     y, column index follows x, iteration is row-major.


class Particle(NamedTuple):
    """Snapshot of one grid cell."""
    position: Vector2
    velocity: Vector2


class FlowGrid:
    """
    A container for all flow points, managing their state via NumPy arrays.
    """
    def __init__(self, positions: np.ndarray, velocities: np.ndarray, seed: int):
        if positions.shape != velocities.shape or positions.ndim != 3 or positions.shape[-1] != 2:
            raise ValueError(
                f"Positions {positions.shape} and velocities {velocities.shape} "
                f"must both have shape (N, N, 2)."
            )
        self.positions = positions
        self.velocities = velocities
        self.seed = seed

    @classmethod
    def from_params(cls, params: Dict[str, Any], width: float, height: float) -> "FlowGrid":
        """
        Builds a grid from the "simulation_parameters" config section.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            width (float): The width of the simulation viewport.
            height (float): The height of the simulation viewport.
        """
        return initialize_grid(
            params.get('grid_size', DEFAULT_GRID_SIZE),
            width,
            height,
            params.get('position_jitter', DEFAULT_POSITION_JITTER),
            params.get('seed'),
        )

    @property
    def grid_size(self) -> int:
        return self.positions.shape[0]

    @property
    def particle_count(self) -> int:
        return self.grid_size * self.grid_size

    def particle(self, row: int, col: int) -> Particle:
        pos = self.positions[row, col]
        vel = self.velocities[row, col]
        return Particle(Vector2(float(pos[0]), float(pos[1])), Vector2(float(vel[0]), float(vel[1])))

    def __len__(self) -> int:
        return self.particle_count

    def __iter__(self) -> Iterator[Particle]:
        for row in range(self.grid_size):
            for col in range(self.grid_size):
                yield self.particle(row, col)


def initialize_grid(
    grid_size: int,
    viewport_width: float,
    viewport_height: float,
    position_jitter: float,
    seed: Optional[int] = None,
) -> FlowGrid:
    """
    Lays out grid_size x grid_size particles fractionally spaced across
    the viewport, each nudged by an independent random jitter.
    """
    if grid_size < 0:
        msg = f"Configuration error: grid_size must be non-negative, got {grid_size}."
        logging.critical(msg)
        raise ValueError(msg)
    if position_jitter < 0:
        msg = f"Configuration error: position_jitter must be non-negative, got {position_jitter}."
        logging.critical(msg)
        raise ValueError(msg)

    seed = resolve_seed(seed)
    # All randomness in this module comes from the resolved seed.
    rng = np.random.default_rng(seed)

    fractions = np.arange(grid_size, dtype=np.float64) / grid_size if grid_size else np.zeros(0)
    cols, rows = np.meshgrid(fractions, fractions)
    jitter = rng.uniform(0.0, 1.0, size=(grid_size, grid_size, 2)) * position_jitter

    positions = np.empty((grid_size, grid_size, 2), dtype=np.float64)
    positions[..., 0] = viewport_width * (cols + jitter[..., 0])
    positions[..., 1] = viewport_height * (rows + jitter[..., 1])
    velocities = np.zeros((grid_size, grid_size, 2), dtype=np.float64)

    logging.info(
        f"FlowGrid initialized with {grid_size}x{grid_size} particles "
        f"over a {viewport_width}x{viewport_height} viewport (seed {seed})."
    )
    logging.debug(
        f"Particle data arrays created. "
        f"Positions shape: {positions.shape}, "
        f"Velocities shape: {velocities.shape}"
    )
    return FlowGrid(positions, velocities, seed)
