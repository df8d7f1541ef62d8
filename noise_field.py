# noise_field.py
"""
Seedable, coherent 2D noise used to steer and colour the flow points.

The simulation only depends on the NoiseField capability (sample and
sample_many), so tests can drive it with a deterministic stub. PerlinNoise
is the production implementation: classic gradient noise over a shuffled
permutation table, evaluated in a Numba-jitted loop.
"""
import logging
import numpy as np
from typing import Protocol, runtime_checkable
from numba import jit

# --- Data Contracts ---
#
# class NoiseField (protocol):
#   - sample(self, x: float, y: float) -> float
#   - sample_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray
#     - Inputs: coordinate arrays of the same (or broadcastable) shape.
#     - Outputs: float64 array of the broadcast shape.
#   - Invariants: pure function of (seed, x, y). No side effects.
#
# class PerlinNoise:
#   - __init__(self, seed: int):
#     - Side Effects: Builds the 512-entry permutation table.
#     - Invariants: The table never changes after construction.
#   - Output is exactly 0.0 on integer lattice points and stays within
#     about [-1, 1] elsewhere.

PERMUTATION_SIZE = 256


@runtime_checkable
class NoiseField(Protocol):
    """A deterministic scalar field N(x, y) in roughly [-1, 1]."""

    def sample(self, x: float, y: float) -> float:
        ...

    def sample_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        ...


@jit(nopython=True)
def _fade(t):
    # 6t^5 - 15t^4 + 10t^3: first and second derivatives vanish at 0 and 1.
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@jit(nopython=True)
def _lerp(a, b, t):
    return a + t * (b - a)


@jit(nopython=True)
def _gradient(hash_value, x, y):
    """Dot product of (x, y) with one of four diagonal gradients."""
    h = hash_value & 3
    if h == 0:
        return x + y
    if h == 1:
        return -x + y
    if h == 2:
        return x - y
    return -x - y


@jit(nopython=True)
def _perlin_numba(permutation, xs, ys):
    """
    Numba-jitted 2D Perlin noise over flat coordinate arrays.
    """
    count = xs.shape[0]
    out = np.empty(count, dtype=np.float64)
    for i in range(count):
        x0 = np.floor(xs[i])
        y0 = np.floor(ys[i])
        xi = int(x0) & 255
        yi = int(y0) & 255
        xf = xs[i] - x0
        yf = ys[i] - y0

        u = _fade(xf)
        v = _fade(yf)

        aa = permutation[permutation[xi] + yi]
        ab = permutation[permutation[xi] + yi + 1]
        ba = permutation[permutation[xi + 1] + yi]
        bb = permutation[permutation[xi + 1] + yi + 1]

        x1 = _lerp(_gradient(aa, xf, yf), _gradient(ba, xf - 1.0, yf), u)
        x2 = _lerp(_gradient(ab, xf, yf - 1.0), _gradient(bb, xf - 1.0, yf - 1.0), u)
        out[i] = _lerp(x1, x2, v)
    return out


class PerlinNoise:
    """
    Repeatable 2D Perlin noise. Seeding the permutation table makes the
    field deterministic.
    """
    def __init__(self, seed: int):
        self._seed = int(seed)
        rng = np.random.default_rng(self._seed)
        table = np.arange(PERMUTATION_SIZE, dtype=np.int64)
        rng.shuffle(table)
        # Doubled so corner lookups never need a modulo.
        self._permutation = np.tile(table, 2)
        self._permutation.setflags(write=False)
        logging.debug(f"PerlinNoise initialized with seed {self._seed}.")

    @property
    def seed(self) -> int:
        return self._seed

    def sample(self, x: float, y: float) -> float:
        xs = np.array([x], dtype=np.float64)
        ys = np.array([y], dtype=np.float64)
        return float(_perlin_numba(self._permutation, xs, ys)[0])

    def sample_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xs, ys = np.broadcast_arrays(
            np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
        )
        flat = _perlin_numba(
            self._permutation,
            np.ascontiguousarray(xs).ravel(),
            np.ascontiguousarray(ys).ravel(),
        )
        return flat.reshape(xs.shape)
