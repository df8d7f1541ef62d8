import logging

import numpy as np
import pytest


class ConstantNoise:
    """Noise field returning the same value everywhere."""

    def __init__(self, value):
        self.value = value

    def sample(self, x, y):
        return self.value

    def sample_many(self, xs, ys):
        return np.full(np.broadcast(xs, ys).shape, self.value, dtype=np.float64)


class RecordingNoise:
    """Linear noise field that remembers every coordinate it was asked for."""

    def __init__(self, slope_x=0.01, slope_y=-0.02):
        self.slope_x = slope_x
        self.slope_y = slope_y
        self.calls = []

    def sample(self, x, y):
        self.calls.append((np.array([x]), np.array([y])))
        return self.slope_x * x + self.slope_y * y

    def sample_many(self, xs, ys):
        xs = np.array(xs, dtype=np.float64)
        ys = np.array(ys, dtype=np.float64)
        self.calls.append((xs, ys))
        return self.slope_x * xs + self.slope_y * ys


@pytest.fixture
def constant_noise():
    return ConstantNoise


@pytest.fixture
def recording_noise():
    return RecordingNoise()


@pytest.fixture
def restore_root_logger():
    """Puts the root logger back the way it was after setup_logging runs."""
    logger = logging.getLogger()
    handlers = list(logger.handlers)
    level = logger.level
    numba_level = logging.getLogger("numba").level
    yield
    logging.getLogger("numba").setLevel(numba_level)
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
