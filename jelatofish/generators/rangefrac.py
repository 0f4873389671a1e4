"""Rangefrac: a midpoint-displacement fractal for rough, mountainous texture.

The fractal is built once, into a square toroidal matrix, when the
parameters are sampled. Evaluating a point interpolates the matrix.
"""

from dataclasses import dataclass, field

import numpy as np

MATRIX_SCALE = 8
MATRIX_SIZE = 1 << MATRIX_SCALE

_NEIGHBOURS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


def build_matrix(rng, scale=MATRIX_SCALE):
    """Fill a ``2**scale`` square matrix, coarse steps first.

    Every cell not yet assigned at the current step takes a value drawn
    uniformly between the lowest and highest of its neighbours that were
    assigned at a coarser step. Returns ``(data, level)``; ``level`` holds
    the step at which each cell was assigned.
    """
    size = 1 << scale
    data = np.zeros((size, size), dtype=np.float64)
    level = np.zeros((size, size), dtype=np.int64)

    for exponent in range(scale - 1, -1, -1):
        step = 1 << exponent
        coords = np.arange(0, size, step)
        xs, ys = np.meshgrid(coords, coords, indexing="ij")
        pending = level[xs, ys] < step
        xs = xs[pending]
        ys = ys[pending]

        low = np.full(xs.shape, np.inf)
        high = np.full(xs.shape, -np.inf)
        for dx, dy in _NEIGHBOURS:
            nx = (xs + dx * step) % size
            ny = (ys + dy * step) % size
            known = level[nx, ny] > step
            values = data[nx, ny]
            low = np.where(known, np.minimum(low, values), low)
            high = np.where(known, np.maximum(high, values), high)

        # Cells with no coarser neighbours may land anywhere.
        isolated = np.isinf(low)
        low[isolated] = 0.0
        high[isolated] = 1.0

        values = rng.uniform(low, high)
        values = np.where(low == high, low, values)

        # The first values have nothing to compare against, and they bound
        # every value that follows. Push them towards 0 or 1 by averaging
        # with their rounded value: whiter whites and blacker blacks.
        if step == size // 2:
            values = (values + np.where(values > 0.5, 1.0, 0.0)) / 2.0

        data[xs, ys] = values
        level[xs, ys] = step

    return data, level


@dataclass(frozen=True, eq=False)
class RangefracParams:
    data: np.ndarray = field(
        default_factory=lambda: np.zeros((MATRIX_SIZE, MATRIX_SIZE)))

    @classmethod
    def random(cls, rng):
        data, _ = build_matrix(rng)
        data.setflags(write=False)
        return cls(data=data)


def generate(x, y, params):
    """Interpolate the matrix at the four cells around the scaled point.

    Each cell is weighted by ``max(0, 1 - distance)``.
    """
    data = params.data
    size = data.shape[0]
    tweaker = 0.5 / size
    sx = np.multiply(x, size)
    sy = np.multiply(y, size)
    left = np.floor(sx - tweaker).astype(np.int64)
    top = np.floor(sy - tweaker).astype(np.int64)

    total = 0.0
    weights = 0.0
    for dx, dy in ((0, 0), (1, 0), (0, 1), (1, 1)):
        cx = left + dx
        cy = top + dy
        weight = np.maximum(0.0, 1.0 - np.hypot(cx - sx, cy - sy))
        total = total + data[cx % size, cy % size] * weight
        weights = weights + weight
    return total / weights
