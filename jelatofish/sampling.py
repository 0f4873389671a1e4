"""Small random pickers shared by the parameter samplers.

Every function takes the RNG explicitly (a ``numpy.random.RandomState``);
nothing here touches global random state.
"""

from typing import NamedTuple

from .errors import DegenerateInputError


class Point(NamedTuple):
    """A point in generator space, nominally in [0, 1) x [0, 1)."""
    x: float
    y: float


class Area(NamedTuple):
    """Raster resolution in pixels."""
    width: int
    height: int

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise DegenerateInputError(
                f"raster size must be positive, got {self.width}x{self.height}"
            )
        return self


def maybe(rng):
    """Flip a fair coin."""
    return rng.randint(0, 2) == 0


def random_point(rng):
    return Point(rng.uniform(0.0, 1.0), rng.uniform(0.0, 1.0))


class Range(NamedTuple):
    """A closed interval of floats, always stored with min <= max."""
    min: float
    max: float

    @classmethod
    def of(cls, a, b):
        return cls(a, b) if b > a else cls(b, a)

    @classmethod
    def random(cls, rng, low_bounds, high_bounds):
        """Build a range whose ends are drawn from two (low, high) bounds."""
        return cls.of(rng.uniform(*low_bounds), rng.uniform(*high_bounds))

    def sample(self, rng):
        if self.min != self.max:
            return rng.uniform(self.min, self.max)
        return self.min
