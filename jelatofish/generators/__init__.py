"""Procedural value generators and the closed set of generator kinds.

Every generator maps a point of the unit square (points slightly outside
it are allowed) and an immutable parameter set to a value in roughly
[0, 1]. Coordinates may be scalars or numpy arrays.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import numpy as np

from . import bubble, coswave, flatwave, rangefrac, spinflake
from .packing import PackMethod, packed_cos

__all__ = ["GeneratorKind", "PackMethod", "packed_cos", "debug_generate"]


def debug_generate(x, y, params=None):
    """Debug generator: a smooth falloff from the top-left corner."""
    return np.exp(-np.multiply(x, y))


@dataclass(frozen=True)
class GeneratorInfo:
    evaluate: Callable
    params_type: Optional[type]
    # Does the generator smooth its own edges / tile on its own?
    anti_aliased: bool
    seamless: bool


class GeneratorKind(Enum):
    COSWAVE = "coswave"
    SPINFLAKE = "spinflake"
    FLATWAVE = "flatwave"
    RANGEFRAC = "rangefrac"
    BUBBLE = "bubble"
    TEST = "test"

    @property
    def info(self):
        return _REGISTRY[self]

    @property
    def anti_aliased(self):
        return _REGISTRY[self].anti_aliased

    @property
    def seamless(self):
        return _REGISTRY[self].seamless

    def evaluate(self, x, y, params):
        return _REGISTRY[self].evaluate(x, y, params)

    def random_params(self, rng):
        params_type = _REGISTRY[self].params_type
        if params_type is None:
            return None
        return params_type.random(rng)

    @classmethod
    def sample(cls, rng):
        """Pick one of the real generators; never TEST."""
        return RANDOM_KINDS[rng.randint(0, len(RANDOM_KINDS))]


_REGISTRY = {
    GeneratorKind.COSWAVE: GeneratorInfo(
        coswave.generate, coswave.CoswaveParams,
        anti_aliased=False, seamless=False),
    GeneratorKind.SPINFLAKE: GeneratorInfo(
        spinflake.generate, spinflake.SpinflakeParams,
        anti_aliased=False, seamless=True),
    GeneratorKind.FLATWAVE: GeneratorInfo(
        flatwave.generate, flatwave.FlatwaveParams,
        anti_aliased=False, seamless=False),
    GeneratorKind.RANGEFRAC: GeneratorInfo(
        rangefrac.generate, rangefrac.RangefracParams,
        anti_aliased=True, seamless=True),
    GeneratorKind.BUBBLE: GeneratorInfo(
        bubble.generate, bubble.BubbleParams,
        anti_aliased=False, seamless=False),
    GeneratorKind.TEST: GeneratorInfo(
        debug_generate, None,
        anti_aliased=False, seamless=False),
}

RANDOM_KINDS = (
    GeneratorKind.COSWAVE,
    GeneratorKind.SPINFLAKE,
    GeneratorKind.FLATWAVE,
    GeneratorKind.RANGEFRAC,
    GeneratorKind.BUBBLE,
)
