"""Packing a cosine wave into the 0..1 range the engine expects.

Several generators lay a wave over a line. Since a cosine runs -1..1, each
wave picks one of these folding rules to bring it into 0..1. Adding a rule
here makes it available to every generator that uses packed waves.
"""

from enum import Enum

import numpy as np


class PackMethod(Enum):
    SCALE_TO_FIT = "scale"
    FLIP_SIGN_TO_FIT = "flip"
    TRUNCATE_TO_FIT = "truncate"
    SLOPE_TO_FIT = "slope"

    @classmethod
    def sample(cls, rng):
        members = list(cls)
        return members[rng.randint(0, len(members))]


def packed_cos(distance, scale, pack_method):
    """Return cos(distance * scale) folded into [0, 1].

    ``pack_method`` of None (not yet chosen) yields a flat 0.5.
    """
    if pack_method is None:
        return np.full(np.shape(distance), 0.5)

    phase = np.multiply(distance, scale)
    if pack_method is PackMethod.SLOPE_TO_FIT:
        # Only the first half of each cycle: a saw-edge
        return (np.cos(np.fmod(phase, np.pi)) + 1.0) / 2.0

    rawcos = np.cos(phase)
    if pack_method is PackMethod.SCALE_TO_FIT:
        return (rawcos + 1.0) / 2.0
    if pack_method is PackMethod.FLIP_SIGN_TO_FIT:
        return np.abs(rawcos)
    if pack_method is PackMethod.TRUNCATE_TO_FIT:
        return np.where(rawcos >= 0.0, rawcos, rawcos + 1.0)
    raise TypeError(f"unknown pack method: {pack_method!r}")
