"""Coswave: concentric cosine ripples around a random origin.

The workhorse generator. The rings are squished along a random axis and
their angular spacing distorted, so they rarely come out as perfect
circles.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..sampling import Point, maybe, random_point
from .packing import PackMethod, packed_cos

# One in this many coswaves gets the exponential wavescale.
LINEAR_ACCEL_ODDS = 64


class WaveAccel(Enum):
    NONE = "none"
    LINEAR = "linear"


@dataclass(frozen=True)
class CoswaveParams:
    origin: Point = Point(0.0, 0.0)
    wave_scale: float = 1.0
    squish: float = 1.0
    sqangle: float = 0.0
    distortion: float = 1.0
    pack_method: PackMethod = PackMethod.SCALE_TO_FIT
    accel_method: WaveAccel = WaveAccel.NONE
    accel: float = 0.0

    @classmethod
    def random(cls, rng):
        origin = random_point(rng)
        pack_method = PackMethod.sample(rng)
        wave_scale = rng.uniform(0.0, 25.0) + 1.0
        # The squish angle sets the direction in which the rings are
        # stretched; the squish factor ranges from half to double length.
        sqangle = rng.uniform(0.0, np.pi)
        distortion = rng.uniform(0.0, 1.5) + 0.5
        squish = (rng.uniform(0.0, 2.0) + 0.5) * (1.0 if maybe(rng) else -1.0)

        # Rarely, raise the wavescale to the power of the distance. Past
        # the point where a wave is narrower than a pixel this turns into
        # chaotic moire: eddies, turbulence and a little static.
        if rng.randint(0, LINEAR_ACCEL_ODDS) == 0:
            accel_method = WaveAccel.LINEAR
            accel = rng.uniform(0.0, 2.0) + 1.0
        else:
            accel_method = WaveAccel.NONE
            accel = 0.0

        # Flip-sign and truncate turn valleys into peaks, doubling the
        # apparent frequency. Scale-to-fit gets a doubled scale to match.
        if pack_method is PackMethod.SCALE_TO_FIT:
            wave_scale *= 2.0

        return cls(
            origin=origin,
            wave_scale=wave_scale,
            squish=squish,
            sqangle=sqangle,
            distortion=distortion,
            pack_method=pack_method,
            accel_method=accel_method,
            accel=accel,
        )


def generate(x, y, params):
    # Rotate the axes of this shape around the origin.
    x = np.subtract(x, params.origin.x)
    y = np.subtract(y, params.origin.y)
    hypangle = np.arctan2(y * params.distortion, x) + params.sqangle
    hypotenuse = np.hypot(x, y)
    x = np.cos(hypangle) * hypotenuse
    y = np.sin(hypangle) * hypotenuse

    # Squished distance from the origin to the point.
    hypotenuse = np.hypot(x * params.squish, y / params.squish)

    if params.accel_method is WaveAccel.LINEAR:
        wave_scale = np.power(params.wave_scale, hypotenuse * params.accel)
    else:
        wave_scale = params.wave_scale
    return packed_cos(hypotenuse, wave_scale, params.pack_method)
