"""Spinflake: a rotationally symmetric blob with a spiky, twirling edge.

The edge radius is a base circle perturbed by one or more florets. Each
floret adds a ring of spines whose phase can twist with distance from the
centre, which gives the spiral arms.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..sampling import Point, maybe, random_point

MAX_FLORETS = 4
MAX_SPINES = 16
MAX_TWIRL = 14.0
MAX_SINEAMP = 4.0


class SinePositivizing(Enum):
    """How a floret squeezes sin() into 0..1."""
    COMPRESS = "compress"
    TRUNCATE = "truncate"
    ABSOLUTE = "absolute"
    SAWBLADE = "sawblade"

    @classmethod
    def sample(cls, rng):
        members = list(cls)
        return members[rng.randint(0, len(members))]


class TwirlMethod(Enum):
    NONE = "none"
    CURVE = "curve"
    SINE = "sine"

    @classmethod
    def sample(cls, rng):
        members = list(cls)
        return members[rng.randint(0, len(members))]


@dataclass(frozen=True)
class Twirl:
    base: float = 0.0
    speed: float = 0.0
    amp: float = 0.0
    method: TwirlMethod = TwirlMethod.NONE

    @classmethod
    def random(cls, rng):
        base = rng.uniform(0.0, np.pi)
        method = TwirlMethod.sample(rng)
        if method is TwirlMethod.SINE:
            speed = rng.uniform(0.0, MAX_TWIRL * np.pi)
            amp = rng.uniform(-MAX_SINEAMP, MAX_SINEAMP)
        elif method is TwirlMethod.CURVE:
            speed = rng.uniform(-MAX_TWIRL, MAX_TWIRL)
            amp = rng.uniform(-MAX_SINEAMP, MAX_SINEAMP)
        else:
            speed = amp = 0.0
        return cls(base=base, speed=speed, amp=amp, method=method)


@dataclass(frozen=True)
class Floret:
    sinepos_method: SinePositivizing = SinePositivizing.COMPRESS
    backward: bool = False
    spines: int = 1
    spine_radius: float = 0.0
    twirl: Twirl = Twirl()

    @classmethod
    def random(cls, rng):
        sinepos_method = SinePositivizing.sample(rng)
        backward = maybe(rng)
        spines = rng.randint(1, MAX_SPINES + 1)
        spine_radius = rng.uniform(0.0, 0.5)
        twirl = Twirl.random(rng)
        # abs(sin) doubles the spine count; keep it symmetric
        if sinepos_method is SinePositivizing.ABSOLUTE and spines % 2 == 1:
            spines += 1
        return cls(
            sinepos_method=sinepos_method,
            backward=backward,
            spines=spines,
            spine_radius=spine_radius,
            twirl=twirl,
        )


@dataclass(frozen=True)
class SpinflakeParams:
    origin: Point = Point(0.5, 0.5)
    radius: float = 0.25
    squish: float = 1.0
    twist: float = 0.0
    average_florets: bool = False
    florets: tuple = (Floret(),)

    @classmethod
    def random(cls, rng):
        origin = random_point(rng)
        radius = rng.uniform(0.0, 1.0)
        squish = rng.uniform(0.0, 2.75) * 0.25
        twist = rng.uniform(0.0, np.pi)
        average_florets = maybe(rng)
        count = rng.randint(1, MAX_FLORETS + 1)
        florets = tuple(Floret.random(rng) for _ in range(count))
        return cls(
            origin=origin,
            radius=radius,
            squish=squish,
            twist=twist,
            average_florets=average_florets,
            florets=florets,
        )


def generate(x, y, params):
    """Evaluate the spinflake, cross-fading across the horizontal seam."""
    x = np.asarray(x, dtype=np.float64)
    val = _vtiled_point(x, y, params)
    farpoint = _vtiled_point(x - 1.0, y, params)
    farweight = (x - 0.5) * 2.0
    return np.where(x > 0.5, val * (1.0 - farweight) + farpoint * farweight, val)


def _vtiled_point(x, y, params):
    y = np.asarray(y, dtype=np.float64)
    point = _raw_point(x, y, params)
    farpoint = _raw_point(x, y - 1.0, params)
    farweight = (y - 0.5) * 2.0
    return np.where(y > 0.5, point * (1.0 - farweight) + farpoint * farweight,
                    point)


def _raw_point(x, y, params):
    # Rotate around the origin so the squished bulges point in a random
    # direction rather than along the axes.
    x = x - params.origin.x
    y = y - params.origin.y
    hypangle = np.arctan2(y, x) + params.twist
    origindist = np.hypot(x, y)
    x = np.cos(hypangle) * origindist
    y = np.sin(hypangle) * origindist

    with np.errstate(divide="ignore", invalid="ignore"):
        origindist = np.hypot(x * params.squish, y / params.squish)
        pointangle = np.arctan2(y, x)

        edgedist = params.radius
        for floret in params.florets:
            edgedist = edgedist + _calc_wave(pointangle, origindist, floret)
        if params.average_florets:
            edgedist = edgedist / len(params.florets)

        # Distance from the edge, proportionate to the origin-edge distance.
        # Positive inside the shape, negative outside.
        proportion = (edgedist - origindist) / edgedist
        inside = np.sqrt(np.maximum(proportion, 0.0))
        outside = 1.0 - 1.0 / (1.0 - np.minimum(proportion, 0.0))

    out = np.where(proportion >= 0.0, inside, outside)
    out = np.where(edgedist > 0.0, out, 0.0)
    return np.where(origindist == 0.0, 1.0, out)


def _calc_wave(theta, dist, floret):
    """Distance from centre this floret adds at angle ``theta``.

    Florets twirl independently of each other.
    """
    twirl = floret.twirl
    param = theta * floret.spines + twirl.base
    if twirl.method is TwirlMethod.CURVE:
        param = param + dist * (twirl.speed + dist * twirl.amp)
    elif twirl.method is TwirlMethod.SINE:
        param = param + np.sin(dist * twirl.speed) * (twirl.amp + dist * twirl.amp)
    return _chopsin(param, floret) * floret.spine_radius


def _chopsin(theta, floret):
    out = np.sin(theta)
    method = floret.sinepos_method
    if method is SinePositivizing.COMPRESS:
        out = (out + 1.0) / 2.0
    elif method is SinePositivizing.ABSOLUTE:
        out = np.abs(out)
    elif method is SinePositivizing.TRUNCATE:
        out = np.where(out < 0.0, out + 1.0, out)
    elif method is SinePositivizing.SAWBLADE:
        theta = np.fmod(theta / 4.0, np.pi) / 2.0
        theta = np.where(theta < 0.0, theta + np.pi / 2.0, theta)
        out = np.sin(theta)
    if floret.backward:
        return 1.0 - out
    return out
