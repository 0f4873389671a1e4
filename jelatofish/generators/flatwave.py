"""Flatwave: interfering straight-line waves.

Each wave packet runs along a line through its origin. Where packets
overlap, an interference rule picks or blends their values.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..sampling import Point, maybe, random_point
from .packing import PackMethod, packed_cos

MIN_WAVE_PACKETS = 2
MAX_WAVE_PACKETS = 4


class Interference(Enum):
    MOST_EXTREME = "most_extreme"
    LEAST_EXTREME = "least_extreme"
    MAX = "max"
    MIN = "min"
    AVERAGE = "average"

    @classmethod
    def sample(cls, rng):
        members = list(cls)
        return members[rng.randint(0, len(members))]


@dataclass(frozen=True)
class Accel:
    """A secondary wave across the line that wobbles the main wave's phase."""
    scale: float = 2.0
    amp: float = 0.0
    pack_method: PackMethod = PackMethod.SCALE_TO_FIT
    enabled: bool = False

    @classmethod
    def random(cls, rng):
        return cls(
            scale=rng.uniform(2.0, 30.0),
            amp=rng.uniform(0.0, 0.1),
            pack_method=PackMethod.sample(rng),
            enabled=maybe(rng),
        )


@dataclass(frozen=True)
class Wave:
    scale: float = 2.0
    pack_method: PackMethod = PackMethod.SCALE_TO_FIT
    accel: Accel = Accel()

    @classmethod
    def random(cls, rng):
        pack_method = PackMethod.sample(rng)
        scale = rng.uniform(2.0, 30.0)
        if pack_method is PackMethod.SCALE_TO_FIT:
            scale *= 2.0
        return cls(scale=scale, pack_method=pack_method, accel=Accel.random(rng))


@dataclass(frozen=True)
class WavePacket:
    """A wave on a line given by an origin and an angle."""
    origin: Point = Point(0.0, 0.0)
    angle: float = 0.0
    wave: Wave = Wave()

    @classmethod
    def random(cls, rng):
        return cls(
            origin=random_point(rng),
            angle=rng.uniform(0.0, np.pi),
            wave=Wave.random(rng),
        )


@dataclass(frozen=True)
class FlatwaveParams:
    interference: Interference = Interference.MAX
    packets: tuple = (WavePacket(),)

    @classmethod
    def random(cls, rng):
        interference = Interference.sample(rng)
        count = rng.randint(MIN_WAVE_PACKETS, MAX_WAVE_PACKETS + 1)
        packets = tuple(WavePacket.random(rng) for _ in range(count))
        return cls(interference=interference, packets=packets)


def generate(x, y, params):
    method = params.interference
    if len(params.packets) == 1:
        return _calc_wave_packet(x, y, params.packets[0])

    out = None
    for packet in params.packets:
        layer = _calc_wave_packet(x, y, packet)
        if out is None:
            out = layer
        elif method is Interference.MOST_EXTREME:
            out = np.where(np.abs(layer - 0.5) > np.abs(out - 0.5), layer, out)
        elif method is Interference.LEAST_EXTREME:
            out = np.where(np.abs(layer - 0.5) < np.abs(out - 0.5), layer, out)
        elif method is Interference.MAX:
            out = np.maximum(layer, out)
        elif method is Interference.MIN:
            out = np.minimum(layer, out)
        else:
            out = out + layer

    if method is Interference.AVERAGE:
        return out / len(params.packets)
    return out


def _calc_wave_packet(x, y, packet):
    # Re-centre on the packet origin, then turn the offset into legs of a
    # right triangle aligned with the packet's line.
    x = np.subtract(x, packet.origin.x)
    y = np.subtract(y, packet.origin.y)
    hypotenuse = np.hypot(x, y)
    hypangle = np.arctan2(y, x) + packet.angle
    transverse = np.cos(hypangle) * hypotenuse
    distance = np.sin(hypangle) * hypotenuse
    return _calc_wave(distance, transverse, packet.wave)


def _calc_wave(distance, transverse, wave):
    accel = wave.accel
    if accel.enabled:
        distance = distance + packed_cos(
            transverse, accel.scale, accel.pack_method) * accel.amp
    return packed_cos(distance, wave.scale, wave.pack_method)
