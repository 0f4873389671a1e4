"""Bubble: lumpy fields of squished, rotated circular bubbles."""

from dataclasses import dataclass

import numpy as np

from ..sampling import Point, Range, maybe, random_point

MAX_BUBBLES = 32
MIN_BUBBLES = MAX_BUBBLES // 4
MIN_SCALE = 1e-9


@dataclass(frozen=True)
class Bubble:
    # by what factor should we shrink the influence of this bubble?
    scale: float = 0.1
    # multiplies the transverse axis, divides the other
    squish: float = 1.0
    angle: float = 0.0
    origin: Point = Point(0.5, 0.5)

    @classmethod
    def random(cls, rng, scale, squish, angle):
        return cls(
            scale=max(scale.sample(rng), MIN_SCALE),
            origin=random_point(rng),
            squish=squish.sample(rng),
            angle=angle.sample(rng),
        )


def _random_squish(rng):
    if not maybe(rng):
        return 1.0
    value = rng.uniform(1.0, 4.0)
    return value if maybe(rng) else 1.0 / value


@dataclass(frozen=True)
class BubbleParams:
    scale: Range = Range(0.1, 0.1)
    squish: Range = Range(1.0, 1.0)
    angle: Range = Range(0.0, 0.0)
    bubbles: tuple = (Bubble(),)

    @classmethod
    def random(cls, rng):
        scale = Range.random(rng, (0.0, 0.2), (0.0, 0.2))
        squish = Range.of(_random_squish(rng), _random_squish(rng))
        angle = Range.random(rng, (0.0, np.pi / 2.0), (0.0, np.pi / 2.0))
        count = rng.randint(MIN_BUBBLES, MAX_BUBBLES)
        bubbles = tuple(Bubble.random(rng, scale, squish, angle)
                        for _ in range(count))
        return cls(scale=scale, squish=squish, angle=angle, bubbles=bubbles)


def generate(x, y, params):
    """Take the highest bubble value over this tile and its eight neighbours.

    Neighbouring tiles are damped by the point's distance from the shared
    edge, so only bubbles near the boundary leak across it.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    left, top = x, y
    right, bottom = 1.0 - x, 1.0 - y
    tiles = (
        (0.0, 0.0, 1.0),
        (1.0, 0.0, right),
        (-1.0, 0.0, left),
        (0.0, 1.0, bottom),
        (0.0, -1.0, top),
        (1.0, 1.0, right * bottom),
        (1.0, -1.0, right * top),
        (-1.0, 1.0, left * bottom),
        (-1.0, -1.0, left * top),
    )
    out = None
    for dx, dy, weight in tiles:
        value = all_bubbles_value(x + dx, y + dy, params) * weight
        out = value if out is None else np.maximum(out, value)
    return out


def all_bubbles_value(x, y, params):
    """The biggest lump any one bubble gives this point."""
    out = None
    for bubble in params.bubbles:
        value = one_bubble_value(x, y, bubble)
        out = value if out is None else np.maximum(out, value)
    return out


def one_bubble_value(x, y, bubble):
    """``1 - d**2 / scale`` in the bubble's rotated, squished frame.

    Zero on the rim, negative outside.
    """
    x = np.subtract(x, bubble.origin.x)
    y = np.subtract(y, bubble.origin.y)
    hypotenuse = np.hypot(x, y)
    hypangle = np.arctan2(y, x) + bubble.angle
    transverse = np.cos(hypangle) * hypotenuse * bubble.squish
    distance = np.sin(hypangle) * hypotenuse / bubble.squish
    hypotenuse = np.hypot(transverse, distance)
    return 1.0 - hypotenuse * hypotenuse / bubble.scale
