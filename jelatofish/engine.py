"""Rendering a generator into a seamless, anti-aliased raster."""

import logging

import numpy as np

from .errors import OutOfBoundsError
from .sampling import Area

logger = logging.getLogger(__name__)


def render(size, kind, params, rng, roll=None):
    """Render one generator over a whole raster.

    Args:
        size: (width, height) of the raster in pixels.
        kind: GeneratorKind to evaluate.
        params: Parameter set for ``kind`` (None for the debug generator).
        rng: numpy RandomState; only used to pick the roll offset.
        roll: Optional (x, y) pixel offset. Drawn from ``rng`` when None.

    Returns:
        Array of shape (height, width) with values in [0, 1].
    """
    size = Area(*size).validate()
    if roll is None:
        roll = random_roll(size, rng)
    logger.debug("Rendering %s at %dx%d, roll=%s",
                 kind.value, size.width, size.height, roll)

    ys, xs = np.mgrid[0:size.height, 0:size.width]
    return sample_pixels(xs, ys, size, roll, kind, params)


def random_roll(size, rng):
    """Pick which part of the endless pattern lands on the raster origin."""
    return (rng.randint(0, size[0] + 1), rng.randint(0, size[1] + 1))


def sample_pixels(xs, ys, size, roll, kind, params):
    """Compute the clamped value of the given integer pixels.

    ``xs`` and ``ys`` may be scalars or arrays of matching shape.
    """
    width, height = Area(*size).validate()
    xs = np.asarray(xs)
    ys = np.asarray(ys)
    if np.any((xs < 0) | (xs >= width) | (ys < 0) | (ys >= height)):
        raise OutOfBoundsError(
            f"pixel outside {width}x{height} raster"
        )

    # Work in 0..1 so a generator draws the same picture at any resolution.
    x = ((xs + roll[0]) % width) / width
    y = ((ys + roll[1]) % height) / height
    fudge = 1.0 / (width + height)
    pixel = anti_aliased_point(x, y, fudge, kind, params)
    return np.clip(pixel, 0.0, 1.0)


def anti_aliased_point(x, y, fudge, kind, params):
    """Supersample generators that do not smooth their own edges.

    Three extra samples between this pixel and the next are averaged in.
    Smooth gradients are unaffected; sharp transitions lose their stairs.
    """
    pixel = wrapped_point(x, y, kind, params)
    if not kind.anti_aliased:
        pixel = pixel + wrapped_point(x + fudge, y, kind, params)
        pixel = pixel + wrapped_point(x, y + fudge, kind, params)
        pixel = pixel + wrapped_point(x + fudge, y + fudge, kind, params)
        pixel = pixel / 4.0
    return pixel


def wrapped_point(x, y, kind, params):
    """Evaluate a point, blending in values from the neighbouring tiles.

    For generators that do not tile on their own, the point is mixed with
    the values one tile over on each axis, weighted by distance from the
    tile edge. The two sides of the tile then fade smoothly into each other.
    Out-of-range results are clipped, not renormalised.
    """
    evaluate = kind.info.evaluate
    pixel = evaluate(x, y, params)
    if not kind.seamless:
        farh = x + 1.0
        farv = y + 1.0
        farval1 = evaluate(x, farv, params)
        farval2 = evaluate(farh, y, params)
        farval3 = evaluate(farh, farv, params)

        weight = x * y
        farweight1 = x * (2.0 - farv)
        farweight2 = (2.0 - farh) * y
        farweight3 = (2.0 - farh) * (2.0 - farv)
        totalweight = weight + farweight1 + farweight2 + farweight3
        pixel = (pixel * weight + farval1 * farweight1 + farval2 * farweight2
                 + farval3 * farweight3) / totalweight
    return np.clip(pixel, 0.0, 1.0)
