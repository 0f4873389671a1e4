"""Tests for the generator engine: roll, anti-aliasing, wrapping, clamping."""

import numpy as np
import pytest

from jelatofish.engine import (
    random_roll,
    render,
    sample_pixels,
    wrapped_point,
)
from jelatofish.errors import DegenerateInputError, OutOfBoundsError
from jelatofish.generators import GeneratorKind, PackMethod
from jelatofish.generators.coswave import CoswaveParams, WaveAccel
from jelatofish.sampling import Point


@pytest.mark.parametrize("kind", list(GeneratorKind))
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_render_is_clamped(kind, seed):
    rng = np.random.RandomState(seed)
    params = kind.random_params(rng)
    pixels = render((16, 12), kind, params, rng)
    assert pixels.shape == (12, 16)
    assert np.all(np.isfinite(pixels))
    assert pixels.min() >= 0.0
    assert pixels.max() <= 1.0


@pytest.mark.parametrize("kind", [k for k in GeneratorKind if not k.seamless])
def test_wrapped_point_is_periodic(kind):
    params = kind.random_params(np.random.RandomState(31))
    t = np.linspace(0.0, 0.99, 11)
    zeros, ones = np.zeros_like(t), np.ones_like(t)
    np.testing.assert_allclose(wrapped_point(zeros, t, kind, params),
                               wrapped_point(ones, t, kind, params), atol=1e-9)
    np.testing.assert_allclose(wrapped_point(t, zeros, kind, params),
                               wrapped_point(t, ones, kind, params), atol=1e-9)


def test_roll_shifts_raster():
    kind = GeneratorKind.FLATWAVE
    params = kind.random_params(np.random.RandomState(6))
    base = render((10, 8), kind, params, None, roll=(0, 0))
    shifted = render((10, 8), kind, params, None, roll=(3, 2))
    np.testing.assert_allclose(shifted, np.roll(base, (-2, -3), axis=(0, 1)),
                               rtol=1e-12)


def test_full_roll_is_no_roll():
    kind = GeneratorKind.COSWAVE
    params = kind.random_params(np.random.RandomState(6))
    np.testing.assert_allclose(
        render((10, 8), kind, params, None, roll=(0, 0)),
        render((10, 8), kind, params, None, roll=(10, 8)), rtol=1e-12)


def test_random_roll_range():
    rng = np.random.RandomState(12)
    rolls = [random_roll((5, 3), rng) for _ in range(300)]
    xs = {r[0] for r in rolls}
    ys = {r[1] for r in rolls}
    assert xs == set(range(6))
    assert ys == set(range(4))


def test_render_reproducible():
    kind = GeneratorKind.BUBBLE
    a = render((12, 12), kind, kind.random_params(np.random.RandomState(9)),
               np.random.RandomState(1))
    b = render((12, 12), kind, kind.random_params(np.random.RandomState(9)),
               np.random.RandomState(1))
    np.testing.assert_array_equal(a, b)


def test_coswave_four_by_four():
    params = CoswaveParams(
        origin=Point(0.0, 0.0), wave_scale=1.0, squish=1.0, sqangle=0.0,
        distortion=1.0, pack_method=PackMethod.SCALE_TO_FIT,
        accel_method=WaveAccel.NONE,
    )
    pixels = render((4, 4), GeneratorKind.COSWAVE, params, None, roll=(0, 0))
    assert pixels.shape == (4, 4)
    assert np.all(np.isfinite(pixels))
    assert pixels.min() >= 0.0
    assert pixels.max() <= 1.0

    again = sample_pixels(0, 0, (4, 4), (0, 0), GeneratorKind.COSWAVE, params)
    assert again == pytest.approx(pixels[0, 0])
    assert again == sample_pixels(0, 0, (4, 4), (0, 0),
                                  GeneratorKind.COSWAVE, params)


@pytest.mark.parametrize("x, y", [(4, 0), (0, 4), (-1, 0), (0, -1)])
def test_sample_pixels_out_of_bounds(x, y):
    with pytest.raises(OutOfBoundsError):
        sample_pixels(x, y, (4, 4), (0, 0), GeneratorKind.TEST, None)


@pytest.mark.parametrize("size", [(0, 4), (4, 0), (-2, 3)])
def test_render_rejects_empty_raster(size):
    with pytest.raises(DegenerateInputError):
        render(size, GeneratorKind.TEST, None, np.random.RandomState(0))


def test_seamless_generator_skips_wrap():
    kind = GeneratorKind.SPINFLAKE
    params = kind.random_params(np.random.RandomState(3))
    x, y = np.meshgrid(np.linspace(0, 1, 5), np.linspace(0, 1, 5))
    np.testing.assert_array_equal(
        wrapped_point(x, y, kind, params),
        np.clip(kind.evaluate(x, y, params), 0.0, 1.0))
