"""Tests for the layer compositor."""

import numpy as np
import pytest

from jelatofish import (
    Colour,
    ColourLayer,
    ColourPalette,
    DegenerateInputError,
    Jelatofish,
    OutOfBoundsError,
    OutOfRangeError,
)
from jelatofish.renderer import MAX_CUTOFF_THRESHOLD, MAX_LAYERS, MIN_LAYERS

WHITE = Colour(1.0, 1.0, 1.0, 1.0)
BLACK = Colour(0.0, 0.0, 0.0, 1.0)
RED = Colour(1.0, 0.0, 0.0, 1.0)
BLUE = Colour(0.0, 0.0, 1.0, 1.0)


def _flat(value, size=(4, 4)):
    width, height = size
    return np.full((height, width), value, dtype=np.float64)


def _random_fish(seed, size=(8, 8), **kwargs):
    return Jelatofish.random(size, rng=np.random.RandomState(seed), **kwargs)


def test_gradient_and_blend():
    top = ColourLayer(image=_flat(0.5), fore=WHITE, back=BLACK)
    bottom = ColourLayer(image=_flat(0.0), fore=RED, back=BLUE, mask=_flat(1.0))
    fish = Jelatofish(size=(4, 4), cutoff_threshold=0.0, layers=(top, bottom))

    pixel = fish.get_pixel_val(1, 2)
    assert pixel.red == pytest.approx(0.25)
    assert pixel.green == pytest.approx(0.25)
    assert pixel.blue == pytest.approx(0.75)
    assert pixel.alpha == 1.0


def test_opaque_top_layer_hides_the_rest():
    rng = np.random.RandomState(0)
    top = ColourLayer(image=rng.uniform(size=(4, 4)), fore=RED, back=BLUE,
                      mask=_flat(1.0))

    def fish_with(colour):
        deeper = [ColourLayer(image=rng.uniform(size=(4, 4)), fore=colour,
                              back=colour, mask=rng.uniform(size=(4, 4)))
                  for _ in range(2)]
        return Jelatofish(size=(4, 4), cutoff_threshold=0.0,
                          layers=[top] + deeper)

    a, b = fish_with(WHITE), fish_with(BLACK)
    for y in range(4):
        for x in range(4):
            pa, pb = a.get_pixel_val(x, y), b.get_pixel_val(x, y)
            assert pa == pb
            assert pa.alpha == 1.0
            image = top.image[y, x]
            assert pa.red == pytest.approx(image)
            assert pa.blue == pytest.approx(1.0 - image)
    np.testing.assert_array_equal(a.composite(), b.composite())


def test_inverted_self_mask():
    layer = ColourLayer(image=_flat(1.0), fore=WHITE, back=BLACK,
                        invert_mask=True)
    other = ColourLayer(image=_flat(0.0), fore=RED, back=BLUE)
    fish = Jelatofish(size=(4, 4), cutoff_threshold=0.0, layers=(layer, other))
    np.testing.assert_array_equal(layer.mask_values(), _flat(0.0))
    assert fish.get_pixel_val(0, 0).alpha == 0.0


def test_cutoff_stops_early():
    top = ColourLayer(image=_flat(0.5), fore=WHITE, back=BLACK, mask=_flat(0.95))
    bottom = ColourLayer(image=_flat(0.5), fore=RED, back=RED, mask=_flat(1.0))
    loose = Jelatofish(size=(4, 4), cutoff_threshold=MAX_CUTOFF_THRESHOLD,
                       layers=(top, bottom))
    strict = Jelatofish(size=(4, 4), cutoff_threshold=0.0, layers=(top, bottom))
    assert loose.get_pixel_val(0, 0) == Colour(0.5, 0.5, 0.5, 1.0)
    assert strict.get_pixel_val(0, 0).green < 0.5


def test_random_fish_pixels():
    fish = _random_fish(1, layer_count=2, cutoff_threshold=0.0)
    assert len(fish.layers) == 2
    for y in range(8):
        for x in range(8):
            pixel = fish.get_pixel_val(x, y)
            for channel in pixel.channels():
                assert 0.0 <= channel <= 1.0


def test_opaque_masks_give_opaque_pixels():
    fish = _random_fish(2, layer_count=2, cutoff_threshold=0.0)
    layers = [ColourLayer(image=layer.image, fore=layer.fore, back=layer.back,
                          mask=np.ones_like(layer.image))
              for layer in fish.layers]
    opaque = Jelatofish(size=fish.size, cutoff_threshold=0.0, layers=layers)
    for y in range(8):
        for x in range(8):
            assert opaque.get_pixel_val(x, y).alpha == 1.0
    assert np.all(opaque.composite()[..., 3] == 1.0)


@pytest.mark.parametrize("seed", [3, 4, 5])
def test_composite_matches_pixels(seed):
    fish = _random_fish(seed)
    rgba = fish.composite()
    assert rgba.shape == (8, 8, 4)
    for y in range(8):
        for x in range(8):
            np.testing.assert_allclose(rgba[y, x],
                                       fish.get_pixel_val(x, y).channels(),
                                       atol=1e-12)


def test_random_fish_is_reproducible():
    a = _random_fish(10, size=(12, 10))
    b = _random_fish(10, size=(12, 10))
    assert a.cutoff_threshold == b.cutoff_threshold
    assert len(a.layers) == len(b.layers)
    np.testing.assert_array_equal(a.composite(), b.composite())
    assert a.to_image().tobytes() == b.to_image().tobytes()


def test_random_defaults_in_range():
    for seed in range(10):
        fish = _random_fish(seed, size=(4, 4))
        assert MIN_LAYERS <= len(fish.layers) <= MAX_LAYERS
        assert 0.0 <= fish.cutoff_threshold <= MAX_CUTOFF_THRESHOLD
        for layer in fish.layers:
            assert not layer.fore.same_rgb(layer.back)
            assert layer.image.shape == (4, 4)
            assert layer.mask is None or layer.mask.shape == (4, 4)


def test_layers_are_read_only():
    fish = _random_fish(6, size=(4, 4))
    with pytest.raises(ValueError):
        fish.layers[0].image[0, 0] = 0.5


def test_palette_colours_are_used():
    palette = ColourPalette([RED, BLUE])
    fish = _random_fish(7, size=(4, 4), palette=palette)
    for layer in fish.layers:
        assert {layer.fore, layer.back} == {RED, BLUE}


@pytest.mark.parametrize("layer_count", [0, 1, 7, 2.5])
def test_bad_layer_count(layer_count):
    with pytest.raises(OutOfRangeError):
        _random_fish(0, layer_count=layer_count)


@pytest.mark.parametrize("cutoff", [-0.01, 0.07, 1.0, float("nan")])
def test_bad_cutoff(cutoff):
    with pytest.raises(OutOfRangeError):
        _random_fish(0, cutoff_threshold=cutoff)


def test_bad_palette_colour():
    palette = ColourPalette([RED, Colour(1.5, 0.0, 0.0, 1.0)])
    with pytest.raises(OutOfRangeError):
        _random_fish(0, palette=palette)


def test_single_colour_palette_rejected():
    palette = ColourPalette([RED, Colour(1.0, 0.0, 0.0, 0.5)])
    with pytest.raises(DegenerateInputError):
        _random_fish(0, palette=palette)


def test_empty_raster_rejected():
    with pytest.raises(DegenerateInputError):
        _random_fish(0, size=(0, 8))


@pytest.mark.parametrize("x, y", [(8, 0), (0, 8), (8, 8), (-1, 3)])
def test_pixel_out_of_bounds(x, y):
    fish = _random_fish(8, layer_count=2)
    with pytest.raises(OutOfBoundsError):
        fish.get_pixel_val(x, y)


def test_direct_construction_validates():
    layer = ColourLayer(image=_flat(0.5), fore=WHITE, back=BLACK)
    with pytest.raises(OutOfRangeError):
        Jelatofish(size=(4, 4), cutoff_threshold=0.0, layers=(layer,))
    with pytest.raises(OutOfRangeError):
        Jelatofish(size=(4, 4), cutoff_threshold=0.5, layers=(layer, layer))
    with pytest.raises(ValueError):
        Jelatofish(size=(5, 4), cutoff_threshold=0.0, layers=(layer, layer))
    with pytest.raises(ValueError):
        ColourLayer(image=_flat(0.5), fore=WHITE, back=BLACK,
                    mask=np.zeros((2, 2)))


def test_to_image_is_rgba():
    image = _random_fish(9, size=(10, 6)).to_image()
    assert image.mode == "RGBA"
    assert image.size == (10, 6)
