"""Layer compositing pipeline.

A Jelatofish is a stack of greyscale generator rasters. Each layer dyes its
raster with a two-colour gradient and masks it with an alpha raster; the
layers are then merged front to back into one RGBA image.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image

from .colour import MAX_CHANVAL, Colour, ColourPalette
from .engine import render as render_raster
from .errors import OutOfBoundsError, OutOfRangeError
from .generators import GeneratorKind
from .sampling import Area, maybe

logger = logging.getLogger(__name__)

MIN_LAYERS = 2
MAX_LAYERS = 6
MAX_CUTOFF_THRESHOLD = 1.0 / 16.0


@dataclass(frozen=True, eq=False)
class ColourLayer:
    """One dyed, masked raster.

    ``fore`` is used for high image values and ``back`` for low ones. When
    ``mask`` is None the image is its own mask.
    """
    image: np.ndarray
    fore: Colour
    back: Colour
    mask: Optional[np.ndarray] = None
    invert_mask: bool = False

    def __post_init__(self):
        image = np.array(self.image, dtype=np.float64)
        image.setflags(write=False)
        object.__setattr__(self, "image", image)
        if self.mask is not None:
            mask = np.array(self.mask, dtype=np.float64)
            if mask.shape != image.shape:
                raise ValueError(
                    f"mask shape {mask.shape} does not match image {image.shape}"
                )
            mask.setflags(write=False)
            object.__setattr__(self, "mask", mask)

    def mask_values(self):
        """Return the effective alpha raster for this layer."""
        mask = self.image if self.mask is None else self.mask
        return 1.0 - mask if self.invert_mask else mask


@dataclass(frozen=True, eq=False)
class Jelatofish:
    """A complete description of one composite image.

    The first layer in ``layers`` is the topmost.
    """
    size: Area
    cutoff_threshold: float
    layers: tuple

    def __post_init__(self):
        size = Area(*self.size).validate()
        object.__setattr__(self, "size", size)
        object.__setattr__(self, "layers", tuple(self.layers))
        _check_layer_count(len(self.layers))
        _check_cutoff_threshold(self.cutoff_threshold)
        for layer in self.layers:
            if layer.image.shape != (size.height, size.width):
                raise ValueError(
                    f"layer shape {layer.image.shape} does not match "
                    f"size {size.width}x{size.height}"
                )

    @classmethod
    def random(cls, size, palette=None, rng=None, layer_count=None,
               cutoff_threshold=None):
        """Build a random set of layers.

        Args:
            size: (width, height) of the image in pixels.
            palette: ColourPalette to dye layers with (random colours if
                None or fewer than two colours).
            rng: numpy RandomState for reproducibility.
            layer_count: Number of layers, 2-6. Random if None.
            cutoff_threshold: Alpha tolerance for early exit, 0-1/16.
                Random if None.

        Raises:
            OutOfRangeError: layer_count, cutoff_threshold or a palette
                colour is out of bounds.
            DegenerateInputError: Zero-sized raster or single-colour palette.
        """
        size = Area(*size).validate()
        if palette is None:
            palette = ColourPalette()
        palette.validate()
        if layer_count is not None:
            _check_layer_count(layer_count)
        if cutoff_threshold is not None:
            _check_cutoff_threshold(cutoff_threshold)
        if rng is None:
            rng = np.random.RandomState()

        if layer_count is None:
            layer_count = rng.randint(MIN_LAYERS, MAX_LAYERS + 1)
        if cutoff_threshold is None:
            cutoff_threshold = rng.uniform(0.0, MAX_CUTOFF_THRESHOLD)

        logger.info("Building %d layers at %dx%d (cutoff %.4f)",
                    layer_count, size.width, size.height, cutoff_threshold)
        layers = tuple(_random_layer(size, palette, rng)
                       for _ in range(layer_count))
        return cls(size=size, cutoff_threshold=cutoff_threshold, layers=layers)

    def get_pixel_val(self, x, y):
        """Calculate one pixel.

        Starting from transparent black, each layer is merged in behind
        the layers already collected. Alpha is opacity: once the collected
        alpha reaches 1 (within the cutoff) deeper layers cannot show and
        are skipped.
        """
        width, height = self.size
        if not (0 <= x < width and 0 <= y < height):
            raise OutOfBoundsError(
                f"pixel ({x}, {y}) outside {width}x{height} image"
            )

        red = green = blue = alpha = 0.0
        for layer in self.layers:
            imageval = float(layer.image[y, x])
            if layer.mask is None:
                maskval = imageval
            else:
                maskval = float(layer.mask[y, x])
            if layer.invert_mask:
                maskval = 1.0 - maskval

            fore, back = layer.fore, layer.back
            layer_red = back.red + imageval * (fore.red - back.red)
            layer_green = back.green + imageval * (fore.green - back.green)
            layer_blue = back.blue + imageval * (fore.blue - back.blue)

            # The new layer goes behind the existing ones; only the part
            # that is not yet opaque lets it show through.
            red = red * alpha + layer_red * (1.0 - alpha)
            green = green * alpha + layer_green * (1.0 - alpha)
            blue = blue * alpha + layer_blue * (1.0 - alpha)

            layer_alpha = maskval * (1.0 - alpha)
            if layer_alpha + alpha + self.cutoff_threshold >= 1.0:
                alpha = 1.0
                break
            alpha += layer_alpha

        return Colour(red, green, blue, alpha)

    def composite(self):
        """Calculate every pixel at once.

        Same arithmetic and early exit as ``get_pixel_val``, applied to
        whole rasters.

        Returns:
            Array of shape (height, width, 4) with RGBA values in [0, 1].
        """
        shape = (self.size.height, self.size.width)
        red = np.zeros(shape)
        green = np.zeros(shape)
        blue = np.zeros(shape)
        alpha = np.zeros(shape)
        done = np.zeros(shape, dtype=bool)

        for layer in self.layers:
            if done.all():
                break
            imageval = layer.image
            maskval = layer.mask_values()
            fore, back = layer.fore, layer.back
            live = ~done

            layer_red = back.red + imageval * (fore.red - back.red)
            layer_green = back.green + imageval * (fore.green - back.green)
            layer_blue = back.blue + imageval * (fore.blue - back.blue)

            red = np.where(live, red * alpha + layer_red * (1.0 - alpha), red)
            green = np.where(
                live, green * alpha + layer_green * (1.0 - alpha), green)
            blue = np.where(
                live, blue * alpha + layer_blue * (1.0 - alpha), blue)

            layer_alpha = maskval * (1.0 - alpha)
            stop = layer_alpha + alpha + self.cutoff_threshold >= 1.0
            alpha = np.where(
                live, np.where(stop, 1.0, alpha + layer_alpha), alpha)
            done = done | (live & stop)

        return np.stack([red, green, blue, alpha], axis=-1)

    def to_image(self):
        """Assemble the final RGBA image."""
        rgba = np.clip(self.composite() * MAX_CHANVAL, 0, MAX_CHANVAL)
        return Image.fromarray(rgba.astype(np.uint8))


@dataclass
class FishConfig:
    """Optional overrides for a random Jelatofish."""

    layer_count: Optional[int] = None
    cutoff_threshold: Optional[float] = None
    # Colour instances; fewer than two means random colours
    palette: tuple = ()


def render(width, height, seed=None, config=None):
    """Render a random Jelatofish.

    Args:
        width: Output image width in pixels.
        height: Output image height in pixels.
        seed: Random seed for reproducible generation.
        config: FishConfig instance (defaults used if None).

    Returns:
        PIL Image in RGBA mode.
    """
    if config is None:
        config = FishConfig()
    if seed is None:
        seed = np.random.RandomState().randint(0, 2**31)
    logger.info("Rendering jelatofish with seed %d", seed)

    rng = np.random.RandomState(seed)
    fish = Jelatofish.random(
        (width, height),
        palette=ColourPalette(config.palette),
        rng=rng,
        layer_count=config.layer_count,
        cutoff_threshold=config.cutoff_threshold,
    )
    return fish.to_image()


def render_texture(width, height, kind, seed=None):
    """Render a single generator as a greyscale image.

    Args:
        width: Output image width in pixels.
        height: Output image height in pixels.
        kind: GeneratorKind (or its name) to render.
        seed: Random seed for reproducible generation.

    Returns:
        PIL Image in L mode.
    """
    kind = GeneratorKind(kind)
    if seed is None:
        seed = np.random.RandomState().randint(0, 2**31)
    logger.info("Rendering %s texture with seed %d", kind.value, seed)

    rng = np.random.RandomState(seed)
    params = kind.random_params(rng)
    pixels = render_raster((width, height), kind, params, rng)
    grey = np.clip(pixels * MAX_CHANVAL, 0, MAX_CHANVAL)
    return Image.fromarray(grey.astype(np.uint8))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _check_layer_count(layer_count):
    if isinstance(layer_count, bool) or not isinstance(
            layer_count, (int, np.integer)):
        raise OutOfRangeError(f"layer_count must be an integer, got {layer_count!r}")
    if not MIN_LAYERS <= layer_count <= MAX_LAYERS:
        raise OutOfRangeError(
            f"must be {MIN_LAYERS} <= layer_count <= {MAX_LAYERS}, "
            f"got {layer_count}"
        )


def _check_cutoff_threshold(cutoff_threshold):
    if not 0.0 <= cutoff_threshold <= MAX_CUTOFF_THRESHOLD:
        raise OutOfRangeError(
            f"must be 0 <= cutoff_threshold <= {MAX_CUTOFF_THRESHOLD}, "
            f"got {cutoff_threshold}"
        )


def _random_layer(size, palette, rng):
    """Pick colours, generators and rasters for one layer.

    Half the time the layer gets a separate mask raster; independently,
    half the time the mask is inverted. Image and mask share one parameter
    set per generator kind.
    """
    back = palette.sample(rng)
    # fore and back must never be equal
    fore = palette.sample(rng)
    while fore.same_rgb(back):
        fore = palette.sample(rng)

    params = {}
    image_kind = GeneratorKind.sample(rng)
    params[image_kind] = image_kind.random_params(rng)
    image = render_raster(size, image_kind, params[image_kind], rng)

    mask = None
    if maybe(rng):
        mask_kind = GeneratorKind.sample(rng)
        if mask_kind not in params:
            params[mask_kind] = mask_kind.random_params(rng)
        mask = render_raster(size, mask_kind, params[mask_kind], rng)

    invert_mask = maybe(rng)
    logger.debug("Layer: image=%s mask=%s invert=%s", image_kind.value,
                 "none" if mask is None else mask_kind.value, invert_mask)
    return ColourLayer(image=image, fore=fore, back=back, mask=mask,
                       invert_mask=invert_mask)
