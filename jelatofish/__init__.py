"""Jelatofish - Composite seamless procedural textures into creature images."""

from .colour import Colour, ColourPalette
from .errors import (
    DegenerateInputError,
    JelatofishError,
    OutOfBoundsError,
    OutOfRangeError,
)
from .generators import GeneratorKind
from .renderer import ColourLayer, FishConfig, Jelatofish, render, render_texture

__version__ = "0.1.0"
__all__ = [
    "generate",
    "render",
    "render_texture",
    "Colour",
    "ColourLayer",
    "ColourPalette",
    "FishConfig",
    "GeneratorKind",
    "Jelatofish",
    "JelatofishError",
    "OutOfRangeError",
    "OutOfBoundsError",
    "DegenerateInputError",
]


def generate(width=256, height=256, seed=None, **kwargs):
    """Generate a jelatofish image.

    Args:
        width: Output image width in pixels.
        height: Output image height in pixels.
        seed: Random seed for reproducible generation.
        **kwargs: Additional FishConfig parameters (layer_count,
            cutoff_threshold, palette).

    Returns:
        PIL Image in RGBA mode.
    """
    config = FishConfig(**kwargs)
    return render(width, height, seed=seed, config=config)
