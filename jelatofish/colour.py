"""Colours and colour palettes."""

from dataclasses import dataclass

from .errors import DegenerateInputError, OutOfRangeError

MAX_CHANVAL = 255


@dataclass(frozen=True)
class Colour:
    """An RGBA colour with channels nominally in [0, 1]."""
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 0.0

    @classmethod
    def random(cls, rng):
        return cls(rng.uniform(0.0, 1.0), rng.uniform(0.0, 1.0),
                   rng.uniform(0.0, 1.0), 0.0)

    @classmethod
    def from_rgb8(cls, rgb, alpha=1.0):
        """Build a colour from 0..255 channel values."""
        r, g, b = rgb[:3]
        return cls(r / MAX_CHANVAL, g / MAX_CHANVAL, b / MAX_CHANVAL, alpha)

    def scale(self, factor):
        return Colour(self.red * factor, self.green * factor,
                      self.blue * factor, self.alpha * factor)

    def is_valid(self):
        return all(0.0 <= c <= 1.0 for c in self.channels())

    def channels(self):
        return (self.red, self.green, self.blue, self.alpha)

    def same_rgb(self, other):
        return (self.red, self.green, self.blue) == \
            (other.red, other.green, other.blue)

    def to_rgba8(self):
        """Truncate each channel to an 8-bit value."""
        return tuple(int(c) for c in self.scale(MAX_CHANVAL).channels())


@dataclass(frozen=True)
class ColourPalette:
    """A finite list of colours to dye layers with.

    With fewer than two colours, random colours are used instead.
    """
    colours: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "colours", tuple(self.colours))

    @property
    def is_random(self):
        return len(self.colours) < 2

    def validate(self):
        """Check every colour up front.

        Raises:
            OutOfRangeError: A channel is outside [0, 1].
            DegenerateInputError: Every colour has the same RGB, so a
                foreground distinct from the background can never be drawn.
        """
        if self.is_random:
            return self
        for colour in self.colours:
            if not colour.is_valid():
                raise OutOfRangeError(
                    f"colour values must be 0.0 <= r/g/b/a <= 1.0, got {colour}"
                )
        first = self.colours[0]
        if all(first.same_rgb(c) for c in self.colours[1:]):
            raise DegenerateInputError(
                "palette needs at least two colours with different RGB"
            )
        return self

    def sample(self, rng):
        """Pick a random colour from the palette."""
        if self.is_random:
            return Colour.random(rng)
        colour = self.colours[rng.randint(0, len(self.colours))]
        if not colour.is_valid():
            raise OutOfRangeError(
                f"colour values must be 0.0 <= r/g/b/a <= 1.0, got {colour}"
            )
        return colour
