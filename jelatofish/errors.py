"""Exceptions raised by the generator engine and the compositor."""


class JelatofishError(Exception):
    """Base class for all jelatofish errors."""


class OutOfRangeError(JelatofishError, ValueError):
    """A caller-supplied value lies outside its documented bounds."""


class OutOfBoundsError(JelatofishError, IndexError):
    """A pixel coordinate lies outside the raster."""


class DegenerateInputError(JelatofishError, ValueError):
    """Input that would divide by zero or resample forever."""
