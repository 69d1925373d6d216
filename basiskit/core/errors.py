class BasisError(Exception):
    """Base class for all errors raised by basiskit."""


class InvalidArgumentError(BasisError, ValueError):
    """
    Raised when a transform or drawing call receives an argument that is
    not legal for the active surface, e.g. a z translation on a 2D surface.
    """


class DegenerateTransformError(BasisError, ArithmeticError):
    """
    Raised when the basis matrix cannot be inverted, or when inverting it
    would produce non-finite coordinates.
    """


class DegenerateScaleError(InvalidArgumentError, DegenerateTransformError):
    """Raised when a scale factor of exactly zero is composed."""


class FrameOrderError(BasisError, RuntimeError):
    """Raised when frame hooks are called out of order."""
