from __future__ import annotations
import math
from enum import Enum


class Dimensionality(Enum):
    TWO_D = 2
    THREE_D = 3

    @property
    def matrix_size(self) -> int:
        """Size of the homogeneous matrix for this dimensionality."""
        return self.value + 1


class _ParsableMode(Enum):
    @classmethod
    def parse(cls, value):
        """
        Returns the member matching value, which may be a member or its
        value string. Returns None for unknown values.
        """
        if isinstance(value, cls):
            return value
        for mode in cls:
            if mode.value == value:
                return mode
        return None


class CoordinateMode(_ParsableMode):
    """
    Where the logical origin sits on the drawing surface.

    RIGHT_HAND puts the origin at the bottom-left corner with y growing
    upwards (quadrant I from math class). LEFT_HAND is the renderer's
    native layout: origin at the top-left, y growing downwards.
    """

    RIGHT_HAND = "right-hand"
    LEFT_HAND = "left-hand"


class AngleMode(_ParsableMode):
    DEGREES = "degrees"
    RADIANS = "radians"

    def to_radians(self, angle: float) -> float:
        if self is AngleMode.DEGREES:
            return math.radians(angle)
        return float(angle)

    def from_radians(self, angle: float) -> float:
        if self is AngleMode.DEGREES:
            return math.degrees(angle)
        return float(angle)


class ColorMode(_ParsableMode):
    RGB = "rgb"
    HSB = "hsb"
