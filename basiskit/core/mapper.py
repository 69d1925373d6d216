from __future__ import annotations
import math
import logging
from dataclasses import dataclass
from typing import NamedTuple
from .errors import DegenerateTransformError
from .tracker import BasisMatrixTracker

logger = logging.getLogger(__name__)


class LogicalPoint(NamedTuple):
    """A position in the user's transformed drawing space."""

    x: float
    y: float


@dataclass(frozen=True)
class PointerSample:
    """
    Pointer coordinates on the drawing surface.

    `flipped` is set when y has been mirrored against the surface height,
    which is how right-handed hosts report the pointer.
    """

    x: float
    y: float
    flipped: bool = False

    @classmethod
    def from_client(
        cls,
        client_x: float,
        client_y: float,
        rect_left: float,
        rect_top: float,
        scroll_width: float,
        scroll_height: float,
        width: float,
        height: float,
    ) -> PointerSample:
        """
        Corrects client (window) coordinates for the canvas offset and for
        the ratio between the canvas' displayed and logical size.
        """
        sx = scroll_width / width if width else 0.0
        sy = scroll_height / height if height else 0.0
        sx = sx or 1.0
        sy = sy or 1.0
        return cls((client_x - rect_left) / sx, (client_y - rect_top) / sy)

    def flip(self, height: float) -> PointerSample:
        """Mirrors y against the surface height."""
        return PointerSample(self.x, height - self.y, not self.flipped)


class CoordinateMapper:
    """
    Maps device pointer coordinates into logical drawing coordinates by
    inverting the tracked basis.
    """

    def __init__(self, tracker: BasisMatrixTracker):
        self.tracker = tracker

    def to_device(self, sample: PointerSample) -> PointerSample:
        """
        Undoes a y pre-flip so the sample lives in the same device space
        the basis maps into.
        """
        if sample.flipped:
            return sample.flip(self.tracker.renderer.height)
        return sample

    def map_pointer(self, sample: PointerSample) -> LogicalPoint:
        """
        Maps a pointer sample through the inverse of the current basis.

        The inverse is computed on every call: the basis may have changed
        since the last query in the same frame.

        Raises:
            DegenerateTransformError: if the basis is not invertible.
        """
        device = self.to_device(sample)
        inverse = self.tracker.current_matrix().invert()
        coords = inverse.transform_point((device.x, device.y))
        x, y = coords[0], coords[1]
        if not (math.isfinite(x) and math.isfinite(y)):
            raise DegenerateTransformError(
                f"Pointer ({device.x}, {device.y}) maps to non-finite "
                f"coordinates ({x}, {y})"
            )
        return LogicalPoint(x, y)
