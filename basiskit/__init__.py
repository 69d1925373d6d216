"""
Tracked coordinate systems and pointer hit-testing on top of an
immediate-mode renderer.
"""

from .core.drag import DragManager, Draggable, DragState
from .core.errors import (
    BasisError,
    DegenerateScaleError,
    DegenerateTransformError,
    FrameOrderError,
    InvalidArgumentError,
)
from .core.factors import ScaleFactors
from .core.mapper import LogicalPoint, PointerSample
from .core.matrix import BasisMatrix
from .core.modes import AngleMode, ColorMode, CoordinateMode, Dimensionality
from .sketch import Sketch


__all__ = [
    "AngleMode",
    "BasisError",
    "BasisMatrix",
    "ColorMode",
    "CoordinateMode",
    "DegenerateScaleError",
    "DegenerateTransformError",
    "Dimensionality",
    "DragManager",
    "DragState",
    "Draggable",
    "FrameOrderError",
    "InvalidArgumentError",
    "LogicalPoint",
    "PointerSample",
    "ScaleFactors",
    "Sketch",
]
