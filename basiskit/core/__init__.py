"""
The transform-tracking core: basis matrix, stack, pointer mapping,
orientation guard and drag state machine.
"""

from .mapper import CoordinateMapper
from .orientation import OrientationGuard
from .stack import StackFrame, StyleState, TransformStack
from .tracker import BasisMatrixTracker


__all__ = [
    "BasisMatrixTracker",
    "CoordinateMapper",
    "OrientationGuard",
    "StackFrame",
    "StyleState",
    "TransformStack",
]
