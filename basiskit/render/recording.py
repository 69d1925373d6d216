from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple
import numpy as np
from ..core.matrix import BasisMatrix
from ..core.modes import Dimensionality
from ..shared.colors import ColorRGBA
from .renderer import DrawStyle, Renderer

logger = logging.getLogger(__name__)


def _to_device(ctm: np.ndarray, x: float, y: float) -> Tuple[float, float]:
    vec = np.zeros(ctm.shape[0])
    vec[0], vec[1], vec[-1] = x, y, 1.0
    res = np.dot(ctm, vec)
    return float(res[0]), float(res[1])


@dataclass(frozen=True)
class RecordedCall:
    name: str
    args: Tuple[Any, ...]
    # The transform in effect when the call was made
    ctm: Optional[np.ndarray] = field(default=None, compare=False)

    def device_point(self, x: float, y: float) -> Tuple[float, float]:
        assert self.ctm is not None
        return _to_device(self.ctm, x, y)


@dataclass(frozen=True)
class RecordedText:
    """A text draw together with the transform active at that moment."""

    value: Any
    x: float
    y: float
    ctm: np.ndarray
    style: DrawStyle

    @property
    def anchor(self) -> Tuple[float, float]:
        """The device position of the text anchor."""
        return _to_device(self.ctm, self.x, self.y)

    @property
    def upright(self) -> bool:
        """False if the text y axis is mirrored on the device."""
        return bool(self.ctm[1, 1] > 0)


class RecordingRenderer(Renderer):
    """
    A headless renderer that records every call it receives.

    It keeps its own current transformation matrix in the column-vector
    convention, the same way a native backend would, so the tracked basis
    can be checked against it. Works for 2D and 3D surfaces.
    """

    def __init__(
        self,
        width: float = 400,
        height: float = 400,
        dimensionality: Dimensionality = Dimensionality.TWO_D,
    ):
        super().__init__(width, height)
        self._dimensionality = dimensionality
        self.ctm: np.ndarray = np.identity(dimensionality.matrix_size)
        self._ctm_stack: List[np.ndarray] = []
        self.calls: List[RecordedCall] = []
        self.texts: List[RecordedText] = []
        self.camera_refreshes: int = 0

    @property
    def dimensionality(self) -> Dimensionality:
        return self._dimensionality

    def _record(self, name: str, *args) -> None:
        self.calls.append(RecordedCall(name, args, self.ctm.copy()))

    def call_names(self) -> List[str]:
        return [call.name for call in self.calls]

    def clear(self) -> None:
        self.calls.clear()
        self.texts.clear()

    def translate(self, dx: float, dy: float, dz: float = 0.0) -> None:
        self._record("translate", dx, dy, dz)
        size = self.ctm.shape[0]
        self.ctm = self.ctm @ BasisMatrix.translation(dx, dy, dz, size).m

    def rotate(
        self, angle: float, axis: Optional[Sequence[float]] = None
    ) -> None:
        self._record("rotate", angle, axis)
        size = self.ctm.shape[0]
        self.ctm = self.ctm @ BasisMatrix.rotation(angle, size, axis).m

    def scale(self, sx: float, sy: float, sz: float = 1.0) -> None:
        self._record("scale", sx, sy, sz)
        size = self.ctm.shape[0]
        self.ctm = self.ctm @ BasisMatrix.scale(sx, sy, sz, size).m

    def _save_state(self) -> None:
        self._record("native_push")
        self._ctm_stack.append(self.ctm.copy())

    def _restore_state(self) -> None:
        self._record("native_pop")
        self.ctm = self._ctm_stack.pop()

    def reset_native_state(self) -> None:
        super().reset_native_state()
        self._ctm_stack.clear()
        self.ctm = np.identity(self._dimensionality.matrix_size)

    def refresh_camera(self) -> None:
        self.camera_refreshes += 1

    def draw_text(self, value, x: float, y: float) -> None:
        self._record("text", value, x, y)
        self.texts.append(
            RecordedText(value, x, y, self.ctm.copy(), self.style)
        )

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._record("line", x1, y1, x2, y2)

    def circle(self, x: float, y: float, diameter: float) -> None:
        self._record("circle", x, y, diameter)

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("rect", x, y, width, height)

    def polygon(self, points: Sequence[Tuple[float, float]]) -> None:
        self._record("polygon", tuple(points))

    def background(self, color: ColorRGBA) -> None:
        self._record("background", color)
