from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple
from blinker import Signal
from ..core.modes import Dimensionality
from ..shared.colors import ColorRGBA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawStyle:
    """The drawing state a renderer saves and restores natively."""

    fill: Optional[ColorRGBA] = (1.0, 1.0, 1.0, 1.0)
    stroke: Optional[ColorRGBA] = (0.0, 0.0, 0.0, 1.0)
    stroke_weight: float = 1.0
    text_size: float = 12.0


class Renderer(ABC):
    """
    The capability interface basiskit needs from an immediate-mode
    drawing backend.

    Implementations provide the primitive transforms, their own native
    state save/restore, a text primitive and a handful of shape
    primitives. The base class owns the device facts every backend shares:
    surface size, the pointer state and the draw style stack.

    Angles passed to `rotate` are always in radians.
    """

    def __init__(self, width: float, height: float):
        self.width: float = float(width)
        self.height: float = float(height)
        self.style: DrawStyle = DrawStyle()
        self._style_stack: List[DrawStyle] = []

        # Pointer state in device coordinates
        self.pointer_x: float = 0.0
        self.pointer_y: float = 0.0
        self.pointer_pressed: bool = False

        # Sent with the renderer as sender whenever the pointer goes up.
        self.pointer_released = Signal()

    @property
    @abstractmethod
    def dimensionality(self) -> Dimensionality:
        pass

    @property
    def is_3d(self) -> bool:
        return self.dimensionality is Dimensionality.THREE_D

    # --- Transforms ---

    @abstractmethod
    def translate(self, dx: float, dy: float, dz: float = 0.0) -> None:
        pass

    @abstractmethod
    def rotate(
        self, angle: float, axis: Optional[Sequence[float]] = None
    ) -> None:
        pass

    @abstractmethod
    def scale(self, sx: float, sy: float, sz: float = 1.0) -> None:
        pass

    # --- Native state ---

    def native_push(self) -> None:
        """Saves the backend transform and the draw style."""
        self._style_stack.append(self.style)
        self._save_state()

    def native_pop(self) -> None:
        """Restores the state saved by the matching `native_push`."""
        if not self._style_stack:
            logger.warning("native_pop() called without matching push")
            return
        self.style = self._style_stack.pop()
        self._restore_state()

    @property
    def native_depth(self) -> int:
        return len(self._style_stack)

    def reset_native_state(self) -> None:
        """
        Drops every saved state. Backends that keep their own stack
        override this to reset it as well.
        """
        self._style_stack.clear()

    @abstractmethod
    def _save_state(self) -> None:
        pass

    @abstractmethod
    def _restore_state(self) -> None:
        pass

    def refresh_camera(self) -> None:
        """
        Re-applies the camera position before a frame. Only meaningful
        for 3D backends.
        """

    # --- Style ---

    def set_fill(self, color: Optional[ColorRGBA]) -> None:
        self.style = replace(self.style, fill=color)

    def set_stroke(self, color: Optional[ColorRGBA]) -> None:
        self.style = replace(self.style, stroke=color)

    def set_stroke_weight(self, weight: float) -> None:
        self.style = replace(self.style, stroke_weight=float(weight))

    @property
    def text_size(self) -> float:
        return self.style.text_size

    @text_size.setter
    def text_size(self, size: float) -> None:
        self.style = replace(self.style, text_size=float(size))

    # --- Primitives ---

    @abstractmethod
    def draw_text(self, value, x: float, y: float) -> None:
        pass

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        pass

    @abstractmethod
    def circle(self, x: float, y: float, diameter: float) -> None:
        pass

    @abstractmethod
    def rect(self, x: float, y: float, width: float, height: float) -> None:
        pass

    @abstractmethod
    def polygon(self, points: Sequence[Tuple[float, float]]) -> None:
        pass

    @abstractmethod
    def background(self, color: ColorRGBA) -> None:
        pass

    # --- Pointer ---

    def move_pointer(self, x: float, y: float) -> None:
        self.pointer_x = float(x)
        self.pointer_y = float(y)

    def press_pointer(self) -> None:
        self.pointer_pressed = True

    def release_pointer(self) -> None:
        self.pointer_pressed = False
        logger.debug("Pointer released")
        self.pointer_released.send(self)
