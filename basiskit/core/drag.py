from __future__ import annotations
import math
import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Dict, Optional
from blinker import Signal
from .errors import InvalidArgumentError
from .mapper import CoordinateMapper, LogicalPoint, PointerSample

if TYPE_CHECKING:
    from ..render.renderer import Renderer
    from ..shared.colors import ColorSpec
    from ..sketch import Sketch

logger = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT = "red"


class DragState(Enum):
    IDLE = auto()
    HOVERING = auto()
    DRAGGING = auto()


class DragManager:
    """
    Owns the capture slot shared by all draggables: at most one of them
    can be dragging at any time.
    """

    def __init__(
        self,
        mapper: CoordinateMapper,
        renderer: Renderer,
        sample_pointer: Optional[Callable[[], PointerSample]] = None,
    ):
        self.mapper = mapper
        self.renderer = renderer
        self._sample_pointer = sample_pointer or self._device_sample
        self.captured: Optional[Draggable] = None

        self.drag_started = Signal()
        self.drag_ended = Signal()

    def _device_sample(self) -> PointerSample:
        return PointerSample(
            self.renderer.pointer_x, self.renderer.pointer_y
        )

    @property
    def is_captured(self) -> bool:
        return self.captured is not None

    @property
    def pointer_pressed(self) -> bool:
        return self.renderer.pointer_pressed

    def pointer_position(self) -> LogicalPoint:
        """The pointer mapped through the basis as of this moment."""
        return self.mapper.map_pointer(self._sample_pointer())

    def try_capture(self, draggable: Draggable) -> bool:
        if self.captured is not None:
            return False
        self.captured = draggable
        logger.debug(f"Drag captured by {draggable}")
        self.drag_started.send(self, draggable=draggable)
        return True

    def release(self) -> None:
        """Clears the capture slot, whoever holds it."""
        if self.captured is None:
            return
        draggable, self.captured = self.captured, None
        logger.debug(f"Drag released by {draggable}")
        self.drag_ended.send(self, draggable=draggable)

    def create(
        self,
        x: float,
        y: float,
        radius: float,
        color: "ColorSpec" = DEFAULT_HIGHLIGHT,
    ) -> Draggable:
        return Draggable(self, x, y, radius, color)


class Draggable:
    """
    A circle that can be hovered and dragged with the pointer.

    Hit-testing happens in logical coordinates, so it keeps working under
    any translate/rotate/scale in effect when `update()` runs.
    """

    def __init__(
        self,
        manager: DragManager,
        x: float,
        y: float,
        radius: float,
        color: "ColorSpec" = DEFAULT_HIGHLIGHT,
    ):
        if radius <= 0:
            raise InvalidArgumentError(
                f"Draggable radius must be positive, got {radius}"
            )
        self.manager = manager
        self.x: float = float(x)
        self.y: float = float(y)
        self.radius: float = float(radius)
        self.color = color
        self.state: DragState = DragState.IDLE
        self.locked: Dict[str, Optional[float]] = {"x": None, "y": None}

        # Any release clears the shared capture slot, not only a release
        # of the draggable holding it.
        manager.renderer.pointer_released.connect(self._on_pointer_released)

    def __repr__(self) -> str:
        return (
            f"Draggable(x={self.x}, y={self.y}, radius={self.radius}, "
            f"state={self.state.name})"
        )

    @property
    def position(self) -> LogicalPoint:
        return LogicalPoint(self.x, self.y)

    def contains(self, point: LogicalPoint) -> bool:
        return math.dist((point.x, point.y), (self.x, self.y)) < self.radius

    def lock(self, axis: str, value: float) -> None:
        """Pins one axis to a value; dragging no longer changes it."""
        if axis not in self.locked:
            raise InvalidArgumentError(f"Unknown axis '{axis}'")
        self.locked[axis] = float(value)
        setattr(self, axis, float(value))

    def unlock(self, axis: str) -> None:
        if axis not in self.locked:
            raise InvalidArgumentError(f"Unknown axis '{axis}'")
        self.locked[axis] = None

    def update(self) -> DragState:
        """
        Advances the state machine for this frame: follow the pointer if
        dragging, then re-evaluate hover and try to claim the capture.
        """
        pointer = self.manager.pointer_position()

        if (
            self.state is DragState.DRAGGING
            and self.manager.captured is not self
        ):
            # The capture was released without a pointer release signal.
            self.state = DragState.IDLE
            return self.state

        if self.state is DragState.DRAGGING:
            if self.locked["x"] is None:
                self.x = pointer.x
            if self.locked["y"] is None:
                self.y = pointer.y
            return self.state

        hovering = self.contains(pointer)
        self.state = DragState.HOVERING if hovering else DragState.IDLE

        if (
            self.state is DragState.HOVERING
            and self.manager.pointer_pressed
            and self.manager.try_capture(self)
        ):
            self.state = DragState.DRAGGING
        return self.state

    def draw(self, sketch: Sketch) -> None:
        sketch.push()
        try:
            if self.update() is not DragState.IDLE:
                sketch.fill(self.color)
            sketch.circle(self.x, self.y, 2 * self.radius)
        finally:
            sketch.pop()

    def _on_pointer_released(self, sender, **kwargs) -> None:
        if self.state is DragState.DRAGGING:
            self.state = DragState.IDLE
        self.manager.release()
