from __future__ import annotations
import logging
from typing import Callable, Optional, Sequence
from .core.config import Config
from .core.drag import DEFAULT_HIGHLIGHT, DragManager, Draggable
from .core.errors import FrameOrderError
from .core.factors import ScaleFactors
from .core.mapper import CoordinateMapper, LogicalPoint, PointerSample
from .core.matrix import BasisMatrix
from .core.modes import AngleMode, ColorMode, CoordinateMode
from .core.orientation import OrientationGuard
from .core.stack import StyleState, TransformStack
from .core.tracker import BasisMatrixTracker
from .render.renderer import Renderer
from .shared.colors import ColorSpec, parse_color

logger = logging.getLogger(__name__)


class Sketch:
    """
    Wraps a renderer and keeps a tracked basis in sync with it.

    All transform and state calls go through the sketch, which records
    them in the basis before delegating to the renderer. Hosts drive the
    sketch through a three phase frame contract, in this order:

        sketch.init()           # once
        sketch.pre_frame()      # every frame, before drawing
        draw(sketch)
        sketch.post_frame()     # every frame, after drawing

    `run_frame(draw)` runs the per-frame phases for a callback.
    """

    def __init__(self, renderer: Renderer, config: Optional[Config] = None):
        self.renderer = renderer
        self.config = config
        self._coordinate_mode = CoordinateMode.RIGHT_HAND
        self._color_mode = ColorMode.RGB
        self.highlight_color: ColorSpec = DEFAULT_HIGHLIGHT
        self.frame_count: int = 0
        self._initialized = False

        self.tracker = BasisMatrixTracker(renderer)
        self.stack = TransformStack(
            self.tracker, self._get_style, self._set_style
        )
        self.mapper = CoordinateMapper(self.tracker)
        self.guard = OrientationGuard(self.tracker, self.stack)
        self.drag_manager = DragManager(
            self.mapper, renderer, sample_pointer=self.pointer_sample
        )

        if config is not None:
            self._apply_config(config)
            config.changed.connect(self._on_config_changed)

    def _apply_config(self, config: Config) -> None:
        self._coordinate_mode = config.coordinate_mode
        self.tracker.angle_mode = config.angle_mode
        self.highlight_color = config.highlight_color

    def _on_config_changed(self, sender: Config, **kwargs) -> None:
        logger.debug("Configuration changed, updating sketch defaults")
        self._apply_config(sender)

    def _get_style(self) -> StyleState:
        return StyleState(color_mode=self._color_mode)

    def _set_style(self, style: StyleState) -> None:
        self._color_mode = style.color_mode

    # --- Frame contract ---

    def init(self) -> None:
        """Prepares the sketch for its first frame."""
        self.stack.clear()
        self.tracker.reset_to_identity()
        self._initialized = True
        logger.debug(
            f"Sketch initialized: {self.renderer.dimensionality.name}, "
            f"{self.renderer.width}x{self.renderer.height}"
        )

    def pre_frame(self) -> None:
        """Applies the ambient coordinate flip and the camera fix."""
        if not self._initialized:
            raise FrameOrderError("init() must run before the first frame")
        self.tracker.apply_ambient_coordinate_flip(
            self._coordinate_mode, self.renderer.height
        )
        if self.renderer.is_3d:
            self.renderer.refresh_camera()

    def post_frame(self) -> None:
        """
        Resets the basis, the stack and the renderer transform. Runs no
        matter how balanced the frame's push/pop calls were.
        """
        if not self._initialized:
            raise FrameOrderError("init() must run before the first frame")
        self.tracker.reset_to_identity()
        self.stack.clear()
        self.renderer.reset_native_state()
        self.frame_count += 1

    def run_frame(self, draw: Callable[[Sketch], None]) -> None:
        self.pre_frame()
        try:
            draw(self)
        finally:
            self.post_frame()

    # --- Modes ---

    @property
    def coordinate_mode(self) -> CoordinateMode:
        return self._coordinate_mode

    @coordinate_mode.setter
    def coordinate_mode(self, mode) -> None:
        # Unknown values keep the current mode.
        parsed = CoordinateMode.parse(mode)
        if parsed is not None:
            self._coordinate_mode = parsed

    @property
    def angle_mode(self) -> AngleMode:
        return self.tracker.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode) -> None:
        parsed = AngleMode.parse(mode)
        if parsed is not None:
            self.tracker.angle_mode = parsed

    @property
    def color_mode(self) -> ColorMode:
        return self._color_mode

    @color_mode.setter
    def color_mode(self, mode) -> None:
        parsed = ColorMode.parse(mode)
        if parsed is not None:
            self._color_mode = parsed

    # --- Transforms ---

    def translate(self, dx: float, dy: float, dz: Optional[float] = None):
        self.tracker.apply_translate(dx, dy, dz)

    def rotate(self, angle: float, axis: Optional[Sequence[float]] = None):
        self.tracker.apply_rotate(angle, axis)

    def rotate_x(self, angle: float):
        self.tracker.apply_rotate_x(angle)

    def rotate_y(self, angle: float):
        self.tracker.apply_rotate_y(angle)

    def rotate_z(self, angle: float):
        self.tracker.apply_rotate_z(angle)

    def scale(
        self, x: float, y: Optional[float] = None, z: Optional[float] = None
    ):
        self.tracker.apply_scale(x, y, z)

    def scale_by(self, factors: ScaleFactors):
        self.tracker.apply_scale_factors(factors)

    def push(self):
        self.stack.push()

    def pop(self):
        self.stack.pop()

    def basis(self) -> BasisMatrix:
        return self.tracker.current_matrix()

    # --- Pointer ---

    def pointer_sample(self) -> PointerSample:
        """
        The pointer as the host reports it. On right-handed 2D surfaces y
        is pre-flipped against the height. 3D surfaces report it relative
        to the projection center.
        """
        r = self.renderer
        if r.is_3d:
            return PointerSample(
                r.pointer_x - r.width / 2, r.pointer_y - r.height / 2
            )
        sample = PointerSample(r.pointer_x, r.pointer_y)
        if self._coordinate_mode is CoordinateMode.RIGHT_HAND:
            return sample.flip(r.height)
        return sample

    def mouse(self) -> LogicalPoint:
        """The pointer position in the current logical coordinates."""
        return self.mapper.map_pointer(self.pointer_sample())

    @property
    def pointer_pressed(self) -> bool:
        return self.renderer.pointer_pressed

    def create_draggable(
        self,
        x: float,
        y: float,
        radius: float,
        color: Optional[ColorSpec] = None,
    ) -> Draggable:
        if color is None:
            color = self.highlight_color
        return self.drag_manager.create(x, y, radius, color)

    # --- Text ---

    def is_flipped(self) -> bool:
        return self.guard.is_flipped()

    def responsive_text(self, value, x: float, y: float):
        self.guard.responsive_text(value, x, y)

    def text(self, value, x: float, y: float):
        self.renderer.draw_text(value, x, y)

    def text_size(self, size: Optional[float] = None) -> float:
        if size is not None:
            self.renderer.text_size = size
        return self.renderer.text_size

    # --- Style and shapes ---

    def _color(self, args) -> ColorSpec:
        return args[0] if len(args) == 1 else args

    def fill(self, *args):
        self.renderer.set_fill(
            parse_color(self._color(args), self._color_mode)
        )

    def no_fill(self):
        self.renderer.set_fill(None)

    def stroke(self, *args):
        self.renderer.set_stroke(
            parse_color(self._color(args), self._color_mode)
        )

    def no_stroke(self):
        self.renderer.set_stroke(None)

    def stroke_weight(self, weight: float):
        self.renderer.set_stroke_weight(weight)

    def background(self, *args):
        self.renderer.background(
            parse_color(self._color(args), self._color_mode)
        )

    def line(self, x1: float, y1: float, x2: float, y2: float):
        self.renderer.line(x1, y1, x2, y2)

    def circle(self, x: float, y: float, diameter: float):
        self.renderer.circle(x, y, diameter)

    def rect(self, x: float, y: float, width: float, height: float):
        self.renderer.rect(x, y, width, height)

    def square(self, x: float, y: float, size: float):
        self.renderer.rect(x, y, size, size)

    def triangle(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        x3: float,
        y3: float,
    ):
        self.renderer.polygon(((x1, y1), (x2, y2), (x3, y3)))

    @property
    def width(self) -> float:
        return self.renderer.width

    @property
    def height(self) -> float:
        return self.renderer.height
