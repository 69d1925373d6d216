from __future__ import annotations
import math
import logging
from typing import Optional, Sequence, Tuple
import cairo
from ..core.errors import InvalidArgumentError
from ..core.modes import Dimensionality
from ..shared.colors import ColorRGBA
from .renderer import Renderer

logger = logging.getLogger(__name__)


class CairoRenderer(Renderer):
    """
    A 2D renderer that draws onto a Cairo image surface.

    Cairo keeps its own current transformation matrix, which is exactly
    the opaque renderer transform the tracked basis has to mirror.
    """

    def __init__(
        self,
        width: int,
        height: int,
        surface: Optional[cairo.ImageSurface] = None,
    ):
        super().__init__(width, height)
        if surface is None:
            surface = cairo.ImageSurface(
                cairo.FORMAT_ARGB32, int(width), int(height)
            )
        self.surface: cairo.ImageSurface = surface
        self.ctx: cairo.Context = cairo.Context(surface)

    @property
    def dimensionality(self) -> Dimensionality:
        return Dimensionality.TWO_D

    def get_matrix(self) -> cairo.Matrix:
        return self.ctx.get_matrix()

    def write_to_png(self, path) -> None:
        self.surface.flush()
        self.surface.write_to_png(str(path))

    # --- Transforms ---

    def translate(self, dx: float, dy: float, dz: float = 0.0) -> None:
        if dz:
            raise InvalidArgumentError("Cairo surfaces have no z axis")
        self.ctx.translate(dx, dy)

    def rotate(
        self, angle: float, axis: Optional[Sequence[float]] = None
    ) -> None:
        if axis is not None:
            raise InvalidArgumentError("Cairo surfaces rotate in-plane only")
        self.ctx.rotate(angle)

    def scale(self, sx: float, sy: float, sz: float = 1.0) -> None:
        self.ctx.scale(sx, sy)

    # --- Native state ---

    def _save_state(self) -> None:
        self.ctx.save()

    def _restore_state(self) -> None:
        self.ctx.restore()

    def reset_native_state(self) -> None:
        for _ in range(self.native_depth):
            self.ctx.restore()
        super().reset_native_state()
        self.ctx.identity_matrix()

    # --- Primitives ---

    def _fill_and_stroke(self) -> None:
        fill, stroke = self.style.fill, self.style.stroke
        if fill is not None:
            self.ctx.set_source_rgba(*fill)
            if stroke is not None:
                self.ctx.fill_preserve()
            else:
                self.ctx.fill()
        if stroke is not None:
            self._stroke_path()
        self.ctx.new_path()

    def _stroke_path(self) -> None:
        stroke = self.style.stroke
        if stroke is None:
            self.ctx.new_path()
            return
        self.ctx.set_source_rgba(*stroke)
        self.ctx.set_line_width(self.style.stroke_weight)
        self.ctx.stroke()

    def draw_text(self, value, x: float, y: float) -> None:
        if self.style.fill is None:
            return
        self.ctx.set_font_size(self.style.text_size)
        self.ctx.set_source_rgba(*self.style.fill)
        self.ctx.move_to(x, y)
        self.ctx.show_text(str(value))
        self.ctx.new_path()

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.ctx.move_to(x1, y1)
        self.ctx.line_to(x2, y2)
        self._stroke_path()

    def circle(self, x: float, y: float, diameter: float) -> None:
        self.ctx.new_sub_path()
        self.ctx.arc(x, y, diameter / 2, 0, 2 * math.pi)
        self._fill_and_stroke()

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self.ctx.rectangle(x, y, width, height)
        self._fill_and_stroke()

    def polygon(self, points: Sequence[Tuple[float, float]]) -> None:
        if len(points) < 2:
            return
        first, *rest = points
        self.ctx.move_to(*first)
        for point in rest:
            self.ctx.line_to(*point)
        self.ctx.close_path()
        self._fill_and_stroke()

    def background(self, color: ColorRGBA) -> None:
        # Paint in device space so the current transform has no effect.
        self.ctx.save()
        self.ctx.identity_matrix()
        self.ctx.set_source_rgba(*color)
        self.ctx.paint()
        self.ctx.restore()
