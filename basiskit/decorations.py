"""
Decorative helpers drawn through a Sketch.

None of these know about renderer internals: they only use the public
transform, text and shape API, so they work in either coordinate mode
and under any user transform.
"""
from __future__ import annotations
import math
from typing import TYPE_CHECKING, Optional, Sequence, Tuple
from .core.errors import InvalidArgumentError

if TYPE_CHECKING:
    from .sketch import Sketch

ARROW_SIZE = 7.0
DIE_PIP_SIZE = 15.0

# Pip offsets in units of the pip size, per roll.
DIE_PIPS = {
    1: ((0, 0),),
    2: ((1, -1), (-1, 1)),
    3: ((0, 0), (1, -1), (-1, 1)),
    4: ((1, -1), (-1, 1), (1, 1), (-1, -1)),
    5: ((0, 0), (1, -1), (-1, 1), (1, 1), (-1, -1)),
    6: ((1, -1.2), (-1, 1.2), (1, 1.2), (-1, -1.2), (-1, 0), (1, 0)),
}


def linmap(
    value: float,
    start1: float,
    stop1: float,
    start2: float,
    stop2: float,
    within_bounds: bool = False,
) -> float:
    """
    Maps a number from one interval to another. With within_bounds the
    result is clamped to the target interval.
    """
    if stop1 == start1:
        raise InvalidArgumentError("Source interval must not be empty")
    result = start2 + (value - start1) * (stop2 - start2) / (stop1 - start1)
    if not within_bounds:
        return result
    low, high = min(start2, stop2), max(start2, stop2)
    return min(max(result, low), high)


def _format_label(value: float) -> str:
    rounded = round(value, 6)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:g}"


def arrow(
    sketch: Sketch,
    tail_x: float,
    tail_y: float,
    head_x: float,
    head_y: float,
    size: float = ARROW_SIZE,
) -> None:
    """Draws a line from tail to head with a triangular arrow head."""
    x = head_x - tail_x
    y = head_y - tail_y
    sketch.push()
    try:
        sketch.translate(tail_x, tail_y)
        sketch.line(0, 0, x, y)
        sketch.rotate(sketch.angle_mode.from_radians(math.atan2(y, x)))
        sketch.translate(math.hypot(x, y) - size, 0)
        sketch.triangle(0, size / 2, 0, -size / 2, size, 0)
    finally:
        sketch.pop()


def draw_vector(
    sketch: Sketch,
    origin: Sequence[float],
    vector: Sequence[float],
) -> None:
    """
    Draws `vector` starting at `origin`. The head grows with the square
    root of the vector's magnitude.
    """
    ox, oy = origin[0], origin[1]
    vx, vy = vector[0], vector[1]
    sketch.line(ox, oy, ox + vx, oy + vy)
    magnitude = math.hypot(vx, vy)
    if magnitude == 0:
        return
    sketch.push()
    try:
        sketch.no_stroke()
        sketch.translate(ox, oy)
        sketch.rotate(sketch.angle_mode.from_radians(math.atan2(vy, vx)))
        sketch.translate(magnitude, 0)
        sketch.scale(math.sqrt(magnitude) / 10)
        sketch.triangle(0, 10, 0, -10, 10, 0)
    finally:
        sketch.pop()


def die(
    sketch: Sketch,
    roll: int,
    x: float,
    y: float,
    primary="white",
    secondary="black",
) -> None:
    """Draws a die face centered on (x, y) showing `roll` pips."""
    if roll not in DIE_PIPS:
        raise InvalidArgumentError("roll must be an integer from 1 to 6")
    s = DIE_PIP_SIZE
    sketch.push()
    try:
        sketch.fill(primary)
        sketch.no_stroke()
        sketch.square(x - 2 * s, y - 2 * s, 4 * s)
        sketch.fill(secondary)
        for dx, dy in DIE_PIPS[roll]:
            sketch.circle(x + dx * s, y + dy * s, s)
    finally:
        sketch.pop()


def draw_tick_axes(
    sketch: Sketch,
    scale_factor: float = 1.0,
    spacing: float = 50.0,
    axis_color="rgb(20,45,217)",
    grid_color="rgba(255,255,255,0.6)",
    label_color="white",
    label_size: float = 12.0,
    axis_thickness: float = 5.0,
    tick_thickness: float = 3.0,
    grid_thickness: float = 0.25,
) -> None:
    """
    Draws x and y axes through the logical origin with tick marks, labels
    and grid lines. `scale_factor` is the scale applied to the coordinate
    system beforehand; sizes are divided by it so they look the same on
    screen.
    """
    if scale_factor == 0:
        raise InvalidArgumentError("scale_factor must not be zero")
    if spacing <= 0:
        raise InvalidArgumentError("spacing must be positive")

    k = scale_factor
    width, height = sketch.width, sketch.height
    step = spacing / k
    tick = 5 / k

    sketch.push()
    try:
        size = sketch.text_size(label_size / k)

        count = int(math.ceil(height / k / step))
        for i in range(count):
            y = i * step
            sketch.stroke(axis_color)
            sketch.stroke_weight(tick_thickness / k)
            sketch.line(tick, y, -tick, y)
            sketch.line(tick, -y, -tick, -y)

            if i != 0:
                sketch.fill(label_color)
                sketch.no_stroke()
                sketch.responsive_text(_format_label(y), 2 * size, y)
                sketch.responsive_text(_format_label(-y), 2 * size, -y)

            sketch.stroke_weight(grid_thickness / k)
            sketch.stroke(grid_color)
            sketch.line(-width / k, y, width / k, y)
            sketch.line(-width / k, -y, width / k, -y)

        count = int(math.ceil(width / k / step))
        for i in range(count):
            x = i * step
            sketch.stroke(axis_color)
            sketch.stroke_weight(tick_thickness / k)
            sketch.line(x, tick, x, -tick)
            sketch.line(-x, tick, -x, -tick)

            if i != 0:
                sketch.fill(label_color)
                sketch.no_stroke()
                sketch.responsive_text(_format_label(x), x, 1.5 * size)
                sketch.responsive_text(_format_label(-x), -x, 1.5 * size)

            sketch.stroke_weight(grid_thickness / k)
            sketch.stroke(grid_color)
            sketch.line(x, -height, x, height)
            sketch.line(-x, -height, -x, height)

        sketch.stroke(axis_color)
        sketch.stroke_weight(axis_thickness / k)
        sketch.line(-width / k, 0, width / k, 0)
        sketch.line(0, height / k, 0, -height / k)

        sketch.fill(label_color)
        sketch.no_stroke()
        sketch.responsive_text("0", size, size)
    finally:
        sketch.pop()


def draw_bar_graph(
    sketch: Sketch,
    data: Sequence[float],
    labels: Optional[Sequence] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    bar_scale: float = 5.0,
) -> None:
    """
    Draws a bar graph with its origin at the current logical origin.
    Without an explicit width or height, the graph fills the surface from
    the origin to 16 units short of the edges.
    """
    if not data:
        raise InvalidArgumentError("A bar graph needs at least one value")
    if labels is not None and len(labels) != len(data):
        raise InvalidArgumentError("labels and data must have equal length")

    origin: Tuple[float, ...] = sketch.basis().get_translation()
    graph_width = width if width else sketch.width - origin[0] - 16
    graph_height = height if height else origin[1] - 16
    bar_width = (graph_width - 2) / (2 * len(data))

    sketch.push()
    try:
        sketch.push()
        sketch.no_fill()
        sketch.line(0, 0, graph_width, 0)
        sketch.triangle(
            graph_width, 10, graph_width, -10, graph_width + 15, 0
        )
        sketch.line(0, 0, 0, graph_height)
        sketch.triangle(
            -10, graph_height, 10, graph_height, 0, graph_height + 15
        )
        sketch.pop()

        sketch.no_stroke()
        size = sketch.text_size()
        for i in range(len(data)):
            label = labels[i] if labels is not None else i + 1
            x = bar_width + 2 * i * bar_width
            sketch.responsive_text(label, x, -size)

        for i, value in enumerate(data):
            x = 2 * i * bar_width + 1
            sketch.rect(x, 1, 2 * bar_width, value * bar_scale)
    finally:
        sketch.pop()
