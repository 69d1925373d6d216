import pytest
import cairo
import numpy as np
from typing import Tuple
from basiskit.core.errors import InvalidArgumentError
from basiskit.core.modes import CoordinateMode
from basiskit.render.cairorenderer import CairoRenderer
from basiskit.sketch import Sketch

WIDTH, HEIGHT = 100, 100
RED = (255, 0, 0, 255)
BLACK = (0, 0, 0, 255)


@pytest.fixture
def renderer() -> CairoRenderer:
    return CairoRenderer(WIDTH, HEIGHT)


@pytest.fixture
def sketch(renderer) -> Sketch:
    sketch = Sketch(renderer)
    sketch.init()
    return sketch


def get_pixel_data(surface: cairo.ImageSurface) -> np.ndarray:
    """Extracts pixel data from a Cairo surface into a NumPy array."""
    surface.flush()
    buf = surface.get_data()
    stride = surface.get_stride()
    data = np.ndarray(
        shape=(HEIGHT, stride // 4, 4), dtype=np.uint8, buffer=buf
    )
    # ARGB32 is BGRA in memory order on little-endian systems.
    return data[:, :WIDTH, [2, 1, 0, 3]]


def assert_pixel_color(
    data: np.ndarray, x: int, y: int, expected: Tuple, tolerance=10
):
    actual = tuple(int(c) for c in data[y, x])
    for a, e in zip(actual, expected):
        assert abs(a - e) <= tolerance, (
            f"Pixel at ({x}, {y}) is {actual}, expected {expected}"
        )


def assert_matches_basis(sketch: Sketch, renderer: CairoRenderer):
    m = renderer.get_matrix()
    b = sketch.basis().m
    assert (m.xx, m.yx, m.xy, m.yy, m.x0, m.y0) == pytest.approx(
        (b[0, 0], b[0, 1], b[1, 0], b[1, 1], b[2, 0], b[2, 1])
    )


def test_basis_tracks_cairo_matrix(sketch, renderer):
    sketch.pre_frame()
    assert_matches_basis(sketch, renderer)

    sketch.translate(20, 30)
    sketch.rotate(30)
    sketch.scale(2, 0.5)
    sketch.push()
    sketch.rotate(-75)
    sketch.translate(3, -4)
    assert_matches_basis(sketch, renderer)

    sketch.pop()
    assert_matches_basis(sketch, renderer)


@pytest.mark.parametrize("point", [(0, 0), (10, 5), (-7.5, 42)])
def test_forward_transform_matches_cairo(sketch, renderer, point):
    sketch.pre_frame()
    sketch.translate(50, 50)
    sketch.rotate(45)
    sketch.scale(1.5)
    device = renderer.ctx.user_to_device(*point)
    assert sketch.tracker.forward_transform(point) == pytest.approx(device)


def test_post_frame_resets_cairo_state(sketch, renderer):
    sketch.pre_frame()
    sketch.translate(10, 10)
    sketch.push()
    sketch.push()
    sketch.rotate(10)
    sketch.post_frame()

    assert renderer.native_depth == 0
    m = renderer.get_matrix()
    assert (m.xx, m.yx, m.xy, m.yy, m.x0, m.y0) == (1, 0, 0, 1, 0, 0)
    assert sketch.basis().is_identity()


def test_right_hand_draws_from_bottom_left(sketch, renderer):
    def draw(s: Sketch):
        s.background(0)
        s.fill("red")
        s.no_stroke()
        s.rect(0, 0, 20, 20)

    sketch.run_frame(draw)

    data = get_pixel_data(renderer.surface)
    assert_pixel_color(data, 10, 90, RED)
    assert_pixel_color(data, 10, 10, BLACK)


def test_left_hand_draws_from_top_left(renderer):
    sketch = Sketch(renderer)
    sketch.coordinate_mode = CoordinateMode.LEFT_HAND
    sketch.init()

    def draw(s: Sketch):
        s.background(0)
        s.fill(255, 0, 0)
        s.no_stroke()
        s.rect(0, 0, 20, 20)

    sketch.run_frame(draw)

    data = get_pixel_data(renderer.surface)
    assert_pixel_color(data, 10, 10, RED)
    assert_pixel_color(data, 10, 90, BLACK)


def test_background_ignores_transform(sketch, renderer):
    sketch.pre_frame()
    sketch.translate(80, 80)
    sketch.scale(0.1)
    sketch.background("red")
    data = get_pixel_data(renderer.surface)
    assert_pixel_color(data, 0, 0, RED)
    assert_pixel_color(data, 99, 99, RED)


def test_rejects_3d_transforms(renderer):
    with pytest.raises(InvalidArgumentError):
        renderer.translate(1, 2, 3)
    with pytest.raises(InvalidArgumentError):
        renderer.rotate(1.0, (1, 0, 0))


def test_write_to_png(sketch, renderer, tmp_path):
    sketch.run_frame(lambda s: s.circle(50, 50, 20))
    path = tmp_path / "out.png"
    renderer.write_to_png(path)
    assert path.exists()
    assert path.stat().st_size > 0
