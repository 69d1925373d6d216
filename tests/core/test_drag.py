import pytest
from unittest.mock import MagicMock
from basiskit.core.drag import DragManager, DragState, Draggable
from basiskit.core.errors import InvalidArgumentError
from basiskit.core.mapper import CoordinateMapper, LogicalPoint
from basiskit.core.tracker import BasisMatrixTracker
from basiskit.render.recording import RecordingRenderer


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer(400, 400)


@pytest.fixture
def tracker(renderer) -> BasisMatrixTracker:
    return BasisMatrixTracker(renderer)


@pytest.fixture
def manager(tracker, renderer) -> DragManager:
    return DragManager(CoordinateMapper(tracker), renderer)


@pytest.fixture
def draggable(manager) -> Draggable:
    return manager.create(100, 100, 10)


def test_invalid_radius(manager):
    with pytest.raises(InvalidArgumentError):
        Draggable(manager, 0, 0, 0)
    with pytest.raises(InvalidArgumentError):
        manager.create(0, 0, -5)


def test_contains_is_strict(draggable):
    assert draggable.contains(LogicalPoint(105, 100))
    assert not draggable.contains(LogicalPoint(110, 100))


def test_hover(draggable, renderer):
    renderer.move_pointer(300, 300)
    assert draggable.update() is DragState.IDLE

    renderer.move_pointer(103, 104)
    assert draggable.update() is DragState.HOVERING

    renderer.move_pointer(300, 300)
    assert draggable.update() is DragState.IDLE


def test_full_drag_cycle(draggable, manager, renderer):
    started = MagicMock()
    ended = MagicMock()
    manager.drag_started.connect(started, weak=False)
    manager.drag_ended.connect(ended, weak=False)

    renderer.move_pointer(100, 100)
    renderer.press_pointer()
    assert draggable.update() is DragState.DRAGGING
    assert manager.captured is draggable
    started.assert_called_once_with(manager, draggable=draggable)

    renderer.move_pointer(150, 160)
    draggable.update()
    assert draggable.position == (150, 160)

    renderer.release_pointer()
    assert draggable.state is DragState.IDLE
    assert not manager.is_captured
    ended.assert_called_once_with(manager, draggable=draggable)

    # The circle stays where it was dropped
    renderer.move_pointer(300, 300)
    assert draggable.update() is DragState.IDLE
    assert draggable.position == (150, 160)


def test_drag_keeps_following_outside_radius(draggable, renderer):
    renderer.move_pointer(100, 100)
    renderer.press_pointer()
    draggable.update()

    # A fast move puts the pointer far outside the circle
    renderer.move_pointer(350, 20)
    assert draggable.update() is DragState.DRAGGING
    assert draggable.position == (350, 20)


def test_single_capture(manager, renderer):
    first = manager.create(100, 100, 10)
    second = manager.create(102, 100, 10)

    renderer.move_pointer(101, 100)
    renderer.press_pointer()
    assert first.update() is DragState.DRAGGING
    assert second.update() is DragState.HOVERING
    assert manager.captured is first

    renderer.move_pointer(200, 200)
    first.update()
    second.update()
    assert first.position == (200, 200)
    assert second.position == (102, 100)

    renderer.release_pointer()
    assert first.state is DragState.IDLE
    assert not manager.is_captured

    # Back to hover evaluation, from where the pointer is now
    assert first.update() is DragState.HOVERING
    assert second.update() is DragState.IDLE
    renderer.move_pointer(300, 300)
    assert first.update() is DragState.IDLE


def test_pressing_outside_does_not_capture(draggable, manager, renderer):
    renderer.move_pointer(300, 300)
    renderer.press_pointer()
    assert draggable.update() is DragState.IDLE
    assert not manager.is_captured

    # Sliding onto the circle with the button down picks it up
    renderer.move_pointer(100, 100)
    assert draggable.update() is DragState.DRAGGING


def test_any_release_clears_capture(manager, renderer):
    holder = manager.create(100, 100, 10)
    bystander = manager.create(300, 300, 10)

    renderer.move_pointer(100, 100)
    renderer.press_pointer()
    holder.update()
    bystander.update()
    assert manager.captured is holder

    renderer.release_pointer()
    assert not manager.is_captured
    assert holder.state is DragState.IDLE
    assert bystander.state is DragState.IDLE


def test_axis_lock(draggable, renderer):
    draggable.lock("y", 120)
    assert draggable.position == (100, 120)

    renderer.move_pointer(100, 120)
    renderer.press_pointer()
    draggable.update()
    renderer.move_pointer(180, 40)
    draggable.update()
    assert draggable.position == (180, 120)

    draggable.unlock("y")
    renderer.move_pointer(190, 50)
    draggable.update()
    assert draggable.position == (190, 50)


def test_invalid_axis(draggable):
    with pytest.raises(InvalidArgumentError):
        draggable.lock("z", 1)
    with pytest.raises(InvalidArgumentError):
        draggable.unlock("w")


def test_hit_test_under_transform(draggable, tracker, renderer):
    tracker.apply_translate(200, 200)
    tracker.apply_rotate(90)
    tracker.apply_scale(2)

    # Logical (100, 100) lands on device (0, 400)
    assert tracker.forward_transform((100, 100)) == pytest.approx((0, 400))
    renderer.move_pointer(0, 400)
    assert draggable.update() is DragState.HOVERING

    renderer.move_pointer(100, 100)
    assert draggable.update() is DragState.IDLE


def test_direct_release_stops_dragging(draggable, manager, renderer):
    renderer.move_pointer(100, 100)
    renderer.press_pointer()
    assert draggable.update() is DragState.DRAGGING

    manager.release()
    renderer.move_pointer(150, 150)
    assert draggable.update() is DragState.IDLE
    assert draggable.position == (100, 100)
    assert not manager.is_captured
