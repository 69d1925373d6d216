from .stack import TransformStack
from .tracker import BasisMatrixTracker


class OrientationGuard:
    """Keeps text upright no matter how the y axis is oriented."""

    def __init__(self, tracker: BasisMatrixTracker, stack: TransformStack):
        self.tracker = tracker
        self.stack = stack

    def is_flipped(self) -> bool:
        return self.tracker.current_matrix().get_y_scale() < 0

    def responsive_text(self, value, x: float, y: float) -> None:
        """
        Draws text at the logical position (x, y). When the y axis is
        flipped, the glyphs are counter-flipped locally so they are not
        drawn upside down.
        """
        if not self.is_flipped():
            self.tracker.renderer.draw_text(value, x, y)
            return

        self.stack.push()
        try:
            self.tracker.apply_scale(1, -1)
            self.tracker.renderer.draw_text(value, x, -y)
        finally:
            self.stack.pop()
