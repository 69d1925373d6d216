from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, List
from .matrix import BasisMatrix
from .modes import ColorMode
from .tracker import BasisMatrixTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyleState:
    """The style fields restored together with the basis."""

    color_mode: ColorMode = ColorMode.RGB


@dataclass(frozen=True)
class StackFrame:
    basis: BasisMatrix
    style: StyleState


class TransformStack:
    """
    Saves and restores the tracked basis together with the renderer's
    native state, so both move in lockstep.

    Nesting is not validated: unbalanced pushes inside a frame are bounded
    by the per-frame reset.
    """

    def __init__(
        self,
        tracker: BasisMatrixTracker,
        get_style: Callable[[], StyleState],
        set_style: Callable[[StyleState], None],
    ):
        self.tracker = tracker
        self._get_style = get_style
        self._set_style = set_style
        self._frames: List[StackFrame] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self) -> None:
        frame = StackFrame(
            self.tracker.current_matrix().copy(), self._get_style()
        )
        self._frames.append(frame)
        self.tracker.renderer.native_push()

    def pop(self) -> None:
        if not self._frames:
            logger.warning("pop() was called without matching push()")
            return
        frame = self._frames.pop()
        self.tracker.restore(frame.basis)
        self._set_style(frame.style)
        self.tracker.renderer.native_pop()

    def clear(self) -> None:
        """Drops all saved frames without restoring anything."""
        if self._frames:
            logger.debug(f"Discarding {len(self._frames)} unpopped frames")
        self._frames.clear()
