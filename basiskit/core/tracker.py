from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Optional, Sequence, Tuple
from .errors import DegenerateScaleError, InvalidArgumentError
from .factors import ScaleFactors
from .matrix import BasisMatrix
from .modes import AngleMode, CoordinateMode, Dimensionality

if TYPE_CHECKING:
    from ..render.renderer import Renderer

logger = logging.getLogger(__name__)

X_AXIS = (1.0, 0.0, 0.0)
Y_AXIS = (0.0, 1.0, 0.0)
Z_AXIS = (0.0, 0.0, 1.0)


class BasisMatrixTracker:
    """
    Tracks the composition of every transform sent to a renderer.

    The renderer keeps its transform private, so the tracker maintains an
    independent copy in the row-vector convention. Each primitive is built
    the way the renderer builds it (column vectors), transposed, and
    premultiplied onto the basis:

        basis = transpose(primitive) @ basis

    With row vectors, ``p @ basis`` then gives the same device position
    the renderer computes for p, which is what makes inversion for pointer
    mapping work. Every compose operation forwards its unchanged
    parameters to the renderer so both transforms stay in lockstep.
    """

    def __init__(
        self,
        renderer: Renderer,
        angle_mode: AngleMode = AngleMode.DEGREES,
    ):
        self.renderer = renderer
        self.dimensionality: Dimensionality = renderer.dimensionality
        self.angle_mode: AngleMode = angle_mode
        self._basis: BasisMatrix = BasisMatrix.identity(self.size)

    @property
    def size(self) -> int:
        return self.dimensionality.matrix_size

    @property
    def is_3d(self) -> bool:
        return self.dimensionality is Dimensionality.THREE_D

    def _compose(self, primitive: BasisMatrix) -> None:
        self._basis = primitive.transposed() @ self._basis

    def current_matrix(self) -> BasisMatrix:
        """Returns the live basis matrix. Callers must not mutate it."""
        return self._basis

    def restore(self, matrix: BasisMatrix) -> None:
        """Replaces the basis with a previously taken snapshot."""
        if matrix.size != self.size:
            raise InvalidArgumentError(
                f"Cannot restore a {matrix.size}x{matrix.size} basis on a "
                f"{self.dimensionality.name} surface"
            )
        self._basis = matrix.copy()

    def reset_to_identity(self) -> None:
        self._basis = BasisMatrix.identity(self.size)

    def apply_translate(
        self, dx: float, dy: float, dz: Optional[float] = None
    ) -> None:
        """
        Composes a translation.

        Args:
            dx: Offset along x.
            dy: Offset along y.
            dz: Offset along z. Only legal on 3D surfaces; omitted means 0.
        """
        if not self.is_3d:
            if dz:
                raise InvalidArgumentError(
                    "z translation is not available on a 2D surface"
                )
            self._compose(BasisMatrix.translation(dx, dy))
            self.renderer.translate(dx, dy)
            return

        dz = 0.0 if dz is None else dz
        self._compose(BasisMatrix.translation(dx, dy, dz, size=4))
        self.renderer.translate(dx, dy, dz)

    def apply_rotate(
        self, angle: float, axis: Optional[Sequence[float]] = None
    ) -> None:
        """
        Composes a rotation.

        Args:
            angle: The angle in the active angle mode.
            axis: The (x, y, z) rotation axis, 3D only. Defaults to the z
                  axis, the in-plane rotation.
        """
        if not self.is_3d and axis is not None:
            raise InvalidArgumentError(
                "A rotation axis is only available on a 3D surface"
            )
        angle_rad = self.angle_mode.to_radians(angle)
        self._compose(BasisMatrix.rotation(angle_rad, self.size, axis))
        self.renderer.rotate(angle_rad, axis)

    def apply_rotate_x(self, angle: float) -> None:
        self._require_3d("rotate_x")
        self.apply_rotate(angle, X_AXIS)

    def apply_rotate_y(self, angle: float) -> None:
        self._require_3d("rotate_y")
        self.apply_rotate(angle, Y_AXIS)

    def apply_rotate_z(self, angle: float) -> None:
        self.apply_rotate(angle, Z_AXIS if self.is_3d else None)

    def _require_3d(self, operation: str) -> None:
        if not self.is_3d:
            raise InvalidArgumentError(
                f"{operation}() is only available on a 3D surface"
            )

    def apply_scale(
        self, x: float, y: Optional[float] = None, z: Optional[float] = None
    ) -> None:
        """
        Composes a scale.

        Args:
            x: Factor along x. Used for every axis when y is omitted.
            y: Factor along y.
            z: Factor along z. Omitted means no scaling along z.
        """
        if y is None:
            factors = ScaleFactors.uniform(x)
        else:
            factors = ScaleFactors.per_axis(x, y, 1.0 if z is None else z)
        self.apply_scale_factors(factors)

    def apply_scale_factors(self, factors: ScaleFactors) -> None:
        if factors.has_zero():
            raise DegenerateScaleError(
                f"Scale factors must be non-zero, got "
                f"({factors.x}, {factors.y}, {factors.z})"
            )
        self._compose(
            BasisMatrix.scale(factors.x, factors.y, factors.z, self.size)
        )
        if self.is_3d:
            self.renderer.scale(factors.x, factors.y, factors.z)
        else:
            self.renderer.scale(factors.x, factors.y)

    def apply_ambient_coordinate_flip(
        self, mode: CoordinateMode, height: float
    ) -> None:
        """
        Moves the logical origin for the given coordinate mode.

        For RIGHT_HAND the y axis is flipped. On 2D surfaces the origin is
        also moved to the bottom edge; 3D projections are already centered,
        so they only get the flip.
        """
        if mode is not CoordinateMode.RIGHT_HAND:
            return
        self.apply_scale(1, -1)
        if not self.is_3d:
            self.apply_translate(0, -height)

    def forward_transform(
        self, point: Sequence[float]
    ) -> Tuple[float, ...]:
        """Maps a logical point to device coordinates."""
        return self._basis.transform_point(point)
