from __future__ import annotations
import math
from typing import Any, Optional, Sequence, Tuple
import numpy as np
from .errors import DegenerateTransformError, InvalidArgumentError


class BasisMatrix:
    """
    A 3x3 (2D) or 4x4 (3D) homogeneous transformation matrix.

    The matrix uses the row-vector convention: a point is transformed as
    ``[x, y, (z,) 1] @ m``. The static constructors build primitives in
    the column-vector convention renderers use internally; call
    `transposed()` on them before composing into a row-vector basis.
    Uses numpy for the underlying calculations.
    """

    def __init__(self, data: Any = None, size: int = 3):
        """
        Initializes a homogeneous matrix.

        Args:
            data: Can be another BasisMatrix, a square list/tuple, a square
                  numpy array, or None to create an identity matrix.
            size: The size of the identity matrix created when data is
                  None. Must be 3 or 4.
        """
        if data is None:
            if size not in (3, 4):
                raise InvalidArgumentError(
                    f"Matrix size must be 3 or 4, got {size}"
                )
            self.m: np.ndarray = np.identity(size, dtype=float)
        elif isinstance(data, BasisMatrix):
            self.m = data.m.copy()
        else:
            try:
                self.m = np.array(data, dtype=float)
            except (TypeError, ValueError) as e:
                raise InvalidArgumentError(
                    f"Could not create BasisMatrix from data: {e}"
                ) from e
            if self.m.shape not in ((3, 3), (4, 4)):
                raise InvalidArgumentError(
                    "Input data must be a 3x3 or 4x4 matrix, "
                    f"got shape {self.m.shape}"
                )

    def __matmul__(self, other: BasisMatrix) -> BasisMatrix:
        """
        Performs plain matrix multiplication: self @ other.

        Under the row-vector convention ``p @ (A @ B)`` applies A first,
        then B.
        """
        if not isinstance(other, BasisMatrix):
            return NotImplemented
        if self.size != other.size:
            raise InvalidArgumentError(
                f"Cannot multiply a {self.size}x{self.size} matrix with a "
                f"{other.size}x{other.size} matrix"
            )
        return BasisMatrix(np.dot(self.m, other.m))

    def __eq__(self, other: Any) -> bool:
        """
        Checks for equality between two matrices.

        Uses np.allclose for floating-point comparisons.
        """
        if not isinstance(other, BasisMatrix):
            return False
        if self.size != other.size:
            return False
        return np.allclose(self.m, other.m)

    def __repr__(self) -> str:
        return f"BasisMatrix({self.m.tolist()})"

    def __str__(self) -> str:
        return str(self.m)

    def __copy__(self) -> BasisMatrix:
        return BasisMatrix(self)

    def __deepcopy__(self, memo: dict) -> BasisMatrix:
        # self.m holds plain floats, a regular copy is sufficient.
        return BasisMatrix(self)

    def copy(self) -> BasisMatrix:
        return BasisMatrix(self)

    @property
    def size(self) -> int:
        return self.m.shape[0]

    @property
    def is_3d(self) -> bool:
        return self.size == 4

    @staticmethod
    def identity(size: int = 3) -> BasisMatrix:
        """Returns a new identity matrix of the given size."""
        return BasisMatrix(size=size)

    def is_identity(self, tolerance: float = 1e-9) -> bool:
        return np.allclose(self.m, np.identity(self.size), atol=tolerance)

    def transposed(self) -> BasisMatrix:
        return BasisMatrix(self.m.T)

    def get_translation(self) -> Tuple[float, ...]:
        """
        Extracts the translation component from the last row, which is
        where the row-vector convention keeps it.
        """
        return tuple(float(v) for v in self.m[-1, :-1])

    def get_y_scale(self) -> float:
        """
        Returns the entry controlling growth along y. A negative value
        means the y axis is flipped.
        """
        return float(self.m[1, 1])

    @staticmethod
    def translation(
        dx: float, dy: float, dz: float = 0.0, size: int = 3
    ) -> BasisMatrix:
        """Creates a column-convention translation matrix."""
        if size == 3:
            return BasisMatrix(
                [
                    [1, 0, dx],
                    [0, 1, dy],
                    [0, 0, 1],
                ]
            )
        return BasisMatrix(
            [
                [1, 0, 0, dx],
                [0, 1, 0, dy],
                [0, 0, 1, dz],
                [0, 0, 0, 1],
            ]
        )

    @staticmethod
    def scale(
        sx: float, sy: float, sz: float = 1.0, size: int = 3
    ) -> BasisMatrix:
        """Creates a scaling matrix around the origin."""
        if size == 3:
            return BasisMatrix(
                [
                    [sx, 0, 0],
                    [0, sy, 0],
                    [0, 0, 1],
                ]
            )
        return BasisMatrix(
            [
                [sx, 0, 0, 0],
                [0, sy, 0, 0],
                [0, 0, sz, 0],
                [0, 0, 0, 1],
            ]
        )

    @staticmethod
    def rotation(
        angle_rad: float,
        size: int = 3,
        axis: Optional[Sequence[float]] = None,
    ) -> BasisMatrix:
        """
        Creates a column-convention rotation matrix.

        Args:
            angle_rad: The rotation angle in radians.
            size: 3 for a rotation in the plane, 4 for a rotation in space.
            axis: The (x, y, z) rotation axis for 4x4 matrices. Defaults to
                  the z axis, which matches the planar rotation.
        """
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        if size == 3:
            return BasisMatrix(
                [
                    [c, -s, 0],
                    [s, c, 0],
                    [0, 0, 1],
                ]
            )

        ux, uy, uz = axis if axis is not None else (0.0, 0.0, 1.0)
        norm = math.sqrt(ux * ux + uy * uy + uz * uz)
        if norm == 0:
            raise InvalidArgumentError("Rotation axis must not be zero")
        ux, uy, uz = ux / norm, uy / norm, uz / norm

        # Rodrigues: R = cI + s[u]x + (1 - c) u u^T
        t = 1 - c
        return BasisMatrix(
            [
                [c + ux * ux * t, ux * uy * t - uz * s,
                 ux * uz * t + uy * s, 0],
                [uy * ux * t + uz * s, c + uy * uy * t,
                 uy * uz * t - ux * s, 0],
                [uz * ux * t - uy * s, uz * uy * t + ux * s,
                 c + uz * uz * t, 0],
                [0, 0, 0, 1],
            ]
        )

    def invert(self) -> BasisMatrix:
        """
        Computes the inverse of the matrix.

        Raises:
            DegenerateTransformError: if the matrix is singular, for
                example after a scale of zero.
        """
        det = np.linalg.det(self.m)
        if not np.isfinite(det) or det == 0:
            raise DegenerateTransformError(
                f"Matrix is not invertible (determinant {det})"
            )
        try:
            inverse = np.linalg.inv(self.m)
        except np.linalg.LinAlgError as e:
            raise DegenerateTransformError(str(e)) from e
        if not np.all(np.isfinite(inverse)):
            raise DegenerateTransformError(
                "Matrix inverse contains non-finite values"
            )
        return BasisMatrix(inverse)

    def transform_point(
        self, point: Sequence[float]
    ) -> Tuple[float, ...]:
        """
        Applies the full transformation to a point.

        Args:
            point: An (x, y) or (x, y, z) tuple. A missing z is taken as 0
                   on 4x4 matrices.

        Returns:
            The transformed point with as many components as the matrix
            has spatial axes.
        """
        dims = self.size - 1
        coords = list(point[:dims])
        if len(coords) < dims:
            coords.extend([0.0] * (dims - len(coords)))
        vec = np.array(coords + [1.0])
        res_vec = np.dot(vec, self.m)
        return tuple(float(v) for v in res_vec[:dims])

    def transform_vector(
        self, vector: Sequence[float]
    ) -> Tuple[float, ...]:
        """
        Applies the transformation to a vector, ignoring translation.
        Useful for transforming direction or delta values.
        """
        dims = self.size - 1
        coords = list(vector[:dims])
        if len(coords) < dims:
            coords.extend([0.0] * (dims - len(coords)))
        # Use 0 for the homogeneous coordinate to ignore translation
        vec = np.array(coords + [0.0])
        res_vec = np.dot(vec, self.m)
        return tuple(float(v) for v in res_vec[:dims])
