import copy
import math
import pytest
import numpy as np
from basiskit.core.errors import DegenerateTransformError, InvalidArgumentError
from basiskit.core.matrix import BasisMatrix


class TestBasisMatrix:
    def test_initialization(self):
        # Default initialization should be a 3x3 identity
        m1 = BasisMatrix()
        assert m1 == BasisMatrix(np.identity(3))
        assert m1.size == 3
        assert not m1.is_3d

        m4 = BasisMatrix(size=4)
        assert m4 == BasisMatrix(np.identity(4))
        assert m4.is_3d

        # Initialization from list
        list_data = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
        m2 = BasisMatrix(list_data)
        assert np.array_equal(m2.m, np.array(list_data))

        # Initialization from another BasisMatrix
        m3 = BasisMatrix(m2)
        assert m3 == m2
        assert m3 is not m2  # Should be a new instance
        assert m3.m is not m2.m  # Internal array should be a copy

    def test_invalid_initialization(self):
        with pytest.raises(InvalidArgumentError):
            BasisMatrix([[1, 2], [3, 4]])  # Wrong shape
        with pytest.raises(ValueError):
            BasisMatrix(size=5)
        with pytest.raises(InvalidArgumentError):
            BasisMatrix("not a matrix")

    def test_equality(self):
        m1 = BasisMatrix.translation(10, 20)
        m2 = BasisMatrix.translation(10, 20)
        m3 = BasisMatrix.translation(10, 21)
        assert m1 == m2
        assert m1 != m3
        assert m1 != "not a matrix"
        assert BasisMatrix.identity(3) != BasisMatrix.identity(4)

    def test_copying(self):
        m1 = BasisMatrix.rotation(math.pi / 4)

        m2 = copy.copy(m1)
        assert m1 == m2
        assert m1.m is not m2.m

        m3 = copy.deepcopy(m1)
        assert m1 == m3
        assert m1.m is not m3.m

    def test_identity(self):
        ident = BasisMatrix.identity()
        p = (123, 456)
        assert ident.transform_point(p) == pytest.approx(p)
        assert ident.is_identity()
        assert not BasisMatrix.translation(1e-3, 0).is_identity()

    def test_translation_uses_row_vectors_once_transposed(self):
        m = BasisMatrix.translation(50, -30).transposed()
        assert m.transform_point((0, 0)) == pytest.approx((50, -30))
        assert m.transform_point((10, 10)) == pytest.approx((60, -20))
        assert m.get_translation() == pytest.approx((50, -30))

    def test_translation_3d(self):
        m = BasisMatrix.translation(1, 2, 3, size=4).transposed()
        assert m.transform_point((1, 1, 1)) == pytest.approx((2, 3, 4))
        # A missing z is taken as 0
        assert m.transform_point((0, 0)) == pytest.approx((1, 2, 3))
        assert m.get_translation() == pytest.approx((1, 2, 3))

    def test_scale(self):
        m = BasisMatrix.scale(2, 3)
        assert m.transform_point((10, 10)) == pytest.approx((20, 30))
        m3d = BasisMatrix.scale(2, 3, 4, size=4)
        assert m3d.transform_point((1, 1, 1)) == pytest.approx((2, 3, 4))
        assert BasisMatrix.scale(1, -1).get_y_scale() == -1

    def test_rotation(self):
        m90 = BasisMatrix.rotation(math.pi / 2).transposed()
        assert m90.transform_point((10, 0)) == pytest.approx((0, 10))

        m180 = BasisMatrix.rotation(math.pi).transposed()
        assert m180.transform_point((10, 0)) == pytest.approx((-10, 0))

    def test_rotation_3d(self):
        # The default axis is z, which matches the planar rotation
        rz = BasisMatrix.rotation(math.pi / 2, size=4).transposed()
        assert rz.transform_point((10, 0, 0)) == pytest.approx((0, 10, 0))

        rx = BasisMatrix.rotation(
            math.pi / 2, size=4, axis=(1, 0, 0)
        ).transposed()
        assert rx.transform_point((0, 10, 0)) == pytest.approx((0, 0, 10))

        # The axis does not need to be normalized
        ry = BasisMatrix.rotation(
            math.pi / 2, size=4, axis=(0, 5, 0)
        ).transposed()
        assert ry.transform_point((0, 0, 10)) == pytest.approx((10, 0, 0))

    def test_rotation_zero_axis(self):
        with pytest.raises(InvalidArgumentError):
            BasisMatrix.rotation(1.0, size=4, axis=(0, 0, 0))

    def test_matrix_multiplication(self):
        # Row vectors: p @ (R @ T) rotates first, then translates
        T = BasisMatrix.translation(100, 0).transposed()
        R = BasisMatrix.rotation(math.pi / 2).transposed()

        p = (10, 20)
        p_final_separate = T.transform_point(R.transform_point(p))
        p_final_combined = (R @ T).transform_point(p)

        assert p_final_combined == pytest.approx(p_final_separate)
        assert p_final_combined == pytest.approx((80, 10))

    def test_multiplication_size_mismatch(self):
        with pytest.raises(InvalidArgumentError):
            BasisMatrix.identity(3) @ BasisMatrix.identity(4)

    def test_inversion(self):
        T = BasisMatrix.translation(55, -21).transposed()
        R = BasisMatrix.rotation(math.radians(33)).transposed()
        S = BasisMatrix.scale(2, 0.5)

        M = S @ R @ T
        M_inv = M.invert()

        assert M_inv @ M == BasisMatrix.identity()

        p_start = (12, 34)
        p_restored = M_inv.transform_point(M.transform_point(p_start))
        assert p_restored == pytest.approx(p_start)

    def test_inversion_singular_matrix(self):
        # A matrix with 0 scale is not invertible
        M_singular = BasisMatrix.scale(1, 0)
        with pytest.raises(DegenerateTransformError):
            M_singular.invert()
        with pytest.raises(ArithmeticError):
            BasisMatrix.scale(0, 1, 1, size=4).invert()

    def test_transform_vector_ignores_translation(self):
        m = (
            BasisMatrix.scale(2, 2)
            @ BasisMatrix.translation(100, 100).transposed()
        )
        assert m.transform_vector((1, 1)) == pytest.approx((2, 2))
        assert m.transform_point((1, 1)) == pytest.approx((102, 102))
