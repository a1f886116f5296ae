"""
Tests for the SVD and LU drivers: svd, singular_values, lu_factor, mldivide, inv,
rcond.
"""

import numpy as np
import pytest

from pydensela.core.compute.linalg import inv, lu_factor, mldivide, rcond, singular_values, svd
from pydensela.core.compute.linalg.lu import norm_flag
from pydensela.core.exceptions import DimensionError, NumericalWarning, SingularMatrixError, ValidationError


# ═══════════════════════════════════════════════════════════════════════
# SVD
# ═══════════════════════════════════════════════════════════════════════


class TestSVD:

    @pytest.mark.parametrize("shape", [(4, 4), (6, 3), (3, 6)])
    def test_reconstruction(self, rng, shape):
        A = rng.standard_normal(shape)
        result = svd(A, full=False)
        np.testing.assert_allclose(result.U @ np.diag(result.s) @ result.Vh, A, atol=1e-12)

    def test_full_shapes(self, rng):
        result = svd(rng.standard_normal((5, 2)))
        assert result.U.shape == (5, 5)
        assert result.s.shape == (2,)
        assert result.Vh.shape == (2, 2)

    def test_complex_singular_values_real(self, rng):
        A = rng.standard_normal((3, 3)) + 1j * rng.standard_normal((3, 3))
        s = singular_values(A)
        assert s.dtype == np.float64
        np.testing.assert_allclose(s, np.linalg.svd(A, compute_uv=False), rtol=1e-12)

    def test_descending(self, rng):
        s = singular_values(rng.standard_normal((5, 4)))
        assert np.all(np.diff(s) <= 0)

    def test_empty(self):
        assert singular_values(np.zeros((0, 3))).shape == (0,)


# ═══════════════════════════════════════════════════════════════════════
# LU, inverse and reciprocal condition
# ═══════════════════════════════════════════════════════════════════════


class TestLU:

    def test_factor_reconstructs(self, rng):
        A = rng.standard_normal((4, 4))
        result = lu_factor(A)
        L = np.tril(result.lu, -1) + np.eye(4)
        U = np.triu(result.lu)
        PA = A.copy()
        for i, p in enumerate(result.piv):
            PA[[i, p]] = PA[[p, i]]
        np.testing.assert_allclose(L @ U, PA, atol=1e-12)
        assert not result.singular

    def test_singular_flag(self):
        assert lu_factor(np.zeros((2, 2))).singular

    def test_rejects_rectangular(self):
        with pytest.raises(DimensionError):
            lu_factor(np.zeros((2, 3)))


class TestInv:

    def test_inverse(self, well_conditioned):
        expected = np.array([[5.0, 2.0, 1.0], [2.0, 4.0, 2.0], [1.0, 2.0, 5.0]]) / 8.0
        np.testing.assert_allclose(inv(well_conditioned), expected, atol=1e-14)

    def test_complex(self, rng):
        A = rng.standard_normal((3, 3)) + 1j * rng.standard_normal((3, 3))
        np.testing.assert_allclose(inv(A) @ A, np.eye(3), atol=1e-12)

    def test_exactly_singular(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            inv(np.array([[1.0, 2.0], [2.0, 4.0]]))
        assert exc_info.value.matrix_name == 'A'
        assert exc_info.value.info == 2

    def test_ill_conditioned_warns(self):
        n = 12
        hilbert = 1.0 / (np.arange(n)[:, None] + np.arange(n) + 1.0)
        with pytest.warns(NumericalWarning, match="Ill-conditioned"):
            inv(hilbert)

    def test_zero_pivot_is_singular(self, ill_conditioned):
        with pytest.raises(SingularMatrixError):
            inv(ill_conditioned)

    def test_layout(self, rng):
        A = np.asfortranarray(rng.standard_normal((3, 3)))
        assert inv(A).flags.f_contiguous


class TestMldivide:

    def test_vector_rhs(self, well_conditioned):
        b = np.array([1.0, 2.0, 3.0])
        x = mldivide(well_conditioned, b)
        assert x.shape == (3,)
        np.testing.assert_allclose(well_conditioned @ x, b, atol=1e-14)

    def test_matrix_rhs(self, rng):
        A = rng.standard_normal((4, 4))
        B = rng.standard_normal((4, 2))
        X = mldivide(A, B)
        assert X.shape == (4, 2)
        np.testing.assert_allclose(A @ X, B, atol=1e-12)

    def test_mixed_real_complex(self, well_conditioned):
        b = np.array([1.0j, 0.0, 1.0])
        x = mldivide(well_conditioned, b)
        assert x.dtype == np.complex128
        np.testing.assert_allclose(well_conditioned @ x, b, atol=1e-14)

    def test_layout_of_rhs(self, rng):
        A = rng.standard_normal((3, 3))
        B = np.asfortranarray(rng.standard_normal((3, 2)))
        assert mldivide(A, B).flags.f_contiguous
        assert mldivide(A, np.ascontiguousarray(B)).flags.c_contiguous

    def test_singular(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            mldivide(np.array([[1.0, 2.0], [2.0, 4.0]]), np.ones(2))
        assert exc_info.value.routine == 'dgesv'

    def test_row_mismatch(self, well_conditioned):
        with pytest.raises(DimensionError, match="rows"):
            mldivide(well_conditioned, np.ones(2))

    def test_rejects_rectangular(self):
        with pytest.raises(DimensionError):
            mldivide(np.ones((2, 3)), np.ones(2))


class TestRcond:

    def test_well_conditioned(self, well_conditioned):
        # ‖A‖₁ = 5, ‖A⁻¹‖₁ = 1, and the estimate is exact for this matrix
        assert rcond(well_conditioned) == pytest.approx(0.2, rel=1e-6)
        assert rcond(well_conditioned, np.inf) == pytest.approx(0.2, rel=1e-6)

    def test_singular_is_zero(self):
        assert rcond(np.zeros((3, 3))) == 0.0

    def test_rectangular(self, rng):
        A = rng.standard_normal((6, 3))
        rc = rcond(A)
        assert 0.0 < rc <= 1.0
        assert 0.0 < rcond(A.T) <= 1.0

    def test_empty_is_inf(self):
        assert rcond(np.zeros((0, 0))) == np.inf

    def test_norm_flags(self):
        assert norm_flag(1) == '1'
        assert norm_flag('O') == '1'
        assert norm_flag(np.inf) == 'I'
        with pytest.raises(ValidationError):
            norm_flag('fro')
