"""
Tests for the Cholesky and balancing kernels.
"""

import numpy as np
import pytest
import scipy.linalg as sla

from pydensela.core.adaptors import Hermitian, Symmetric
from pydensela.core.compute.linalg import balance, cholesky
from pydensela.core.exceptions import DimensionError, NotPositiveDefiniteError, ValidationError
from pydensela.operations import balance as op_balance, cholesky as op_cholesky


# ═══════════════════════════════════════════════════════════════════════
# Cholesky
# ═══════════════════════════════════════════════════════════════════════


class TestCholesky:

    def test_lower(self, well_conditioned):
        L = cholesky(well_conditioned)
        np.testing.assert_array_equal(np.triu(L, 1), 0.0)
        np.testing.assert_allclose(L @ L.T, well_conditioned, atol=1e-14)
        assert np.all(np.diag(L) > 0)

    def test_upper(self, well_conditioned):
        U = cholesky(well_conditioned, lower=False)
        np.testing.assert_array_equal(np.tril(U, -1), 0.0)
        np.testing.assert_allclose(U.T @ U, well_conditioned, atol=1e-14)

    def test_reads_one_triangle(self, well_conditioned):
        garbage = well_conditioned + np.triu(np.full((3, 3), 50.0), 1)
        np.testing.assert_allclose(cholesky(garbage), cholesky(well_conditioned))

    def test_complex_hermitian(self, hermitian_definite_pair):
        _, B = hermitian_definite_pair
        full = Hermitian(B, lower=False).to_dense()
        U = cholesky(Hermitian(B, lower=False))
        np.testing.assert_allclose(U.conj().T @ U, full, atol=1e-12)

    def test_adaptor_decides_triangle(self, well_conditioned):
        L = cholesky(Symmetric(np.tril(well_conditioned)), lower=False)
        np.testing.assert_allclose(L, np.linalg.cholesky(well_conditioned), atol=1e-14)

    def test_not_positive_definite(self):
        A = np.array([[1.0, 2.0], [2.0, 1.0]])
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            cholesky(A)
        assert exc_info.value.minor_order == 2
        assert exc_info.value.routine == 'dpotrf'

    def test_complex_symmetric_rejected(self, general_complex_4x4):
        with pytest.raises(ValidationError, match="Hermitian"):
            cholesky(Symmetric(general_complex_4x4))

    def test_layout(self, well_conditioned):
        assert cholesky(np.asfortranarray(well_conditioned)).flags.f_contiguous

    def test_rejects_rectangular(self):
        with pytest.raises(DimensionError):
            cholesky(np.ones((2, 3)))

    def test_exported_as_operation(self):
        assert op_cholesky is cholesky


# ═══════════════════════════════════════════════════════════════════════
# Balancing
# ═══════════════════════════════════════════════════════════════════════


class TestBalance:

    @pytest.fixture
    def badly_scaled(self):
        return np.array([
            [ 5.14, 0.91,  0.00, -32.80],
            [ 0.91, 0.20,  0.00,  34.50],
            [ 1.90, 0.80, -0.40,  -3.00],
            [-0.33, 0.35,  0.00,   0.66],
        ])

    def test_similarity(self, badly_scaled):
        result = balance(badly_scaled)
        T = result.T
        np.testing.assert_allclose(np.linalg.solve(T, badly_scaled @ T), result.balanced, atol=1e-12)

    def test_matches_reference(self, badly_scaled):
        result = balance(badly_scaled)
        B, T = sla.matrix_balance(badly_scaled)
        np.testing.assert_allclose(result.balanced, B, atol=1e-12)
        np.testing.assert_allclose(result.T, T, atol=1e-12)

    def test_isolated_eigenvalue_moved_first(self, badly_scaled):
        # column 2 holds only its diagonal, so -0.4 is isolated
        result = balance(badly_scaled)
        assert result.balanced[0, 0] == pytest.approx(-0.4)
        np.testing.assert_array_equal(result.balanced[1:, 0], 0.0)
        assert result.permutation[0] == 2
        assert result.scaling[0] == 1.0

    def test_eigenvalues_preserved(self, badly_scaled):
        w = np.linalg.eigvals(balance(badly_scaled).balanced)
        np.testing.assert_allclose(
            np.sort_complex(w), np.sort_complex(np.linalg.eigvals(badly_scaled)), atol=1e-10
        )

    def test_scaling_powers_of_two(self, badly_scaled):
        s = balance(badly_scaled, job='S').scaling
        np.testing.assert_array_equal(np.log2(s), np.round(np.log2(s)))

    def test_permute_only(self, badly_scaled):
        result = balance(badly_scaled, job='P')
        np.testing.assert_array_equal(result.scaling, 1.0)
        np.testing.assert_array_equal(np.sort(result.permutation), np.arange(4))

    def test_none_is_identity(self, badly_scaled):
        result = balance(badly_scaled, job='N')
        np.testing.assert_array_equal(result.balanced, badly_scaled)
        np.testing.assert_array_equal(result.T, np.eye(4))

    def test_complex(self, general_complex_4x4):
        result = balance(general_complex_4x4)
        assert result.balanced.dtype == np.complex128
        assert result.scaling.dtype == np.float64
        np.testing.assert_allclose(
            np.linalg.solve(result.T, general_complex_4x4 @ result.T), result.balanced, atol=1e-12
        )

    def test_layout(self, badly_scaled):
        result = balance(np.asfortranarray(badly_scaled))
        assert result.balanced.flags.f_contiguous

    def test_empty(self):
        result = balance(np.zeros((0, 0)))
        assert result.balanced.shape == (0, 0)
        assert result.permutation.shape == (0,)

    def test_bad_job(self, badly_scaled):
        with pytest.raises(ValidationError, match="job"):
            balance(badly_scaled, job='X')

    def test_exported_as_operation(self):
        assert op_balance is balance
