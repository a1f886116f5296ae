"""
Tests for the reduction family: all, any, which, hold, max, min, sum,
cumsum and dot.

Validates:
    - Axis semantics (1/major per column, 2/minor per row, leading by layout)
    - Axis duality: a reduction along axis 1 of A equals axis 2 of Aᵀ
    - Empty containers reduce to the operator identity
    - Complex ordering and NaN propagation in max/min
"""

import numpy as np
import pytest

from pydensela import elementwise as ew
from pydensela.core.exceptions import DimensionError, ValidationError
from pydensela.core.tags import Axis


@pytest.fixture
def M():
    return np.array([
        [3.0, -1.0, 4.0],
        [1.0, 5.0, -9.0],
    ])


# ═══════════════════════════════════════════════════════════════════════
# Axis semantics
# ═══════════════════════════════════════════════════════════════════════


class TestAxis:

    def test_axis_one_is_per_column(self, M):
        np.testing.assert_array_equal(ew.sum(M, 1), [4.0, 4.0, -5.0])
        np.testing.assert_array_equal(ew.sum(M, Axis.MAJOR), [4.0, 4.0, -5.0])

    def test_axis_two_is_per_row(self, M):
        np.testing.assert_array_equal(ew.sum(M, 2), [6.0, -3.0])
        np.testing.assert_array_equal(ew.sum(M, 'minor'), [6.0, -3.0])

    @pytest.mark.parametrize("reducer", [ew.sum, ew.max, ew.min])
    def test_duality(self, rng, reducer):
        A = rng.standard_normal((4, 6))
        np.testing.assert_allclose(reducer(A, 1), reducer(A.T, 2))
        np.testing.assert_allclose(reducer(A, 2), reducer(A.T, 1))

    def test_leading_row_major(self, M):
        np.testing.assert_array_equal(ew.sum(M, 'leading'), ew.sum(M, 2))

    def test_leading_column_major(self, M):
        F = np.asfortranarray(M)
        np.testing.assert_array_equal(ew.sum(F, 'leading'), ew.sum(M, 1))

    def test_numpy_axis_zero_rejected(self, M):
        with pytest.raises(ValidationError, match="axis"):
            ew.sum(M, 0)

    def test_bool_axis_rejected(self, M):
        with pytest.raises(ValidationError):
            ew.max(M, True)


# ═══════════════════════════════════════════════════════════════════════
# Predicates
# ═══════════════════════════════════════════════════════════════════════


class TestPredicates:

    def test_all_default_nonzero(self):
        assert ew.all([1, 2, 3])
        assert not ew.all([1, 0, 3])

    def test_any_with_predicate(self, M):
        assert ew.any(M, lambda v: v < -5)
        assert not ew.any(M, lambda v: v > 10)

    def test_matrix_axis(self, M):
        positive = lambda v: v > 0
        np.testing.assert_array_equal(ew.all(M, positive, axis=1), [True, False, False])
        np.testing.assert_array_equal(ew.any(M, positive, axis=2), [True, True])

    def test_vector_ignores_axis(self):
        assert ew.all([1.0, 2.0], axis=2) is True

    def test_returns_python_bool(self, M):
        assert type(ew.all(M)) is bool
        assert type(ew.any(M)) is bool

    def test_empty(self):
        assert ew.all(np.zeros(0)) is True
        assert ew.any(np.zeros(0)) is False

    def test_ufunc_predicate(self):
        assert ew.any([1.0, np.nan], np.isnan)

    def test_which(self):
        np.testing.assert_array_equal(ew.which([0, 3, 0, 7]), [1, 3])
        np.testing.assert_array_equal(ew.which([1.0, -2.0, 3.0], lambda v: v < 0), [1])

    def test_which_needs_vector(self, M):
        with pytest.raises(DimensionError):
            ew.which(M)

    def test_hold_keeps_layout(self, M):
        F = np.asfortranarray(M)
        mask = ew.hold(F, lambda v: v > 0)
        assert mask.dtype == np.bool_
        assert mask.flags.f_contiguous
        np.testing.assert_array_equal(mask, M > 0)

    def test_object_array_rejected(self):
        with pytest.raises(ValidationError, match="object"):
            ew.all(np.array([1, 'a', None], dtype=object))


# ═══════════════════════════════════════════════════════════════════════
# max / min
# ═══════════════════════════════════════════════════════════════════════


class TestExtrema:

    def test_matrix_default_is_global(self, M):
        assert ew.max(M) == 5.0
        assert ew.min(M) == -9.0

    def test_matrix_axis(self, M):
        np.testing.assert_array_equal(ew.max(M, 1), [3.0, 5.0, 4.0])
        np.testing.assert_array_equal(ew.min(M, 2), [-1.0, -9.0])

    def test_vector_with_axis_is_length_one(self):
        result = ew.max(np.array([1.0, 7.0, 2.0]), axis=1)
        assert result.shape == (1,)
        assert result[0] == 7.0

    def test_idempotent(self, rng):
        v = rng.standard_normal(8)
        assert ew.max(ew.max(v, axis=1)) == ew.max(v)

    def test_empty_real(self):
        assert ew.max(np.zeros(0)) == -np.inf
        assert ew.min(np.zeros(0)) == np.inf

    def test_empty_integer(self):
        assert ew.max(np.zeros(0, dtype=np.int32)) == np.iinfo(np.int32).min
        assert ew.min(np.zeros(0, dtype=np.int32)) == np.iinfo(np.int32).max

    def test_empty_complex(self):
        assert ew.max(np.zeros(0, dtype=complex)) == 0
        assert ew.min(np.zeros(0, dtype=complex)) == complex(np.inf, 0.0)

    def test_empty_matrix_columns(self):
        result = ew.max(np.zeros((0, 3)), axis=1)
        np.testing.assert_array_equal(result, [-np.inf] * 3)

    def test_integer_dtype_kept(self):
        result = ew.max(np.array([[1, 5], [7, 2]]), axis=1)
        assert result.dtype.kind == 'i'
        np.testing.assert_array_equal(result, [7, 5])

    def test_nan_propagates(self):
        assert np.isnan(ew.max([1.0, np.nan, 3.0]))
        assert np.isnan(ew.min([1.0, np.nan, 3.0]))

    def test_complex_by_magnitude(self):
        v = np.array([3.0 + 0j, -4.0 + 0j, 1.0 + 1.0j])
        assert ew.max(v) == -4.0 + 0j
        assert ew.min(v) == 1.0 + 1.0j

    def test_complex_tie_broken_by_angle(self):
        v = np.array([1.0j, 1.0 + 0j, -1.0j])
        assert ew.max(v) == 1.0j
        assert ew.min(v) == -1.0j

    def test_complex_nan(self):
        v = np.array([1.0 + 0j, complex(0.0, np.nan), 5.0 + 0j])
        result = ew.max(v)
        assert np.isnan(result.real) and np.isnan(result.imag)

    def test_complex_matrix_axis(self):
        A = np.array([[1.0 + 0j, -3.0 + 0j], [2.0j, 1.0 + 1.0j]])
        np.testing.assert_array_equal(ew.max(A, 1), [2.0j, -3.0 + 0j])
        np.testing.assert_array_equal(ew.min(A, 2), [1.0 + 0j, 1.0 + 1.0j])


# ═══════════════════════════════════════════════════════════════════════
# Sums and dot
# ═══════════════════════════════════════════════════════════════════════


class TestSums:

    def test_matrix_default_is_per_column(self, M):
        np.testing.assert_array_equal(ew.sum(M), ew.sum(M, 1))

    def test_vector(self):
        assert ew.sum([1, 2, 3]) == 6
        np.testing.assert_array_equal(ew.sum([1, 2, 3], axis=2), [6])

    def test_sum_all(self, M):
        assert ew.sum_all(M) == pytest.approx(3.0)
        assert ew.sum_all(np.zeros((0, 4))) == 0.0

    def test_cumsum_matrix(self, M):
        np.testing.assert_array_equal(ew.cumsum(M), [[3.0, -1.0, 4.0], [4.0, 4.0, -5.0]])
        np.testing.assert_array_equal(ew.cumsum(M, 2), [[3.0, 2.0, 6.0], [1.0, 6.0, -3.0]])

    def test_cumsum_last_row_is_sum(self, rng):
        A = rng.standard_normal((5, 3))
        np.testing.assert_allclose(ew.cumsum(A)[-1], ew.sum(A))

    def test_cumsum_keeps_layout(self, M):
        assert ew.cumsum(np.asfortranarray(M)).flags.f_contiguous

    def test_cumsum_inplace(self, M):
        expected = ew.cumsum(M, 2)
        ew.cumsum_inplace(M, 2)
        np.testing.assert_array_equal(M, expected)

    def test_cumsum_inplace_vector(self):
        v = np.array([1, 2, 3, 4])
        ew.cumsum_inplace(v)
        np.testing.assert_array_equal(v, [1, 3, 6, 10])

    def test_inplace_needs_ndarray(self):
        with pytest.raises(ValidationError, match="numpy array"):
            ew.cumsum_inplace([1, 2, 3])

    def test_inplace_read_only(self):
        v = np.arange(3.0)
        v.flags.writeable = False
        with pytest.raises(ValidationError, match="read-only"):
            ew.cumsum_inplace(v)


class TestDot:

    def test_vectors(self):
        assert ew.dot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == 32.0

    def test_no_conjugation(self):
        assert ew.dot([1j], [1j]) == -1

    def test_matrix_columns(self, M):
        np.testing.assert_array_equal(ew.dot(M, M), [10.0, 26.0, 97.0])

    def test_matrix_rows(self, M):
        np.testing.assert_array_equal(ew.dot(M, np.ones_like(M), axis=2), [6.0, -3.0])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="lengths"):
            ew.dot([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_shape_mismatch(self, M):
        with pytest.raises(DimensionError):
            ew.dot(M, M.T)

    def test_vector_with_matrix(self, M):
        with pytest.raises(DimensionError, match="both"):
            ew.dot(M[0], M)
