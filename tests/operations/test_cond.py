"""Tests for condition numbers and numerical rank."""

import numpy as np
import pytest

from pydensela.core.exceptions import DimensionError, ValidationError
from pydensela.operations import cond, cond_1, cond_2, cond_frobenius, cond_inf, rank, rcond


class TestCondWellConditioned:

    def test_one_norm(self, well_conditioned):
        assert cond_1(well_conditioned) == pytest.approx(5.0, rel=1e-12)

    def test_inf_norm(self, well_conditioned):
        assert cond_inf(well_conditioned) == pytest.approx(5.0, rel=1e-12)

    def test_frobenius(self, well_conditioned):
        assert cond_frobenius(well_conditioned) == pytest.approx(5.25, rel=1e-12)

    def test_two_norm(self, well_conditioned):
        assert cond_2(well_conditioned) == pytest.approx(4.0, rel=1e-12)

    @pytest.mark.parametrize("p, expected", [
        (1, 5.0), ('1', 5.0), (np.inf, 5.0), ('inf', 5.0),
        ('fro', 5.25), ('frobenius', 5.25), (2, 4.0),
    ])
    def test_dispatch(self, well_conditioned, p, expected):
        assert cond(well_conditioned, p) == pytest.approx(expected, rel=1e-12)

    def test_default_is_two_norm(self, well_conditioned):
        assert cond(well_conditioned) == cond_2(well_conditioned)

    def test_identity(self):
        for p in (1, 2, np.inf):
            assert cond(np.eye(4), p) == pytest.approx(1.0)

    def test_matches_rcond(self, well_conditioned):
        assert 1.0 / cond_1(well_conditioned) == pytest.approx(rcond(well_conditioned), rel=1e-6)


class TestCondSingular:

    @pytest.mark.parametrize("p", [1, np.inf, 'fro'])
    def test_numerically_singular_is_inf(self, ill_conditioned, p):
        assert cond(ill_conditioned, p) == np.inf

    def test_two_norm_is_huge_but_finite(self, ill_conditioned):
        c = cond_2(ill_conditioned)
        assert c > 1e15

    def test_exactly_singular(self):
        A = np.array([[1.0, 2.0], [2.0, 4.0]])
        assert cond_1(A) == np.inf
        assert cond_2(np.zeros((2, 2))) == np.inf


class TestCondRectangular:

    def test_two_norm_accepts_rectangular(self, lsq_real_6x5):
        A, _, _ = lsq_real_6x5
        s = np.linalg.svd(A, compute_uv=False)
        assert cond_2(A) == pytest.approx(s[0] / s[-1], rel=1e-10)

    @pytest.mark.parametrize("p", [1, np.inf, 'fro'])
    def test_other_norms_need_square(self, p):
        with pytest.raises(DimensionError, match="square"):
            cond(np.ones((3, 2)), p)

    def test_unknown_norm(self, well_conditioned):
        with pytest.raises(ValidationError, match="p:"):
            cond(well_conditioned, 3)

    def test_unhashable_norm(self, well_conditioned):
        with pytest.raises(ValidationError):
            cond(well_conditioned, [1])


class TestRank:

    def test_full_rank(self, well_conditioned):
        assert rank(well_conditioned) == 3

    def test_singular(self, ill_conditioned):
        assert rank(ill_conditioned) == 2

    def test_zero(self):
        assert rank(np.zeros((3, 4))) == 0

    def test_empty(self):
        assert rank(np.zeros((0, 3))) == 0

    def test_rectangular(self, lsq_real_6x5):
        A, _, _ = lsq_real_6x5
        assert rank(A) == 5
        assert rank(A.T) == 5

    def test_bounded_by_shape(self, rng):
        A = rng.standard_normal((4, 7))
        assert 0 <= rank(A) <= 4

    def test_explicit_tolerance(self):
        A = np.diag([1.0, 1e-3, 1e-8])
        assert rank(A) == 3
        assert rank(A, tol=1e-5) == 2
        assert rank(A, tol=10.0) == 0

    def test_complex(self, general_complex_4x4):
        assert rank(general_complex_4x4) == 4
