"""
Condition number with respect to inversion.

    cond_p(A) = ‖A‖_p · ‖A⁻¹‖_p         p ∈ {1, ∞, Frobenius}
    cond_2(A) = σ_max / σ_min

The 1, ∞ and Frobenius variants need a square A and return +inf for
singular or numerically singular matrices (LAPACK reciprocal condition
estimate below machine epsilon). The 2-norm variant accepts rectangular
matrices and returns +inf only when the smallest singular value is exactly
zero; for numerically singular matrices it returns a very large number.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pydensela.core.compute.linalg import inv, rcond, singular_values
from pydensela.core.compute.precision import machine_epsilon
from pydensela.core.compute.tolerances import RCOND_SINGULAR_FACTOR
from pydensela.core.dispatch import adapt
from pydensela.core.exceptions import DimensionError, ValidationError
from pydensela.core.validation import check_2d


_NORMS = {
    1: 1,
    '1': 1,
    2: 2,
    '2': 2,
    np.inf: np.inf,
    'inf': np.inf,
    'fro': 'fro',
    'frobenius': 'fro',
}


def _inversion_cond(A: ArrayLike, ord: Any) -> float:
    handle = adapt(A, 'A')
    check_2d(handle.data, 'A')
    m, n = handle.shape
    if m != n:
        raise DimensionError(
            f"A: condition number in the {ord} norm requires a square matrix, "
            f"got shape {handle.shape}; use the 2-norm for rectangular matrices"
        )
    if rcond(handle.data, '1') < RCOND_SINGULAR_FACTOR * machine_epsilon(handle.dtype):
        return float('inf')
    A_inv = inv(handle.data)
    return float(np.linalg.norm(handle.data, ord) * np.linalg.norm(A_inv, ord))


def cond_1(A: ArrayLike) -> float:
    """1-norm condition number."""
    return _inversion_cond(A, 1)


def cond_inf(A: ArrayLike) -> float:
    """Infinity-norm condition number."""
    return _inversion_cond(A, np.inf)


def cond_frobenius(A: ArrayLike) -> float:
    """Frobenius-norm condition number."""
    return _inversion_cond(A, 'fro')


def cond_2(A: ArrayLike) -> float:
    """2-norm condition number σ_max/σ_min; rectangular A is accepted."""
    s = singular_values(A)
    if s.size == 0:
        return 0.0
    if np.any(s == 0):
        return float('inf')
    return float(s.max() / s.min())


def cond(A: ArrayLike, p: Any = 2) -> float:
    """
    Condition number of A in the p-norm.

    Args:
        A: Matrix (square unless p = 2)
        p: 1, 2, np.inf (or 'inf') or 'fro'

    Returns:
        The condition number; +inf for singular matrices

    Raises:
        ValidationError: For an unknown norm
        DimensionError: For rectangular A with p != 2
    """
    try:
        ord = _NORMS[p]
    except (KeyError, TypeError):
        raise ValidationError(f"p: expected 1, 2, np.inf or 'fro', got {p!r}") from None
    if ord == 2:
        return cond_2(A)
    return _inversion_cond(A, ord)
