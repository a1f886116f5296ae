"""
LU-based kernels: factorization, linear solve, inverse and reciprocal
condition estimate.

These are the LU routines consumed by the matrix-power and condition-number
operations. Rectangular matrices get their reciprocal condition estimate
from the triangular factor of a QR decomposition instead.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.dispatch import adapt, lapack_routines, promote
from pydensela.core.exceptions import (
    DimensionError,
    NumericalWarning,
    SingularMatrixError,
    ValidationError,
)
from pydensela.core.compute.lapack import call_lapack, routine_name
from pydensela.core.compute.linalg.qr import QRDecomposition
from pydensela.core.compute.precision import machine_epsilon
from pydensela.core.layout import as_array
from pydensela.core.validation import check_2d, check_square, check_vector_or_matrix


_NORM_FLAGS = {
    1: '1', '1': '1', 'O': '1', 'o': '1',
    np.inf: 'I', 'I': 'I', 'i': 'I', 'inf': 'I',
}


def norm_flag(norm: Any) -> str:
    """LAPACK norm flag ('1' or 'I') for a user norm argument."""
    try:
        return _NORM_FLAGS[norm]
    except (KeyError, TypeError):
        raise ValidationError(
            f"norm: expected 1, '1', 'O', np.inf or 'I', got {norm!r}"
        ) from None


@dataclass(frozen=True)
class LUResult:
    """
    Packed LU factorization P·A = L·U.

    Attributes:
        lu: L (unit lower, below the diagonal) and U packed in one matrix
        piv: Zero-based pivot indices: row i was interchanged with piv[i]
        singular: True when U has an exact zero on its diagonal
    """
    lu: NDArray[np.inexact[Any]]
    piv: NDArray[np.intc]
    singular: bool


def _getrf(data: NDArray[np.inexact[Any]]):
    getrf, = lapack_routines('getrf', data)
    lu, piv, info = call_lapack(getrf, 'getrf', data)
    return getrf, lu, piv, int(info)


def lu_factor(A: ArrayLike) -> LUResult:
    """
    LU factorization with partial pivoting via ``?getrf``.

    Args:
        A: Square matrix

    Returns:
        LUResult with the packed factors in the layout of A
    """
    handle = adapt(A, 'A')
    check_square(handle.data, 'A')
    if handle.shape[0] == 0:
        return LUResult(lu=handle.data.copy(), piv=np.zeros(0, dtype=np.intc), singular=False)
    _, lu, piv, info = _getrf(handle.data)
    return LUResult(lu=handle.restore(lu), piv=piv, singular=info > 0)


def inv(A: ArrayLike) -> NDArray[np.inexact[Any]]:
    """
    Matrix inverse via ``?getrf``/``?getri``.

    A NumericalWarning is issued when the reciprocal condition estimate is
    below machine epsilon.

    Raises:
        SingularMatrixError: If A is exactly singular
    """
    handle = adapt(A, 'A')
    check_square(handle.data, 'A')
    n = handle.shape[0]
    if n == 0:
        return handle.restore(handle.data.copy())

    anorm = _one_norm(handle.data)
    getrf, lu, piv, info = _getrf(handle.data)
    if info > 0:
        raise SingularMatrixError(
            f"Matrix is singular: U({info - 1},{info - 1}) is exactly zero",
            matrix_name='A',
            condition_number=np.inf,
            routine=routine_name(getrf, 'getrf'),
            info=info,
        )

    rc = _gecon(lu, anorm, '1')
    if rc < machine_epsilon(handle.dtype):
        warnings.warn(
            f"Ill-conditioned matrix (rcond={rc:.3e}): inverse may be inaccurate",
            NumericalWarning,
            stacklevel=2,
        )

    getri, = lapack_routines('getri', lu)
    inv_a, _ = call_lapack(getri, 'getri', lu, piv)
    return handle.restore(inv_a)


def _one_norm(data: NDArray[np.inexact[Any]], flag: str = '1') -> float:
    lange, = lapack_routines('lange', data)
    return float(lange(flag, data))


def _gecon(lu: NDArray[np.inexact[Any]], anorm: float, flag: str) -> float:
    gecon, = lapack_routines('gecon', lu)
    rc, _ = call_lapack(gecon, 'gecon', lu, anorm, norm=flag)
    return float(rc)


def rcond(A: ArrayLike, norm: Any = '1') -> float:
    """
    Reciprocal condition number estimate in the 1- or infinity-norm.

    Square matrices use LU and ``?gecon``; an exactly singular matrix
    returns 0. Rectangular matrices use ``?trcon`` on the triangular
    factor of the QR decomposition of A (tall) or Aᵀ (wide).

    Args:
        A: Matrix (m x n)
        norm: 1/'1'/'O' for the 1-norm, np.inf/'I' for the infinity-norm

    Returns:
        Estimate of 1 / (‖A‖·‖A⁻¹‖) in [0, 1]
    """
    flag = norm_flag(norm)
    handle = adapt(A, 'A')
    check_2d(handle.data, 'A')
    m, n = handle.shape
    if min(m, n) == 0:
        return float('inf')

    if m == n:
        anorm = _one_norm(handle.data, flag)
        _, lu, _, info = _getrf(handle.data)
        if info > 0:
            return 0.0
        return _gecon(lu, anorm, flag)

    data = handle.data if m > n else handle.data.T
    k = min(m, n)
    r = np.asfortranarray(QRDecomposition(data).R(full=True)[:k, :k])
    trcon, = lapack_routines('trcon', r)
    rc, _ = call_lapack(trcon, 'trcon', r, norm=flag, uplo='U')
    return float(rc)


def mldivide(A: ArrayLike, B: ArrayLike) -> NDArray[np.inexact[Any]]:
    """
    Solve A·X = B for square A via ``?gesv`` (LU with partial pivoting).

    Args:
        A: Square matrix (n x n)
        B: Right-hand side, a vector of length n or an n x k matrix

    Returns:
        X with the shape of B, in the layout of B

    Raises:
        DimensionError: If A is not square or B does not have n rows
        SingularMatrixError: If A is exactly singular
    """
    A, B = as_array(A), as_array(B)
    dtype = promote(A.dtype, B.dtype)
    a = adapt(A, 'A', dtype=dtype)
    check_square(a.data, 'A')
    b = adapt(B, 'B', dtype=dtype)
    check_vector_or_matrix(b.data, 'B')
    n = a.shape[0]
    if b.shape[0] != n:
        raise DimensionError(f"B: expected {n} rows to match A, got {b.shape[0]}")
    if n == 0:
        return b.restore(b.data.copy())

    rhs = b.data.reshape(n, -1, order='F')
    gesv, = lapack_routines('gesv', a.data, rhs)
    _, _, x, info = call_lapack(gesv, 'gesv', a.data, rhs)
    if info > 0:
        raise SingularMatrixError(
            f"Matrix is singular: U({info - 1},{info - 1}) is exactly zero",
            matrix_name='A',
            condition_number=np.inf,
            routine=routine_name(gesv, 'gesv'),
            info=int(info),
        )
    return b.restore(x.reshape(b.shape, order='F'))
