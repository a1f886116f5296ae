"""
Singular value decomposition via ``?gesdd``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.dispatch import adapt, lapack_routines
from pydensela.core.exceptions import ConvergenceError
from pydensela.core.compute.lapack import call_lapack, routine_name
from pydensela.core.compute.precision import real_dtype
from pydensela.core.validation import check_2d


@dataclass(frozen=True)
class SVDResult:
    """
    Result of singular value decomposition A = U·diag(s)·Vh.

    Attributes:
        U: Left singular vectors (m x m, or m x k in economic mode)
        s: Singular values in descending order (length k = min(m, n))
        Vh: Conjugate-transposed right singular vectors (n x n, or k x n)
    """
    U: NDArray[np.inexact[Any]]
    s: NDArray[np.floating[Any]]
    Vh: NDArray[np.inexact[Any]]


def _gesdd(A: ArrayLike, compute_uv: bool, full: bool):
    handle = adapt(A, 'A')
    check_2d(handle.data, 'A')
    m, n = handle.shape
    k = min(m, n)

    if k == 0:
        u_cols = m if full else k
        vh_rows = n if full else k
        return (
            handle,
            np.eye(m, u_cols, dtype=handle.dtype),
            np.zeros(0, dtype=real_dtype(handle.dtype)),
            np.eye(vh_rows, n, dtype=handle.dtype),
        )

    gesdd, = lapack_routines('gesdd', handle.data)
    u, s, vh, info = call_lapack(
        gesdd, 'gesdd', handle.data,
        compute_uv=int(compute_uv), full_matrices=int(full),
    )
    if info > 0:
        raise ConvergenceError(
            "SVD did not converge",
            routine=routine_name(gesdd, 'gesdd'),
            info=int(info),
        )
    return handle, u, s, vh


def svd(A: ArrayLike, full: bool = True) -> SVDResult:
    """
    Singular value decomposition using LAPACK's divide and conquer driver.

    Args:
        A: Matrix to decompose (m x n)
        full: True for square U and Vh, False for the economic factors

    Returns:
        SVDResult with U and Vh in the layout of A

    Raises:
        ConvergenceError: If ``?gesdd`` fails to converge
    """
    handle, u, s, vh = _gesdd(A, compute_uv=True, full=full)
    return SVDResult(U=handle.restore(u), s=s, Vh=handle.restore(vh))


def singular_values(A: ArrayLike) -> NDArray[np.floating[Any]]:
    """Singular values of A in descending order."""
    _, _, s, _ = _gesdd(A, compute_uv=False, full=False)
    return s
