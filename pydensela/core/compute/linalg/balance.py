"""
Matrix balancing via ``?gebal``.

Balancing permutes A to isolate eigenvalues where possible and scales the
remaining rows and columns by powers of two so their norms are closer:

    B = T⁻¹·A·T,  T = P·D

B has the eigenvalues of A, usually computed more accurately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.dispatch import adapt, lapack_routines
from pydensela.core.exceptions import ValidationError
from pydensela.core.compute.lapack import call_lapack
from pydensela.core.compute.precision import real_dtype
from pydensela.core.validation import check_square


# job -> (permute, scale)
_JOBS = {
    'N': (0, 0),
    'P': (1, 0),
    'S': (0, 1),
    'B': (1, 1),
}


@dataclass(frozen=True)
class BalanceResult:
    """
    Result of balancing a square matrix.

    Attributes:
        balanced: B = T⁻¹·A·T
        scaling: Diagonal of D; 1 for rows isolated by the permutation
        permutation: P as an index vector: column k of P is e[permutation[k]]
        T: The balancing matrix P·D
    """
    balanced: NDArray[np.inexact[Any]]
    scaling: NDArray[np.floating[Any]]
    permutation: NDArray[np.intp]
    T: NDArray[np.floating[Any]]


def _permutation(pivscale: NDArray[np.floating[Any]], lo: int, hi: int) -> NDArray[np.intp]:
    n = pivscale.shape[0]
    perm = np.arange(n)
    # Interchanges are recorded 1-based, from the bottom up to hi+1, then
    # from the top down to lo-1
    for i in [*range(n - 1, hi, -1), *range(lo)]:
        j = int(pivscale[i]) - 1
        perm[[i, j]] = perm[[j, i]]
    return perm


def balance(A: ArrayLike, job: str = 'B') -> BalanceResult:
    """
    Balance a square matrix for eigenvalue computation.

    Args:
        A: Square matrix
        job: 'B' to permute and scale, 'P' to permute only, 'S' to scale
            only, 'N' for neither

    Returns:
        BalanceResult with B and T in the layout of A
    """
    try:
        permute, scale = _JOBS[str(job).upper()]
    except KeyError:
        raise ValidationError(f"job: expected 'B', 'P', 'S' or 'N', got {job!r}") from None

    handle = adapt(A, 'A')
    check_square(handle.data, 'A')
    n = handle.shape[0]
    rdtype = real_dtype(handle.dtype)
    if n == 0:
        return BalanceResult(
            balanced=handle.restore(handle.data.copy()),
            scaling=np.ones(0, dtype=rdtype),
            permutation=np.arange(0),
            T=np.eye(0, dtype=rdtype),
        )

    gebal, = lapack_routines('gebal', handle.data)
    ba, lo, hi, pivscale, _ = call_lapack(gebal, 'gebal', handle.data, scale=scale, permute=permute)
    lo, hi = int(lo), int(hi)

    scaling = np.ones(n, dtype=rdtype)
    scaling[lo:hi + 1] = pivscale[lo:hi + 1]
    perm = _permutation(pivscale, lo, hi)
    T = np.zeros((n, n), dtype=rdtype)
    T[perm, np.arange(n)] = scaling
    return BalanceResult(
        balanced=handle.restore(ba),
        scaling=scaling,
        permutation=perm,
        T=handle.restore(T),
    )
