"""
Solver dispatch for linear least squares.

``llsq_solution`` is the bundle-returning entry point; ``llsq_qr``,
``llsq_svd`` and ``llsq`` return x only.
"""

from __future__ import annotations

import warnings
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.exceptions import NumericalWarning, ValidationError
from pydensela.core.result import Result
from pydensela.lsq.backends.cpu import CPUQRLeastSquaresBackend, CPUSVDLeastSquaresBackend
from pydensela.lsq.design import LeastSquaresDesign
from pydensela.lsq.solution import LeastSquaresSolution


# Type alias for method selection
MethodChoice = Literal['auto', 'qr', 'svd']


def llsq_solution(
    A: ArrayLike,
    b: ArrayLike,
    *,
    method: MethodChoice = 'auto',
    rcond: float | None = None,
) -> LeastSquaresSolution:
    """
    Solve the linear least-squares problem min ‖A·x − b‖₂.

    Args:
        A: Coefficient matrix (m x n)
        b: Right-hand side, a vector of length m or an m x k matrix
        method:
            - 'qr': rank-revealing QR (?gelsy)
            - 'svd': SVD (?gelss), minimum-norm solution
            - 'auto': QR when A has full column rank, otherwise SVD
        rcond: Relative cutoff for small singular values / R diagonal
            entries; machine epsilon when None

    Returns:
        LeastSquaresSolution with x, rank and residual norm

    Raises:
        ValidationError: If inputs are invalid or method is unknown
        DimensionError: If A and b have different row counts
        ConvergenceError: If the SVD fails to converge
    """
    # === Construct Design ===
    design = LeastSquaresDesign.build(A, b)

    # === Solve ===
    if method == 'qr':
        result = CPUQRLeastSquaresBackend(rcond).solve(design)
    elif method == 'svd':
        result = CPUSVDLeastSquaresBackend(rcond).solve(design)
    elif method == 'auto':
        result = _solve_auto(design, rcond)
    else:
        raise ValidationError(f"method: expected 'auto', 'qr' or 'svd', got {method!r}")

    # === Wrap and Return ===
    return LeastSquaresSolution(_result=result, _design=design)


def _solve_auto(design: LeastSquaresDesign, rcond: float | None) -> Result:
    result = CPUQRLeastSquaresBackend(rcond).solve(design)
    full_rank = min(design.m, design.n)
    if result.params.rank >= full_rank:
        return result

    msg = (
        f"A is rank deficient (rank {result.params.rank} < min(m, n) = {full_rank}); "
        f"using the SVD minimum-norm solution"
    )
    warnings.warn(msg, NumericalWarning, stacklevel=3)
    svd_result = CPUSVDLeastSquaresBackend(rcond).solve(design)
    return Result(
        params=svd_result.params,
        info={**svd_result.info, 'fallback_from': 'qr'},
        timing=svd_result.timing,
        backend_name=svd_result.backend_name,
        warnings=svd_result.warnings + (msg,),
    )


def llsq_qr(A: ArrayLike, b: ArrayLike) -> NDArray[np.inexact[Any]]:
    """Least-squares solution via rank-revealing QR."""
    return llsq_solution(A, b, method='qr').x


def llsq_svd(A: ArrayLike, b: ArrayLike, rcond: float | None = None) -> NDArray[np.inexact[Any]]:
    """Minimum-norm least-squares solution via SVD."""
    return llsq_solution(A, b, method='svd', rcond=rcond).x


def llsq(A: ArrayLike, b: ArrayLike) -> NDArray[np.inexact[Any]]:
    """Least-squares solution: QR for full column rank A, SVD otherwise."""
    return llsq_solution(A, b, method='auto').x
