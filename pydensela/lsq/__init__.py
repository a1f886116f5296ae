"""
Linear least squares.

Public API:
    llsq_qr(A, b)              rank-revealing QR
    llsq_svd(A, b, rcond=None) SVD, minimum-norm solution
    llsq(A, b)                 QR for full column rank, SVD otherwise
    llsq_solution(A, b, method='auto') -> LeastSquaresSolution

Example:
    >>> from pydensela.lsq import llsq
    >>> x = llsq(A, b)
"""

from pydensela.lsq.design import LeastSquaresDesign
from pydensela.lsq.solution import LeastSquaresParams, LeastSquaresSolution
from pydensela.lsq.solvers import llsq, llsq_qr, llsq_svd, llsq_solution

__all__ = [
    "llsq",
    "llsq_qr",
    "llsq_svd",
    "llsq_solution",
    "LeastSquaresDesign",
    "LeastSquaresSolution",
    "LeastSquaresParams",
]
