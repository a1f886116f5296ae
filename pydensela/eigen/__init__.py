"""
Eigenproblem orchestrator.

Standard and generalized eigenproblems for general, symmetric and Hermitian
operands, with left and/or right eigenvectors.

Public API:
    eigen_decompose(A, B=None, side=..., want_eigvals=...) -> EigenSolution
    eigenvalues(A[, B]), eigenvectors(A[, B])
    left_eigen(A[, B]), right_eigen(A[, B]), eigen(A[, B])

Example:
    >>> from pydensela.eigen import eigen
    >>> v, LV, RV = eigen(A)
    >>> np.allclose(A @ RV, RV * v)
    True
"""

from pydensela.eigen.design import EigenDesign, Side
from pydensela.eigen.solution import EigenParams, EigenSolution
from pydensela.eigen.solvers import (
    eigen_decompose,
    eigenvalues,
    eigenvectors,
    left_eigen,
    right_eigen,
    eigen,
)

__all__ = [
    "eigen_decompose",
    "eigenvalues",
    "eigenvectors",
    "left_eigen",
    "right_eigen",
    "eigen",
    "EigenDesign",
    "EigenSolution",
    "EigenParams",
    "Side",
]
