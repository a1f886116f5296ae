"""
Solver dispatch for eigenproblems.

``eigen_decompose`` is the bundle-returning entry point; the remaining
functions are thin value-level wrappers over it.
"""

from __future__ import annotations

from typing import Any, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.protocols import DenseOperand
from pydensela.eigen.backends.cpu import CPUEigenBackend
from pydensela.eigen.design import EigenDesign, Side
from pydensela.eigen.solution import EigenSolution


Operand = Union[ArrayLike, DenseOperand]


def eigen_decompose(
    A: Operand,
    B: Operand | None = None,
    *,
    side: Side | str = Side.BOTH,
    want_eigvals: bool = True,
) -> EigenSolution:
    """
    Solve the standard or generalized eigenproblem.

    Dispatches on the operand:
        - plain arrays (and Triangular adaptors) use the general drivers
        - Symmetric / Hermitian adaptors use the symmetric/Hermitian drivers
        - with B, the generalized problem A·x = λ·B·x is solved

    Args:
        A: Square matrix or Symmetric/Hermitian adaptor
        B: Optional square matrix of the same order (generalized problem)
        side: Which eigenvectors to compute: 'none', 'left', 'right', 'both'
        want_eigvals: For the generalized problem, whether alpha and beta
            are kept in the solution

    Returns:
        EigenSolution with values, eigenvectors and diagnostics

    Raises:
        DimensionError: If A or B is not square or the orders differ
        LayoutError: If A and B have different storage layouts
        ConvergenceError: If the backend fails to converge
        NotPositiveDefiniteError: If B of a symmetric-definite pair is not
            positive definite

    Example:
        >>> sol = eigen_decompose(Symmetric(A), side='right')
        >>> sol.values        # real, ascending
        >>> sol.vectors       # orthonormal columns
    """
    design = EigenDesign.build(A, B, side=side, want_eigvals=want_eigvals)
    result = CPUEigenBackend().solve(design)
    return EigenSolution(_result=result, _design=design)


def eigenvalues(A: Operand, B: Operand | None = None) -> NDArray[np.inexact[Any]]:
    """Eigenvalues of A, or generalized eigenvalues of (A, B)."""
    return eigen_decompose(A, B, side=Side.NONE, want_eigvals=False).values


def eigenvectors(A: Operand, B: Operand | None = None):
    """
    Eigenvectors without the eigenvalues.

    Returns:
        (LV, RV) for general operands; V for symmetric/Hermitian adaptors
    """
    sol = eigen_decompose(A, B, side=Side.BOTH, want_eigvals=False)
    if sol.is_structured:
        return sol.vectors
    return sol.left_vectors, sol.right_vectors


def left_eigen(A: Operand, B: Operand | None = None):
    """(v, LV): eigenvalues and left eigenvectors (V for symmetric/Hermitian)."""
    sol = eigen_decompose(A, B, side=Side.LEFT, want_eigvals=False)
    return sol.values, sol.left_vectors


def right_eigen(A: Operand, B: Operand | None = None):
    """(v, RV): eigenvalues and right eigenvectors (V for symmetric/Hermitian)."""
    sol = eigen_decompose(A, B, side=Side.RIGHT, want_eigvals=False)
    return sol.values, sol.right_vectors


def eigen(A: Operand, B: Operand | None = None):
    """
    Full eigendecomposition.

    Returns:
        (v, LV, RV) for general operands, where LV[:, j]ᴴ·A = v[j]·LV[:, j]ᴴ
        and A·RV[:, j] = v[j]·RV[:, j] (with B on the right-hand side for
        the generalized problem); (v, V) for symmetric/Hermitian adaptors
    """
    sol = eigen_decompose(A, B, side=Side.BOTH, want_eigvals=False)
    if sol.is_structured:
        return sol.values, sol.vectors
    return sol.values, sol.left_vectors, sol.right_vectors
