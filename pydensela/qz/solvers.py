"""
Eager QZ entry points.

Thin wrappers over QZDecomposition for callers that want the factors at
once, and the non-mutating reorder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.qz.decomposition import QZDecomposition, SelectionOrMask
from pydensela.qz.selectors import Selection, SelectionLike


@dataclass(frozen=True)
class QZResult:
    """
    Generalized Schur form A = Q·S·Zᴴ, B = Q·T·Zᴴ.

    Attributes:
        S: Upper (quasi-)triangular
        T: Upper triangular
        Q: Left orthogonal/unitary factor
        Z: Right orthogonal/unitary factor
        alpha: Eigenvalue numerators
        beta: Eigenvalue denominators
        n_selected: Size of the leading selected block (n when unsorted)
    """
    S: NDArray[np.inexact[Any]]
    T: NDArray[np.inexact[Any]]
    Q: NDArray[np.inexact[Any]]
    Z: NDArray[np.inexact[Any]]
    alpha: NDArray[np.inexact[Any]]
    beta: NDArray[np.inexact[Any]]
    n_selected: int


def _as_result(qz: QZDecomposition) -> QZResult:
    return QZResult(
        S=qz.S, T=qz.T, Q=qz.Q, Z=qz.Z,
        alpha=qz.alpha, beta=qz.beta,
        n_selected=qz.n_selected,
    )


def qz_decompose(
    A: ArrayLike,
    B: ArrayLike,
    selection: SelectionLike = Selection.ALL,
) -> QZResult:
    """
    Generalized Schur decomposition of (A, B).

    Args:
        A, B: Square matrices of the same order
        selection: Region whose eigenvalues should lead the Schur form

    Returns:
        QZResult with all factors in the layout of A
    """
    return _as_result(QZDecomposition(A, B, selection))


def qz_reorder(
    S: ArrayLike,
    T: ArrayLike,
    Q: ArrayLike,
    Z: ArrayLike,
    selection: SelectionOrMask,
) -> QZResult:
    """
    Reorder an existing generalized Schur form without touching the inputs.

    Args:
        S, T, Q, Z: A generalized Schur form
        selection: Selection or boolean mask of eigenvalues to move to the
            leading block

    Returns:
        New QZResult with the reordered factors
    """
    return _as_result(QZDecomposition.from_factors(S, T, Q, Z).reorder(selection))


def qz_eigenvalues(A: ArrayLike, B: ArrayLike) -> NDArray[np.complexfloating[Any]]:
    """Generalized eigenvalues of (A, B) through the QZ algorithm."""
    return QZDecomposition(A, B).eigenvalues()


def reordered(qz: QZDecomposition, selection: SelectionOrMask) -> QZDecomposition:
    """Reordered copy of ``qz``; ``qz`` itself is left unchanged."""
    return qz.copy().reorder(selection)
