"""
QR decomposition with reflector-based application of Q.

The factorization is computed once with ``?geqrf`` and kept as Householder
reflectors. Q is only formed (``?orgqr``/``?ungqr``) when asked for; the
products Q·C, Qᴴ·C, C·Q and C·Qᴴ go straight through ``?ormqr``/``?unmqr``.

Shapes (A is m x n, k = min(m, n)):
    full=True   Q is m x m, R is m x n
    full=False  for tall A (m > n): Q is m x n, R is n x n;
                for square and wide A the full factors are returned
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.dispatch import (
    adapt,
    conjugate_transpose_flag,
    element_kind,
    lapack_routines,
    orthogonal_routine,
    promote,
)
from pydensela.core.exceptions import DimensionError
from pydensela.core.compute.lapack import call_lapack
from pydensela.core.layout import as_array, restore_layout, layout_of
from pydensela.core.validation import check_2d, check_array, check_vector_or_matrix


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal/unitary factor (m x m, or m x n in economic mode)
        R: Upper triangular factor (m x n, or n x n in economic mode)
        rank: Numerical rank determined from the R diagonal
    """
    Q: NDArray[np.inexact[Any]]
    R: NDArray[np.inexact[Any]]
    rank: int


def _economic_cols(m: int, n: int, full: bool) -> int:
    return m if (full or m <= n) else n


class QRDecomposition:
    """
    Householder QR factorization A = Q·R held in reflector form.

    Usage:
        qr = QRDecomposition(A)
        R = qr.R(full=False)
        y = qr.tlprod(b)      # Qᴴ·b without forming Q
    """

    def __init__(self, A: ArrayLike):
        handle = adapt(A, 'A')
        check_2d(handle.data, 'A')
        self._layout = handle.layout
        self._shape = handle.shape
        m, n = self._shape

        if min(m, n) == 0:
            self._reflectors = np.zeros((m, n), dtype=handle.dtype, order='F')
            self._tau = np.zeros(0, dtype=handle.dtype)
            return

        geqrf, = lapack_routines('geqrf', handle.data)
        reflectors, tau, _, _ = call_lapack(
            geqrf, 'geqrf', handle.data, query_workspace=True
        )
        self._reflectors = reflectors
        self._tau = tau

    @property
    def shape(self) -> tuple[int, int]:
        return self._shape

    @property
    def dtype(self) -> np.dtype:
        return self._reflectors.dtype

    @property
    def reflectors(self) -> tuple[NDArray[np.inexact[Any]], NDArray[np.inexact[Any]]]:
        """Raw ``?geqrf`` output: packed reflectors/R and the tau scalars."""
        return self._reflectors, self._tau

    def Q(self, full: bool = True) -> NDArray[np.inexact[Any]]:
        """Orthogonal/unitary factor."""
        m, n = self._shape
        k = min(m, n)
        cols = _economic_cols(m, n, full)

        if k == 0:
            return restore_layout(np.eye(m, cols, dtype=self.dtype), self._layout)

        work = np.zeros((m, cols), dtype=self.dtype, order='F')
        work[:, :k] = self._reflectors[:, :k]
        gqr, = lapack_routines(orthogonal_routine(element_kind(self.dtype), 'gqr'), work)
        q, _, _ = call_lapack(gqr, 'gqr', work, self._tau, query_workspace=True)
        return restore_layout(q, self._layout)

    def R(self, full: bool = True) -> NDArray[np.inexact[Any]]:
        """Upper triangular (trapezoidal) factor."""
        m, n = self._shape
        rows = _economic_cols(m, n, full)
        r = np.zeros((rows, n), dtype=self.dtype)
        top = min(rows, m)
        r[:top, :] = np.triu(self._reflectors[:top, :])
        return restore_layout(r, self._layout)

    def rank(self) -> int:
        """Numerical rank from the magnitude of the R diagonal."""
        diag_R = np.abs(np.diag(self._reflectors))
        if len(diag_R) == 0 or diag_R.max() == 0:
            return 0
        tol = max(self._shape) * np.finfo(self.dtype).eps * diag_R.max()
        return int(np.sum(diag_R > tol))

    # Products with Q; Q itself is never formed.

    def lprod(self, C: ArrayLike) -> NDArray[np.inexact[Any]]:
        """Q·C"""
        return self._apply(C, side='L', adjoint=False)

    def tlprod(self, C: ArrayLike) -> NDArray[np.inexact[Any]]:
        """Qᴴ·C"""
        return self._apply(C, side='L', adjoint=True)

    def rprod(self, C: ArrayLike) -> NDArray[np.inexact[Any]]:
        """C·Q"""
        return self._apply(C, side='R', adjoint=False)

    def trprod(self, C: ArrayLike) -> NDArray[np.inexact[Any]]:
        """C·Qᴴ"""
        return self._apply(C, side='R', adjoint=True)

    def _apply(self, C: ArrayLike, side: str, adjoint: bool) -> NDArray[np.inexact[Any]]:
        C = as_array(C)
        c = check_array(C, 'C')
        check_vector_or_matrix(c, 'C')
        layout = layout_of(C)
        m = self._shape[0]

        is_vector = c.ndim == 1
        if is_vector:
            c = c.reshape(-1, 1) if side == 'L' else c.reshape(1, -1)

        along = c.shape[0] if side == 'L' else c.shape[1]
        if along != m:
            which = 'rows' if side == 'L' else 'columns'
            raise DimensionError(
                f"C: expected {m} {which} to multiply with Q of order {m}, got shape {c.shape}"
            )

        dtype = promote(self.dtype, c.dtype)
        k = min(self._shape)
        if c.size == 0 or k == 0:
            out = np.array(c, dtype=dtype)
        else:
            kind = element_kind(dtype)
            work = np.asfortranarray(c, dtype=dtype)
            reflectors = np.asfortranarray(self._reflectors[:, :k], dtype=dtype)
            tau = self._tau[:k].astype(dtype)
            trans = conjugate_transpose_flag(kind) if adjoint else 'N'
            mqr, = lapack_routines(orthogonal_routine(kind, 'mqr'), work)
            out, _, _ = call_lapack(
                mqr, 'mqr', side, trans, reflectors, tau, work, query_workspace=True
            )

        if is_vector:
            return out.ravel()
        return restore_layout(out, layout)


def qr(A: ArrayLike, full: bool = True) -> QRResult:
    """
    QR decomposition using LAPACK.

    Computes A = QR where Q is orthogonal/unitary and R is upper
    triangular.

    Args:
        A: Matrix to decompose (m x n)
        full: True for Q m x m and R m x n; False for the economic
            factors of a tall matrix (Q m x n, R n x n)

    Returns:
        QRResult with Q, R in the layout of A, and numerical rank
    """
    decomposition = QRDecomposition(A)
    return QRResult(
        Q=decomposition.Q(full),
        R=decomposition.R(full),
        rank=decomposition.rank(),
    )
