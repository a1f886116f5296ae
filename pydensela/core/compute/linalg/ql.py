"""
QL decomposition A = Q·L.

QL is computed through QR of the row-and-column reversed matrix: with
P the exchange (anti-identity) matrix, P·A·P = Q̃·R̃ gives
A = (P·Q̃·P)·(P·R̃·P), and P·R̃·P is lower trapezoidal. All products with
Q reuse the reflectors of Q̃, so Q is never formed for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.compute.linalg.qr import QRDecomposition
from pydensela.core.layout import as_array, layout_of, restore_layout
from pydensela.core.validation import check_2d


@dataclass(frozen=True)
class QLResult:
    """
    Result of QL decomposition.

    Attributes:
        Q: Orthogonal/unitary factor (m x m, or m x n in economic mode)
        L: Lower trapezoidal factor (m x n, or n x n in economic mode)
    """
    Q: NDArray[np.inexact[Any]]
    L: NDArray[np.inexact[Any]]


def _reverse(arr: NDArray[Any]) -> NDArray[Any]:
    return arr[::-1, ::-1]


class QLDecomposition:
    """
    QL factorization held as the QR factorization of the reversed matrix.

    Shapes follow QRDecomposition: ``full=False`` only shrinks the factors
    of a tall matrix (Q m x n, L n x n).
    """

    def __init__(self, A: ArrayLike):
        arr = as_array(A)
        check_2d(arr, 'A')
        self._layout = layout_of(arr)
        self._qr = QRDecomposition(_reverse(arr))

    @property
    def shape(self) -> tuple[int, int]:
        return self._qr.shape

    @property
    def dtype(self) -> np.dtype:
        return self._qr.dtype

    def Q(self, full: bool = True) -> NDArray[np.inexact[Any]]:
        return restore_layout(_reverse(self._qr.Q(full)), self._layout)

    def L(self, full: bool = True) -> NDArray[np.inexact[Any]]:
        return restore_layout(_reverse(self._qr.R(full)), self._layout)

    def lprod(self, C: ArrayLike) -> NDArray[np.inexact[Any]]:
        """Q·C"""
        return self._left(C, self._qr.lprod)

    def tlprod(self, C: ArrayLike) -> NDArray[np.inexact[Any]]:
        """Qᴴ·C"""
        return self._left(C, self._qr.tlprod)

    def rprod(self, C: ArrayLike) -> NDArray[np.inexact[Any]]:
        """C·Q"""
        return self._right(C, self._qr.rprod)

    def trprod(self, C: ArrayLike) -> NDArray[np.inexact[Any]]:
        """C·Qᴴ"""
        return self._right(C, self._qr.trprod)

    @staticmethod
    def _left(C: ArrayLike, apply) -> NDArray[np.inexact[Any]]:
        c = as_array(C)
        layout = layout_of(c)
        out = np.flip(apply(np.flip(c, axis=0)), axis=0)
        return restore_layout(out, layout)

    @staticmethod
    def _right(C: ArrayLike, apply) -> NDArray[np.inexact[Any]]:
        c = as_array(C)
        layout = layout_of(c)
        axis = c.ndim - 1
        out = np.flip(apply(np.flip(c, axis=axis)), axis=axis)
        return restore_layout(out, layout)


def ql(A: ArrayLike, full: bool = True) -> QLResult:
    """
    QL decomposition A = Q·L.

    Args:
        A: Matrix to decompose (m x n)
        full: True for Q m x m and L m x n; False for the economic
            factors of a tall matrix

    Returns:
        QLResult with Q and L in the layout of A
    """
    decomposition = QLDecomposition(A)
    return QLResult(Q=decomposition.Q(full), L=decomposition.L(full))
