"""
Structured matrix adaptors.

An adaptor wraps a square dense array and declares how it should be read:
as a symmetric or Hermitian matrix stored in one triangle, or as a
triangular matrix. The eigen orchestrator dispatches on the adaptor type;
every other operation sees the adaptor through ``to_dense()``.

Only the designated triangle of the wrapped array is ever consulted, so
the other triangle may hold anything (including garbage or zeros).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.dispatch import Structure
from pydensela.core.layout import Layout, layout_of, restore_layout
from pydensela.core.validation import check_square


def _square(data: ArrayLike, name: str) -> NDArray[Any]:
    arr = np.asarray(data)
    check_square(arr, name)
    return arr


def _triangle(arr: NDArray[Any], lower: bool) -> NDArray[Any]:
    return np.tril(arr) if lower else np.triu(arr)


@dataclass(frozen=True, eq=False)
class Symmetric:
    """
    Symmetric matrix stored in its lower (default) or upper triangle.

    Attributes:
        data: Square array holding the designated triangle
        lower: True to read the lower triangle, False for the upper
    """
    data: NDArray[Any]
    lower: bool = True

    structure = Structure.SYMMETRIC

    def __post_init__(self):
        object.__setattr__(self, 'data', _square(self.data, 'Symmetric'))

    @property
    def layout(self) -> Layout:
        return layout_of(self.data)

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    def to_dense(self) -> NDArray[Any]:
        tri = _triangle(self.data, self.lower)
        dense = tri + tri.T - np.diag(np.diag(tri))
        return restore_layout(dense, self.layout)


@dataclass(frozen=True, eq=False)
class Hermitian:
    """
    Hermitian matrix stored in its lower (default) or upper triangle.

    The imaginary part of the diagonal is ignored, as LAPACK does.

    Attributes:
        data: Square array holding the designated triangle
        lower: True to read the lower triangle, False for the upper
    """
    data: NDArray[Any]
    lower: bool = True

    structure = Structure.HERMITIAN

    def __post_init__(self):
        object.__setattr__(self, 'data', _square(self.data, 'Hermitian'))

    @property
    def layout(self) -> Layout:
        return layout_of(self.data)

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    def to_dense(self) -> NDArray[Any]:
        tri = _triangle(self.data, self.lower)
        dense = tri + tri.conj().T - np.diag(np.diag(tri))
        if np.iscomplexobj(dense):
            idx = np.arange(dense.shape[0])
            dense[idx, idx] = dense[idx, idx].real
        return restore_layout(dense, self.layout)


@dataclass(frozen=True, eq=False)
class Triangular:
    """
    Triangular view of a square matrix.

    Attributes:
        data: Square array holding the triangle
        lower: True for lower triangular, False for upper
        unit: Treat the diagonal as all ones without reading it
    """
    data: NDArray[Any]
    lower: bool = True
    unit: bool = False

    structure = Structure.TRIANGULAR

    def __post_init__(self):
        object.__setattr__(self, 'data', _square(self.data, 'Triangular'))

    @property
    def layout(self) -> Layout:
        return layout_of(self.data)

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    def to_dense(self) -> NDArray[Any]:
        dense = _triangle(self.data, self.lower)
        if self.unit:
            np.fill_diagonal(dense, 1)
        return restore_layout(dense, self.layout)
