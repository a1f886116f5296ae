"""
Sums, cumulative sums and inner products.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.exceptions import DimensionError
from pydensela.core.layout import Layout, layout_of, restore_layout
from pydensela.core.tags import Axis, AxisLike, resolve_axis
from pydensela.core.validation import check_same_shape
from pydensela.elementwise._operand import operand, writable


def sum(x: ArrayLike, axis: AxisLike | None = None):
    """
    Sum of a vector, or column/row sums of a matrix.

    Matrices default to axis 1 (one sum per column). For vectors an
    explicit axis returns a length-1 vector instead of a scalar.
    """
    arr, layout = operand(x)
    if arr.ndim == 1:
        total = arr.sum()
        return total if axis is None else np.array([total], dtype=total.dtype)
    return arr.sum(axis=resolve_axis(Axis.ONE if axis is None else axis, layout))


def sum_all(x: ArrayLike):
    """Sum of every element; 0 for an empty container."""
    arr, _ = operand(x)
    return arr.sum()


def _cumsum(arr: NDArray[Any], axis: AxisLike | None, layout: Layout) -> NDArray[Any]:
    if arr.ndim == 1:
        return np.cumsum(arr)
    return np.cumsum(arr, axis=resolve_axis(Axis.ONE if axis is None else axis, layout))


def cumsum(x: ArrayLike, axis: AxisLike | None = None) -> NDArray[Any]:
    """
    Cumulative sum with the shape (and layout) of x.

    Matrices accumulate down each column by default (axis 1); axis 2
    accumulates along each row.
    """
    arr, layout = operand(x)
    return restore_layout(_cumsum(arr, axis, layout), layout)


def cumsum_inplace(x: NDArray[Any], axis: AxisLike | None = None) -> None:
    """Cumulative sum written back into x."""
    arr = writable(x)
    arr[...] = _cumsum(arr, axis, layout_of(arr))


def dot(u: ArrayLike, v: ArrayLike, axis: AxisLike | None = None):
    """
    Inner products without conjugation.

    For two vectors, the scalar Σ u_i·v_i. For two matrices of the same
    shape, the vector of column-wise (axis 1, the default) or row-wise
    (axis 2) inner products.

    Raises:
        DimensionError: On length or shape mismatch, or when a vector is
            paired with a matrix
    """
    a, layout = operand(u, 'u')
    b, _ = operand(v, 'v')
    if a.ndim != b.ndim:
        raise DimensionError(
            f"dot: operands must both be vectors or both be matrices, got {a.ndim}D and {b.ndim}D"
        )
    if a.ndim == 1:
        if a.shape[0] != b.shape[0]:
            raise DimensionError(f"dot: vector lengths differ: {a.shape[0]} and {b.shape[0]}")
        return np.dot(a, b)
    check_same_shape(a, b, ('u', 'v'))
    return np.sum(a * b, axis=resolve_axis(Axis.ONE if axis is None else axis, layout))
