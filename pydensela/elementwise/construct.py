"""
Constructors and elementwise maps: eye, transform, element_pow.
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pydensela.core.exceptions import ValidationError
from pydensela.core.layout import Layout, restore_layout
from pydensela.core.validation import check_integer, check_same_shape
from pydensela.elementwise._operand import apply, operand, writable


def eye(
    n: int,
    m: int | None = None,
    dtype: DTypeLike = np.float64,
    layout: Layout = Layout.ROW_MAJOR,
) -> NDArray[Any]:
    """
    Identity matrix, or the rectangular n x m identity.

    Args:
        n: Number of rows
        m: Number of columns (default: n)
        dtype: Element type (default: float64)
        layout: Storage layout of the result

    Raises:
        ValidationError: If n or m is not a non-negative integer
    """
    rows = check_integer(n, 'n')
    cols = rows if m is None else check_integer(m, 'm')
    if rows < 0 or cols < 0:
        raise ValidationError(f"eye: sizes must be non-negative, got {rows} x {cols}")
    order = 'F' if layout is Layout.COLUMN_MAJOR else 'C'
    return np.eye(rows, cols, dtype=dtype, order=order)


def transform(x: ArrayLike, f: Callable[[Any], Any]) -> NDArray[Any]:
    """
    Apply a unary callable to each element.

    The result has the shape and layout of x; its element type is whatever
    ``f`` returns.
    """
    arr, layout = operand(x)
    return restore_layout(apply(arr, f), layout)


def transform_inplace(x: NDArray[Any], f: Callable[[Any], Any]) -> None:
    """Apply ``f`` to each element of x, writing the results back into x."""
    arr = writable(x)
    arr[...] = apply(arr, f)


def element_pow(x: ArrayLike, p: ArrayLike) -> NDArray[Any]:
    """
    Elementwise power x_i ** p_i.

    Args:
        x: Vector or matrix
        p: Scalar exponent, or an exponent container with the shape of x

    Integer bases raised to negative exponents are computed in floating
    point.
    """
    arr, layout = operand(x)
    exponent = np.asarray(p)
    if exponent.ndim != 0:
        check_same_shape(arr, exponent, ('x', 'p'))
    if np.issubdtype(arr.dtype, np.integer) and np.any(exponent < 0):
        arr = arr.astype(np.float64)
    return restore_layout(np.power(arr, exponent), layout)
