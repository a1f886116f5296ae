"""
Predicate reductions: all, any, which, hold.

The predicate is a unary callable applied element by element; when it is
omitted the predicate is "nonzero". For matrices an axis tag turns the
scalar answer into one boolean per column (axis 1) or per row (axis 2).
"""

import builtins
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.layout import restore_layout
from pydensela.core.tags import AxisLike, resolve_axis
from pydensela.core.validation import check_1d
from pydensela.elementwise._operand import mask, operand


Predicate = Callable[[Any], bool]


def all(x: ArrayLike, pred: Predicate | None = None, axis: AxisLike | None = None):
    """
    True when ``pred`` holds for every element.

    Args:
        x: Vector or matrix
        pred: Unary predicate (default: element is nonzero)
        axis: For matrices, reduce along an axis tag and return a
            boolean vector; ignored for vectors

    Returns:
        bool, or a boolean vector when a matrix axis is given. All of an
        empty container is True.
    """
    arr, layout = operand(x)
    m = mask(arr, pred)
    if axis is None or arr.ndim == 1:
        return builtins.bool(np.all(m))
    return np.all(m, axis=resolve_axis(axis, layout))


def any(x: ArrayLike, pred: Predicate | None = None, axis: AxisLike | None = None):
    """
    True when ``pred`` holds for at least one element.

    Same shape rules as ``all``; any of an empty container is False.
    """
    arr, layout = operand(x)
    m = mask(arr, pred)
    if axis is None or arr.ndim == 1:
        return builtins.bool(np.any(m))
    return np.any(m, axis=resolve_axis(axis, layout))


def which(x: ArrayLike, pred: Predicate | None = None) -> NDArray[np.intp]:
    """Indices of the vector elements where ``pred`` holds, in order."""
    arr, _ = operand(x)
    check_1d(arr, 'x')
    return np.flatnonzero(mask(arr, pred))


def hold(x: ArrayLike, pred: Predicate | None = None) -> NDArray[np.bool_]:
    """Boolean mask of ``pred`` with the shape and layout of x."""
    arr, layout = operand(x)
    return restore_layout(mask(arr, pred), layout)
