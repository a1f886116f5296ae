"""
max / min reductions.

Real and integer data use numpy's reductions with the identity of the
operator as ``initial``, so empty inputs reduce to -inf/+inf (or the
integer bounds) and NaN propagates. Complex data is ordered by magnitude,
with the phase angle as tiebreak; a NaN in either component of any element
makes the result complex NaN.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.tags import AxisLike, resolve_axis
from pydensela.elementwise._operand import operand


# === Identities ===

def _identity(dtype: np.dtype, largest: bool) -> Any:
    if dtype == np.bool_:
        return not largest
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        return info.min if largest else info.max
    if np.issubdtype(dtype, np.complexfloating):
        return dtype.type(0) if largest else dtype.type(complex(np.inf, 0.0))
    return -np.inf if largest else np.inf


# === Complex ordering ===

def _complex_extreme(v: NDArray[np.complexfloating[Any]], largest: bool) -> Any:
    if v.size == 0:
        return _identity(v.dtype, largest)
    if np.isnan(v.real).any() or np.isnan(v.imag).any():
        return v.dtype.type(complex(np.nan, np.nan))
    order = np.lexsort((np.angle(v), np.abs(v)))
    return v[order[-1] if largest else order[0]]


def _reduce(arr: NDArray[Any], axis: int | None, largest: bool) -> Any:
    if np.iscomplexobj(arr):
        if axis is None:
            return _complex_extreme(arr.ravel(), largest)
        out_len = arr.shape[1 - axis]
        out = np.empty(out_len, dtype=arr.dtype)
        for i in range(out_len):
            line = arr[:, i] if axis == 0 else arr[i, :]
            out[i] = _complex_extreme(line, largest)
        return out

    reducer = np.max if largest else np.min
    return reducer(arr, axis=axis, initial=_identity(arr.dtype, largest))


def _extreme(x: ArrayLike, axis: AxisLike | None, largest: bool):
    arr, layout = operand(x)
    if arr.ndim == 1:
        value = _reduce(arr, None, largest)
        if axis is None:
            return value
        return np.array([value], dtype=arr.dtype)
    if axis is None:
        return _reduce(arr, None, largest)
    return _reduce(arr, resolve_axis(axis, layout), largest)


# === Public API ===

def max(x: ArrayLike, axis: AxisLike | None = None):
    """
    Largest element of a vector or matrix.

    Args:
        x: Vector or matrix
        axis: For matrices, an axis tag; the result is then one value per
            column (axis 1) or per row (axis 2). For vectors an explicit
            axis returns a length-1 vector.

    Returns:
        Scalar, or a vector along the requested axis
    """
    return _extreme(x, axis, largest=True)


def min(x: ArrayLike, axis: AxisLike | None = None):
    """Smallest element of a vector or matrix. See ``max``."""
    return _extreme(x, axis, largest=False)
