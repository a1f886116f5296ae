"""
Storage layouts and the layout-restoring half of the adapter.

numpy arrays carry their layout in their memory order: C order is
row-major, Fortran order is column-major. LAPACK wants column-major input;
callers get their results back in the layout of the operand they passed.

Design principles:
    - The layout of an operand is read, never assumed
    - Copies happen only when the memory order has to change
    - Vectors and single-row/column matrices have no layout to preserve
"""

from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.exceptions import LayoutError
from pydensela.core.protocols import DenseOperand


class Layout(Enum):
    """Storage order of a matrix."""
    ROW_MAJOR = 'row_major'
    COLUMN_MAJOR = 'column_major'


def as_array(operand: ArrayLike | DenseOperand) -> NDArray[Any]:
    """
    Materialize an operand as a numpy array without changing its layout.

    ndarrays pass through untouched, DenseOperand objects (adaptors, lazy
    expressions) are evaluated via a single ``to_dense()`` call, and
    anything else goes through ``np.asarray``. A declared layout is carried
    into the memory order of the result, so ``layout_of`` gives the same
    answer for the array as for the operand. Operations materialize once
    and work on the array from then on.
    """
    if isinstance(operand, np.ndarray):
        return operand
    if isinstance(operand, DenseOperand):
        dense = np.asarray(operand.to_dense())
        declared = getattr(operand, 'layout', None)
        if isinstance(declared, Layout):
            return restore_layout(dense, declared)
        return dense
    return np.asarray(operand)


def layout_of(operand: ArrayLike | DenseOperand) -> Layout:
    """
    Storage layout of an operand.

    Objects that expose a ``layout`` attribute of type Layout report it
    directly. For arrays, contiguity flags decide; non-contiguous views are
    classified by which axis has the larger stride. Arrays that are both
    C- and F-contiguous (vectors, 1 x n, n x 1) report ROW_MAJOR, numpy's
    default order.
    """
    declared = getattr(operand, 'layout', None)
    if isinstance(declared, Layout):
        return declared

    arr = operand if isinstance(operand, np.ndarray) else as_array(operand)
    if arr.ndim < 2 or arr.flags.c_contiguous:
        return Layout.ROW_MAJOR
    if arr.flags.f_contiguous:
        return Layout.COLUMN_MAJOR
    if abs(arr.strides[0]) >= abs(arr.strides[1]):
        return Layout.ROW_MAJOR
    return Layout.COLUMN_MAJOR


def is_layout_ambiguous(arr: NDArray[Any]) -> bool:
    """True when the array is simultaneously C- and F-contiguous."""
    return arr.ndim < 2 or (arr.flags.c_contiguous and arr.flags.f_contiguous)


def check_same_layout(
    a: NDArray[Any],
    b: NDArray[Any],
    names: tuple[str, str],
) -> None:
    """
    Verify two matrix operands share a storage layout.

    Operands whose layout is ambiguous are compatible with either layout.

    Raises:
        LayoutError: If both layouts are definite and they differ
    """
    if is_layout_ambiguous(a) or is_layout_ambiguous(b):
        return
    la, lb = layout_of(a), layout_of(b)
    if la is not lb:
        raise LayoutError(
            f"Inconsistent layouts: {names[0]} is {la.value}, {names[1]} is {lb.value}"
        )


def restore_layout(result: NDArray[Any], layout: Layout) -> NDArray[Any]:
    """
    Return ``result`` in the requested layout.

    No copy is made when the result already has that memory order; in
    particular a column-major LAPACK output handed back to a column-major
    caller is returned as is.
    """
    if result.ndim < 2:
        return result
    if layout is Layout.COLUMN_MAJOR:
        return np.asfortranarray(result)
    return np.ascontiguousarray(result)


def convert_to(operand: ArrayLike | DenseOperand, layout: Layout) -> NDArray[Any]:
    """Copy of ``operand`` in the given layout, with the same values."""
    arr = as_array(operand)
    order = 'F' if layout is Layout.COLUMN_MAJOR else 'C'
    return np.array(arr, order=order, copy=True)
