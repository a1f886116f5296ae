"""
Shared operand handling for the elementwise and reduction family.

Unlike the LAPACK-backed operations, these kernels keep the caller's
element type: boolean and integer inputs stay boolean and integer.
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.exceptions import ValidationError
from pydensela.core.layout import Layout, as_array, layout_of
from pydensela.core.protocols import DenseOperand
from pydensela.core.validation import check_vector_or_matrix


def operand(x: ArrayLike | DenseOperand, name: str = 'x') -> tuple[NDArray[Any], Layout]:
    """Materialize a vector/matrix operand and read its layout."""
    arr = as_array(x)
    if arr.dtype == object:
        raise ValidationError(f"{name}: object arrays are not supported")
    check_vector_or_matrix(arr, name)
    return arr, layout_of(arr)


def writable(x: Any, name: str = 'x') -> NDArray[Any]:
    """The ndarray behind an in-place operation."""
    if not isinstance(x, np.ndarray):
        raise ValidationError(f"{name}: in-place operations need a numpy array, got {type(x).__name__}")
    if not x.flags.writeable:
        raise ValidationError(f"{name}: array is read-only")
    check_vector_or_matrix(x, name)
    return x


def apply(
    arr: NDArray[Any],
    func: Callable[[Any], Any],
    otype: type | None = None,
) -> NDArray[Any]:
    """
    Apply a unary callable to every element.

    numpy ufuncs are applied to the whole array; any other callable is
    called once per element. An empty array is returned as an empty copy.
    """
    if isinstance(func, np.ufunc):
        out = func(arr)
        return out if otype is None else np.asarray(out, dtype=otype)
    if arr.size == 0:
        return np.array(arr, dtype=otype if otype is not None else arr.dtype)
    otypes = [otype] if otype is not None else None
    return np.vectorize(func, otypes=otypes)(arr)


def mask(arr: NDArray[Any], pred: Callable[[Any], bool] | None) -> NDArray[np.bool_]:
    """Boolean mask of ``pred``; the default predicate is "nonzero"."""
    if pred is None:
        return arr != 0
    return apply(arr, pred, otype=bool)
