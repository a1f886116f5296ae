"""
Shape-level rearrangements: rot90, tril, triu.

All of them return new arrays in the layout of the input. The
``*_inplace`` variants overwrite their argument once the result is
complete.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.exceptions import DimensionError
from pydensela.core.layout import Layout, convert_to
from pydensela.core.validation import check_2d, check_integer
from pydensela.elementwise._operand import operand, writable


# === Rotation ===

def _rotated(arr: NDArray[Any], k: int) -> NDArray[Any]:
    if arr.ndim == 1:
        # a vector has no orientation: quarter turns 2 and 3 reverse it
        return arr[::-1] if k % 4 in (2, 3) else arr
    return np.rot90(arr, k % 4)


def rot90(x: ArrayLike, k: int = 1) -> NDArray[Any]:
    """
    Rotate a matrix by k quarter turns counterclockwise.

    Any integer k is accepted and taken modulo 4; k ≡ 0 returns a copy.
    Vectors are reversed for k ≡ 2, 3 and copied for k ≡ 0, 1.
    """
    k = check_integer(k, 'k')
    arr, layout = operand(x)
    return convert_to(_rotated(arr, k), layout)


def rot90_inplace(x: NDArray[Any], k: int = 1) -> None:
    """
    Rotate x in place.

    Raises:
        DimensionError: For an odd number of quarter turns of a
            non-square matrix
    """
    k = check_integer(k, 'k')
    arr = writable(x)
    if arr.ndim == 2 and k % 2 == 1 and arr.shape[0] != arr.shape[1]:
        raise DimensionError(
            f"rot90_inplace: an odd rotation of a {arr.shape[0]} x {arr.shape[1]} matrix changes its shape"
        )
    arr[...] = _rotated(arr, k).copy()


# === Triangles ===

def _triangle(A: ArrayLike, k: int, lower: bool) -> tuple[NDArray[Any], Layout]:
    k = check_integer(k, 'k')
    arr, layout = operand(A, 'A')
    check_2d(arr, 'A')
    part = np.tril(arr, k) if lower else np.triu(arr, k)
    return part, layout


def tril(A: ArrayLike, k: int = 0) -> NDArray[Any]:
    """
    Lower triangle of A: entries above the k-th diagonal are zeroed.

    k = 0 keeps the main diagonal, k > 0 also keeps k super-diagonals,
    k < 0 drops the main diagonal and -k-1 sub-diagonals.
    """
    part, layout = _triangle(A, k, lower=True)
    return convert_to(part, layout)


def triu(A: ArrayLike, k: int = 0) -> NDArray[Any]:
    """Upper triangle of A: entries below the k-th diagonal are zeroed."""
    part, layout = _triangle(A, k, lower=False)
    return convert_to(part, layout)


def tril_inplace(A: NDArray[Any], k: int = 0) -> None:
    arr = writable(A, 'A')
    part, _ = _triangle(arr, k, lower=True)
    arr[...] = part


def triu_inplace(A: NDArray[Any], k: int = 0) -> None:
    arr = writable(A, 'A')
    part, _ = _triangle(arr, k, lower=False)
    arr[...] = part
