"""
Integer matrix powers.

A^k for k > 0 by binary exponentiation, the identity for k = 0, and
(A⁻¹)^|k| for k < 0.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.compute.linalg import inv
from pydensela.core.dispatch import adapt
from pydensela.core.validation import check_integer, check_square


def pow(A: ArrayLike, k: int) -> NDArray[np.inexact[Any]]:
    """
    Raise a square matrix to an integer power.

    Args:
        A: Square matrix
        k: Integer exponent (negative exponents invert A first)

    Returns:
        A^k in the layout of A

    Raises:
        ValidationError: If k is not an integer
        DimensionError: If A is not square
        SingularMatrixError: If k < 0 and A is singular
    """
    k = check_integer(k, 'k')
    handle = adapt(A, 'A')
    check_square(handle.data, 'A')
    n = handle.shape[0]

    if k == 0:
        return handle.restore(np.eye(n, dtype=handle.dtype))

    base = inv(handle.data) if k < 0 else handle.data
    k = abs(k)

    result = None
    while k:
        if k & 1:
            result = base.copy() if result is None else result @ base
        k >>= 1
        if k:
            base = base @ base
    return handle.restore(result)


matrix_power = pow
