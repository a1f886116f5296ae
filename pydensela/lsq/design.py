"""
Least-squares design.

Validates the pair (A, b) once: A is a matrix, b a vector or a matrix of
right-hand sides with as many rows as A. Both are converted to a common
LAPACK dtype.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.dispatch import adapt, promote
from pydensela.core.exceptions import DimensionError
from pydensela.core.layout import Layout, as_array, layout_of
from pydensela.core.validation import check_2d, check_array, check_vector_or_matrix


@dataclass(frozen=True)
class LeastSquaresDesign:
    """
    Least-squares problem min ‖A·x − b‖₂.

    Construction:
        LeastSquaresDesign.build(A, b)
    """
    _A: NDArray[np.inexact[Any]]
    _b: NDArray[np.inexact[Any]]
    _layout: Layout

    @classmethod
    def build(cls, A: ArrayLike, b: ArrayLike) -> LeastSquaresDesign:
        """
        Build and validate a least-squares design.

        Raises:
            ValidationError: For non-numeric or non-finite input
            DimensionError: If A is not 2D or b does not have A's row count
        """
        A = as_array(A)
        check_2d(A, 'A')
        b_arr = check_array(as_array(b), 'b')
        check_vector_or_matrix(b_arr, 'b')
        if b_arr.shape[0] != A.shape[0]:
            raise DimensionError(
                f"A and b must have the same number of rows: got {A.shape[0]} and {b_arr.shape[0]}"
            )

        dtype = promote(A.dtype, b_arr.dtype)
        a = adapt(A, 'A', dtype=dtype).data
        b_work = adapt(b_arr, 'b', dtype=dtype).data
        return cls(_A=a, _b=b_work, _layout=layout_of(A))

    # === Properties ===

    @property
    def A(self) -> NDArray[np.inexact[Any]]:
        return self._A

    @property
    def b(self) -> NDArray[np.inexact[Any]]:
        return self._b

    @property
    def m(self) -> int:
        """Number of equations."""
        return self._A.shape[0]

    @property
    def n(self) -> int:
        """Number of unknowns."""
        return self._A.shape[1]

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def multiple_rhs(self) -> bool:
        return self._b.ndim == 2
