"""
Numerical rank.
"""

import numpy as np
from numpy.typing import ArrayLike

from pydensela.core.compute.linalg import singular_values
from pydensela.core.compute.precision import eps_of
from pydensela.core.layout import as_array


def rank(A: ArrayLike, tol: float | None = None) -> int:
    """
    Number of singular values of A greater than ``tol``.

    The default tolerance is max(m, n)·eps(σ_max), where eps(x) is the
    distance from x to the next larger floating-point number.
    """
    A = as_array(A)
    s = singular_values(A)
    if s.size == 0:
        return 0
    if tol is None:
        tol = max(A.shape) * eps_of(s.max(), s.dtype)
    return int(np.count_nonzero(s > tol))
