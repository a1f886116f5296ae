"""
Cholesky factorization via ``?potrf``.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.dispatch import ElementKind, SELF_ADJOINT, Structure, adapt, lapack_routines
from pydensela.core.exceptions import NotPositiveDefiniteError, ValidationError
from pydensela.core.compute.lapack import call_lapack, routine_name
from pydensela.core.protocols import DenseOperand
from pydensela.core.validation import check_square


def cholesky(A: ArrayLike | DenseOperand, lower: bool = True) -> NDArray[np.inexact[Any]]:
    """
    Cholesky factor of a symmetric/Hermitian positive definite matrix.

    Only one triangle of A is read: the one named by ``lower`` for plain
    arrays, the designated triangle for Symmetric and Hermitian adaptors
    (whose own ``lower`` then decides the factor returned).

    Args:
        A: Square matrix or Symmetric/Hermitian adaptor
        lower: True for L with A = L·Lᴴ, False for U with A = Uᴴ·U

    Returns:
        The triangular factor, other triangle zeroed, in the layout of A

    Raises:
        NotPositiveDefiniteError: If a leading minor of A is not positive
        ValidationError: For a Symmetric adaptor over complex data
    """
    structure = getattr(A, 'structure', Structure.GENERAL)
    if structure in SELF_ADJOINT:
        lower = bool(A.lower)
    handle = adapt(A, 'A', keep_structure=True)
    check_square(handle.data, 'A')
    if structure is Structure.SYMMETRIC and handle.kind is ElementKind.COMPLEX:
        raise ValidationError(
            "Symmetric adaptor over complex data is not supported; "
            "use Hermitian for complex self-adjoint matrices"
        )
    if handle.shape[0] == 0:
        return handle.restore(handle.data.copy())

    potrf, = lapack_routines('potrf', handle.data)
    c, info = call_lapack(potrf, 'potrf', handle.data, lower=int(lower), clean=1)
    if info > 0:
        raise NotPositiveDefiniteError(
            f"A is not positive definite: leading minor of order {int(info)} is not positive",
            matrix_name='A',
            minor_order=int(info),
            routine=routine_name(potrf, 'potrf'),
            info=int(info),
        )
    return handle.restore(c)
