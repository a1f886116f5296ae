"""
Operand classification and driver selection.

Every LAPACK-backed operation starts here: the operand is classified by
element kind, precision, layout and structure, converted to a column-major
working array, and the matching LAPACK variant is looked up.

Design principles:
    - Real operands use the real drivers, complex operands the complex ones
    - Mixed real/complex operand sets are promoted to a common type
    - Symmetric/Hermitian operands hand LAPACK only the designated triangle
    - The handle knows how to put results back into the caller's layout
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg.lapack import get_lapack_funcs

from pydensela.core.exceptions import ValidationError
from pydensela.core.layout import Layout, as_array, layout_of, restore_layout
from pydensela.core.protocols import DenseOperand
from pydensela.core.validation import check_array, check_finite


class ElementKind(Enum):
    """Whether an operand's elements are real or complex."""
    REAL = 'real'
    COMPLEX = 'complex'


class Structure(Enum):
    """Structural tag of a matrix operand."""
    GENERAL = 'general'
    SYMMETRIC = 'symmetric'
    HERMITIAN = 'hermitian'
    TRIANGULAR = 'triangular'


# LAPACK prefix per working dtype
_PREFIX = {
    np.dtype(np.float32): 's',
    np.dtype(np.float64): 'd',
    np.dtype(np.complex64): 'c',
    np.dtype(np.complex128): 'z',
}


def element_kind(dtype: np.dtype | type) -> ElementKind:
    """Element kind of a dtype."""
    if np.issubdtype(np.dtype(dtype), np.complexfloating):
        return ElementKind.COMPLEX
    return ElementKind.REAL


def promote(*dtypes: np.dtype | type) -> np.dtype:
    """
    Common LAPACK working dtype for a set of operand dtypes.

    Integers and booleans count as float64; the result is always one of
    float32, float64, complex64, complex128.
    """
    working = []
    for dt in dtypes:
        dt = np.dtype(dt)
        if not np.issubdtype(dt, np.inexact):
            dt = np.dtype(np.float64)
        working.append(dt)
    result = np.result_type(*working)
    if result not in _PREFIX:
        result = np.dtype(np.complex128) if np.issubdtype(result, np.complexfloating) else np.dtype(np.float64)
    return result


@dataclass(frozen=True)
class OperandTraits:
    """
    Classification of a single operand.

    Attributes:
        dtype: Working dtype after promotion to a LAPACK type
        kind: Real or complex
        layout: Caller's storage layout
        structure: General, symmetric, Hermitian or triangular
        lower: Designated triangle for structured operands, else None
        shape: Operand shape
    """
    dtype: np.dtype
    kind: ElementKind
    layout: Layout
    structure: Structure
    lower: bool | None
    shape: tuple[int, ...]

    @property
    def prefix(self) -> str:
        """LAPACK precision prefix: 's', 'd', 'c' or 'z'."""
        return _PREFIX[self.dtype]

    @property
    def is_square(self) -> bool:
        return len(self.shape) == 2 and self.shape[0] == self.shape[1]


# Structures whose raw storage LAPACK reads through one triangle
SELF_ADJOINT = (Structure.SYMMETRIC, Structure.HERMITIAN)


def classify(operand: ArrayLike | DenseOperand) -> OperandTraits:
    """
    Classify an operand without copying it.

    Adaptors are classified from their raw storage. Any other DenseOperand
    is evaluated once; callers that already hold the materialized array
    should pass that instead.
    """
    structure = getattr(operand, 'structure', Structure.GENERAL)
    raw = getattr(operand, 'data', None) if structure is not Structure.GENERAL else None
    if raw is not None:
        arr, layout = np.asarray(raw), layout_of(operand)
    else:
        arr = as_array(operand)
        layout = layout_of(arr)
    dtype = promote(arr.dtype)
    return OperandTraits(
        dtype=dtype,
        kind=element_kind(dtype),
        layout=layout,
        structure=structure,
        lower=getattr(operand, 'lower', None) if structure is not Structure.GENERAL else None,
        shape=arr.shape,
    )


@dataclass(frozen=True)
class ColumnMajorHandle:
    """
    Column-major working view of an operand.

    Attributes:
        data: Fortran-ordered array of a LAPACK dtype. For symmetric and
            Hermitian operands this is the raw storage; only the triangle
            named by ``traits.lower`` is meaningful.
        traits: Classification of the original operand
    """
    data: NDArray[np.inexact[Any]]
    traits: OperandTraits

    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype

    @property
    def kind(self) -> ElementKind:
        return element_kind(self.data.dtype)

    @property
    def layout(self) -> Layout:
        return self.traits.layout

    @property
    def shape(self) -> tuple[int, ...]:
        return self.data.shape

    def restore(self, result: NDArray[Any]) -> NDArray[Any]:
        """Return a result matrix in the caller's layout."""
        return restore_layout(result, self.traits.layout)


def adapt(
    operand: ArrayLike | DenseOperand,
    name: str,
    *,
    dtype: np.dtype | type | None = None,
    keep_structure: bool = False,
    finite: bool = True,
) -> ColumnMajorHandle:
    """
    Build the column-major working handle for an operand.

    Args:
        operand: Array-like or DenseOperand
        name: Parameter name for error messages
        dtype: Working dtype to promote to (defaults to the operand's own
            LAPACK dtype)
        keep_structure: For symmetric/Hermitian operands, pass the raw
            storage through so LAPACK reads only the designated triangle.
            When False every operand is materialized densely.
        finite: Reject NaN/Inf input

    Returns:
        ColumnMajorHandle whose ``data`` is Fortran-ordered. A copy is made
        only when the memory order or dtype has to change.
    """
    structure = getattr(operand, 'structure', Structure.GENERAL)
    if structure is Structure.GENERAL:
        operand = as_array(operand)
    traits = classify(operand)
    keep = keep_structure and structure in SELF_ADJOINT
    raw = operand.data if keep else as_array(operand)

    arr = check_array(raw, name)
    if dtype is not None:
        arr = arr.astype(promote(arr.dtype, dtype), copy=False)
    if finite:
        # LAPACK never reads the other triangle of structured storage
        if keep:
            check_finite(np.tril(arr) if traits.lower else np.triu(arr), name)
        else:
            check_finite(arr, name)

    return ColumnMajorHandle(data=np.asfortranarray(arr), traits=traits)


def lapack_routines(
    names: str | tuple[str, ...],
    *arrays: NDArray[Any],
    dtype: np.dtype | type | None = None,
) -> tuple[Callable[..., Any], ...]:
    """
    LAPACK wrappers matching the common type of ``arrays``.

    A single name returns a 1-tuple, so callers always unpack.
    """
    if isinstance(names, str):
        names = (names,)
    funcs = get_lapack_funcs(names, arrays, dtype=dtype)
    if not isinstance(funcs, (list, tuple)):
        funcs = (funcs,)
    return tuple(funcs)


def structured_driver(kind: ElementKind, generalized: bool) -> str:
    """Unprefixed name of the symmetric/Hermitian eigen driver."""
    if kind is ElementKind.COMPLEX:
        return 'hegv' if generalized else 'heev'
    return 'sygv' if generalized else 'syev'


def orthogonal_routine(kind: ElementKind, action: str) -> str:
    """
    Unprefixed name of the routine that builds or applies Q.

    ``action`` is 'gqr' (form Q) or 'mqr' (multiply by Q).
    """
    if action not in ('gqr', 'mqr'):
        raise ValidationError(f"action: expected 'gqr' or 'mqr', got {action!r}")
    return ('un' if kind is ElementKind.COMPLEX else 'or') + action


def conjugate_transpose_flag(kind: ElementKind) -> str:
    """LAPACK ``trans`` flag for Q^H: 'C' for complex, 'T' for real."""
    return 'C' if kind is ElementKind.COMPLEX else 'T'
