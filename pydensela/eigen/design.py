"""
Eigenproblem design.

EigenDesign takes the caller's operand(s) and turns them into everything
the backend needs: column-major working arrays of a common LAPACK dtype,
the structure that picks the driver family, the designated triangle for
symmetric/Hermitian input, and which eigenvectors were requested.

All shape, layout and structure checks happen here. Backends trust the
design.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.dispatch import (
    ElementKind,
    SELF_ADJOINT,
    Structure,
    adapt,
    classify,
    element_kind,
    promote,
)
from pydensela.core.exceptions import DimensionError, ValidationError
from pydensela.core.layout import Layout, as_array, check_same_layout
from pydensela.core.protocols import DenseOperand
from pydensela.core.validation import check_square


class Side(Enum):
    """Which eigenvectors to compute."""
    NONE = 'none'
    LEFT = 'left'
    RIGHT = 'right'
    BOTH = 'both'


def as_side(side: Side | str) -> Side:
    if isinstance(side, Side):
        return side
    try:
        return Side(side)
    except ValueError:
        raise ValidationError(
            f"side: expected 'none', 'left', 'right' or 'both', got {side!r}"
        ) from None


@dataclass(frozen=True)
class EigenDesign:
    """
    Validated eigenproblem specification.

    Construction:
        EigenDesign.build(A)                       # standard problem
        EigenDesign.build(A, B)                    # generalized problem
        EigenDesign.build(Symmetric(A), side='right')
    """
    _a: NDArray[np.inexact[Any]]
    _b: NDArray[np.inexact[Any]] | None
    _structure: Structure
    _lower: bool
    _layout: Layout
    _side: Side
    _want_eigvals: bool

    @classmethod
    def build(
        cls,
        A: ArrayLike | DenseOperand,
        B: ArrayLike | DenseOperand | None = None,
        *,
        side: Side | str = Side.BOTH,
        want_eigvals: bool = True,
    ) -> EigenDesign:
        """
        Build an EigenDesign.

        Symmetric/Hermitian adaptors select the structured drivers; only
        the designated triangle of A is read. For the generalized
        structured problem B is read through the same triangle, unless it
        is itself an adaptor over the other triangle, in which case it is
        materialized.

        Raises:
            DimensionError: If A (or B) is not square, or orders differ
            LayoutError: If A and B have different definite layouts
            ValidationError: For a Symmetric adaptor over complex data
        """
        side = as_side(side)
        # Lazy operands are evaluated here, once; adaptors keep their storage
        if getattr(A, 'structure', None) not in SELF_ADJOINT:
            A = as_array(A)
        traits_a = classify(A)
        structure = traits_a.structure
        structured = structure is not Structure.GENERAL
        lower = bool(traits_a.lower) if structured else True

        a_raw = as_array(A.data) if structured else A
        check_square(a_raw, 'A')

        b_same_triangle = False
        if B is not None:
            b_same_triangle = (
                structured
                and getattr(B, 'structure', None) in SELF_ADJOINT
                and bool(B.lower) == lower
            )
            if not b_same_triangle:
                B = as_array(B)
            b_raw = as_array(B.data) if b_same_triangle else B
            check_square(b_raw, 'B')
            if b_raw.shape != a_raw.shape:
                raise DimensionError(
                    f"A and B must have the same order: got {a_raw.shape} and {b_raw.shape}"
                )
            check_same_layout(a_raw, b_raw, ('A', 'B'))

        dtype = promote(a_raw.dtype) if B is None else promote(a_raw.dtype, b_raw.dtype)
        if structure is Structure.SYMMETRIC and element_kind(dtype) is ElementKind.COMPLEX:
            raise ValidationError(
                "Symmetric adaptor over complex data is not supported; "
                "use Hermitian for complex self-adjoint matrices"
            )

        a = adapt(A, 'A', dtype=dtype, keep_structure=True).data
        b = None
        if B is not None:
            b = adapt(B, 'B', dtype=dtype, keep_structure=b_same_triangle).data

        return cls(
            _a=a,
            _b=b,
            _structure=structure,
            _lower=lower,
            _layout=traits_a.layout,
            _side=side,
            _want_eigvals=bool(want_eigvals),
        )

    # === Properties ===

    @property
    def A(self) -> NDArray[np.inexact[Any]]:
        """Column-major working copy of A."""
        return self._a

    @property
    def B(self) -> NDArray[np.inexact[Any]] | None:
        """Column-major working copy of B, or None for the standard problem."""
        return self._b

    @property
    def n(self) -> int:
        return self._a.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._a.dtype

    @property
    def kind(self) -> ElementKind:
        return element_kind(self._a.dtype)

    @property
    def structure(self) -> Structure:
        return self._structure

    @property
    def is_structured(self) -> bool:
        """True for symmetric and Hermitian problems."""
        return self._structure is not Structure.GENERAL

    @property
    def lower(self) -> bool:
        return self._lower

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def generalized(self) -> bool:
        return self._b is not None

    @property
    def side(self) -> Side:
        return self._side

    @property
    def want_left(self) -> bool:
        return self._side in (Side.LEFT, Side.BOTH)

    @property
    def want_right(self) -> bool:
        return self._side in (Side.RIGHT, Side.BOTH)

    @property
    def want_vectors(self) -> bool:
        return self._side is not Side.NONE

    @property
    def want_eigvals(self) -> bool:
        return self._want_eigvals
