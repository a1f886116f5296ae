"""
Eigenvalue selection predicates for QZ reordering.

Each region of the complex plane has a real and a complex variant. The real
variant receives the eigenvalue in the (alphar, alphai, beta) form of the
real drivers; the complex variant receives complex (alpha, beta). Both are
vectorized over all eigenvalues at once and return a boolean mask.

The predicates are registered in a dispatch table keyed by
(ElementKind, Selection); ``select`` is the only lookup.
"""

from enum import Enum
from typing import Any, Callable, Union

import numpy as np
from numpy.typing import NDArray

from pydensela.core.dispatch import ElementKind
from pydensela.core.exceptions import ValidationError


class Selection(Enum):
    """Region of the complex plane whose eigenvalues lead the Schur form."""
    ALL = 'all'
    LHP = 'lhp'    # left half plane, Re(λ) < 0
    RHP = 'rhp'    # right half plane, Re(λ) > 0
    UDI = 'udi'    # interior of the unit disk, |λ| < 1
    UDO = 'udo'    # exterior of the unit disk, |λ| >= 1


SelectionLike = Union[Selection, str]

Mask = NDArray[np.bool_]


def as_selection(selection: SelectionLike) -> Selection:
    if isinstance(selection, Selection):
        return selection
    try:
        return Selection(str(selection).lower())
    except ValueError:
        raise ValidationError(
            f"selection: expected one of {[s.value for s in Selection]}, got {selection!r}"
        ) from None


def _eps(beta: NDArray[Any]) -> float:
    return float(np.finfo(beta.dtype).eps)


# === Real variants: (alphar, alphai, beta) ===

def lhp_real(alphar: NDArray[Any], alphai: NDArray[Any], beta: NDArray[Any]) -> Mask:
    """Re(λ) < 0, with beta safely away from zero relative to alphar."""
    opposite = ((alphar > 0) & (beta < 0)) | ((alphar < 0) & (beta > 0))
    return opposite & (np.abs(beta) > np.abs(alphar) * _eps(beta))


def rhp_real(alphar: NDArray[Any], alphai: NDArray[Any], beta: NDArray[Any]) -> Mask:
    """Re(λ) > 0, with beta safely away from zero relative to alphar."""
    same = ((alphar > 0) & (beta > 0)) | ((alphar < 0) & (beta < 0))
    return same & (np.abs(beta) > np.abs(alphar) * _eps(beta))


def udi_real(alphar: NDArray[Any], alphai: NDArray[Any], beta: NDArray[Any]) -> Mask:
    """|λ| < 1"""
    return np.hypot(alphar, alphai) < np.abs(beta)


def udo_real(alphar: NDArray[Any], alphai: NDArray[Any], beta: NDArray[Any]) -> Mask:
    """|λ| >= 1 (boundary included)"""
    return np.hypot(alphar, alphai) >= np.abs(beta)


# === Complex variants: (alpha, beta) ===

def lhp_complex(alpha: NDArray[Any], beta: NDArray[Any]) -> Mask:
    """Re(λ) < 0 with beta != 0"""
    out = np.zeros(alpha.shape, dtype=bool)
    nonzero = np.abs(beta) != 0
    out[nonzero] = np.real(alpha[nonzero] / beta[nonzero]) < 0
    return out


def rhp_complex(alpha: NDArray[Any], beta: NDArray[Any]) -> Mask:
    """Re(λ) > 0 with beta != 0"""
    out = np.zeros(alpha.shape, dtype=bool)
    nonzero = np.abs(beta) != 0
    out[nonzero] = np.real(alpha[nonzero] / beta[nonzero]) > 0
    return out


def udi_complex(alpha: NDArray[Any], beta: NDArray[Any]) -> Mask:
    """|λ| < 1"""
    return np.abs(alpha) < np.abs(beta)


def udo_complex(alpha: NDArray[Any], beta: NDArray[Any]) -> Mask:
    """|λ| >= 1 (boundary included)"""
    return np.abs(alpha) >= np.abs(beta)


_SELECTORS: dict[tuple[ElementKind, Selection], Callable[..., Mask]] = {
    (ElementKind.REAL, Selection.LHP): lhp_real,
    (ElementKind.REAL, Selection.RHP): rhp_real,
    (ElementKind.REAL, Selection.UDI): udi_real,
    (ElementKind.REAL, Selection.UDO): udo_real,
    (ElementKind.COMPLEX, Selection.LHP): lhp_complex,
    (ElementKind.COMPLEX, Selection.RHP): rhp_complex,
    (ElementKind.COMPLEX, Selection.UDI): udi_complex,
    (ElementKind.COMPLEX, Selection.UDO): udo_complex,
}


def selector(kind: ElementKind, selection: SelectionLike) -> Callable[..., Mask]:
    """
    Predicate registered for an element kind and region.

    Raises:
        ValidationError: For Selection.ALL, which has no predicate
    """
    selection = as_selection(selection)
    try:
        return _SELECTORS[(kind, selection)]
    except KeyError:
        raise ValidationError(f"No eigenvalue predicate for selection {selection.value!r}") from None


def select(
    kind: ElementKind,
    selection: SelectionLike,
    alpha: NDArray[np.inexact[Any]],
    beta: NDArray[np.inexact[Any]],
) -> Mask:
    """
    Evaluate the predicate for ``selection`` on every eigenvalue.

    Args:
        kind: Element kind of the pencil; picks the real or complex variant
        selection: Region to select (ALL selects everything)
        alpha: Eigenvalue numerators; complex alphar + i·alphai for real pencils
        beta: Eigenvalue denominators

    Returns:
        Boolean mask, True for selected eigenvalues
    """
    selection = as_selection(selection)
    alpha = np.asarray(alpha)
    beta = np.asarray(beta)
    if selection is Selection.ALL:
        return np.ones(alpha.shape, dtype=bool)
    predicate = selector(kind, selection)
    if kind is ElementKind.REAL:
        return np.asarray(predicate(alpha.real, alpha.imag, beta.real), dtype=bool)
    return np.asarray(predicate(alpha, beta), dtype=bool)
