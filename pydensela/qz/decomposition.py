"""
QZ (generalized Schur) decomposition object.

    A = Q·S·Zᴴ,  B = Q·T·Zᴴ

S is upper quasi-triangular (real pencils) or upper triangular (complex
pencils), T is upper triangular, Q and Z are orthogonal/unitary. The
generalized eigenvalues are α_i/β_i.

The Schur form is computed with ``?gges`` without sorting. Selection of a
region, either at construction or later through ``reorder``, evaluates the
registered predicate on (α, β) and moves the selected eigenvalues to the
leading block with ``?tgsen``.

State machine:
    EMPTY --decompose--> DECOMPOSED --reorder--> REORDERED --reorder--> ...

Accessing factors or eigen-information in the EMPTY state raises
StateError.
"""

from __future__ import annotations

import copy as _copy
from enum import Enum
from typing import Any, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydensela.core.compute.lapack import call_lapack, routine_name
from pydensela.core.compute.precision import eigenvalue_ratio
from pydensela.core.dispatch import ElementKind, adapt, element_kind, lapack_routines, promote
from pydensela.core.exceptions import (
    ConvergenceError,
    DimensionError,
    NumericalError,
    StateError,
    ValidationError,
)
from pydensela.core.layout import Layout, as_array, check_same_layout, layout_of, restore_layout
from pydensela.core.validation import check_square
from pydensela.eigen._repack import normalize_columns
from pydensela.qz import _eigvecs
from pydensela.qz.selectors import Selection, SelectionLike, as_selection, select


class QZState(Enum):
    """Lifecycle state of a QZDecomposition."""
    EMPTY = 'empty'
    DECOMPOSED = 'decomposed'
    REORDERED = 'reordered'


SelectionOrMask = Union[Selection, str, ArrayLike]

# (S, T, Q, Z, alpha, beta)
Factors = tuple


def _check_pair(A: NDArray[Any], B: NDArray[Any], names: tuple[str, str]) -> None:
    check_square(A, names[0])
    check_square(B, names[1])
    if A.shape != B.shape:
        raise DimensionError(
            f"{names[0]} and {names[1]} must have the same order: got {A.shape} and {B.shape}"
        )


def _alpha_beta(ab: list[NDArray[Any]]):
    if len(ab) == 3:
        alphar, alphai, beta = ab
        return alphar + 1j * alphai, beta
    alpha, beta = ab
    return alpha, beta


def _gges(a: NDArray[Any], b: NDArray[Any]) -> Factors:
    """Unsorted generalized Schur form of (a, b)."""
    n = a.shape[0]
    gges, = lapack_routines('gges', a, b)
    # The wrapper takes a selection callback even when sort_t=0
    res = call_lapack(gges, 'gges', lambda *args: None, a, b, sort_t=0, query_workspace=True)
    info = int(res[-1])
    name = routine_name(gges, 'gges')
    if 0 < info <= n:
        raise ConvergenceError(
            f"QZ iteration failed; (A, B) is not in generalized Schur form "
            f"(eigenvalues {info}..{n - 1} may still be correct)",
            routine=name,
            info=info,
            n_converged=n - info,
        )
    if info == n + 1:
        raise ConvergenceError(
            "Something other than the QZ iteration failed",
            routine=name,
            info=info,
        )
    if info > n + 1:
        raise NumericalError("Generalized Schur reordering failed", routine=name, info=info)

    S, T, _, *ab, Q, Z, _, _ = res
    return (S, T, Q, Z, *_alpha_beta(ab))


def _tgsen(S, T, Q, Z, mask: NDArray[np.bool_]) -> Factors:
    """
    Reorder a generalized Schur form so the masked eigenvalues lead.

    The wrapper works on copies; the input factors are left untouched, so a
    failure here never disturbs a committed decomposition.
    """
    tgsen, = lapack_routines('tgsen', S, T)
    n = S.shape[0]
    lwork = 4 * n + 16 if element_kind(S.dtype) is ElementKind.REAL else 1
    res = call_lapack(
        tgsen, 'tgsen', mask, S, T, Q, Z,
        ijob=0, lwork=lwork, liwork=1,
    )
    info = int(res[-1])
    if info == 1:
        raise NumericalError(
            "Reordering failed: the eigenvalue clusters are too close "
            "(the reordered pencil would be too far from generalized Schur form)",
            routine=routine_name(tgsen, 'tgsen'),
            info=info,
        )
    S, T, *ab, Q, Z, _, _, _, _, _ = res
    return (S, T, Q, Z, *_alpha_beta(ab))


def _close_pairs(S: NDArray[Any], mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
    mask = np.array(mask, dtype=bool)
    for start, size in _eigvecs.schur_blocks(S):
        if size == 2 and (mask[start] or mask[start + 1]):
            mask[start:start + 2] = True
    return mask


def _reorder(factors: Factors, mask: NDArray[np.bool_]) -> tuple[Factors, int]:
    """Reordered factors and the size of the leading block."""
    S, T, Q, Z = factors[:4]
    mask = _close_pairs(S, mask)
    if S.shape[0] > 0:
        factors = _tgsen(S, T, Q, Z, mask)
    return factors, int(np.count_nonzero(mask))


class QZDecomposition:
    """
    Generalized Schur decomposition of a matrix pair.

    Usage:
        qz = QZDecomposition(A, B)                     # unsorted
        qz = QZDecomposition(A, B, selection='udi')    # |λ| < 1 leading
        qz.reorder('lhp')                              # in place
        S, T, Q, Z = qz.S, qz.T, qz.Q, qz.Z
        w = qz.eigenvalues()
    """

    def __init__(
        self,
        A: ArrayLike | None = None,
        B: ArrayLike | None = None,
        selection: SelectionLike = Selection.ALL,
    ):
        self._state = QZState.EMPTY
        self._S: NDArray[np.inexact[Any]] | None = None
        self._T: NDArray[np.inexact[Any]] | None = None
        self._Q: NDArray[np.inexact[Any]] | None = None
        self._Z: NDArray[np.inexact[Any]] | None = None
        self._alpha: NDArray[np.inexact[Any]] | None = None
        self._beta: NDArray[np.inexact[Any]] | None = None
        self._n_selected = 0
        self._layout = Layout.ROW_MAJOR
        self._warnings: tuple[str, ...] = ()

        if A is not None or B is not None:
            if A is None or B is None:
                raise ValidationError("A and B must be given together")
            self.decompose(A, B, selection)

    # === Construction ===

    def decompose(
        self,
        A: ArrayLike,
        B: ArrayLike,
        selection: SelectionLike = Selection.ALL,
    ) -> QZDecomposition:
        """
        Compute the decomposition of (A, B), replacing any previous state.

        The previous state is kept if any step fails, including the
        reordering requested by ``selection``.

        Args:
            A, B: Square matrices of the same order and layout
            selection: Region whose eigenvalues should lead the Schur form

        Returns:
            self

        Raises:
            DimensionError: If A or B is not square, or the orders differ
            LayoutError: If A and B have different storage layouts
            ConvergenceError: If the QZ iteration fails
            NumericalError: If the requested reordering fails
        """
        selection = as_selection(selection)
        A, B = as_array(A), as_array(B)
        _check_pair(A, B, ('A', 'B'))
        check_same_layout(A, B, ('A', 'B'))

        dtype = promote(A.dtype, B.dtype)
        a = adapt(A, 'A', dtype=dtype).data
        b = adapt(B, 'B', dtype=dtype).data
        n = a.shape[0]

        if n == 0:
            empty = np.zeros(0, dtype=dtype)
            self._commit((a, b, np.zeros_like(a), np.zeros_like(a), empty, empty), layout_of(A))
            return self

        factors = _gges(a, b)
        n_selected = n
        if selection is not Selection.ALL:
            mask = select(element_kind(factors[0].dtype), selection, factors[4], factors[5])
            factors, n_selected = _reorder(factors, mask)
        self._commit(factors, layout_of(A), n_selected)
        return self

    @classmethod
    def from_factors(
        cls,
        S: ArrayLike,
        T: ArrayLike,
        Q: ArrayLike,
        Z: ArrayLike,
    ) -> QZDecomposition:
        """
        Wrap an existing generalized Schur form (S, T, Q, Z).

        (α, β) are recovered from the diagonal blocks of (S, T).
        """
        S, T, Q, Z = (as_array(X) for X in (S, T, Q, Z))
        _check_pair(S, T, ('S', 'T'))
        _check_pair(Q, Z, ('Q', 'Z'))
        if S.shape != Q.shape:
            raise DimensionError(
                f"Q and Z must have the order of S: got {Q.shape}, expected {S.shape}"
            )
        dtype = promote(S.dtype, T.dtype, Q.dtype, Z.dtype)
        s, t, q, z = (adapt(X, name, dtype=dtype).data for X, name in zip((S, T, Q, Z), 'STQZ'))

        n = s.shape[0]
        empty = np.zeros(0, dtype=dtype)
        factors = (s, t, q, z, empty, empty)
        if n > 0:
            # ?tgsen with an empty selection leaves the form unchanged and
            # recomputes (alpha, beta) from its diagonal blocks.
            factors = _tgsen(s, t, q, z, np.zeros(n, dtype=bool))
        qz = cls()
        qz._commit(factors, layout_of(S))
        return qz

    # === Reordering ===

    def reorder(self, selection: SelectionOrMask) -> QZDecomposition:
        """
        Move the selected eigenvalues to the leading diagonal blocks.

        S, T, Q, Z, alpha and beta are replaced only once the reordering
        has succeeded. For real pencils a conjugate pair is selected as a
        whole when either member is.

        Args:
            selection: A Selection (or its name) evaluated on the current
                eigenvalues, or a boolean mask of length n

        Returns:
            self

        Raises:
            NumericalError: If ?tgsen cannot swap the requested blocks; the
                decomposition is left as it was
        """
        self._require()
        if isinstance(selection, (Selection, str)):
            selection = as_selection(selection)
            if selection is Selection.ALL:
                self._n_selected = self.n
                self._state = QZState.REORDERED
                return self
            mask = select(self.kind, selection, self._alpha, self._beta)
        else:
            mask = np.asarray(selection, dtype=bool)
            if mask.shape != (self.n,):
                raise DimensionError(
                    f"selection mask: expected shape ({self.n},), got {mask.shape}"
                )
        factors = (self._S, self._T, self._Q, self._Z, self._alpha, self._beta)
        factors, n_selected = _reorder(factors, mask)
        self._commit(factors, self._layout, n_selected, QZState.REORDERED)
        return self

    def _commit(
        self,
        factors: Factors,
        layout: Layout,
        n_selected: int | None = None,
        state: QZState = QZState.DECOMPOSED,
    ) -> None:
        S, T, Q, Z, alpha, beta = factors
        self._S, self._T, self._Q, self._Z = S, T, Q, Z
        self._alpha, self._beta = alpha, beta
        self._layout = layout
        self._state = state
        self._n_selected = S.shape[0] if n_selected is None else n_selected

    def copy(self) -> QZDecomposition:
        """Independent deep copy, including the state."""
        return _copy.deepcopy(self)

    # === State ===

    def _require(self) -> None:
        if self._state is QZState.EMPTY:
            raise StateError("QZ decomposition has not been computed; call decompose(A, B) first")

    @property
    def state(self) -> QZState:
        return self._state

    @property
    def is_decomposed(self) -> bool:
        return self._state is not QZState.EMPTY

    @property
    def n(self) -> int:
        self._require()
        return self._S.shape[0]

    @property
    def kind(self) -> ElementKind:
        self._require()
        return element_kind(self._S.dtype)

    @property
    def n_selected(self) -> int:
        """
        Number of eigenvalues in the leading block after the last
        selection; n when no selection was applied.
        """
        self._require()
        return self._n_selected

    # === Factors ===

    @property
    def S(self) -> NDArray[np.inexact[Any]]:
        self._require()
        return restore_layout(self._S.copy(order='A'), self._layout)

    @property
    def T(self) -> NDArray[np.inexact[Any]]:
        self._require()
        return restore_layout(self._T.copy(order='A'), self._layout)

    @property
    def Q(self) -> NDArray[np.inexact[Any]]:
        self._require()
        return restore_layout(self._Q.copy(order='A'), self._layout)

    @property
    def Z(self) -> NDArray[np.inexact[Any]]:
        self._require()
        return restore_layout(self._Z.copy(order='A'), self._layout)

    @property
    def alpha(self) -> NDArray[np.inexact[Any]]:
        """Eigenvalue numerators (complex for real pencils: alphar + i·alphai)."""
        self._require()
        return self._alpha.copy()

    @property
    def beta(self) -> NDArray[np.inexact[Any]]:
        """Eigenvalue denominators."""
        self._require()
        return self._beta.copy()

    # === Eigen information ===

    def eigenvalues(self) -> NDArray[np.complexfloating[Any]]:
        """
        Generalized eigenvalues α/β.

        β = 0 gives inf (nan when α = 0 too); a NumericalWarning flags
        eigenvalues that are numerically infinite or undetermined.
        """
        self._require()
        values, messages = eigenvalue_ratio(self._alpha, self._beta)
        self._warnings = messages
        return values

    @property
    def warnings(self) -> tuple[str, ...]:
        """Messages from the last eigenvalues() call."""
        return self._warnings

    def right_eigenvectors(self, backtransform: bool = True) -> NDArray[np.complexfloating[Any]]:
        """
        Right generalized eigenvectors.

        Args:
            backtransform: True for eigenvectors of (A, B) (Z·x),
                False for eigenvectors of (S, T)

        Returns:
            n x n complex matrix, column k for eigenvalue k
        """
        self._require()
        X = _eigvecs.right_vectors(self._S, self._T, self._alpha, self._beta)
        if backtransform and self.n > 0:
            X = normalize_columns(self._Z @ X)
        return restore_layout(X, self._layout)

    def left_eigenvectors(self, backtransform: bool = True) -> NDArray[np.complexfloating[Any]]:
        """
        Left generalized eigenvectors.

        Args:
            backtransform: True for eigenvectors of (A, B) (Q·y),
                False for eigenvectors of (S, T)

        Returns:
            n x n complex matrix, column k for eigenvalue k
        """
        self._require()
        Y = _eigvecs.left_vectors(self._S, self._T, self._alpha, self._beta)
        if backtransform and self.n > 0:
            Y = normalize_columns(self._Q @ Y)
        return restore_layout(Y, self._layout)

    def eigenvectors(self, backtransform: bool = True):
        """(left, right) generalized eigenvectors."""
        return (
            self.left_eigenvectors(backtransform),
            self.right_eigenvectors(backtransform),
        )

    def __repr__(self) -> str:
        if self._state is QZState.EMPTY:
            return "QZDecomposition(state='empty')"
        return (
            f"QZDecomposition(n={self.n}, kind={self.kind.value}, "
            f"state={self._state.value!r}, n_selected={self._n_selected})"
        )
