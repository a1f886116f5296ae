"""
QZ (generalized Schur) engine.

Public API:
    QZDecomposition(A, B, selection=...)    cached decomposition object
    qz_decompose(A, B, selection) -> QZResult
    qz_reorder(S, T, Q, Z, selection) -> QZResult
    qz_eigenvalues(A, B)
    reordered(qz, selection) -> QZDecomposition

Selections:
    'all', 'lhp' (Re λ < 0), 'rhp' (Re λ > 0), 'udi' (|λ| < 1),
    'udo' (|λ| >= 1)
"""

from pydensela.qz.selectors import (
    Selection,
    select,
    selector,
    lhp_real,
    rhp_real,
    udi_real,
    udo_real,
    lhp_complex,
    rhp_complex,
    udi_complex,
    udo_complex,
)
from pydensela.qz.decomposition import QZDecomposition, QZState
from pydensela.qz.solvers import (
    QZResult,
    qz_decompose,
    qz_reorder,
    qz_eigenvalues,
    reordered,
)

__all__ = [
    "QZDecomposition",
    "QZState",
    "QZResult",
    "qz_decompose",
    "qz_reorder",
    "qz_eigenvalues",
    "reordered",
    "Selection",
    "select",
    "selector",
    "lhp_real",
    "rhp_real",
    "udi_real",
    "udo_real",
    "lhp_complex",
    "rhp_complex",
    "udi_complex",
    "udo_complex",
]
