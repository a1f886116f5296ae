"""
PyDenseLA: dense linear-algebra extensions over LAPACK.

Eigenproblems, generalized Schur (QZ) decompositions with eigenvalue
selection, least squares, condition numbers and a family of elementwise
reductions, for numpy vectors and matrices in either storage layout.

Submodules:
    eigen: Standard and generalized eigenproblems
    qz: Generalized Schur decomposition and reordering
    lsq: Linear least squares (QR and SVD drivers)
    operations: cond, rcond, pow, rank, mldivide, cholesky, balance
    elementwise: Reductions, maps and rearrangements
    core: Layouts, adaptors, axis tags, exceptions, factorizations
"""

__version__ = "0.1.0"

from pydensela import core
from pydensela import eigen
from pydensela import qz
from pydensela import lsq
from pydensela import operations
from pydensela import elementwise

from pydensela.core import (
    Layout,
    Axis,
    Symmetric,
    Hermitian,
    Triangular,
    PyDenseLAError,
    ValidationError,
    DimensionError,
    LayoutError,
    StateError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
    NumericalWarning,
)
from pydensela.core.compute.linalg import qr, ql, svd, inv
from pydensela.eigen import eigen_decompose, eigenvalues, eigenvectors
from pydensela.qz import QZDecomposition, Selection, qz_decompose, qz_reorder
from pydensela.lsq import llsq, llsq_qr, llsq_svd, llsq_solution
from pydensela.operations import balance, cholesky, cond, mldivide, rcond, matrix_power, rank

__all__ = [
    "__version__",
    "core",
    "eigen",
    "qz",
    "lsq",
    "operations",
    "elementwise",
    "Layout",
    "Axis",
    "Symmetric",
    "Hermitian",
    "Triangular",
    "PyDenseLAError",
    "ValidationError",
    "DimensionError",
    "LayoutError",
    "StateError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
    "NumericalWarning",
    "qr",
    "ql",
    "svd",
    "inv",
    "eigen_decompose",
    "eigenvalues",
    "eigenvectors",
    "QZDecomposition",
    "Selection",
    "qz_decompose",
    "qz_reorder",
    "llsq",
    "llsq_qr",
    "llsq_svd",
    "llsq_solution",
    "cond",
    "rcond",
    "matrix_power",
    "rank",
    "mldivide",
    "cholesky",
    "balance",
]
