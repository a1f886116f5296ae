"""
Dense factorization kernels for pydensela.

All kernels are LAPACK-backed through scipy.linalg.lapack and follow the
same conventions:
    - Inputs are adapted to column-major working arrays once
    - Results come back in the layout of the input
    - Backend failures are raised immediately as NumericalError subclasses

Submodules:
    qr: QR decomposition and reflector-based products with Q
    ql: QL decomposition built on QR of the reversed matrix
    svd: Singular value decomposition
    lu: LU factorization, linear solve, inverse, reciprocal condition estimate
    cholesky: Cholesky factorization
    balance: Balancing for eigenvalue computation
"""

from pydensela.core.compute.linalg.qr import QRResult, QRDecomposition, qr
from pydensela.core.compute.linalg.ql import QLResult, QLDecomposition, ql
from pydensela.core.compute.linalg.svd import SVDResult, svd, singular_values
from pydensela.core.compute.linalg.lu import LUResult, lu_factor, mldivide, inv, rcond
from pydensela.core.compute.linalg.cholesky import cholesky
from pydensela.core.compute.linalg.balance import BalanceResult, balance

__all__ = [
    # QR / QL
    "QRResult",
    "QRDecomposition",
    "qr",
    "QLResult",
    "QLDecomposition",
    "ql",
    # SVD
    "SVDResult",
    "svd",
    "singular_values",
    # LU
    "LUResult",
    "lu_factor",
    "mldivide",
    "inv",
    "rcond",
    # Cholesky / balancing
    "cholesky",
    "BalanceResult",
    "balance",
]
