"""
High-level dense operations.

Public API:
    cond(A, p=2), cond_1, cond_2, cond_inf, cond_frobenius
    rcond(A, norm='1')
    pow(A, k), matrix_power
    rank(A, tol=None)
    mldivide(A, B), cholesky(A, lower=True), balance(A, job='B')
"""

from pydensela.core.compute.linalg import balance, cholesky, mldivide, rcond
from pydensela.operations.cond import cond, cond_1, cond_2, cond_inf, cond_frobenius
from pydensela.operations.power import pow, matrix_power
from pydensela.operations.rank import rank

__all__ = [
    "cond",
    "cond_1",
    "cond_2",
    "cond_inf",
    "cond_frobenius",
    "rcond",
    "pow",
    "matrix_power",
    "rank",
    "mldivide",
    "cholesky",
    "balance",
]
