"""
Elementwise and reduction kernels over vectors and matrices.

Public API:
    all, any, which, hold          predicate reductions
    max, min                       extrema (complex: magnitude, then phase)
    sum, sum_all, cumsum, dot      sums and inner products
    transform, element_pow, eye    maps and constructors
    rot90, tril, triu              rearrangements

Reducers take an optional axis tag (1, 2, 'major', 'minor', 'leading').
In-place variants: tril_inplace, triu_inplace, cumsum_inplace,
transform_inplace, rot90_inplace.
"""

from pydensela.elementwise.predicates import all, any, which, hold
from pydensela.elementwise.extrema import max, min
from pydensela.elementwise.sums import sum, sum_all, cumsum, cumsum_inplace, dot
from pydensela.elementwise.construct import eye, transform, transform_inplace, element_pow
from pydensela.elementwise.shape import (
    rot90,
    rot90_inplace,
    tril,
    tril_inplace,
    triu,
    triu_inplace,
)

__all__ = [
    "all",
    "any",
    "which",
    "hold",
    "max",
    "min",
    "sum",
    "sum_all",
    "cumsum",
    "cumsum_inplace",
    "dot",
    "eye",
    "transform",
    "transform_inplace",
    "element_pow",
    "rot90",
    "rot90_inplace",
    "tril",
    "tril_inplace",
    "triu",
    "triu_inplace",
]
