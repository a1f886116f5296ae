"""
Tolerance tiers for numerical validation.

Defines precision expectations for the supported LAPACK element types:
- FP64 (double / complex double): reference precision
- FP32 (single / complex single): relaxed for single-precision arithmetic
- RECONSTRUCTION: the 1e-5 acceptance level used for decomposition
  round trips on the literal test matrices, which are given to six digits

Used by the test suite and by the default thresholds below.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='double precision: backward-stable LAPACK result',
)

FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='single precision: backward-stable LAPACK result',
)

RECONSTRUCTION = ToleranceTier(
    rtol=1e-5,
    atol=1e-5,
    name='reconstruction',
    description='decomposition round trip on six-digit literal inputs',
)

# Reciprocal condition numbers below this multiple of machine epsilon are
# treated as numerically singular by cond_1 / cond_inf / cond_frobenius.
RCOND_SINGULAR_FACTOR = 1.0


def select_tolerance(dtype: np.dtype | type) -> ToleranceTier:
    """Select the tolerance tier matching a numpy element type."""
    if np.finfo(dtype).bits <= 32:
        return FP32
    return FP64
