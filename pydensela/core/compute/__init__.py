"""
Shared compute infrastructure for pydensela.

This module provides timing utilities, precision constants, the LAPACK
calling convention and the factorization kernels that are shared across
all domain packages.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    precision: Numerical precision constants and utilities
    tolerances: Tolerance tiers for numerical comparisons
    lapack: Workspace queries and info checking for LAPACK wrappers
    linalg: Factorization kernels (QR, QL, SVD, LU, Cholesky, balancing)
"""

from pydensela.core.compute.timing import Timer

__all__ = [
    # Timing
    "Timer",
]
