"""
Core infrastructure for pydensela.

This module provides shared abstractions, utilities, and backend infrastructure
used by all domain-specific subpackages (eigen, qz, lsq, operations, elementwise).

Key components:
    protocols: DenseOperand, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    layout: Storage layouts and layout restoration
    dispatch: Operand classification and LAPACK driver selection
    adaptors: Symmetric, Hermitian and triangular views
    tags: Reduction-axis tags
    compute: Timing, precision, factorization kernels
"""

from pydensela.core.protocols import DenseOperand, Backend
from pydensela.core.result import Result
from pydensela.core.exceptions import (
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
from pydensela.core.layout import Layout, layout_of, convert_to
from pydensela.core.dispatch import ElementKind, Structure, classify, adapt
from pydensela.core.adaptors import Symmetric, Hermitian, Triangular
from pydensela.core.tags import Axis

__all__ = [
    # Protocols
    "DenseOperand",
    "Backend",
    # Result
    "Result",
    # Exceptions
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
    # Layout and dispatch
    "Layout",
    "layout_of",
    "convert_to",
    "ElementKind",
    "Structure",
    "classify",
    "adapt",
    # Adaptors and tags
    "Symmetric",
    "Hermitian",
    "Triangular",
    "Axis",
]
