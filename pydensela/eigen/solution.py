"""
Eigenproblem solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pydensela.core.result import Result

if TYPE_CHECKING:
    from pydensela.eigen.design import EigenDesign


@dataclass(frozen=True)
class EigenParams:
    """
    Parameter payload for an eigenproblem.

    General problems give complex values and complex eigenvector matrices.
    Symmetric/Hermitian problems give real ascending values and a single
    orthonormal (or B-orthonormal) eigenvector matrix, stored as both
    ``left`` and ``right``. Eigenvectors that were not requested are n x 0.
    ``alpha`` and ``beta`` are only set for the generalized general problem
    with ``want_eigvals``.
    """
    values: NDArray[np.inexact[Any]]
    left: NDArray[np.inexact[Any]]
    right: NDArray[np.inexact[Any]]
    alpha: NDArray[np.inexact[Any]] | None = None
    beta: NDArray[np.inexact[Any]] | None = None


@dataclass
class EigenSolution:
    """
    User-facing eigenproblem results.

    Wraps the backend Result and provides accessors for eigenvalues,
    eigenvectors and the (alpha, beta) pair of the generalized problem.
    """
    _result: Result[EigenParams]
    _design: 'EigenDesign'

    @property
    def values(self) -> NDArray[np.inexact[Any]]:
        return self._result.params.values

    @property
    def left_vectors(self) -> NDArray[np.inexact[Any]]:
        return self._result.params.left

    @property
    def right_vectors(self) -> NDArray[np.inexact[Any]]:
        return self._result.params.right

    @property
    def vectors(self) -> NDArray[np.inexact[Any]]:
        """Eigenvectors of a symmetric/Hermitian problem (same as right_vectors)."""
        return self._result.params.right

    @property
    def alpha(self) -> NDArray[np.inexact[Any]] | None:
        return self._result.params.alpha

    @property
    def beta(self) -> NDArray[np.inexact[Any]] | None:
        return self._result.params.beta

    @property
    def is_structured(self) -> bool:
        return self._design.is_structured

    @property
    def generalized(self) -> bool:
        return self._design.generalized

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Short text summary of the computed eigenvalues."""
        kind = 'generalized ' if self.generalized else ''
        lines = [
            f"Eigenproblem ({kind}{self._design.structure.value})",
            "=" * 50,
            f"Order: {self._design.n}",
            f"Driver: {self.info.get('driver', '?')}",
            f"Side: {self._design.side.value}",
            "",
            "Eigenvalues:",
        ]
        for i, v in enumerate(self.values):
            lines.append(f"  [{i}] {v:.6g}")
        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  {w}" for w in self.warnings)
        return "\n".join(lines)
