"""
Least-squares solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pydensela.core.result import Result

if TYPE_CHECKING:
    from pydensela.lsq.design import LeastSquaresDesign


@dataclass(frozen=True)
class LeastSquaresParams:
    """
    Parameter payload for a least-squares solve.

    ``singular_values`` is only available from the SVD driver.
    ``residual_norm`` is a float for a single right-hand side and an array
    (one entry per column) for several.
    """
    x: NDArray[np.inexact[Any]]
    rank: int
    singular_values: NDArray[np.floating[Any]] | None
    residual_norm: float | NDArray[np.floating[Any]]
    method: str


@dataclass
class LeastSquaresSolution:
    """
    User-facing least-squares results.

    Wraps the backend Result and provides accessors for the solution,
    the effective rank and the residual.
    """
    _result: Result[LeastSquaresParams]
    _design: 'LeastSquaresDesign'

    @property
    def x(self) -> NDArray[np.inexact[Any]]:
        return self._result.params.x

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def rank_deficient(self) -> bool:
        return self.rank < min(self._design.m, self._design.n)

    @property
    def singular_values(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.singular_values

    @property
    def residual_norm(self) -> float | NDArray[np.floating[Any]]:
        return self._result.params.residual_norm

    @property
    def method(self) -> str:
        return self._result.params.method

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
        """Short text summary of the solve."""
        lines = [
            "Linear Least Squares",
            "=" * 50,
            f"Equations: {self._design.m}",
            f"Unknowns: {self._design.n}",
            f"Method: {self.method} ({self.backend_name})",
            f"Rank: {self.rank}",
            f"Residual norm: {np.round(self.residual_norm, 6)}",
        ]
        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  {w}" for w in self.warnings)
        return "\n".join(lines)
