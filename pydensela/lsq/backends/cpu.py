"""
CPU LAPACK backends for linear least squares.

    CPUQRLeastSquaresBackend   ?gelsy, complete orthogonal factorization
                               with column pivoting (rank-revealing QR)
    CPUSVDLeastSquaresBackend  ?gelss, SVD; minimum-norm solution

Both go through scipy.linalg.lstsq, which handles the workspace queries
and the padding of b for wide systems.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sla

from pydensela.core.result import Result
from pydensela.core.compute.timing import Timer
from pydensela.core.exceptions import ConvergenceError
from pydensela.core.layout import restore_layout
from pydensela.lsq.design import LeastSquaresDesign
from pydensela.lsq.solution import LeastSquaresParams


def _residual_norm(design: LeastSquaresDesign, x: NDArray[Any]) -> float | NDArray[Any]:
    r = design.A @ x - design.b
    if r.ndim == 1:
        return float(np.linalg.norm(r))
    return np.linalg.norm(r, axis=0)


class _LstsqBackend:
    driver = ''
    method = ''

    def __init__(self, rcond: float | None = None):
        self._rcond = rcond

    @property
    def name(self) -> str:
        return f'cpu_{self.driver}'

    def solve(self, design: LeastSquaresDesign) -> Result[LeastSquaresParams]:
        """
        Solve min ‖A·x − b‖₂.

        Returns:
            Result containing LeastSquaresParams

        Raises:
            ConvergenceError: If the SVD inside ?gelss fails to converge
        """
        timer = Timer()
        timer.start()

        with timer.section(self.driver):
            try:
                x, _, rank, s = sla.lstsq(
                    design.A, design.b,
                    cond=self._rcond,
                    lapack_driver=self.driver,
                    check_finite=False,
                )
            except sla.LinAlgError as e:
                raise ConvergenceError(str(e), routine=self.driver) from e

        with timer.section('residual'):
            residual = _residual_norm(design, x)

        timer.stop()

        if x.ndim == 2:
            x = restore_layout(x, design.layout)

        params = LeastSquaresParams(
            x=x,
            rank=int(rank),
            singular_values=s if self.method == 'svd' else None,
            residual_norm=residual,
            method=self.method,
        )

        info: dict[str, Any] = {
            'method': self.method,
            'driver': self.driver,
            'rank': int(rank),
            'rcond': self._rcond,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


class CPUQRLeastSquaresBackend(_LstsqBackend):
    """
    Rank-revealing QR backend.

    For rank-deficient A this returns a particular minimum-residual
    solution (the one ?gelsy's complete orthogonal factorization picks).
    """
    driver = 'gelsy'
    method = 'qr'


class CPUSVDLeastSquaresBackend(_LstsqBackend):
    """
    SVD backend.

    Singular values below ``rcond·σ_max`` are treated as zero, which gives
    the minimum-norm least-squares solution.
    """
    driver = 'gelss'
    method = 'svd'
