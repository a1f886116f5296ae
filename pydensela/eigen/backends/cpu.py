"""
CPU LAPACK backend for eigenproblems.

Drives the LAPACK eigen drivers through scipy.linalg.lapack:

    general, standard        ?geev
    general, generalized     ?ggev
    symmetric / Hermitian    ?syev / ?heev
    symmetric-definite pair  ?sygv / ?hegv (itype 1: A·x = λ·B·x)

Real general drivers return conjugate-pair eigenvectors packed into two
real columns; they are expanded into complex columns in a single post-pass.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pydensela.core.result import Result
from pydensela.core.compute.timing import Timer
from pydensela.core.compute.lapack import call_lapack, routine_name
from pydensela.core.compute.precision import complex_dtype, eigenvalue_ratio, real_dtype
from pydensela.core.dispatch import ElementKind, lapack_routines, structured_driver
from pydensela.core.exceptions import (
    ConvergenceError,
    NotPositiveDefiniteError,
    NumericalError,
)
from pydensela.core.layout import restore_layout
from pydensela.eigen._repack import expand_conjugate_pairs, normalize_columns
from pydensela.eigen.design import EigenDesign
from pydensela.eigen.solution import EigenParams


class CPUEigenBackend:
    """
    CPU backend for standard and generalized eigenproblems.

    Implements the Backend protocol for EigenDesign -> EigenParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def solve(self, design: EigenDesign) -> Result[EigenParams]:
        """
        Solve the eigenproblem described by ``design``.

        Returns:
            Result containing EigenParams; eigenvectors are in the layout
            of A

        Raises:
            ConvergenceError: If the QR/QZ iteration fails to converge
            NotPositiveDefiniteError: If B of a symmetric-definite pair is
                not positive definite
        """
        timer = Timer()
        timer.start()

        if design.n == 0:
            params, driver, messages = self._empty(design), None, ()
        elif design.is_structured:
            params, driver, messages = self._structured(design, timer)
        elif design.generalized:
            params, driver, messages = self._generalized(design, timer)
        else:
            params, driver, messages = self._standard(design, timer)

        timer.stop()

        info: dict[str, Any] = {
            'driver': driver,
            'structure': design.structure.value,
            'generalized': design.generalized,
            'side': design.side.value,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(messages),
        )

    # === General, standard ===

    def _standard(self, design: EigenDesign, timer: Timer):
        geev, = lapack_routines('geev', design.A)
        driver = routine_name(geev, 'geev')
        n = design.n

        with timer.section('geev'):
            res = call_lapack(
                geev, 'geev', design.A,
                compute_vl=int(design.want_left),
                compute_vr=int(design.want_right),
            )
        info = int(res[-1])
        if info > 0:
            raise ConvergenceError(
                f"QR algorithm failed to compute all eigenvalues; "
                f"{n - info} of {n} converged",
                routine=driver,
                info=info,
                n_converged=n - info,
            )

        if design.kind is ElementKind.REAL:
            wr, wi, vl, vr, _ = res
            values = wr + 1j * wi
            imag = wi
        else:
            values, vl, vr, _ = res
            imag = None

        with timer.section('repack'):
            left = self._general_vectors(vl, imag, design, design.want_left)
            right = self._general_vectors(vr, imag, design, design.want_right)

        return EigenParams(values=values, left=left, right=right), driver, ()

    # === General, generalized ===

    def _generalized(self, design: EigenDesign, timer: Timer):
        ggev, = lapack_routines('ggev', design.A, design.B)
        driver = routine_name(ggev, 'ggev')
        n = design.n

        with timer.section('ggev'):
            res = call_lapack(
                ggev, 'ggev', design.A, design.B,
                compute_vl=int(design.want_left),
                compute_vr=int(design.want_right),
                query_workspace=True,
            )
        info = int(res[-1])
        if 0 < info <= n:
            raise ConvergenceError(
                f"QZ iteration failed; {n - info} of {n} eigenvalues converged",
                routine=driver,
                info=info,
                n_converged=n - info,
            )
        if info == n + 1:
            raise ConvergenceError(
                "QZ iteration failed outside the eigenvalue loop",
                routine=driver,
                info=info,
            )
        if info > n + 1:
            raise NumericalError(
                "Generalized eigenvector computation failed",
                routine=driver,
                info=info,
            )

        if design.kind is ElementKind.REAL:
            alphar, alphai, beta, vl, vr, _, _ = res
            alpha = alphar + 1j * alphai
            imag = alphai
        else:
            alpha, beta, vl, vr, _, _ = res
            imag = None

        with timer.section('ratio'):
            values, messages = eigenvalue_ratio(alpha, beta)

        with timer.section('repack'):
            left = self._general_vectors(vl, imag, design, design.want_left)
            right = self._general_vectors(vr, imag, design, design.want_right)

        params = EigenParams(
            values=values,
            left=left,
            right=right,
            alpha=alpha if design.want_eigvals else None,
            beta=beta if design.want_eigvals else None,
        )
        return params, driver, messages

    def _general_vectors(
        self,
        packed: NDArray[np.inexact[Any]],
        imag: NDArray[np.floating[Any]] | None,
        design: EigenDesign,
        wanted: bool,
    ) -> NDArray[np.complexfloating[Any]]:
        cdtype = complex_dtype(design.dtype)
        if not wanted:
            return np.zeros((design.n, 0), dtype=cdtype)
        if imag is not None:
            vectors = expand_conjugate_pairs(imag, packed)
        else:
            vectors = packed.astype(cdtype, copy=False)
        return restore_layout(normalize_columns(vectors), design.layout)

    # === Symmetric / Hermitian ===

    def _structured(self, design: EigenDesign, timer: Timer):
        name = structured_driver(design.kind, design.generalized)
        n = design.n

        if design.generalized:
            func, = lapack_routines(name, design.A, design.B)
            driver = routine_name(func, name)
            with timer.section(name):
                res = call_lapack(
                    func, name, design.A, design.B,
                    itype=1,
                    jobz='V' if design.want_vectors else 'N',
                    uplo='L' if design.lower else 'U',
                )
            info = int(res[-1])
            if info > n:
                raise NotPositiveDefiniteError(
                    f"B is not positive definite: leading minor of order "
                    f"{info - n} is not positive",
                    matrix_name='B',
                    minor_order=info - n,
                    routine=driver,
                    info=info,
                )
        else:
            func, = lapack_routines(name, design.A)
            driver = routine_name(func, name)
            with timer.section(name):
                res = call_lapack(
                    func, name, design.A,
                    compute_v=int(design.want_vectors),
                    lower=int(design.lower),
                )
            info = int(res[-1])

        if info > 0:
            raise ConvergenceError(
                f"Eigenvalue iteration failed to converge; {info} off-diagonal "
                f"elements did not converge to zero",
                routine=driver,
                info=info,
            )

        values, v = res[0], res[1]
        if design.want_vectors:
            vectors = restore_layout(v, design.layout)
        else:
            vectors = np.zeros((n, 0), dtype=design.dtype)

        params = EigenParams(values=values, left=vectors, right=vectors)
        return params, driver, ()

    def _empty(self, design: EigenDesign) -> EigenParams:
        if design.is_structured:
            values = np.zeros(0, dtype=real_dtype(design.dtype))
            vectors = np.zeros((0, 0), dtype=design.dtype)
        else:
            values = np.zeros(0, dtype=complex_dtype(design.dtype))
            vectors = np.zeros((0, 0), dtype=complex_dtype(design.dtype))
        empty = np.zeros(0, dtype=design.dtype)
        keep = design.generalized and design.want_eigvals and not design.is_structured
        return EigenParams(
            values=values,
            left=vectors,
            right=vectors,
            alpha=empty if keep else None,
            beta=empty if keep else None,
        )
