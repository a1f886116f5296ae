"""
Numerical precision constants and utilities.

Provides machine epsilon, the underflow floor and the safe alpha/beta
ratio used wherever generalized eigenvalues are formed.
"""

import warnings

import numpy as np
from numpy.typing import NDArray
from typing import Any

from pydensela.core.exceptions import NumericalWarning


def real_dtype(dtype: np.dtype | type) -> np.dtype:
    """Real counterpart of a float or complex dtype (complex128 -> float64)."""
    return np.empty(0, dtype=dtype).real.dtype


def complex_dtype(dtype: np.dtype | type) -> np.dtype:
    """Complex counterpart of a float or complex dtype (float32 -> complex64)."""
    return np.result_type(dtype, np.complex64)


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Complex dtypes report the epsilon of their real component type.
    """
    return float(np.finfo(dtype).eps)


def underflow_threshold(dtype: np.dtype | type = np.float64) -> float:
    """Smallest positive normalized number of the dtype's real type."""
    return float(np.finfo(dtype).tiny)


def eps_of(value: float, dtype: np.dtype | type = np.float64) -> float:
    """
    Distance from |value| to the next larger representable number.

    eps_of(1.0) equals machine epsilon; eps_of(0.0) is the smallest
    subnormal.
    """
    return float(np.spacing(np.abs(np.asarray(value, dtype=real_dtype(dtype)))))


def eigenvalue_ratio(
    alpha: NDArray[np.inexact[Any]],
    beta: NDArray[np.inexact[Any]],
) -> tuple[NDArray[np.complexfloating[Any]], tuple[str, ...]]:
    """
    Form generalized eigenvalues alpha/beta with the infinity convention.

    beta == 0 with alpha != 0 gives inf; alpha == beta == 0 gives nan.
    A warning is produced for every index where
    ``(|Re alpha| + |Im alpha|) * tiny >= |beta|``, i.e. where the ratio
    is numerically infinite or undetermined.

    Args:
        alpha: Numerators (real or complex)
        beta: Denominators (real or complex)

    Returns:
        (eigenvalues, warning messages). The messages are also issued with
        ``warnings.warn`` so they reach callers that never look at them.
    """
    alpha = np.asarray(alpha)
    beta = np.asarray(beta)
    cdtype = complex_dtype(np.result_type(alpha.dtype, beta.dtype))

    w = np.empty(alpha.shape, dtype=cdtype)
    beta_zero = beta == 0
    alpha_zero = alpha == 0
    with np.errstate(divide='ignore', invalid='ignore'):
        w[~beta_zero] = alpha[~beta_zero] / beta[~beta_zero]
    w[beta_zero & ~alpha_zero] = np.inf
    w[beta_zero & alpha_zero] = complex(np.nan, np.nan)

    tiny = underflow_threshold(cdtype)
    magnitude = np.abs(np.real(alpha)) + np.abs(np.imag(alpha))
    suspect = np.flatnonzero(magnitude * tiny >= np.abs(beta))

    messages = tuple(
        f"Eigenvalue({i}) is numerically infinite or undetermined "
        f"(alpha={complex(alpha[i])}, beta={complex(beta[i])})"
        for i in suspect
    )
    for msg in messages:
        warnings.warn(msg, NumericalWarning, stacklevel=3)

    return w, messages
