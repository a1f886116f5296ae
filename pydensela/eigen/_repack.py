"""
Post-pass over packed real eigenvectors.

The real drivers return a conjugate pair of eigenvectors x ± iy as two
adjacent real columns (x, y), flagged by a nonzero imaginary part of the
first eigenvalue of the pair. This module expands them into explicit
complex columns and applies the max(|Re| + |Im|) = 1 normalization.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pydensela.core.compute.precision import complex_dtype


def expand_conjugate_pairs(
    imag: NDArray[np.floating[Any]],
    packed: NDArray[np.floating[Any]],
) -> NDArray[np.complexfloating[Any]]:
    """
    Expand packed real eigenvectors into complex columns.

    Args:
        imag: Imaginary parts of the eigenvalues (``wi`` or ``alphai``);
            a pair occupies indices j, j+1 with imag[j] > 0
        packed: n x n real matrix from the driver

    Returns:
        n x n complex matrix; columns j and j+1 of a pair are x + iy and
        x - iy
    """
    out = packed.astype(complex_dtype(packed.dtype))
    ncols = packed.shape[1]
    j = 0
    while j < ncols:
        if imag[j] != 0 and j + 1 < ncols:
            x = packed[:, j]
            y = packed[:, j + 1]
            out[:, j] = x + 1j * y
            out[:, j + 1] = x - 1j * y
            j += 2
        else:
            j += 1
    return out


def normalize_columns(vectors: NDArray[np.inexact[Any]]) -> NDArray[np.inexact[Any]]:
    """
    Scale each column so its largest component has |Re| + |Im| = 1.

    Zero columns are left untouched. Conjugate columns stay conjugate.
    """
    if vectors.size == 0:
        return vectors
    scale = np.max(np.abs(vectors.real) + np.abs(vectors.imag), axis=0)
    scale[scale == 0] = 1
    return vectors / scale
