"""
Generalized eigenvectors of a pencil in generalized Schur form.

For each eigenvalue λ_k = α_k/β_k of (S, T), the matrix M = β_k·S − α_k·T
is block upper triangular and singular in the diagonal block holding k.
Right eigenvectors come from back substitution on M·x = 0, left
eigenvectors from forward substitution on Mᴴ·y = 0. Blocks are 1 x 1,
except for the 2 x 2 blocks of conjugate pairs in a real Schur form.

Nearly singular diagonal blocks (repeated eigenvalues) are perturbed to a
small multiple of machine precision, as LAPACK's ?tgevc does.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pydensela.core.compute.precision import complex_dtype, underflow_threshold
from pydensela.eigen._repack import normalize_columns


def schur_blocks(S: NDArray[np.inexact[Any]]) -> list[tuple[int, int]]:
    """(start, size) of each diagonal block of a (quasi-)triangular S."""
    n = S.shape[0]
    real = not np.iscomplexobj(S)
    blocks = []
    i = 0
    while i < n:
        if real and i + 1 < n and S[i + 1, i] != 0:
            blocks.append((i, 2))
            i += 2
        else:
            blocks.append((i, 1))
            i += 1
    return blocks


def _null_vector(block: NDArray[np.complexfloating[Any]]) -> NDArray[np.complexfloating[Any]]:
    if block.shape[0] == 1:
        return np.ones(1, dtype=block.dtype)
    (a, b), (c, d) = block
    if abs(a) + abs(b) >= abs(c) + abs(d):
        v = np.array([-b, a], dtype=block.dtype)
    else:
        v = np.array([-d, c], dtype=block.dtype)
    if not np.any(v):
        v = np.array([1, 0], dtype=block.dtype)
    return v


def _solve_block(
    block: NDArray[np.complexfloating[Any]],
    rhs: NDArray[np.complexfloating[Any]],
    small: float,
) -> NDArray[np.complexfloating[Any]]:
    if block.shape[0] == 1:
        d = block[0, 0]
        if abs(d) < small:
            d = small
        return rhs / d
    block = block.copy()
    if abs(np.linalg.det(block)) < small * max(np.abs(block).max(), small):
        block[np.diag_indices(2)] += small
    return np.linalg.solve(block, rhs)


def _pencil(S, T, alpha_k, beta_k):
    M = beta_k * S - alpha_k * T
    scale = max(abs(beta_k) * np.abs(S).max(initial=0.0), abs(alpha_k) * np.abs(T).max(initial=0.0))
    small = max(np.finfo(M.dtype).eps * scale, underflow_threshold(M.dtype))
    return M, small


def _block_index(blocks: list[tuple[int, int]], k: int) -> int:
    for idx, (start, size) in enumerate(blocks):
        if start <= k < start + size:
            return idx
    raise IndexError(k)


def right_vectors(
    S: NDArray[np.inexact[Any]],
    T: NDArray[np.inexact[Any]],
    alpha: NDArray[np.inexact[Any]],
    beta: NDArray[np.inexact[Any]],
) -> NDArray[np.complexfloating[Any]]:
    """Columns x_k with S·x_k·β_k = T·x_k·α_k, normalized."""
    n = S.shape[0]
    cdtype = complex_dtype(S.dtype)
    Sc = S.astype(cdtype)
    Tc = T.astype(cdtype)
    blocks = schur_blocks(S)
    X = np.zeros((n, n), dtype=cdtype)

    for k in range(n):
        M, small = _pencil(Sc, Tc, alpha[k], beta[k])
        p = _block_index(blocks, k)
        start, size = blocks[p]
        x = np.zeros(n, dtype=cdtype)
        x[start:start + size] = _null_vector(M[start:start + size, start:start + size])
        end = start + size
        for j in range(p - 1, -1, -1):
            js, jn = blocks[j]
            rhs = -M[js:js + jn, js + jn:end] @ x[js + jn:end]
            x[js:js + jn] = _solve_block(M[js:js + jn, js:js + jn], rhs, small)
        X[:, k] = x

    return normalize_columns(X)


def left_vectors(
    S: NDArray[np.inexact[Any]],
    T: NDArray[np.inexact[Any]],
    alpha: NDArray[np.inexact[Any]],
    beta: NDArray[np.inexact[Any]],
) -> NDArray[np.complexfloating[Any]]:
    """Columns y_k with y_kᴴ·S·β_k = y_kᴴ·T·α_k, normalized."""
    n = S.shape[0]
    cdtype = complex_dtype(S.dtype)
    Sc = S.astype(cdtype)
    Tc = T.astype(cdtype)
    blocks = schur_blocks(S)
    Y = np.zeros((n, n), dtype=cdtype)

    for k in range(n):
        M, small = _pencil(Sc, Tc, alpha[k], beta[k])
        Mh = M.conj().T
        p = _block_index(blocks, k)
        start, size = blocks[p]
        y = np.zeros(n, dtype=cdtype)
        y[start:start + size] = _null_vector(Mh[start:start + size, start:start + size])
        for j in range(p + 1, len(blocks)):
            js, jn = blocks[j]
            rhs = -Mh[js:js + jn, start:js] @ y[start:js]
            y[js:js + jn] = _solve_block(Mh[js:js + jn, js:js + jn], rhs, small)
        Y[:, k] = y

    return normalize_columns(Y)
