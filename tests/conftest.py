"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


# ═══════════════════════════════════════════════════════════════════════
# Eigenproblem matrices
# ═══════════════════════════════════════════════════════════════════════

@pytest.fixture
def general_real_5x5():
    """Real nonsymmetric 5 x 5 matrix with two complex conjugate pairs."""
    return np.array([
        [-1.01,  0.86, -4.60,  3.31, -4.81],
        [ 3.98,  0.53, -7.04,  5.29,  3.55],
        [ 3.30,  8.26, -3.89,  8.20, -1.51],
        [ 4.43,  4.96, -7.66, -7.33,  6.18],
        [ 7.31, -6.43, -6.16,  2.47,  5.58],
    ])


@pytest.fixture
def general_complex_4x4():
    """Complex nonsymmetric 4 x 4 matrix."""
    return np.array([
        [-3.84 + 2.25j, -8.94 - 4.75j,  8.95 - 6.53j, -9.87 + 4.82j],
        [-0.66 + 0.83j, -4.40 - 3.82j, -3.50 - 4.26j, -3.15 + 7.36j],
        [-3.99 - 4.73j, -5.88 - 6.60j, -3.36 - 0.40j, -0.75 + 5.23j],
        [ 7.74 + 4.18j,  3.66 - 7.53j,  2.58 + 3.60j,  4.59 + 5.41j],
    ])


@pytest.fixture
def upper_symmetric_5x5():
    """Upper triangle of a real symmetric 5 x 5 matrix (lower part zero)."""
    return np.array([
        [1.96, -6.49, -0.47, -7.20, -0.65],
        [0.00,  3.80, -6.39,  1.50, -6.34],
        [0.00,  0.00,  4.17, -1.51,  2.67],
        [0.00,  0.00,  0.00,  5.70,  1.80],
        [0.00,  0.00,  0.00,  0.00, -7.10],
    ])


@pytest.fixture
def upper_hermitian_4x4():
    """Upper triangle of a Hermitian 4 x 4 matrix."""
    return np.array([
        [9.14 + 0.00j, -4.37 - 9.22j, -1.98 - 1.72j, -8.96 - 9.50j],
        [0.00 + 0.00j, -3.35 + 0.00j,  2.25 - 9.51j,  2.57 + 2.40j],
        [0.00 + 0.00j,  0.00 + 0.00j, -4.82 + 0.00j, -3.24 + 2.04j],
        [0.00 + 0.00j,  0.00 + 0.00j,  0.00 + 0.00j,  8.44 + 0.00j],
    ])


@pytest.fixture
def general_pair_4x4():
    """Real 4 x 4 pair (A, B) with finite generalized eigenvalues."""
    A = np.array([
        [3.9, 12.5, -34.5, -0.5],
        [4.3, 21.5, -47.5,  7.5],
        [4.3, 21.5, -43.5,  3.5],
        [4.4, 26.0, -46.0,  6.0],
    ])
    B = np.array([
        [1.0, 2.0, -3.0, 1.0],
        [1.0, 3.0, -5.0, 4.0],
        [1.0, 3.0, -4.0, 3.0],
        [1.0, 3.0, -4.0, 4.0],
    ])
    return A, B


@pytest.fixture
def symmetric_definite_pair():
    """Upper triangles of a symmetric A and a symmetric positive definite B."""
    A = np.triu(np.array([
        [0.24,  0.39,  0.42, -0.10],
        [0.00, -0.11,  0.79,  0.60],
        [0.00,  0.00, -0.25,  0.40],
        [0.00,  0.00,  0.00, -0.03],
    ]))
    B = np.triu(np.array([
        [4.16, -3.12,  0.56, -0.10],
        [0.00,  5.03, -0.83,  1.09],
        [0.00,  0.00,  0.76,  0.34],
        [0.00,  0.00,  0.00,  1.18],
    ]))
    return A, B


@pytest.fixture
def hermitian_definite_pair():
    """Upper triangles of a Hermitian A and a Hermitian positive definite B."""
    A = np.triu(np.array([
        [-7.36 + 0.00j, 0.77 - 0.43j, -0.64 - 0.92j,  3.01 - 6.97j],
        [ 0.00 + 0.00j, 3.49 + 0.00j,  2.19 + 4.45j,  1.90 + 3.73j],
        [ 0.00 + 0.00j, 0.00 + 0.00j,  0.12 + 0.00j,  2.88 - 3.17j],
        [ 0.00 + 0.00j, 0.00 + 0.00j,  0.00 + 0.00j, -2.54 + 0.00j],
    ]))
    B = np.triu(np.array([
        [3.23 + 0.00j, 1.51 - 1.92j,  1.90 + 0.84j,  0.42 + 2.50j],
        [0.00 + 0.00j, 3.58 + 0.00j, -0.23 + 1.11j, -1.18 + 1.37j],
        [0.00 + 0.00j, 0.00 + 0.00j,  4.09 + 0.00j,  2.33 - 0.14j],
        [0.00 + 0.00j, 0.00 + 0.00j,  0.00 + 0.00j,  4.29 + 0.00j],
    ]))
    return A, B


# ═══════════════════════════════════════════════════════════════════════
# QZ matrices
# ═══════════════════════════════════════════════════════════════════════

@pytest.fixture
def qz_pair_5x5():
    """Real 5 x 5 pair used for generalized Schur decompositions."""
    A = np.array([
        [-0.180557,  0.322289, -0.651789,  0.793637, -0.141086],
        [ 0.729781,  1.665989,  0.620091, -1.541503,  0.146673],
        [-0.594370,  0.494804,  1.004784, -0.221373, -2.196082],
        [-1.106269,  0.026697,  2.687083,  0.763162,  1.203514],
        [-0.021184, -0.882220, -1.618234,  1.119524,  2.588165],
    ])
    B = np.array([
        [-1.592710,  0.057283, -1.862275,  0.712471,  0.463207],
        [ 1.072859, -1.384371,  0.777754,  1.914787,  0.082774],
        [-0.451744, -0.131528, -0.636187,  0.984480,  0.011728],
        [-0.876629, -0.083787,  0.474227, -0.042328, -0.529845],
        [-0.812610,  0.142456,  0.033739, -2.000422, -0.765401],
    ])
    return A, B


@pytest.fixture
def unit_disk_pair(rng):
    """
    Real 4 x 4 pair with eigenvalues 2, 0.5, -3, 0.25.

    Two eigenvalues lie inside the unit disk, two outside; they are
    interleaved so that a reordering has work to do.
    """
    U, _ = np.linalg.qr(rng.standard_normal((4, 4)))
    V, _ = np.linalg.qr(rng.standard_normal((4, 4)))
    S = np.triu(rng.standard_normal((4, 4)), 1) + np.diag([2.0, 0.5, -3.0, 0.25])
    T = np.triu(rng.standard_normal((4, 4)) * 0.1, 1) + np.eye(4)
    return U @ S @ V.T, U @ T @ V.T


# ═══════════════════════════════════════════════════════════════════════
# Least squares and conditioning
# ═══════════════════════════════════════════════════════════════════════

@pytest.fixture
def lsq_real_6x5():
    """Overdetermined 6 x 5 system and its least-squares solution."""
    A = np.array([
        [-0.09,  0.14, -0.46,  0.68,  1.29],
        [-1.56,  0.20,  0.29,  1.09,  0.51],
        [-1.48, -0.43,  0.89, -0.71, -0.96],
        [-1.09,  0.84,  0.77,  2.11, -1.27],
        [ 0.08,  0.55, -1.13,  0.14,  1.74],
        [-1.59, -0.72,  1.06,  1.24,  0.34],
    ])
    b = np.array([7.4, 4.2, -8.3, 1.8, 8.6, 2.1])
    x = np.array([
        -0.799744726899358,
        -3.287963505993538,
        -7.474984265142480,
         4.939273145125775,
         0.767833440867089,
    ])
    return A, b, x


@pytest.fixture
def lsq_complex_5x4():
    """Overdetermined complex 5 x 4 system and its least-squares solution."""
    A = np.array([
        [ 0.47 - 0.34j, -0.40 + 0.54j,  0.60 + 0.01j,  0.80 - 1.02j],
        [-0.32 - 0.23j, -0.05 + 0.20j, -0.26 - 0.44j, -0.43 + 0.17j],
        [ 0.35 - 0.60j, -0.52 - 0.34j,  0.87 - 0.11j, -0.34 - 0.09j],
        [ 0.89 + 0.71j, -0.45 - 0.45j, -0.02 - 0.57j,  1.14 - 0.78j],
        [-0.19 + 0.06j,  0.11 - 0.85j,  1.44 + 0.80j,  0.07 + 1.14j],
    ])
    b = np.array([-1.08 - 2.59j, -2.61 - 1.49j, 3.13 - 3.61j, 7.33 - 8.01j, 9.12 + 7.63j])
    x = np.array([
        18.79221131415766 + 9.58842519277362j,
        19.15428710640874 + 2.12745817492880j,
        2.79395045513666 + 10.27260222931818j,
        7.14260392345630 - 11.39648999358683j,
    ])
    return A, b, x


@pytest.fixture
def well_conditioned():
    return np.array([
        [ 2.0, -1.0,  0.0],
        [-1.0,  3.0, -1.0],
        [ 0.0, -1.0,  2.0],
    ])


@pytest.fixture
def ill_conditioned():
    return np.array([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [7.0, 8.0, 9.0],
    ])


# ═══════════════════════════════════════════════════════════════════════
# Lazy operands
# ═══════════════════════════════════════════════════════════════════════

class CountingOperand:
    """DenseOperand that records how often it is evaluated."""

    def __init__(self, array, layout=None):
        self._array = np.asarray(array)
        self.calls = 0
        if layout is not None:
            self.layout = layout

    def to_dense(self):
        self.calls += 1
        return self._array.copy()


@pytest.fixture
def counting_operand():
    """Factory for lazy operands that count their to_dense() calls."""
    return CountingOperand
