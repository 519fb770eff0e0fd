"""Least-squares solver for the balancing system.

``A`` is generally not square, so the coefficients are taken from the normal
equations

    (Aᵀ A) x = Aᵀ B

which are solved by Gaussian elimination with partial pivoting followed by
back substitution.
"""

from __future__ import annotations

import numpy as np

from chembalance.constants import DEFAULT_PIVOT_TOLERANCE, DEFAULT_PRECISION
from chembalance.errors import SingularSystem


def gaussian_elimination(
    matrix: np.ndarray,
    rhs: np.ndarray,
    pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE,
) -> np.ndarray:
    """Solve a square system ``matrix @ x = rhs``.

    At each step the row with the largest magnitude in the pivot column is
    swapped into place. The inputs are not modified.

    Args:
        matrix: Square coefficient matrix.
        rhs: Right-hand side vector.
        pivot_tolerance: Pivots with a magnitude at or below this fraction of
            the largest entry of the augmented matrix are zero.

    Returns:
        The solution vector.

    Raises:
        SingularSystem: A zero pivot remained after pivot selection.
    """
    a = np.array(matrix, dtype=float)
    b = np.array(rhs, dtype=float).reshape(-1)
    n = a.shape[0]
    if a.ndim != 2 or a.shape[1] != n or b.shape[0] != n:
        raise ValueError("Incompatible matrices for Gaussian elimination")

    augmented = np.column_stack([a, b])
    threshold = pivot_tolerance * float(np.abs(augmented).max(initial=0.0))
    for k in range(n):
        pivot_row = k + int(np.argmax(np.abs(augmented[k:, k])))
        if abs(augmented[pivot_row, k]) <= threshold:
            raise SingularSystem()
        if pivot_row != k:
            augmented[[k, pivot_row]] = augmented[[pivot_row, k]]
        factors = augmented[k + 1:, k] / augmented[k, k]
        augmented[k + 1:, k + 1:] -= np.outer(factors, augmented[k, k + 1:])
        augmented[k + 1:, k] = 0.0

    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        x[i] = (augmented[i, n] - augmented[i, i + 1:n] @ x[i + 1:]) / augmented[i, i]
    return x


def solve(
    matrix: np.ndarray,
    rhs: np.ndarray,
    precision: int = DEFAULT_PRECISION,
    pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE,
) -> np.ndarray:
    """Least-squares coefficients for ``matrix @ x ≈ rhs``.

    The result is rounded half up to ``precision`` decimals to drop
    floating-point noise; one value per column of ``matrix``.
    """
    a = np.asarray(matrix, dtype=float)
    b = np.asarray(rhs, dtype=float).reshape(-1)
    a_t = a.T
    x = gaussian_elimination(a_t @ a, a_t @ b, pivot_tolerance=pivot_tolerance)
    scale = 10.0**precision
    # Adding 0.0 turns -0.0 into 0.0.
    return np.floor(x * scale + 0.5) / scale + 0.0
