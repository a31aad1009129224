"""
GF(2) Linear Algebra

Rank and null space of dense binary matrices, used to derive generator
matrices and code dimensions from parity check matrices. The elimination
itself is done by ``ldpc.mod2``.
"""

import numpy as np
import ldpc.mod2
from scipy.sparse import issparse


def _as_binary(A) -> np.ndarray:
    A = np.asarray(A, dtype=np.uint8) & 1
    if A.ndim != 2:
        raise ValueError(f"expected a 2D matrix, got shape {A.shape}")
    return A


def rank(A) -> int:
    """Rank of a binary matrix over GF(2)."""
    A = _as_binary(A)
    # Empty and all-zero matrices are handled here
    if not A.any():
        return 0
    return int(ldpc.mod2.rank(A))


def nullspace(A) -> np.ndarray:
    """
    Return a basis for the nullspace of A (mod 2), as rows.

    Every returned row ``v`` satisfies ``A @ v % 2 == 0``. For a matrix
    with ``n`` columns and rank ``r`` the result has shape ``(n - r, n)``.
    """
    A = _as_binary(A)
    n = A.shape[1]
    if not A.any():
        return np.eye(n, dtype=np.uint8)
    basis = ldpc.mod2.nullspace(A)
    # Newer ldpc releases return scipy sparse matrices
    if issparse(basis):
        basis = basis.toarray()
    return (np.asarray(basis).astype(np.uint8) & 1).reshape(-1, n)
