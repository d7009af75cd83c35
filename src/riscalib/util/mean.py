"""Means of rotations, arrays and scalars."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from ..errors import NonConvergenceError
from .so3 import exp_so3, log_so3

logger = logging.getLogger(__name__)


def compute_karcher_mean(
    rotations: Iterable[np.ndarray],
    tolerance: float = 1e-15,
    max_iterations: int = 100,
) -> np.ndarray:
    """Compute the Riemannian (Karcher) mean of a set of rotations.

    Starting from the first rotation X, repeatedly averages the tangent
    vectors log(Xᵀ R_i) and moves X along their mean, X ← X exp(mean), until
    the mean tangent vector is shorter than ``tolerance``.

    An empty input yields the identity. Callers that need to tell "no data"
    apart from an identity mean must check for emptiness themselves.

    Args:
        rotations: 3x3 rotation matrices
        tolerance: Convergence threshold on the norm of the mean tangent vector
        max_iterations: Maximum number of update steps

    Returns:
        3x3 rotation matrix of the mean

    Raises:
        ValueError: If a rotation is not 3x3 or max_iterations < 1
        NonConvergenceError: If the estimate has not converged after
            ``max_iterations`` updates (widely dispersed inputs)
    """
    rotations = [np.asarray(R, dtype=np.float64) for R in rotations]
    if not rotations:
        return np.eye(3)
    for R in rotations:
        if R.shape != (3, 3):
            raise ValueError(f"Rotation must be 3x3, got {R.shape}")
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

    X = rotations[0].copy()
    for iteration in range(max_iterations):
        A = np.zeros(3)
        for R in rotations:
            A += log_so3(X.T @ R)
        A /= len(rotations)

        if np.linalg.norm(A) < tolerance:
            logger.debug("Karcher mean of %d rotations converged after %d updates",
                         len(rotations), iteration)
            return X
        X = X @ exp_so3(A)

    raise NonConvergenceError(X, max_iterations)


def compute_mat_vec_mean(arrays: Sequence[np.ndarray]) -> np.ndarray:
    """Element-wise mean of equally shaped arrays.

    Args:
        arrays: Arrays (vectors or matrices) of identical shape

    Returns:
        Mean array

    Raises:
        ValueError: If ``arrays`` is empty or shapes differ
    """
    if len(arrays) == 0:
        raise ValueError("Cannot compute the mean of an empty sequence")
    X = np.zeros_like(np.asarray(arrays[0], dtype=np.float64))
    for item in arrays:
        item = np.asarray(item, dtype=np.float64)
        if item.shape != X.shape:
            raise ValueError(f"Shape mismatch: {item.shape} vs {X.shape}")
        X += item
    return X / len(arrays)


def compute_numerical_mean(values: Sequence[float]) -> float:
    """Mean of scalar values.

    Raises:
        ValueError: If ``values`` is empty
    """
    if len(values) == 0:
        raise ValueError("Cannot compute the mean of an empty sequence")
    total = 0.0
    for v in values:
        total += v
    return total / len(values)
