"""Exponential and logarithmic maps of the rotation group SO(3)."""

from __future__ import annotations

import math

import numpy as np


def skew(v: np.ndarray) -> np.ndarray:
    """Create skew-symmetric matrix from vector.

    Args:
        v: 3D vector

    Returns:
        3x3 skew-symmetric matrix [v]×
    """
    return np.array([
        [0, -v[2], v[1]],
        [v[2], 0, -v[0]],
        [-v[1], v[0], 0]
    ], dtype=np.float64)


def exp_so3(omega: np.ndarray) -> np.ndarray:
    """Exponential map from so(3) to SO(3) (Rodrigues formula).

    Args:
        omega: Rotation vector (3,), axis * angle in radians

    Returns:
        3x3 rotation matrix
    """
    omega = np.asarray(omega, dtype=np.float64)
    theta = np.linalg.norm(omega)
    if theta < 1e-10:
        # First-order approximation for small angles: R ≈ I + [omega]×
        return np.eye(3) + skew(omega)

    axis = omega / theta
    K = skew(axis)

    # Rodrigues formula: R = I + sin(θ)K + (1 - cos(θ))K²
    return np.eye(3) + np.sin(theta) * K + (1 - np.cos(theta)) * (K @ K)


def log_so3(R: np.ndarray) -> np.ndarray:
    """Logarithmic map from SO(3) to so(3).

    The angle is recovered with atan2 so it stays accurate near 0. Near π the
    antisymmetric part of R vanishes and the axis is read from the symmetric
    part instead.

    Args:
        R: 3x3 rotation matrix

    Returns:
        Rotation vector (3,), axis * angle with angle in [0, π]
    """
    R = np.asarray(R, dtype=np.float64)
    w = np.array([R[2, 1] - R[1, 2], R[0, 2] - R[2, 0], R[1, 0] - R[0, 1]])
    sin_theta = 0.5 * np.linalg.norm(w)
    cos_theta = 0.5 * (np.trace(R) - 1.0)
    theta = math.atan2(sin_theta, cos_theta)

    if sin_theta < 1e-10 and cos_theta > 0.0:
        # θ / (2 sin θ) ≈ (1 + θ²/6) / 2
        return 0.5 * (1.0 + theta * theta / 6.0) * w

    if sin_theta < 1e-6 and cos_theta < 0.0:
        # Symmetric part: cos θ I + (1 - cos θ) a aᵀ
        aat = (0.5 * (R + R.T) - cos_theta * np.eye(3)) / (1.0 - cos_theta)
        k = int(np.argmax(np.diag(aat)))
        axis = aat[:, k] / math.sqrt(aat[k, k])
        if np.dot(axis, w) < 0.0:
            axis = -axis
        return theta * axis

    return theta / (2.0 * sin_theta) * w
