"""Homogeneous 4x4 rigid transform helpers."""
from __future__ import annotations

import numpy as np


def identity() -> np.ndarray:
    return np.eye(4, dtype=float)


def make_transform(rotation: np.ndarray | None = None, translation: np.ndarray | None = None) -> np.ndarray:
    """Assemble a homogeneous transform from a 3x3 rotation and a translation."""

    T = np.eye(4, dtype=float)
    if rotation is not None:
        T[:3, :3] = rotation
    if translation is not None:
        T[:3, 3] = translation
    return T


def rotation_z(angle: float) -> np.ndarray:
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array(
        [
            [c, -s, 0.0],
            [s, c, 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=float,
    )


def yaw_from_rotation(R: np.ndarray) -> float:
    """Rotation about the z axis encoded by ``R``; other axes are ignored."""

    return float(np.arctan2(R[1, 0], R[0, 0]))


def is_homogeneous(T: np.ndarray) -> bool:
    return T.shape == (4, 4) and np.array_equal(T[3], [0.0, 0.0, 0.0, 1.0])


def is_rigid(T: np.ndarray, tol: float = 1e-9) -> bool:
    """True when ``T`` is homogeneous with an orthonormal, right-handed rotation."""

    if not is_homogeneous(T):
        return False
    R = T[:3, :3]
    return bool(np.allclose(R.T @ R, np.eye(3), atol=tol) and abs(np.linalg.det(R) - 1.0) <= tol)
