"""Seedable random source used by the sampling operations."""
from __future__ import annotations

from typing import Optional

import numpy as np
from scipy.spatial.transform import Rotation


class RandomNumberGenerator:
    """Thin wrapper around :class:`numpy.random.Generator`.

    Joint models only need closed-interval uniform draws, gaussian draws and
    uniformly distributed unit quaternions. A fixed ``seed`` makes every
    sequence of draws reproducible.
    """

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        self._gen = np.random.default_rng(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def generator(self) -> np.random.Generator:
        return self._gen

    def uniform_real(self, lo: float, hi: float) -> float:
        """Draw uniformly from ``[lo, hi]``."""

        if lo == hi:
            return float(lo)
        # numpy draws from the half-open [lo, hi); clip keeps the closed interval contract
        return float(min(max(self._gen.uniform(lo, hi), lo), hi))

    def gaussian(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        return float(self._gen.normal(mean, stddev))

    def quaternion(self) -> np.ndarray:
        """Uniformly distributed unit quaternion in ``(x, y, z, w)`` order."""

        # an isotropic 4D gaussian direction is uniform on SO(3)
        return Rotation.from_quat(self._gen.normal(size=4)).as_quat()
