"""Fixed joint: a rigid connection without variables."""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .joint_model import JointModel, JointType
from .rng import RandomNumberGenerator
from .transforms import identity
from .types import Bounds


class FixedJointModel(JointModel):
    joint_type = JointType.FIXED

    def __init__(self, name: str):
        super().__init__(name, (), ())

    def random_values_near_by(
        self,
        rng: RandomNumberGenerator,
        near: Sequence[float],
        distance: float,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        self._bounds(bounds)
        self._as_values(near)
        return self._out(out)

    def maximum_extent(self, bounds: Optional[Bounds] = None) -> float:
        self._bounds(bounds)
        return 0.0

    def distance(self, values1: Sequence[float], values2: Sequence[float]) -> float:
        self._as_values(values1)
        self._as_values(values2)
        return 0.0

    def interpolate(
        self,
        from_values: Sequence[float],
        to_values: Sequence[float],
        t: float,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        self._as_values(from_values)
        self._as_values(to_values)
        return self._out(out)

    def compute_transform(self, values: Sequence[float]) -> np.ndarray:
        self._as_values(values)
        return identity()

    def compute_joint_state_values(self, transform: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        return self._out(out)
