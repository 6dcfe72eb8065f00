"""Floating joint: unconstrained 3D rigid motion."""
from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation, Slerp

from .joint_model import (
    AngularDistanceWeighted,
    JointModel,
    JointType,
    _check_distance,
    _uniform_near,
    _uniform_within,
)
from .rng import RandomNumberGenerator
from .transforms import make_transform
from .types import Bounds, VariableBounds

TRANS = slice(0, 3)
ROT = slice(3, 7)

_IDENTITY_QUAT = np.array([0.0, 0.0, 0.0, 1.0])
_QUAT_TOLERANCE = 1e-6


class FloatingJointModel(AngularDistanceWeighted, JointModel):
    """Translation plus a unit quaternion in ``(x, y, z, w)`` order.

    Seven variables are stored but the state space is six dimensional.
    Distance is the translational Euclidean distance plus the weighted
    rotation angle between the two orientations.
    """

    joint_type = JointType.FLOATING

    def __init__(self, name: str, angular_distance_weight: float = 1.0):
        names = ("trans_x", "trans_y", "trans_z", "rot_x", "rot_y", "rot_z", "rot_w")
        bounds = (VariableBounds(),) * 3 + (VariableBounds(-1.0, 1.0),) * 4
        super().__init__(name, names, bounds)
        self.angular_distance_weight = angular_distance_weight

    def state_space_dimension(self) -> int:
        return 6

    def normalize_rotation(self, values: np.ndarray) -> bool:
        """Rescale the quaternion to unit length; a zero quaternion becomes identity."""

        self._check_values(values)
        norm = float(np.linalg.norm(values[ROT]))
        if abs(norm - 1.0) <= 1e-12:
            return False
        if norm < 1e-12:
            values[ROT] = _IDENTITY_QUAT
        else:
            values[ROT] = values[ROT] / norm
        return True

    def default_values(self, bounds: Optional[Bounds] = None, out: Optional[np.ndarray] = None) -> np.ndarray:
        bounds = self._bounds(bounds)
        out = self._out(out)
        for i in range(3):
            out[i] = bounds[i].clip(0.0)
        out[ROT] = _IDENTITY_QUAT
        return out

    def random_values(
        self,
        rng: RandomNumberGenerator,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        bounds = self._bounds(bounds)
        out = self._out(out)
        for i in range(3):
            out[i] = _uniform_within(rng, bounds[i])
        out[ROT] = rng.quaternion()
        return out

    def random_values_near_by(
        self,
        rng: RandomNumberGenerator,
        near: Sequence[float],
        distance: float,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Translation within ``distance`` per axis, orientation within ``distance / w`` radians."""

        bounds = self._bounds(bounds)
        near = self._as_values(near)
        _check_distance(distance)
        out = self._out(out)
        for i in range(3):
            out[i] = _uniform_near(rng, bounds[i], float(near[i]), distance)
        axis = np.array([rng.gaussian() for _ in range(3)])
        norm = np.linalg.norm(axis)
        axis = axis / norm if norm > 1e-12 else np.array([0.0, 0.0, 1.0])
        weight = self.angular_distance_weight
        max_angle = min(distance / weight, math.pi) if weight > 0.0 else math.pi
        angle = rng.uniform_real(0.0, max_angle)
        rotation = _rotation(near) * Rotation.from_rotvec(axis * angle)
        out[ROT] = rotation.as_quat()
        return out

    def enforce_bounds(self, values: np.ndarray, bounds: Optional[Bounds] = None) -> bool:
        bounds = self._bounds(bounds)
        changed = self.normalize_rotation(values)
        for i in range(3):
            clipped = bounds[i].clip(float(values[i]))
            if clipped != values[i]:
                values[i] = clipped
                changed = True
        return changed

    def satisfies_bounds(self, values: Sequence[float], bounds: Optional[Bounds] = None, margin: float = 0.0) -> bool:
        """Translation must lie inside the shrunk bounds and the quaternion must be unit length."""

        bounds = self._bounds(bounds)
        values = self._as_values(values)
        if not all(bounds[i].contains(float(values[i]), margin) for i in range(3)):
            return False
        return abs(float(np.linalg.norm(values[ROT])) - 1.0) <= _QUAT_TOLERANCE

    def maximum_extent(self, bounds: Optional[Bounds] = None) -> float:
        bounds = self._bounds(bounds)
        extents = [bounds[i].max_position - bounds[i].min_position for i in range(3)]
        return math.sqrt(sum(e * e for e in extents)) + self.angular_distance_weight * math.pi

    def distance(self, values1: Sequence[float], values2: Sequence[float]) -> float:
        a = self._as_values(values1)
        b = self._as_values(values2)
        translation = float(np.linalg.norm(a[TRANS] - b[TRANS]))
        angle = float((_rotation(a).inv() * _rotation(b)).magnitude())
        return translation + self.angular_distance_weight * angle

    def interpolate(
        self,
        from_values: Sequence[float],
        to_values: Sequence[float],
        t: float,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        a = self._as_values(from_values)
        b = self._as_values(to_values)
        out = self._out(out)
        out[TRANS] = a[TRANS] + (b[TRANS] - a[TRANS]) * t
        slerp = Slerp([0.0, 1.0], Rotation.from_quat([a[ROT], b[ROT]]))
        q = slerp([t]).as_quat()[0]
        # keep the sign of the nearer endpoint so t=0 and t=1 reproduce the inputs
        ref = a[ROT] if t <= 0.5 else b[ROT]
        if np.dot(q, ref) < 0.0:
            q = -q
        out[ROT] = q
        return out

    def compute_transform(self, values: Sequence[float]) -> np.ndarray:
        v = self._as_values(values)
        return make_transform(_rotation(v).as_matrix(), v[TRANS])

    def compute_joint_state_values(self, transform: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        out = self._out(out)
        out[TRANS] = transform[:3, 3]
        out[ROT] = Rotation.from_matrix(transform[:3, :3]).as_quat()
        return out


def _rotation(values: np.ndarray) -> Rotation:
    return Rotation.from_quat(values[ROT])
