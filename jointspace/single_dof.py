"""Single-axis joints: revolute and prismatic."""
from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from .angles import angular_distance, interpolate_angle, normalize_angle
from .joint_model import JointModel, JointType, _check_distance, _extent, _uniform_near, _uniform_within
from .rng import RandomNumberGenerator
from .transforms import make_transform
from .types import Bounds, VariableBounds


def _unit_axis(axis: Sequence[float]) -> np.ndarray:
    axis = np.asarray(axis, dtype=float)
    if axis.shape != (3,):
        raise ValueError(f"Expected axis of shape (3,), got {axis.shape}")
    norm = np.linalg.norm(axis)
    if norm < 1e-12:
        raise ValueError(f"Axis vector is too small to be normalized: {axis}")
    return axis / norm


class SingleDOFJointModel(JointModel):
    """Joint with one scalar variable moving along or about ``axis``."""

    def __init__(self, name: str, axis: Sequence[float], bounds: VariableBounds):
        super().__init__(name, (name,), (bounds,))
        self._axis = _unit_axis(axis)
        self._axis.setflags(write=False)

    @property
    def axis(self) -> np.ndarray:
        return self._axis

    def random_values_near_by(
        self,
        rng: RandomNumberGenerator,
        near: Sequence[float],
        distance: float,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        bounds = self._bounds(bounds)
        near = self._as_values(near)
        _check_distance(distance)
        out = self._out(out)
        out[0] = _uniform_near(rng, bounds[0], float(near[0]), distance)
        return out

    def maximum_extent(self, bounds: Optional[Bounds] = None) -> float:
        bounds = self._bounds(bounds)
        return _extent(bounds[0])

    def distance(self, values1: Sequence[float], values2: Sequence[float]) -> float:
        a = self._as_values(values1)
        b = self._as_values(values2)
        return abs(float(a[0]) - float(b[0]))

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
        out[0] = a[0] + (b[0] - a[0]) * t
        return out


class RevoluteJointModel(SingleDOFJointModel):
    """Rotation about a fixed axis.

    A ``continuous`` joint wraps around: its value is kept in ``[-pi, pi]``
    and distance and interpolation follow the shorter arc.
    """

    joint_type = JointType.REVOLUTE

    def __init__(
        self,
        name: str,
        axis: Sequence[float] = (0.0, 0.0, 1.0),
        bounds: Optional[VariableBounds] = None,
        continuous: bool = False,
    ):
        if bounds is None:
            bounds = VariableBounds(-math.pi, math.pi)
        super().__init__(name, axis, bounds)
        self._continuous = continuous

    @property
    def continuous(self) -> bool:
        return self._continuous

    def normalize_rotation(self, values: np.ndarray) -> bool:
        self._check_values(values)
        if not self._continuous:
            return False
        wrapped = normalize_angle(float(values[0]))
        if wrapped == values[0]:
            return False
        values[0] = wrapped
        return True

    def random_values(
        self,
        rng: RandomNumberGenerator,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        if not self._continuous:
            return super().random_values(rng, bounds, out)
        bounds = self._bounds(bounds)
        out = self._out(out)
        lo = max(-math.pi, bounds[0].min_position)
        hi = min(math.pi, bounds[0].max_position)
        out[0] = rng.uniform_real(lo, hi) if lo <= hi else _uniform_within(rng, bounds[0])
        return out

    def random_values_near_by(
        self,
        rng: RandomNumberGenerator,
        near: Sequence[float],
        distance: float,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        if not self._continuous:
            return super().random_values_near_by(rng, near, distance, bounds, out)
        bounds = self._bounds(bounds)
        near = self._as_values(near)
        _check_distance(distance)
        out = self._out(out)
        span = min(distance, math.pi)
        out[0] = bounds[0].clip(normalize_angle(float(near[0]) + rng.uniform_real(-span, span)))
        return out

    def enforce_bounds(self, values: np.ndarray, bounds: Optional[Bounds] = None) -> bool:
        bounds = self._bounds(bounds)
        before = np.array(values, dtype=float)
        self.normalize_rotation(values)
        super().enforce_bounds(values, bounds)
        return not np.array_equal(before, values)

    def maximum_extent(self, bounds: Optional[Bounds] = None) -> float:
        if self._continuous:
            self._bounds(bounds)
            return math.pi
        return super().maximum_extent(bounds)

    def distance(self, values1: Sequence[float], values2: Sequence[float]) -> float:
        if not self._continuous:
            return super().distance(values1, values2)
        a = self._as_values(values1)
        b = self._as_values(values2)
        return angular_distance(float(a[0]), float(b[0]))

    def interpolate(
        self,
        from_values: Sequence[float],
        to_values: Sequence[float],
        t: float,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        if not self._continuous:
            return super().interpolate(from_values, to_values, t, out)
        a = self._as_values(from_values)
        b = self._as_values(to_values)
        out = self._out(out)
        out[0] = interpolate_angle(float(a[0]), float(b[0]), t)
        return out

    def compute_transform(self, values: Sequence[float]) -> np.ndarray:
        v = self._as_values(values)
        R = Rotation.from_rotvec(self._axis * v[0]).as_matrix()
        return make_transform(R)

    def compute_joint_state_values(self, transform: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Angle about the joint axis, in ``[-pi, pi]``; off-axis rotation is discarded."""

        out = self._out(out)
        rotvec = Rotation.from_matrix(transform[:3, :3]).as_rotvec()
        out[0] = float(np.dot(rotvec, self._axis))
        return out


class PrismaticJointModel(SingleDOFJointModel):
    """Translation along a fixed axis."""

    joint_type = JointType.PRISMATIC

    def __init__(
        self,
        name: str,
        axis: Sequence[float] = (1.0, 0.0, 0.0),
        bounds: Optional[VariableBounds] = None,
    ):
        super().__init__(name, axis, bounds if bounds is not None else VariableBounds())

    def compute_transform(self, values: Sequence[float]) -> np.ndarray:
        v = self._as_values(values)
        return make_transform(translation=self._axis * v[0])

    def compute_joint_state_values(self, transform: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        out = self._out(out)
        out[0] = float(np.dot(transform[:3, 3], self._axis))
        return out
