"""Planar joint: translation in the x-y plane plus rotation about z (SE(2))."""
from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from .angles import angular_distance, interpolate_angle, normalize_angle
from .joint_model import (
    AngularDistanceWeighted,
    JointModel,
    JointType,
    _check_distance,
    _check_transform_buffer,
    _uniform_near,
    _uniform_within,
)
from .rng import RandomNumberGenerator
from .transforms import make_transform, rotation_z, yaw_from_rotation
from .types import Bounds, VariableBounds

X, Y, YAW = 0, 1, 2


class PlanarJointModel(AngularDistanceWeighted, JointModel):
    """Three variables ``x``, ``y`` and ``yaw`` describing motion in SE(2).

    The metric is ``hypot(dx, dy) + w * |dyaw|`` where ``dyaw`` is measured
    along the shorter arc and ``w`` is :attr:`angular_distance_weight`.
    Yaw is kept canonical in ``[-pi, pi]``.
    """

    joint_type = JointType.PLANAR

    def __init__(self, name: str, angular_distance_weight: float = 1.0):
        bounds = (
            VariableBounds(),
            VariableBounds(),
            VariableBounds(-math.pi, math.pi),
        )
        super().__init__(name, ("x", "y", "yaw"), bounds)
        self.angular_distance_weight = angular_distance_weight

    def normalize_rotation(self, values: np.ndarray) -> bool:
        """Bring yaw into ``[-pi, pi]`` in place; return True if it changed."""

        self._check_values(values)
        yaw = float(values[YAW])
        wrapped = normalize_angle(yaw)
        if wrapped == yaw:
            return False
        values[YAW] = wrapped
        return True

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------
    def random_values(
        self,
        rng: RandomNumberGenerator,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        bounds = self._bounds(bounds)
        out = self._out(out)
        out[X] = _uniform_within(rng, bounds[X])
        out[Y] = _uniform_within(rng, bounds[Y])
        yb = bounds[YAW]
        lo = max(-math.pi, yb.min_position)
        hi = min(math.pi, yb.max_position)
        if lo <= hi:
            out[YAW] = rng.uniform_real(lo, hi)
        else:
            out[YAW] = _uniform_within(rng, yb)
        return out

    def random_values_near_by(
        self,
        rng: RandomNumberGenerator,
        near: Sequence[float],
        distance: float,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Sample x and y within ``distance`` of ``near`` and yaw within ``distance`` radians of it.

        The yaw interval wraps around ``+-pi``; the sample is normalized before
        being clipped to the yaw bounds.
        """

        bounds = self._bounds(bounds)
        near = self._as_values(near)
        _check_distance(distance)
        out = self._out(out)
        out[X] = _uniform_near(rng, bounds[X], float(near[X]), distance)
        out[Y] = _uniform_near(rng, bounds[Y], float(near[Y]), distance)
        span = min(distance, math.pi)
        yaw = normalize_angle(float(near[YAW]) + rng.uniform_real(-span, span))
        out[YAW] = bounds[YAW].clip(yaw)
        return out

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------
    def enforce_bounds(self, values: np.ndarray, bounds: Optional[Bounds] = None) -> bool:
        # normalize first: clamping an unwrapped yaw could leave it off the canonical range
        bounds = self._bounds(bounds)
        before = np.array(values, dtype=float)
        self.normalize_rotation(values)
        super().enforce_bounds(values, bounds)
        return not np.array_equal(before, values)

    # ------------------------------------------------------------------
    # Metric
    # ------------------------------------------------------------------
    def maximum_extent(self, bounds: Optional[Bounds] = None) -> float:
        bounds = self._bounds(bounds)
        dx = bounds[X].max_position - bounds[X].min_position
        dy = bounds[Y].max_position - bounds[Y].min_position
        return math.hypot(dx, dy) + self.angular_distance_weight * math.pi

    def distance(self, values1: Sequence[float], values2: Sequence[float]) -> float:
        a = self._as_values(values1)
        b = self._as_values(values2)
        dxy = math.hypot(a[X] - b[X], a[Y] - b[Y])
        return dxy + self.angular_distance_weight * angular_distance(float(a[YAW]), float(b[YAW]))

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
        out[X] = a[X] + (b[X] - a[X]) * t
        out[Y] = a[Y] + (b[Y] - a[Y]) * t
        out[YAW] = interpolate_angle(float(a[YAW]), float(b[YAW]), t)
        return out

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------
    def compute_transform(self, values: Sequence[float]) -> np.ndarray:
        v = self._as_values(values)
        return make_transform(rotation_z(v[YAW]), np.array([v[X], v[Y], 0.0]))

    def compute_joint_state_values(self, transform: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Extract ``(x, y, yaw)``.

        Out-of-plane translation and rotation are dropped without checking;
        only the z-rotation part of the input is kept.
        """

        out = self._out(out)
        out[X] = transform[0, 3]
        out[Y] = transform[1, 3]
        out[YAW] = yaw_from_rotation(transform[:3, :3])
        return out

    def update_transform(self, values: Sequence[float], transform: np.ndarray) -> np.ndarray:
        """In-place variant of :meth:`compute_transform`.

        Only the planar entries are rewritten when ``transform`` already has
        the planar structure; any other buffer is reset to identity first.
        """

        _check_transform_buffer(transform)
        v = self._as_values(values)
        if not _is_planar(transform):
            transform[...] = np.eye(4)
        transform[:2, :2] = rotation_z(v[YAW])[:2, :2]
        transform[0, 3] = v[X]
        transform[1, 3] = v[Y]
        return transform


def _is_planar(T: np.ndarray) -> bool:
    return (
        T[0, 2] == 0.0
        and T[1, 2] == 0.0
        and T[2, 0] == 0.0
        and T[2, 1] == 0.0
        and T[2, 2] == 1.0
        and T[2, 3] == 0.0
        and T[3, 0] == 0.0
        and T[3, 1] == 0.0
        and T[3, 2] == 0.0
        and T[3, 3] == 1.0
    )
