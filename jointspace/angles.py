"""Wrap-around arithmetic for rotational variables."""
from __future__ import annotations

import math

TWO_PI = 2.0 * math.pi


def normalize_angle(angle: float) -> float:
    """Map ``angle`` into ``[-pi, pi]``; values already inside are returned unchanged."""

    if -math.pi <= angle <= math.pi:
        return angle
    v = math.fmod(angle, TWO_PI)
    if v < -math.pi:
        v += TWO_PI
    elif v > math.pi:
        v -= TWO_PI
    return v


def shortest_angular_difference(from_angle: float, to_angle: float) -> float:
    """Signed difference ``to - from`` along the shorter arc, in ``[-pi, pi]``."""

    delta = to_angle - from_angle
    return math.atan2(math.sin(delta), math.cos(delta))


def angular_distance(a: float, b: float) -> float:
    return abs(shortest_angular_difference(a, b))


def interpolate_angle(from_angle: float, to_angle: float, t: float) -> float:
    """Interpolate through the smaller arc and normalize the result."""

    return normalize_angle(from_angle + shortest_angular_difference(from_angle, to_angle) * t)
