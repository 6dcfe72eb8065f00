"""Shared dataclasses for joint variables, bounds and limits."""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class VariableBounds:
    """Closed position interval and rate limits for one joint variable."""

    min_position: float = -math.inf
    max_position: float = math.inf
    max_velocity: float = math.inf
    max_acceleration: float = math.inf
    max_effort: float = math.inf

    def __post_init__(self) -> None:
        if self.min_position > self.max_position:
            raise ValueError(
                f"Inverted bounds: min_position={self.min_position} > max_position={self.max_position}"
            )

    @property
    def position_bounded(self) -> bool:
        return math.isfinite(self.min_position) and math.isfinite(self.max_position)

    @property
    def velocity_bounded(self) -> bool:
        return math.isfinite(self.max_velocity)

    @property
    def acceleration_bounded(self) -> bool:
        return math.isfinite(self.max_acceleration)

    @property
    def effort_bounded(self) -> bool:
        return math.isfinite(self.max_effort)

    def clip(self, value: float) -> float:
        return min(max(value, self.min_position), self.max_position)

    def contains(self, value: float, margin: float = 0.0) -> bool:
        return self.min_position + margin <= value <= self.max_position - margin


Bounds = Sequence[VariableBounds]


@dataclass(frozen=True)
class Limits:
    """Position limits for a whole configuration vector."""

    q_min: np.ndarray
    q_max: np.ndarray

    def clamp(self, q: np.ndarray) -> np.ndarray:
        return np.minimum(np.maximum(q, self.q_min), self.q_max)

    @classmethod
    def from_bounds(cls, bounds: Bounds) -> "Limits":
        q_min = np.array([b.min_position for b in bounds], dtype=float)
        q_max = np.array([b.max_position for b in bounds], dtype=float)
        return cls(q_min=q_min, q_max=q_max)

    def apply(self, bounds: Bounds) -> Tuple[VariableBounds, ...]:
        """Intersect ``bounds`` with these limits, keeping the rate limits.

        The result is a fresh bounds tuple, so a shared joint model can be
        evaluated under tightened runtime limits without being copied.
        """

        if len(bounds) != len(self.q_min) or len(bounds) != len(self.q_max):
            raise ValueError(f"Expected {len(self.q_min)} bounds, got {len(bounds)}")
        tightened = []
        for b, lo, hi in zip(bounds, self.q_min, self.q_max):
            tightened.append(
                VariableBounds(
                    min_position=max(b.min_position, float(lo)),
                    max_position=min(b.max_position, float(hi)),
                    max_velocity=b.max_velocity,
                    max_acceleration=b.max_acceleration,
                    max_effort=b.max_effort,
                )
            )
        return tuple(tightened)


@dataclass(frozen=True)
class VariableLimits:
    """Introspection record describing the limits of one variable."""

    variable_name: str
    has_position_limits: bool
    min_position: float
    max_position: float
    has_velocity_limits: bool
    max_velocity: float
    has_acceleration_limits: bool
    max_acceleration: float
    has_effort_limits: bool
    max_effort: float

    @classmethod
    def from_bounds(cls, name: str, bounds: VariableBounds) -> "VariableLimits":
        return cls(
            variable_name=name,
            has_position_limits=bounds.position_bounded,
            min_position=bounds.min_position,
            max_position=bounds.max_position,
            has_velocity_limits=bounds.velocity_bounded,
            max_velocity=bounds.max_velocity,
            has_acceleration_limits=bounds.acceleration_bounded,
            max_acceleration=bounds.max_acceleration,
            has_effort_limits=bounds.effort_bounded,
            max_effort=bounds.max_effort,
        )


@dataclass(frozen=True)
class Variable:
    """A named scalar degree of freedom and its slot in a configuration vector."""

    name: str
    index: int
    bounds: VariableBounds


@dataclass(frozen=True)
class Frames:
    """Base and tool frames for a kinematic chain."""

    T_base: np.ndarray
    T_tool: np.ndarray
