"""Abstract joint model shared by every joint family."""
from __future__ import annotations

from abc import ABC, abstractmethod
import enum
import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .rng import RandomNumberGenerator
from .types import Bounds, VariableBounds, VariableLimits

logger = logging.getLogger(__name__)


class JointType(enum.Enum):
    UNKNOWN = 0
    REVOLUTE = 1
    PRISMATIC = 2
    PLANAR = 3
    FLOATING = 4
    FIXED = 5


class JointModel(ABC):
    """Configuration space of one joint.

    A joint model is immutable once built and never owns configuration
    values: every operation reads or writes a caller-supplied slice of a
    configuration vector (or a caller-supplied transform). Bounds-sensitive
    operations take the bounds as an argument and fall back to the joint's
    intrinsic bounds only when ``bounds`` is ``None``, so one instance can be
    shared by many differently constrained callers and threads.

    Operations that produce values follow the numpy ``out=`` convention:
    when ``out`` is given it is filled in place and returned.
    """

    joint_type: JointType = JointType.UNKNOWN

    def __init__(self, name: str, local_variable_names: Sequence[str], default_bounds: Sequence[VariableBounds]):
        if len(local_variable_names) != len(default_bounds):
            raise ValueError(
                f"Expected {len(local_variable_names)} bounds for joint '{name}', got {len(default_bounds)}"
            )
        self._name = name
        self._local_variable_names: Tuple[str, ...] = tuple(local_variable_names)
        if len(self._local_variable_names) == 1:
            self._variable_names: Tuple[str, ...] = (name,)
        else:
            self._variable_names = tuple(f"{name}/{local}" for local in self._local_variable_names)
        self._default_bounds: Tuple[VariableBounds, ...] = tuple(default_bounds)
        logger.debug("Created %s joint '%s' with %d variables", self.type_name, name, self.variable_count)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self._name}>"

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> JointType:
        return self.joint_type

    @property
    def type_name(self) -> str:
        return self.joint_type.name.lower()

    @property
    def variable_names(self) -> Tuple[str, ...]:
        return self._variable_names

    @property
    def local_variable_names(self) -> Tuple[str, ...]:
        return self._local_variable_names

    @property
    def variable_count(self) -> int:
        return len(self._local_variable_names)

    @property
    def default_bounds(self) -> Tuple[VariableBounds, ...]:
        """Intrinsic bounds, used whenever an operation receives ``bounds=None``."""

        return self._default_bounds

    def variable_index(self, name: str) -> int:
        """Index of a variable (full or local name) within this joint's slice."""

        if name in self._variable_names:
            return self._variable_names.index(name)
        if name in self._local_variable_names:
            return self._local_variable_names.index(name)
        raise KeyError(f"Joint '{self._name}' has no variable named '{name}'")

    def state_space_dimension(self) -> int:
        return self.variable_count

    def variable_limits(self) -> List[VariableLimits]:
        """Intrinsic limits of every variable; overridden bounds are not consulted."""

        return [VariableLimits.from_bounds(n, b) for n, b in zip(self._variable_names, self._default_bounds)]

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------
    def default_values(self, bounds: Optional[Bounds] = None, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Zero for every variable, moved to the nearest in-bounds value."""

        bounds = self._bounds(bounds)
        out = self._out(out)
        for i, b in enumerate(bounds):
            out[i] = b.clip(0.0)
        return out

    def random_values(
        self,
        rng: RandomNumberGenerator,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        bounds = self._bounds(bounds)
        out = self._out(out)
        for i, b in enumerate(bounds):
            out[i] = _uniform_within(rng, b)
        return out

    @abstractmethod
    def random_values_near_by(
        self,
        rng: RandomNumberGenerator,
        near: Sequence[float],
        distance: float,
        bounds: Optional[Bounds] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Sample within a ``distance`` neighbourhood of ``near``, clipped to ``bounds``."""

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------
    def enforce_bounds(self, values: np.ndarray, bounds: Optional[Bounds] = None) -> bool:
        """Clamp ``values`` in place; return True if anything changed."""

        bounds = self._bounds(bounds)
        self._check_values(values)
        changed = False
        for i, b in enumerate(bounds):
            clipped = b.clip(float(values[i]))
            if clipped != values[i]:
                values[i] = clipped
                changed = True
        return changed

    def satisfies_bounds(self, values: Sequence[float], bounds: Optional[Bounds] = None, margin: float = 0.0) -> bool:
        bounds = self._bounds(bounds)
        values = self._as_values(values)
        return all(b.contains(float(v), margin) for v, b in zip(values, bounds))

    # ------------------------------------------------------------------
    # Metric
    # ------------------------------------------------------------------
    @abstractmethod
    def maximum_extent(self, bounds: Optional[Bounds] = None) -> float:
        """Largest distance between two configurations inside ``bounds``."""

    @abstractmethod
    def distance(self, values1: Sequence[float], values2: Sequence[float]) -> float:
        pass

    @abstractmethod
    def interpolate(
        self,
        from_values: Sequence[float],
        to_values: Sequence[float],
        t: float,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        pass

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------
    @abstractmethod
    def compute_transform(self, values: Sequence[float]) -> np.ndarray:
        """Fresh 4x4 homogeneous transform for ``values``."""

    @abstractmethod
    def compute_joint_state_values(self, transform: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Joint values reproducing ``transform`` as closely as the joint allows."""

    def update_transform(self, values: Sequence[float], transform: np.ndarray) -> np.ndarray:
        """Write the transform for ``values`` into ``transform`` and return it."""

        _check_transform_buffer(transform)
        transform[...] = self.compute_transform(values)
        return transform

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _bounds(self, bounds: Optional[Bounds]) -> Sequence[VariableBounds]:
        if bounds is None:
            return self._default_bounds
        if len(bounds) != self.variable_count:
            raise ValueError(
                f"Expected {self.variable_count} bounds for joint '{self._name}', got {len(bounds)}"
            )
        return bounds

    def _check_values(self, values: np.ndarray) -> None:
        if np.shape(values) != (self.variable_count,):
            raise ValueError(
                f"Expected values of shape ({self.variable_count},) for joint '{self._name}', got {np.shape(values)}"
            )

    def _as_values(self, values: Sequence[float]) -> np.ndarray:
        arr = np.asarray(values, dtype=float)
        self._check_values(arr)
        return arr

    def _out(self, out: Optional[np.ndarray]) -> np.ndarray:
        if out is None:
            return np.zeros(self.variable_count, dtype=float)
        self._check_values(out)
        return out


class AngularDistanceWeighted:
    """Mixin for joints whose metric mixes translation and rotation."""

    _angular_distance_weight: float = 1.0

    @property
    def angular_distance_weight(self) -> float:
        return self._angular_distance_weight

    @angular_distance_weight.setter
    def angular_distance_weight(self, weight: float) -> None:
        # Writes are not synchronised; reconfigure before sharing across threads.
        weight = float(weight)
        if not weight >= 0.0:
            raise ValueError(f"Angular distance weight must be non-negative, got {weight}")
        logger.debug("Angular distance weight of '%s' set to %g", getattr(self, "name", "?"), weight)
        self._angular_distance_weight = weight


def _uniform_within(rng: RandomNumberGenerator, b: VariableBounds) -> float:
    if b.position_bounded:
        return rng.uniform_real(b.min_position, b.max_position)
    return b.clip(0.0)


def _uniform_near(rng: RandomNumberGenerator, b: VariableBounds, near: float, distance: float) -> float:
    lo = max(b.min_position, near - distance)
    hi = min(b.max_position, near + distance)
    if lo > hi or not (math.isfinite(lo) and math.isfinite(hi)):
        return b.clip(near)
    return rng.uniform_real(lo, hi)


def _check_distance(distance: float) -> None:
    if not distance >= 0.0:
        raise ValueError(f"Neighbourhood distance must be non-negative, got {distance}")


def _check_transform_buffer(transform: np.ndarray) -> None:
    if not isinstance(transform, np.ndarray) or transform.shape != (4, 4):
        raise ValueError(f"Expected a (4, 4) transform buffer, got {getattr(transform, 'shape', type(transform))}")


def _extent(b: VariableBounds) -> float:
    if not b.position_bounded:
        return math.inf
    return b.max_position - b.min_position
