"""Kinematic chains built from shared joint models."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from .joint_model import JointModel
from .rng import RandomNumberGenerator
from .transforms import identity
from .types import Bounds, Frames, Variable, VariableBounds

logger = logging.getLogger(__name__)


class SerialKinematics(Protocol):
    """Protocol for serial chains that expose forward kinematics."""

    @property
    def dof(self) -> int:
        """Number of configuration variables of the chain."""

    def fk_Ts(self, q: np.ndarray) -> List[np.ndarray]:
        """Return homogeneous transforms for base, joints and tool."""


@dataclass(frozen=True)
class ChainLink:
    """A joint model and the fixed transform from the parent frame to the joint frame."""

    joint: JointModel
    origin: np.ndarray = field(default_factory=identity)


@dataclass(frozen=True)
class ChainConfig:
    """Configuration describing a serial chain of joints."""

    links: Tuple[ChainLink, ...]
    frames: Frames
    name: str


@dataclass(frozen=True)
class FKOptions:
    with_tool: bool = True
    with_base: bool = True


@dataclass
class FKResult:
    Ts: List[np.ndarray]
    points: np.ndarray


class JointChain:
    """Serial chain mapping a configuration vector onto its joint models.

    The chain assigns each joint a contiguous slice of the configuration
    vector. Joint models are referenced, not copied, so several chains (and
    threads) may share them.
    """

    def __init__(self, config: ChainConfig):
        self.config = config
        self._T_base = np.array(config.frames.T_base, dtype=float)
        self._T_tool = np.array(config.frames.T_tool, dtype=float)
        self._offsets: Dict[str, int] = {}
        offset = 0
        for link in config.links:
            if link.joint.name in self._offsets:
                raise ValueError(f"Duplicate joint name '{link.joint.name}' in chain '{config.name}'")
            self._offsets[link.joint.name] = offset
            offset += link.joint.variable_count
        self._variable_count = offset
        logger.debug(
            "Built chain '%s' with %d joints and %d variables", config.name, len(config.links), self._variable_count
        )

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def joints(self) -> Tuple[JointModel, ...]:
        return tuple(link.joint for link in self.config.links)

    @property
    def dof(self) -> int:
        return self._variable_count

    @property
    def variable_count(self) -> int:
        return self._variable_count

    @property
    def variable_names(self) -> List[str]:
        return [n for joint in self.joints for n in joint.variable_names]

    def joint(self, name: str) -> JointModel:
        for link in self.config.links:
            if link.joint.name == name:
                return link.joint
        raise KeyError(f"Chain '{self.name}' has no joint named '{name}'")

    def variable_offset(self, joint: JointModel | str) -> int:
        name = joint if isinstance(joint, str) else joint.name
        try:
            return self._offsets[name]
        except KeyError:
            raise KeyError(f"Chain '{self.name}' has no joint named '{name}'") from None

    def variables(self, bounds: Optional[Bounds] = None) -> List[Variable]:
        bounds = self._bounds(bounds)
        names = self.variable_names
        return [Variable(name=n, index=i, bounds=b) for i, (n, b) in enumerate(zip(names, bounds))]

    def default_bounds(self) -> Tuple[VariableBounds, ...]:
        return tuple(b for joint in self.joints for b in joint.default_bounds)

    def joint_values(self, q: np.ndarray, joint: JointModel | str) -> np.ndarray:
        """Writable view of the slice of ``q`` owned by ``joint``."""

        self._check_q(q)
        jm = self.joint(joint) if isinstance(joint, str) else joint
        start = self.variable_offset(jm)
        return q[start : start + jm.variable_count]

    def joint_bounds(self, bounds: Bounds, joint: JointModel) -> Sequence[VariableBounds]:
        start = self.variable_offset(joint)
        return bounds[start : start + joint.variable_count]

    # ------------------------------------------------------------------
    # Whole-vector helpers delegating to each joint
    # ------------------------------------------------------------------
    def default_configuration(self, bounds: Optional[Bounds] = None) -> np.ndarray:
        bounds = self._bounds(bounds)
        q = np.zeros(self._variable_count, dtype=float)
        for jm in self.joints:
            jm.default_values(self.joint_bounds(bounds, jm), out=self.joint_values(q, jm))
        return q

    def random_configuration(self, rng: RandomNumberGenerator, bounds: Optional[Bounds] = None) -> np.ndarray:
        bounds = self._bounds(bounds)
        q = np.zeros(self._variable_count, dtype=float)
        for jm in self.joints:
            jm.random_values(rng, self.joint_bounds(bounds, jm), out=self.joint_values(q, jm))
        return q

    def enforce_bounds(self, q: np.ndarray, bounds: Optional[Bounds] = None) -> bool:
        bounds = self._bounds(bounds)
        changed = False
        for jm in self.joints:
            changed = jm.enforce_bounds(self.joint_values(q, jm), self.joint_bounds(bounds, jm)) or changed
        return changed

    def satisfies_bounds(self, q: np.ndarray, bounds: Optional[Bounds] = None, margin: float = 0.0) -> bool:
        bounds = self._bounds(bounds)
        return all(
            jm.satisfies_bounds(self.joint_values(q, jm), self.joint_bounds(bounds, jm), margin) for jm in self.joints
        )

    def fk_Ts(self, q: np.ndarray) -> List[np.ndarray]:
        self._check_q(q)
        T = self._T_base.copy()
        Ts = [T.copy()]
        for link in self.config.links:
            T = T @ link.origin @ link.joint.compute_transform(self.joint_values(q, link.joint))
            Ts.append(T.copy())
        Ts[-1] = Ts[-1] @ self._T_tool
        return Ts

    def _bounds(self, bounds: Optional[Bounds]) -> Sequence[VariableBounds]:
        if bounds is None:
            return self.default_bounds()
        if len(bounds) != self._variable_count:
            raise ValueError(f"Expected {self._variable_count} bounds, got {len(bounds)}")
        return bounds

    def _check_q(self, q: np.ndarray) -> None:
        if q.shape != (self._variable_count,):
            raise ValueError(f"Expected q of shape ({self._variable_count},), got {q.shape}")


def fk(robot: SerialKinematics, q: np.ndarray, opts: FKOptions | None = None) -> FKResult:
    """Evaluate forward kinematics with configurable output options."""

    if opts is None:
        opts = FKOptions()
    Ts = list(robot.fk_Ts(q))
    if not opts.with_tool and len(Ts) > 1:
        Ts = Ts[:-1]
    if not opts.with_base and len(Ts) > 0:
        Ts = Ts[1:]
    points = np.array([T[:3, 3] for T in Ts], dtype=float)
    return FKResult(Ts=Ts, points=points)
