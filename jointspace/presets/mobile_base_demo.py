"""High-level mobile base demo utilities built on top of the joint models."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..kinematics import FKOptions, JointChain, fk
from ..planar import PlanarJointModel
from ..rng import RandomNumberGenerator
from .mobile_base import create_chain, workspace_bounds

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PathResult:
    """Container returned by :meth:`MobileBaseDemo.path_demo`."""

    q: np.ndarray
    base: np.ndarray
    tgrid: np.ndarray
    length: float


class MobileBaseDemo:
    """Convenience wrapper exposing sampling, interpolation and plotting for the mobile base."""

    def __init__(self, seed: Optional[int] = 0, half_extent: float = 5.0) -> None:
        self.chain: JointChain = create_chain()
        self.bounds = workspace_bounds(self.chain.config, half_extent)
        self.rng = RandomNumberGenerator(seed)
        self.base: PlanarJointModel = self.chain.joint("base")
        self._base_bounds = self.chain.joint_bounds(self.bounds, self.base)

    # ------------------------------------------------------------------
    # Sampling helpers
    # ------------------------------------------------------------------
    def sample_base_poses(self, samples: int = 200) -> np.ndarray:
        poses = np.zeros((samples, self.base.variable_count))
        for row in poses:
            self.base.random_values(self.rng, self._base_bounds, out=row)
        return poses

    def sample_near(self, near: Sequence[float], distance: float, samples: int = 200) -> np.ndarray:
        poses = np.zeros((samples, self.base.variable_count))
        for row in poses:
            self.base.random_values_near_by(self.rng, near, distance, self._base_bounds, out=row)
        return poses

    # ------------------------------------------------------------------
    # Interpolation helpers
    # ------------------------------------------------------------------
    def interpolated_path(self, start: Sequence[float], goal: Sequence[float], samples: int = 50) -> np.ndarray:
        """Base poses along the geodesic from ``start`` to ``goal``."""

        path = np.zeros((samples, self.base.variable_count))
        for row, t in zip(path, np.linspace(0.0, 1.0, samples)):
            self.base.interpolate(start, goal, float(t), out=row)
        return path

    def path_length(self, path: np.ndarray) -> float:
        return float(sum(self.base.distance(a, b) for a, b in zip(path[:-1], path[1:])))

    def path_demo(self, samples: int = 60, duration: float = 6.0) -> PathResult:
        """Interpolate between two random base poses and lift the whole chain along the way."""

        start = self.base.random_values(self.rng, self._base_bounds)
        goal = self.base.random_values(self.rng, self._base_bounds)
        base = self.interpolated_path(start, goal, samples)
        q = np.tile(self.chain.default_configuration(self.bounds), (samples, 1))
        lift = self.chain.joint("lift")
        lift_bounds = self.chain.joint_bounds(self.bounds, lift)[0]
        for i, row in enumerate(q):
            self.chain.joint_values(row, self.base)[:] = base[i]
            self.chain.joint_values(row, lift)[0] = lift_bounds.max_position * (i / max(samples - 1, 1))
        length = self.path_length(base)
        extent = self.base.maximum_extent(self._base_bounds)
        logger.info("Path of length %.3f (normalised %.3f)", length, length / extent)
        return PathResult(q=q, base=base, tgrid=np.linspace(0.0, duration, samples), length=length)

    def fk_points(self, q: np.ndarray) -> np.ndarray:
        """Return XYZ coordinates for base, joints and tool."""

        res = fk(self.chain, q, FKOptions(with_base=True, with_tool=True))
        return res.points

    # ------------------------------------------------------------------
    # Visualisation helpers
    # ------------------------------------------------------------------
    def plot_path(self, base: np.ndarray, samples: Optional[np.ndarray] = None, title: str | None = None, show: bool = True):
        fig, ax = plt.subplots(figsize=(7, 7))
        if samples is not None:
            ax.scatter(samples[:, 0], samples[:, 1], s=4, alpha=0.3, label="samples")
        ax.plot(base[:, 0], base[:, 1], lw=2, label="path")
        ax.quiver(base[:, 0], base[:, 1], np.cos(base[:, 2]), np.sin(base[:, 2]), angles="xy", width=0.003)
        x_b, y_b = self._base_bounds[0], self._base_bounds[1]
        ax.set_xlim([x_b.min_position, x_b.max_position])
        ax.set_ylim([y_b.min_position, y_b.max_position])
        ax.set_aspect("equal")
        ax.set_xlabel("X [m]")
        ax.set_ylabel("Y [m]")
        ax.set_title(title or "Mobile base path")
        ax.legend(loc="upper right")
        ax.grid(True)
        if show:
            plt.show()
        return fig

    def plot_trajectory(self, tgrid: np.ndarray, q: np.ndarray, show: bool = True):
        fig, axs = plt.subplots(3, 1, figsize=(10, 8), sharex=True)
        base = np.array([self.chain.joint_values(row, self.base) for row in q])
        axs[0].plot(tgrid, base[:, :2])
        axs[0].set_ylabel("x, y [m]")
        axs[1].plot(tgrid, np.rad2deg(base[:, 2]))
        axs[1].set_ylabel("yaw [deg]")
        pts = np.array([self.fk_points(row)[-1] for row in q])
        axs[2].plot(tgrid, pts[:, 2])
        axs[2].set_ylabel("tool z [m]")
        axs[2].set_xlabel("t [s]")
        for ax in axs:
            ax.grid(True)
        plt.tight_layout()
        if show:
            plt.show()
        return fig
