"""Mobile base preset: planar base, torso, lift and tool flange."""
from __future__ import annotations

import numpy as np

from ..fixed import FixedJointModel
from ..kinematics import ChainConfig, ChainLink, JointChain
from ..planar import PlanarJointModel
from ..single_dof import PrismaticJointModel, RevoluteJointModel
from ..transforms import make_transform
from ..types import Frames, VariableBounds


def mobile_base_config(angular_distance_weight: float = 0.5) -> ChainConfig:
    base = PlanarJointModel("base", angular_distance_weight=angular_distance_weight)
    torso = RevoluteJointModel(
        "torso_yaw",
        axis=(0.0, 0.0, 1.0),
        bounds=VariableBounds(np.deg2rad(-170.0), np.deg2rad(170.0), max_velocity=1.5, max_effort=80.0),
    )
    lift = PrismaticJointModel(
        "lift",
        axis=(0.0, 0.0, 1.0),
        bounds=VariableBounds(0.0, 0.6, max_velocity=0.2, max_effort=400.0),
    )
    flange = FixedJointModel("tool_flange")
    links = (
        ChainLink(base),
        ChainLink(torso, make_transform(translation=(0.10, 0.0, 0.35))),
        ChainLink(lift, make_transform(translation=(0.0, 0.0, 0.20))),
        ChainLink(flange, make_transform(translation=(0.25, 0.0, 0.05))),
    )
    frames = Frames(T_base=np.eye(4), T_tool=np.eye(4))
    return ChainConfig(links=links, frames=frames, name="Mobile base")


def workspace_bounds(config: ChainConfig, half_extent: float = 5.0) -> tuple[VariableBounds, ...]:
    """Default chain bounds with the base x/y confined to a square workspace."""

    bounds = []
    for link in config.links:
        for local, b in zip(link.joint.local_variable_names, link.joint.default_bounds):
            if isinstance(link.joint, PlanarJointModel) and local in ("x", "y"):
                b = VariableBounds(-half_extent, half_extent, b.max_velocity, b.max_acceleration, b.max_effort)
            bounds.append(b)
    return tuple(bounds)


def create_chain() -> JointChain:
    """Instantiate the mobile base chain from its configuration."""

    return JointChain(mobile_base_config())
