"""Joint configuration-space models for planners and kinematics solvers."""
from .fixed import FixedJointModel
from .floating import FloatingJointModel
from .joint_model import JointModel, JointType
from .kinematics import ChainConfig, ChainLink, FKOptions, FKResult, JointChain, SerialKinematics, fk
from .planar import PlanarJointModel
from .rng import RandomNumberGenerator
from .single_dof import PrismaticJointModel, RevoluteJointModel, SingleDOFJointModel
from .types import Bounds, Frames, Limits, Variable, VariableBounds, VariableLimits

__all__ = [
    "Bounds",
    "VariableBounds",
    "VariableLimits",
    "Variable",
    "Limits",
    "Frames",
    "RandomNumberGenerator",
    "JointType",
    "JointModel",
    "FixedJointModel",
    "SingleDOFJointModel",
    "RevoluteJointModel",
    "PrismaticJointModel",
    "PlanarJointModel",
    "FloatingJointModel",
    "ChainLink",
    "ChainConfig",
    "JointChain",
    "SerialKinematics",
    "FKOptions",
    "FKResult",
    "fk",
]
