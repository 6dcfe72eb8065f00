"""Predefined chain configurations and ready-to-run demos."""

from .mobile_base import create_chain, mobile_base_config, workspace_bounds
from .mobile_base_demo import MobileBaseDemo, PathResult

__all__ = [
    "create_chain",
    "mobile_base_config",
    "workspace_bounds",
    "MobileBaseDemo",
    "PathResult",
]
