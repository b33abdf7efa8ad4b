"""Sprint planning engine."""

from .base import BasePlanner
from .greedy import GreedySprintPlanner, schedule
from .topo import topological_order

__all__ = [
    "BasePlanner",
    "GreedySprintPlanner",
    "schedule",
    "topological_order",
]
