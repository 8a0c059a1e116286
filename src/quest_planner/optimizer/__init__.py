"""Path planning interfaces."""

from quest_planner.optimizer.errors import LampAllocationError, PlanningError, PreconditionError
from quest_planner.optimizer.path_builder import Path, PathStats, find_path, plan_path
from quest_planner.optimizer.specs import PathRequest

__all__ = [
    "LampAllocationError",
    "Path",
    "PathRequest",
    "PathStats",
    "PlanningError",
    "PreconditionError",
    "find_path",
    "plan_path",
]
