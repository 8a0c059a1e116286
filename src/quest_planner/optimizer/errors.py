"""Fatal planning failures."""

from __future__ import annotations

from collections.abc import Iterable

from quest_planner.models.lamp import LampReward
from quest_planner.models.skill import Skill


class PlanningError(RuntimeError):
    """The planner cannot make progress (unsolvable or malformed catalog)."""


class PreconditionError(PlanningError):
    """A quest was asked to complete while already complete or not yet available."""


class LampAllocationError(PlanningError):
    """A lamp has no skill combination left to be used on."""

    def __init__(self, lamp: LampReward, used: Iterable[frozenset[Skill]]) -> None:
        self.lamp = lamp
        self.used = list(used)
        super().__init__(
            f"Unable to use lamp: no suitable skill found: lamp={lamp!r}, previous={self.used!r}"
        )
