"""Input specs for a path planning request."""

from __future__ import annotations

from dataclasses import dataclass, field

from quest_planner.models.catalog import AccessFilter, TypeFilter
from quest_planner.models.quest import QuestPriority
from quest_planner.models.skill import Skill


@dataclass(slots=True)
class PathRequest:
    """User options for one planning run.

    ``name`` selects the profile to load; None plans from a fresh account.
    ``ironman`` and ``recommended`` are recorded on the player but are
    expected to be applied by whoever builds the catalog.
    """

    name: str | None = None
    access_filter: AccessFilter = AccessFilter.ALL
    type_filter: TypeFilter = TypeFilter.ALL
    ironman: bool = False
    recommended: bool = False
    lamp_skills: list[Skill] = field(default_factory=list)
    quest_priorities: dict[int, QuestPriority] = field(default_factory=dict)
