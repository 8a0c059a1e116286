"""Simulated player state consumed and mutated by the path finder."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from quest_planner.models.quest import Quest, QuestEntry, QuestStatus
from quest_planner.models.skill import Skill, initial_xps, level_at_xp


@dataclass(frozen=True, slots=True)
class PlayerSnapshot:
    """Read-only view of a player at one point of a path."""

    name: str | None
    levels: dict[Skill, int]
    quest_points: int
    total_level: int
    combat_level: float


@dataclass(eq=False, slots=True)
class Player:
    """A player being walked through the quest catalog.

    Owns its experience map and quest entries exclusively; build a fresh
    Player (or ``copy()``) for each planning run.
    """

    name: str | None = None
    skill_xps: dict[Skill, float] = field(default_factory=initial_xps)
    quests: list[QuestEntry] = field(default_factory=list)
    lamp_skills: list[Skill] = field(default_factory=list)
    ironman: bool = False
    recommended: bool = False

    def __post_init__(self) -> None:
        self.skill_xps = {**initial_xps(), **self.skill_xps}
        self.quests = sorted(self.quests, key=lambda entry: entry.quest.id)

    # --- Skills ------------------------------------------------------------

    def xp(self, skill: Skill) -> float:
        return self.skill_xps.get(skill, 0.0)

    def level(self, skill: Skill) -> int:
        return level_at_xp(self.xp(skill))

    def levels(self) -> dict[Skill, int]:
        return {skill: self.level(skill) for skill in Skill}

    @property
    def total_level(self) -> int:
        return sum(self.levels().values())

    @property
    def combat_level(self) -> float:
        attack = self.level(Skill.ATTACK)
        strength = self.level(Skill.STRENGTH)
        magic = self.level(Skill.MAGIC)
        ranged = self.level(Skill.RANGED)
        best = max(attack + strength, 2 * magic, 2 * ranged) * 13 / 10
        return (
            best
            + self.level(Skill.DEFENCE)
            + self.level(Skill.CONSTITUTION)
            + math.floor(self.level(Skill.PRAYER) / 2)
            + math.floor(self.level(Skill.SUMMONING) / 2)
        ) / 4

    def add_xp(self, skill: Skill, xp: float) -> None:
        """Add experience; a change that would go below zero is ignored."""
        new_xp = self.xp(skill) + xp
        if new_xp >= 0:
            self.skill_xps[skill] = new_xp

    # --- Quests ------------------------------------------------------------

    @property
    def quest_points(self) -> int:
        return sum(entry.quest.rewards.quest_points for entry in self.completed_quests())

    def completed_quests(self) -> list[QuestEntry]:
        return [entry for entry in self.quests if entry.status is QuestStatus.COMPLETED]

    def incomplete_quests(self) -> list[QuestEntry]:
        """Entries not yet completed, ordered by quest id."""
        return [entry for entry in self.quests if entry.status is not QuestStatus.COMPLETED]

    def entry_for(self, quest_id: int) -> QuestEntry | None:
        for entry in self.quests:
            if entry.quest.id == quest_id:
                return entry
        return None

    def is_quest_completed(self, quest: Quest | int) -> bool:
        quest_id = quest if isinstance(quest, int) else quest.id
        entry = self.entry_for(quest_id)
        return entry is not None and entry.is_completed

    # --- Copies ------------------------------------------------------------

    def copy(self) -> Player:
        return Player(
            name=self.name,
            skill_xps=dict(self.skill_xps),
            quests=[entry.copy() for entry in self.quests],
            lamp_skills=list(self.lamp_skills),
            ironman=self.ironman,
            recommended=self.recommended,
        )

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(
            name=self.name,
            levels=self.levels(),
            quest_points=self.quest_points,
            total_level=self.total_level,
            combat_level=self.combat_level,
        )
