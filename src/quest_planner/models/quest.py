"""Quest catalog data model and per-player quest progress."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from quest_planner.models.lamp import LampReward
from quest_planner.models.skill import Skill


class QuestStatus(Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class QuestPriority(IntEnum):
    """Player-assigned weight; a higher value is completed sooner."""

    MINIMUM = 0
    LOW = 1
    NORMAL = 2
    HIGH = 3
    MAXIMUM = 4


class QuestType(Enum):
    QUEST = "QUEST"
    MINIQUEST = "MINIQUEST"
    SAGA = "SAGA"


@dataclass(frozen=True, slots=True)
class SkillRequirement:
    """Requires *skill* at *level* or above.

    Example: Agility >= 50
    """
    skill: Skill
    level: int

    def sort_key(self) -> tuple[int, int]:
        return (int(self.skill), self.level)


@dataclass(frozen=True, slots=True)
class QuestRequirements:
    combat_level: int = 0
    quest_points: int = 0
    quests: frozenset[int] = frozenset()
    skills: tuple[SkillRequirement, ...] = ()


@dataclass(frozen=True, slots=True)
class QuestRewards:
    quest_points: int = 0
    xp: dict[Skill, float] = field(default_factory=dict)
    lamps: tuple[LampReward, ...] = ()


@dataclass(frozen=True, slots=True)
class Quest:
    """An immutable catalog entry.

    Placeholder quests group other quests administratively (e.g. a saga
    header) and have no player-visible effect.
    """

    id: int
    title: str = ""
    display_name: str = ""
    placeholder: bool = False
    members: bool = False
    type: QuestType = QuestType.QUEST
    requirements: QuestRequirements = field(default_factory=QuestRequirements)
    rewards: QuestRewards = field(default_factory=QuestRewards)

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def name(self) -> str:
        return self.display_name or self.title

    @property
    def lamp_rewards(self) -> tuple[LampReward, ...]:
        return self.rewards.lamps


@dataclass(eq=False, slots=True)
class QuestEntry:
    """A quest bound to one player's progress.

    ``used_lamp_skills`` records the skill combinations already chosen for
    this entry's lamps, in the order they were chosen.
    """

    quest: Quest
    status: QuestStatus = QuestStatus.NOT_STARTED
    priority: QuestPriority = QuestPriority.NORMAL
    used_lamp_skills: list[frozenset[Skill]] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.status is QuestStatus.COMPLETED

    def complete(self) -> None:
        self.status = QuestStatus.COMPLETED

    def set_status(self, status: QuestStatus) -> None:
        """Update status loaded from a profile; completion is never undone."""
        if self.is_completed:
            return
        self.status = status

    def copy(self) -> QuestEntry:
        return QuestEntry(
            quest=self.quest,
            status=self.status,
            priority=self.priority,
            used_lamp_skills=list(self.used_lamp_skills),
        )
