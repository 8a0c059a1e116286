"""Path actions: train a skill, complete a quest, use a lamp.

Actions are bound to the player they were created for. ``copy_for_player``
rebinds an action without re-running it, which the path finder uses to
freeze the player's state next to each step of the path.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

from quest_planner.engine.requirements import meets_all_requirements
from quest_planner.models.lamp import LampReward
from quest_planner.models.player import Player, PlayerSnapshot
from quest_planner.models.quest import Quest, QuestEntry
from quest_planner.models.skill import Skill, level_at_xp


class ActionType(Enum):
    TRAIN = "TRAIN"
    QUEST = "QUEST"
    LAMP = "LAMP"


@dataclass(frozen=True, slots=True)
class QuestSnapshot:
    id: int
    title: str
    display_name: str
    quest_points: int
    members: bool


@dataclass(frozen=True, slots=True)
class ActionSnapshot:
    """What a presentation layer needs to render one step."""

    type: ActionType
    message: str
    future: bool
    quest: QuestSnapshot | None
    player: PlayerSnapshot


def snapshot_quest(quest: Quest) -> QuestSnapshot:
    return QuestSnapshot(
        id=quest.id,
        title=quest.title,
        display_name=quest.name,
        quest_points=quest.rewards.quest_points,
        members=quest.members,
    )


def format_xp(xp: float) -> str:
    """Compact experience amount: 500, 187.5, 1k, 5.185k, 1.2m."""
    for threshold, suffix in ((1_000_000, "m"), (1_000, "k")):
        if abs(xp) >= threshold:
            return _trim(xp / threshold) + suffix
    return _trim(xp)


def _trim(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


class Action:
    """Common interface of every path step."""

    __slots__ = ()

    type: ActionType

    @property
    def future(self) -> bool:
        return False

    @property
    def message(self) -> str:
        raise NotImplementedError

    @property
    def quest(self) -> Quest | None:
        return None

    def meets_requirements(self, player: Player) -> bool:
        raise NotImplementedError

    def process(self, player: Player) -> None:
        raise NotImplementedError

    def copy_for_player(self, player: Player) -> Action:
        return dataclasses.replace(self, player=player)

    def snapshot(self) -> ActionSnapshot:
        quest = self.quest
        return ActionSnapshot(
            type=self.type,
            message=self.message,
            future=self.future,
            quest=snapshot_quest(quest) if quest is not None else None,
            player=self.player.snapshot(),
        )

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False, slots=True)
class TrainAction(Action):
    """Train *skill* from *start_xp* to *end_xp*."""

    player: Player
    skill: Skill
    start_xp: float
    end_xp: float

    type = ActionType.TRAIN

    @property
    def xp(self) -> float:
        return self.end_xp - self.start_xp

    @property
    def message(self) -> str:
        return (
            f"{self.skill.display_name}: Train from level {level_at_xp(self.start_xp)} "
            f"to {level_at_xp(self.end_xp)} ({format_xp(self.xp)} xp)"
        )

    def meets_requirements(self, player: Player) -> bool:
        return True

    def process(self, player: Player) -> None:
        player.add_xp(self.skill, self.xp)


@dataclass(eq=False, slots=True)
class QuestAction(Action):
    """Complete the quest of *entry* and collect its fixed rewards."""

    player: Player
    entry: QuestEntry

    type = ActionType.QUEST

    @property
    def quest(self) -> Quest:
        return self.entry.quest

    @property
    def message(self) -> str:
        return self.quest.name

    def meets_requirements(self, player: Player) -> bool:
        return meets_all_requirements(player, self.quest)

    def process(self, player: Player) -> None:
        for skill, xp in self.quest.rewards.xp.items():
            player.add_xp(skill, xp)
        self.entry.complete()


@dataclass(eq=False, slots=True)
class LampAction(Action):
    """Use *lamp* from *entry*'s rewards on *skills*.

    A future lamp action has no skills; it stands in for a lamp whose own
    requirement is not met yet. ``grants`` is fixed when the action is
    processed and carried unchanged through ``copy_for_player``.
    """

    player: Player
    entry: QuestEntry
    lamp: LampReward
    skills: frozenset[Skill] = frozenset()
    is_future: bool = False
    grants: dict[Skill, float] | None = field(default=None)

    type = ActionType.LAMP

    @property
    def future(self) -> bool:
        return self.is_future

    @property
    def quest(self) -> Quest:
        return self.entry.quest

    def _grants(self) -> dict[Skill, float]:
        if self.grants is not None:
            return self.grants
        return self.lamp.xp_for_skills(self.player, self.skills)

    @property
    def xp(self) -> float | None:
        if self.lamp.type.is_fixed:
            return self.lamp.xp * self.lamp.multiplier
        grants = self._grants()
        if not grants:
            return None
        return sum(grants.values())

    @property
    def message(self) -> str:
        xp = self.xp
        gain = f" to gain {format_xp(xp)} xp" if xp is not None else ""
        if self.is_future:
            return f"{self.quest.name}: Use {self.lamp.name}{gain} (when requirements are met)"
        names = ", ".join(skill.display_name for skill in sorted(self.skills))
        return f"{self.quest.name}: Use {self.lamp.name} on {names}{gain}"

    def meets_requirements(self, player: Player) -> bool:
        return self.lamp.meets_requirements(player)

    def process(self, player: Player) -> None:
        if self.grants is None:
            self.grants = self.lamp.xp_for_skills(player, self.skills)
        for skill, xp in self.grants.items():
            player.add_xp(skill, xp)
