"""Best-next-quest selection.

Candidates are quests whose combat, quest point and prerequisite quest
requirements are met; skill levels are left out because they can always
be trained. Among candidates:

- a quest whose skill requirements are already met beats one that needs
  training;
- between two ready quests the higher priority wins, then the higher
  reward score;
- between two quests that both need training the one nearest to its
  skill requirements wins.
"""

from __future__ import annotations

from collections.abc import Iterable

from quest_planner.engine.planner_config import PlannerConfig
from quest_planner.engine.requirements import (
    meets_selection_requirements,
    meets_skill_requirements,
    total_remaining_skill_requirements,
)
from quest_planner.models.player import Player
from quest_planner.models.quest import Quest, QuestEntry
from quest_planner.models.skill import Skill
from quest_planner.optimizer.lamps import best_lamp_skills


def total_quest_rewards(player: Player, quest: Quest) -> float:
    """Fixed reward xp plus every lamp usable right now.

    Lamps are allocated against a scratch used-combination set, so the
    estimate never touches the player's quest entries.
    """
    total = sum(quest.rewards.xp.values())
    used: list[frozenset[Skill]] = []
    for lamp in quest.lamp_rewards:
        if not lamp.meets_requirements(player):
            continue
        skills = best_lamp_skills(player, lamp, used)
        used.append(skills)
        total += lamp.total_xp(player, skills)
    return total


def quest_score(player: Player, quest: Quest, config: PlannerConfig | None = None) -> float:
    config = config or PlannerConfig()
    rewards = total_quest_rewards(player, quest) / config.reward_score_divisor
    return rewards - total_remaining_skill_requirements(player, quest, include_satisfied=True)


def _compare_by_priority(
    player: Player,
    first: QuestEntry,
    second: QuestEntry,
    config: PlannerConfig,
) -> QuestEntry:
    if first.priority != second.priority:
        return first if first.priority > second.priority else second
    if quest_score(player, first.quest, config) > quest_score(player, second.quest, config):
        return first
    return second


def _compare_by_skill_requirements(
    player: Player,
    first: QuestEntry,
    second: QuestEntry,
) -> QuestEntry:
    first_remaining = total_remaining_skill_requirements(player, first.quest, include_satisfied=True)
    second_remaining = total_remaining_skill_requirements(player, second.quest, include_satisfied=True)
    return second if first_remaining > second_remaining else first


def best_quest(
    player: Player,
    entries: Iterable[QuestEntry],
    config: PlannerConfig | None = None,
) -> QuestEntry | None:
    """Pick the next quest to complete from *entries*, or None.

    *entries* are considered in quest id order regardless of input order.
    """
    config = config or PlannerConfig()
    candidates = [
        entry
        for entry in sorted(entries, key=lambda e: e.quest.id)
        if meets_selection_requirements(player, entry.quest)
    ]

    best: QuestEntry | None = None
    for entry in candidates:
        if best is None:
            best = entry
            continue
        best_ready = meets_skill_requirements(player, best.quest)
        entry_ready = meets_skill_requirements(player, entry.quest)
        if best_ready and entry_ready:
            best = _compare_by_priority(player, best, entry, config)
        elif best_ready:
            continue
        elif entry_ready:
            best = entry
        else:
            best = _compare_by_skill_requirements(player, best, entry)
    return best
