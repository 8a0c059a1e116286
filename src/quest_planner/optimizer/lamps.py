"""Lamp allocation: decide which skills a lamp reward is used on."""

from __future__ import annotations

from quest_planner.engine.actions import LampAction
from quest_planner.engine.requirements import remaining_skill_requirements
from quest_planner.models.lamp import LampReward
from quest_planner.models.player import Player
from quest_planner.models.quest import QuestEntry
from quest_planner.models.skill import Skill, xp_at_level
from quest_planner.optimizer.errors import LampAllocationError


def max_skill_requirements(player: Player) -> dict[Skill, int]:
    """Highest unmet level requirement per skill across incomplete quests."""
    highest: dict[Skill, int] = {}
    for entry in player.incomplete_quests():
        for req in remaining_skill_requirements(player, entry.quest):
            highest[req.skill] = max(highest.get(req.skill, 0), req.level)
    return highest


def remaining_xp_requirements(player: Player) -> dict[Skill, float]:
    """Experience still needed per skill to meet every outstanding requirement."""
    return {
        skill: xp_at_level(level) - player.xp(skill)
        for skill, level in sorted(max_skill_requirements(player).items())
    }


def best_lamp_skills(
    player: Player,
    lamp: LampReward,
    used: list[frozenset[Skill]] | set[frozenset[Skill]],
) -> frozenset[Skill]:
    """Pick the combination a lamp should be used on.

    Preferred lamp skills win in preference order. Otherwise the combination
    closing the largest experience gap toward outstanding quest requirements
    is chosen, the earliest in catalog order on ties.
    """
    choices = lamp.valid_choices(player, used)

    for preferred in player.lamp_skills:
        for skills in choices:
            if preferred in skills:
                return skills

    if not choices:
        raise LampAllocationError(lamp, used)

    gaps = remaining_xp_requirements(player)
    return max(choices, key=lambda skills: sum(gaps.get(skill, 0.0) for skill in skills))


def create_lamp_action(player: Player, entry: QuestEntry, lamp: LampReward) -> LampAction:
    """Resolve *lamp* now, or defer it when its own requirement is unmet."""
    if not lamp.meets_requirements(player):
        return LampAction(player, entry, lamp, is_future=True)

    skills = best_lamp_skills(player, lamp, entry.used_lamp_skills)
    entry.used_lamp_skills.append(skills)
    return LampAction(player, entry, lamp, skills)
