"""Requirement evaluation for quests against a player.

Every function here is a pure read of the player and quest.
"""

from __future__ import annotations

from quest_planner.models.player import Player
from quest_planner.models.quest import Quest, SkillRequirement


def meets_combat_requirement(player: Player, quest: Quest) -> bool:
    return player.combat_level >= quest.requirements.combat_level


def meets_quest_point_requirement(player: Player, quest: Quest) -> bool:
    return player.quest_points >= quest.requirements.quest_points


def meets_prerequisite_quests(player: Player, quest: Quest) -> bool:
    return all(player.is_quest_completed(qid) for qid in quest.requirements.quests)


def meets_skill_requirements(player: Player, quest: Quest) -> bool:
    return all(player.level(req.skill) >= req.level for req in quest.requirements.skills)


def meets_selection_requirements(player: Player, quest: Quest) -> bool:
    """Everything but skill levels, which can always be trained."""
    return (
        meets_combat_requirement(player, quest)
        and meets_quest_point_requirement(player, quest)
        and meets_prerequisite_quests(player, quest)
    )


def meets_all_requirements(player: Player, quest: Quest) -> bool:
    return meets_selection_requirements(player, quest) and meets_skill_requirements(player, quest)


def remaining_skill_requirements(
    player: Player,
    quest: Quest,
    include_satisfied: bool = False,
) -> list[SkillRequirement]:
    """Skill requirements ordered by skill then level.

    Only unmet requirements are returned unless *include_satisfied* is set.
    """
    ordered = sorted(quest.requirements.skills, key=SkillRequirement.sort_key)
    if include_satisfied:
        return ordered
    return [req for req in ordered if player.level(req.skill) < req.level]


def total_remaining_skill_requirements(
    player: Player,
    quest: Quest,
    include_satisfied: bool = False,
) -> int:
    """Summed level gap over the requirements.

    With *include_satisfied* a met requirement adds its (negative) surplus,
    so a quest the player is over-levelled for totals lower.
    """
    return sum(
        req.level - player.level(req.skill)
        for req in remaining_skill_requirements(player, quest, include_satisfied)
    )
