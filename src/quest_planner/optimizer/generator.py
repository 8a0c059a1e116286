"""Expand a decision to complete a quest into concrete actions."""

from __future__ import annotations

from quest_planner.engine.actions import Action, QuestAction, TrainAction
from quest_planner.engine.requirements import (
    meets_selection_requirements,
    remaining_skill_requirements,
)
from quest_planner.models.player import Player
from quest_planner.models.quest import QuestEntry, SkillRequirement
from quest_planner.models.skill import Skill, xp_at_level
from quest_planner.optimizer.errors import PreconditionError
from quest_planner.optimizer.lamps import create_lamp_action


def create_train_action(player: Player, requirement: SkillRequirement) -> TrainAction:
    skill = requirement.skill
    return TrainAction(player, skill, player.xp(skill), float(xp_at_level(requirement.level)))


def complete_quest(player: Player, entry: QuestEntry) -> list[Action]:
    """Actions completing *entry*: training, the quest itself, then its lamps.

    Nothing is applied to the player here except the lamp bookkeeping on
    *entry*; the caller processes the returned actions in order.
    """
    quest = entry.quest
    if player.is_quest_completed(quest) or entry.is_completed:
        raise PreconditionError(f"Quest already completed: {quest.id}")
    if not meets_selection_requirements(player, quest):
        raise PreconditionError(f"Unmet requirements for quest: {quest.id}")

    # Ordered by skill then level, so the last requirement per skill is the highest.
    highest: dict[Skill, SkillRequirement] = {}
    for req in remaining_skill_requirements(player, quest):
        highest[req.skill] = req

    actions: list[Action] = [create_train_action(player, req) for req in highest.values()]
    actions.append(QuestAction(player, entry))
    for lamp in quest.lamp_rewards:
        actions.append(create_lamp_action(player, entry, lamp))
    return actions
