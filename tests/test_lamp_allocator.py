import pytest

from quest_planner.engine.actions import LampAction
from quest_planner.models.lamp import LampReward, LampType
from quest_planner.models.player import Player
from quest_planner.models.quest import Quest, QuestEntry, QuestRequirements, SkillRequirement
from quest_planner.models.skill import Skill, xp_at_level
from quest_planner.optimizer.errors import LampAllocationError
from quest_planner.optimizer.lamps import (
    best_lamp_skills,
    create_lamp_action,
    max_skill_requirements,
    remaining_xp_requirements,
)

ATTACK = frozenset({Skill.ATTACK})
DEFENCE = frozenset({Skill.DEFENCE})
MAGIC = frozenset({Skill.MAGIC})


def _requiring(quest_id: int, *requirements: SkillRequirement) -> QuestEntry:
    return QuestEntry(Quest(id=quest_id, requirements=QuestRequirements(skills=requirements)))


def _lamp(*choices: frozenset[Skill], min_level: int = 1) -> LampReward:
    return LampReward(type=LampType.XP, xp=500, choices=choices, min_level=min_level)


def test_max_skill_requirements_take_highest_unmet_level():
    player = Player(
        quests=[
            _requiring(1, SkillRequirement(Skill.DEFENCE, 20)),
            _requiring(2, SkillRequirement(Skill.DEFENCE, 30), SkillRequirement(Skill.MAGIC, 5)),
        ]
    )
    assert max_skill_requirements(player) == {Skill.DEFENCE: 30, Skill.MAGIC: 5}
    assert remaining_xp_requirements(player)[Skill.DEFENCE] == xp_at_level(30)


def test_completed_quests_do_not_count_toward_gaps():
    entry = _requiring(1, SkillRequirement(Skill.DEFENCE, 20))
    entry.complete()
    assert max_skill_requirements(Player(quests=[entry])) == {}


def test_preferred_skill_wins():
    player = Player(lamp_skills=[Skill.HERBLORE, Skill.ATTACK])
    assert best_lamp_skills(player, LampReward(), []) == frozenset({Skill.HERBLORE})


def test_preference_follows_preference_order_not_choice_order():
    player = Player(lamp_skills=[Skill.MAGIC, Skill.ATTACK])
    assert best_lamp_skills(player, _lamp(ATTACK, MAGIC), []) == MAGIC


def test_largest_gap_wins_without_preference():
    player = Player(
        quests=[_requiring(1, SkillRequirement(Skill.DEFENCE, 20))],
        lamp_skills=[Skill.HERBLORE],
    )
    assert best_lamp_skills(player, _lamp(ATTACK, DEFENCE), []) == DEFENCE


def test_gap_is_summed_over_a_combination():
    player = Player(
        quests=[
            _requiring(1, SkillRequirement(Skill.DEFENCE, 20)),
            _requiring(2, SkillRequirement(Skill.ATTACK, 15), SkillRequirement(Skill.MAGIC, 15)),
        ]
    )
    pair = frozenset({Skill.ATTACK, Skill.MAGIC})
    assert best_lamp_skills(player, _lamp(DEFENCE, pair), []) == pair


def test_no_gaps_falls_back_to_first_choice():
    assert best_lamp_skills(Player(), _lamp(DEFENCE, ATTACK), []) == DEFENCE


def test_used_combinations_are_skipped():
    assert best_lamp_skills(Player(), _lamp(ATTACK, DEFENCE), [ATTACK]) == DEFENCE


def test_no_valid_choice_is_fatal():
    with pytest.raises(LampAllocationError) as info:
        best_lamp_skills(Player(), _lamp(ATTACK), [ATTACK])
    assert info.value.used == [ATTACK]
    assert "previous" in str(info.value)


def test_create_lamp_action_records_choice_on_entry():
    entry = QuestEntry(Quest(id=1, title="Q"))
    player = Player(quests=[entry])
    first = create_lamp_action(player, entry, _lamp(ATTACK, DEFENCE))
    second = create_lamp_action(player, entry, _lamp(ATTACK, DEFENCE))
    assert isinstance(first, LampAction)
    assert not first.future
    assert first.skills == ATTACK
    assert second.skills == DEFENCE
    assert entry.used_lamp_skills == [ATTACK, DEFENCE]


def test_unusable_lamp_is_deferred():
    entry = QuestEntry(Quest(id=1, title="Q"))
    player = Player(quests=[entry])
    action = create_lamp_action(player, entry, _lamp(ATTACK, min_level=10))
    assert action.future
    assert action.skills == frozenset()
    assert action.message.endswith("(when requirements are met)")
    assert entry.used_lamp_skills == []
