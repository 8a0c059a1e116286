import logging

import pytest

from quest_planner.engine.actions import ActionType, LampAction, QuestAction
from quest_planner.engine.requirements import remaining_skill_requirements
from quest_planner.models.catalog import QuestCatalog
from quest_planner.models.lamp import LampReward, LampType
from quest_planner.models.player import Player
from quest_planner.models.quest import (
    Quest,
    QuestEntry,
    QuestPriority,
    QuestRequirements,
    QuestRewards,
    QuestStatus,
    SkillRequirement,
)
from quest_planner.models.skill import Skill, xp_at_level
from quest_planner.optimizer import PathRequest, PlanningError, find_path, plan_path
from quest_planner.optimizer.path_builder import create_stats


def _quest(
    quest_id: int,
    *,
    placeholder: bool = False,
    qp: int = 1,
    xp: dict[Skill, float] | None = None,
    lamps: tuple[LampReward, ...] = (),
    quests: frozenset[int] = frozenset(),
    skills: tuple[SkillRequirement, ...] = (),
    combat: int = 0,
    quest_points: int = 0,
) -> Quest:
    return Quest(
        id=quest_id,
        title=f"Q{quest_id}",
        placeholder=placeholder,
        requirements=QuestRequirements(
            combat_level=combat,
            quest_points=quest_points,
            quests=quests,
            skills=skills,
        ),
        rewards=QuestRewards(quest_points=qp, xp=xp or {}, lamps=lamps),
    )


def _player(*quests: Quest, **kwargs) -> Player:
    return Player(quests=[QuestEntry(q) for q in quests], **kwargs)


def _messages(path) -> list[str]:
    return [action.message for action in path.actions]


def _sample_quests() -> list[Quest]:
    return [
        _quest(1, xp={Skill.COOKING: 300.0}),
        _quest(
            2,
            quests=frozenset({1}),
            skills=(SkillRequirement(Skill.ATTACK, 10),),
            lamps=(LampReward(type=LampType.XP, xp=500),),
        ),
        _quest(3, placeholder=True, qp=0),
    ]


def test_find_path_orders_training_quests_and_lamps():
    player = _player(*_sample_quests())
    path = find_path(player)

    assert _messages(path) == [
        "Q1",
        "Attack: Train from level 1 to 10 (1.154k xp)",
        "Q2",
        "Q2: Use XP Lamp on Attack to gain 500 xp",
    ]
    assert path.stats.percent_complete == 100.0
    assert all(entry.status is QuestStatus.COMPLETED for entry in player.quests)
    assert player.xp(Skill.ATTACK) == xp_at_level(10) + 500
    assert player.xp(Skill.COOKING) == 300


def test_placeholder_quests_complete_silently():
    player = _player(*_sample_quests())
    path = find_path(player)
    assert player.entry_for(3).is_completed
    assert all(action.quest is None or action.quest.id != 3 for action in path.actions)


def test_placeholder_lamps_apply_now_or_are_discarded(caplog):
    usable = LampReward(type=LampType.XP, xp=500, choices=(frozenset({Skill.ATTACK}),))
    blocked = LampReward(type=LampType.XP, xp=900, choices=(frozenset({Skill.MAGIC}),), min_level=50)
    player = _player(_quest(1), _quest(2, placeholder=True, qp=0, lamps=(usable, blocked)))

    with caplog.at_level(logging.DEBUG, logger="quest_planner.optimizer.path_builder"):
        path = find_path(player)

    assert _messages(path) == ["Q1"]
    assert player.xp(Skill.ATTACK) == 500
    assert player.xp(Skill.MAGIC) == 0
    assert "Discarding future placeholder action: Q2: Use XP Lamp to gain 900 xp" in caplog.text


def test_every_quest_appears_once():
    quests = [
        _quest(1),
        _quest(2, quests=frozenset({1}), skills=(SkillRequirement(Skill.MINING, 20),)),
        _quest(3, skills=(SkillRequirement(Skill.MINING, 10),)),
        _quest(4, quest_points=2),
        _quest(5, combat=3, skills=(SkillRequirement(Skill.STRENGTH, 10),)),
    ]
    player = _player(*quests)
    path = find_path(player)

    quest_ids = [a.quest.id for a in path.actions if isinstance(a, QuestAction)]
    assert sorted(quest_ids) == [1, 2, 3, 4, 5]
    assert len(quest_ids) == len(set(quest_ids))
    assert not player.incomplete_quests()


def test_training_reaches_requirements_before_each_quest():
    quests = [
        _quest(1, skills=(SkillRequirement(Skill.MINING, 10), SkillRequirement(Skill.SMITHING, 5))),
        _quest(2, quests=frozenset({1}), skills=(SkillRequirement(Skill.MINING, 30),)),
    ]
    path = find_path(_player(*quests))

    for action in path.actions:
        if isinstance(action, QuestAction):
            assert remaining_skill_requirements(action.player, action.quest) == []
            assert action.snapshot().player.levels[Skill.MINING] >= 10


def test_lamps_on_one_quest_never_share_a_combination():
    lamps = (
        LampReward(xp=100, choices=(frozenset({Skill.ATTACK}), frozenset({Skill.DEFENCE}))),
        LampReward(xp=100, choices=(frozenset({Skill.ATTACK}), frozenset({Skill.DEFENCE}))),
    )
    player = _player(_quest(1, lamps=lamps), lamp_skills=[Skill.ATTACK])
    path = find_path(player)

    chosen = [a.skills for a in path.actions if isinstance(a, LampAction)]
    assert chosen == [frozenset({Skill.ATTACK}), frozenset({Skill.DEFENCE})]


def test_deferred_lamp_resolves_once_requirement_is_met():
    lamp = LampReward(type=LampType.XP, xp=500, choices=(frozenset({Skill.ATTACK}),), min_level=10)
    quests = [
        _quest(1, lamps=(lamp,)),
        _quest(2, quests=frozenset({1}), skills=(SkillRequirement(Skill.ATTACK, 10),)),
    ]
    player = _player(*quests)
    path = find_path(player)

    assert _messages(path) == [
        "Q1",
        "Attack: Train from level 1 to 10 (1.154k xp)",
        "Q2",
        "Q1: Use XP Lamp on Attack to gain 500 xp",
    ]
    lamp_actions = [a for a in path.actions if a.type is ActionType.LAMP]
    assert len(lamp_actions) == 1
    assert not lamp_actions[0].future
    assert player.xp(Skill.ATTACK) == xp_at_level(10) + 500


def test_unresolvable_lamp_stays_future_at_the_end():
    lamp = LampReward(type=LampType.XP, xp=500, choices=(frozenset({Skill.ATTACK}),), min_level=50)
    player = _player(_quest(1, lamps=(lamp,)))
    path = find_path(player)

    assert _messages(path) == [
        "Q1",
        "Q1: Use XP Lamp to gain 500 xp (when requirements are met)",
    ]
    assert path.actions[-1].future
    assert player.xp(Skill.ATTACK) == 0


def test_actions_snapshot_player_state_at_each_step():
    quests = [
        _quest(1, xp={Skill.COOKING: 100.0}),
        _quest(2, quests=frozenset({1}), xp={Skill.COOKING: 10_000.0}),
    ]
    path = find_path(_player(*quests))
    first, second = path.actions
    assert first.snapshot().player.quest_points == 1
    assert second.snapshot().player.quest_points == 2
    assert first.snapshot().player.levels[Skill.COOKING] < second.snapshot().player.levels[Skill.COOKING]


def test_priority_orders_independent_quests():
    quests = [_quest(1), _quest(2)]
    player = Player(
        quests=[QuestEntry(quests[0]), QuestEntry(quests[1], priority=QuestPriority.HIGH)]
    )
    assert _messages(find_path(player)) == ["Q2", "Q1"]


def test_unsolvable_catalog_is_fatal():
    quests = [_quest(1), _quest(7, combat=200), _quest(8, quests=frozenset({7}))]
    with pytest.raises(PlanningError, match="stuck quests: 7, 8"):
        find_path(_player(*quests))


def test_find_path_is_deterministic():
    quests = [
        _quest(i, xp={Skill(i % 5 + 1): 100.0 * i}, lamps=(LampReward(type=LampType.SMALL_XP),))
        for i in range(1, 12)
    ]
    first = _messages(find_path(_player(*quests)))
    second = _messages(find_path(_player(*quests)))
    assert first == second


def test_already_completed_quests_are_skipped():
    player = _player(*_sample_quests())
    player.entry_for(1).complete()
    path = find_path(player)
    assert "Q1" not in _messages(path)
    assert path.stats.percent_complete == 100.0


def test_create_stats_handles_empty_and_partial():
    assert create_stats(Player()).percent_complete == 100.0
    player = _player(_quest(1), _quest(2))
    player.entry_for(1).complete()
    assert create_stats(player).percent_complete == 50.0


def test_plan_path_builds_player_from_catalog():
    catalog = QuestCatalog.of(_sample_quests())
    request = PathRequest(
        name=None,
        lamp_skills=[Skill.PRAYER],
        quest_priorities={1: QuestPriority.HIGH},
    )
    path = plan_path(catalog, request)
    assert _messages(path)[-1] == "Q2: Use XP Lamp on Prayer to gain 500 xp"


def test_plan_path_runs_are_independent():
    catalog = QuestCatalog.of(_sample_quests())
    first = plan_path(catalog)
    second = plan_path(catalog)
    assert _messages(first) == _messages(second)
    assert first.actions[0].player is not second.actions[0].player
