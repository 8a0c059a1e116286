"""Parse a JSON quest catalog into Quest objects.

Expected layout (one object per quest, snake_case keys):

    {
      "id": 12,
      "title": "The Restless Ghost",
      "display_name": "",
      "placeholder": false,
      "members": false,
      "type": "QUEST",
      "requirements": {
        "combat": 0,
        "quest_points": 0,
        "quests": [3],
        "skills": [{"skill": "prayer", "level": 5}]
      },
      "rewards": {
        "quest_points": 1,
        "xp": {"prayer": 1125},
        "lamps": [
          {"type": "SMALL_XP", "multiplier": 1.0, "min_level": 1,
           "skills": [["attack"], ["strength", "defence"]]}
        ]
      }
    }

The document is either a list of such objects or ``{"quests": [...]}``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from quest_planner.models.catalog import QuestCatalog
from quest_planner.models.lamp import LampReward, LampType
from quest_planner.models.quest import (
    Quest,
    QuestRequirements,
    QuestRewards,
    QuestType,
    SkillRequirement,
)
from quest_planner.models.skill import parse_skill


def _parse_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{what}: bool is not a valid integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip(), 0)
    raise ValueError(f"{what}: expected integer-like value, got {value!r}")


def _parse_enum(enum_cls, value: Any, what: str):
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        raise ValueError(f"{what}: unknown value {value!r}") from None


def parse_lamp(data: dict[str, Any]) -> LampReward:
    choices = tuple(
        frozenset(parse_skill(name) for name in choice)
        for choice in data.get("skills", [])
    )
    if any(not choice for choice in choices):
        raise ValueError("lamp: empty skill choice")
    return LampReward(
        type=_parse_enum(LampType, data.get("type", "XP"), "lamp type"),
        xp=float(data.get("xp", 0.0)),
        multiplier=float(data.get("multiplier", 1.0)),
        choices=choices,
        min_level=_parse_int(data.get("min_level", 1), "lamp min_level"),
    )


def parse_requirements(data: dict[str, Any]) -> QuestRequirements:
    skills = tuple(
        SkillRequirement(
            skill=parse_skill(entry["skill"]),
            level=_parse_int(entry["level"], "skill level"),
        )
        for entry in data.get("skills", [])
    )
    return QuestRequirements(
        combat_level=_parse_int(data.get("combat", 0), "combat"),
        quest_points=_parse_int(data.get("quest_points", 0), "quest_points"),
        quests=frozenset(_parse_int(q, "quest id") for q in data.get("quests", [])),
        skills=skills,
    )


def parse_rewards(data: dict[str, Any]) -> QuestRewards:
    return QuestRewards(
        quest_points=_parse_int(data.get("quest_points", 0), "quest_points"),
        xp={parse_skill(name): float(xp) for name, xp in data.get("xp", {}).items()},
        lamps=tuple(parse_lamp(lamp) for lamp in data.get("lamps", [])),
    )


def parse_quest(data: dict[str, Any]) -> Quest:
    """Parse one quest object."""
    if not isinstance(data, dict):
        raise ValueError(f"Quest entry must be an object, got {type(data).__name__}")
    if "id" not in data:
        raise ValueError(f"Quest entry has no id: {data!r}")
    title = str(data.get("title", ""))
    return Quest(
        id=_parse_int(data["id"], "id"),
        title=title,
        display_name=str(data.get("display_name") or title),
        placeholder=bool(data.get("placeholder", False)),
        members=bool(data.get("members", False)),
        type=_parse_enum(QuestType, data.get("type", "QUEST"), "quest type"),
        requirements=parse_requirements(data.get("requirements") or {}),
        rewards=parse_rewards(data.get("rewards") or {}),
    )


def parse_catalog(payload: Any) -> QuestCatalog:
    if isinstance(payload, dict):
        payload = payload.get("quests")
    if not isinstance(payload, list):
        raise ValueError("Quest catalog must be a list or an object with a 'quests' list")
    return QuestCatalog.of(parse_quest(entry) for entry in payload)


def load_catalog(path: Path) -> QuestCatalog:
    return parse_catalog(json.loads(Path(path).read_text()))
