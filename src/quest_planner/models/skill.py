"""Skills and the level/experience curve.

Skill indices follow the row order of the hiscores lite CSV (row 0 is the
overall total), so ``Skill(row)`` maps a hiscores row straight to a skill.
"""

from __future__ import annotations

from enum import IntEnum


class Skill(IntEnum):
    """Trainable skills, valued by hiscores row index."""

    ATTACK = 1
    DEFENCE = 2
    STRENGTH = 3
    CONSTITUTION = 4
    RANGED = 5
    PRAYER = 6
    MAGIC = 7
    COOKING = 8
    WOODCUTTING = 9
    FLETCHING = 10
    FISHING = 11
    FIREMAKING = 12
    CRAFTING = 13
    SMITHING = 14
    MINING = 15
    HERBLORE = 16
    AGILITY = 17
    THIEVING = 18
    SLAYER = 19
    FARMING = 20
    RUNECRAFTING = 21
    HUNTER = 22
    CONSTRUCTION = 23
    SUMMONING = 24
    DUNGEONEERING = 25
    DIVINATION = 26
    INVENTION = 27
    ARCHAEOLOGY = 28
    NECROMANCY = 29

    @property
    def display_name(self) -> str:
        return SKILL_NAMES[self]


SKILL_NAMES: dict[Skill, str] = {skill: skill.name.title() for skill in Skill}

NAME_TO_SKILL: dict[str, Skill] = {name.lower(): skill for skill, name in SKILL_NAMES.items()}

MIN_LEVEL = 1
MAX_LEVEL = 120

# Every skill starts at level 1 except Constitution.
INITIAL_LEVELS: dict[Skill, int] = {skill: MIN_LEVEL for skill in Skill}
INITIAL_LEVELS[Skill.CONSTITUTION] = 10


def _build_xp_table() -> list[int]:
    """Experience needed for each level, index 0 = level 1."""
    table = [0]
    points = 0
    for level in range(1, MAX_LEVEL):
        points += int(level + 300 * 2 ** (level / 7))
        table.append(points // 4)
    return table


_XP_TABLE = _build_xp_table()


def xp_at_level(level: int) -> int:
    """Minimum experience for *level*, clamped to [MIN_LEVEL, MAX_LEVEL]."""
    level = max(MIN_LEVEL, min(MAX_LEVEL, int(level)))
    return _XP_TABLE[level - 1]


def level_at_xp(xp: float) -> int:
    """Highest level whose experience threshold is <= *xp*."""
    level = MIN_LEVEL
    for index, threshold in enumerate(_XP_TABLE):
        if xp < threshold:
            break
        level = index + 1
    return level


def parse_skill(value: object) -> Skill:
    """Accept a Skill, a hiscores index, or a (case-insensitive) name."""
    if isinstance(value, Skill):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Skill(value)
    if isinstance(value, str):
        key = value.strip().lower().replace("_", " ")
        if key in NAME_TO_SKILL:
            return NAME_TO_SKILL[key]
    raise ValueError(f"Unknown skill: {value!r}")


def initial_xps() -> dict[Skill, float]:
    """Fresh experience map for a new character."""
    return {skill: float(xp_at_level(level)) for skill, level in INITIAL_LEVELS.items()}
