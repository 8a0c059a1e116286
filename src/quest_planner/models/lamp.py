"""Lamp rewards: discretionary experience granted to a chosen skill set.

Tiered lamp amounts scale with the current level of the skill they are
used on, read from the per-level table of each lamp size. Dragonkin lamps
use a cubic formula instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from quest_planner.models.skill import Skill

if TYPE_CHECKING:
    from quest_planner.models.player import Player


# Lamp experience by level, index 0 = level 1. Levels past the end of a
# table use its last entry.
SMALL_LAMP_XP: tuple[int, ...] = (
    62, 69, 77, 85, 93, 104, 123, 127, 144, 153,
    170, 188, 205, 229, 252, 261, 274, 285, 298, 310,
    324, 337, 352, 367, 383, 399, 405, 414, 453, 473,
    493, 514, 536, 559, 583, 608, 635, 662, 691, 720,
    752, 784, 818, 853, 889, 929, 970, 1012, 1055, 1101,
    1148, 1200, 1249, 1304, 1362, 1422, 1485, 1546, 1616, 1684,
    1757, 1835, 1911, 2004, 2108, 2171, 2269, 2379, 2470, 2592,
    2693, 2809, 2946, 3082, 3213, 3339, 3495, 3646, 3792, 3980,
    4166, 4347, 4521, 4762, 4918, 5033, 5375, 5592, 5922, 6121,
    6451, 6614, 6928, 7236, 7532, 8064, 8347, 8602,
)

MEDIUM_LAMP_XP: tuple[int, ...] = (
    124, 138, 154, 170, 186, 208, 246, 254, 288, 306,
    340, 376, 410, 458, 504, 522, 548, 570, 596, 620,
    648, 674, 704, 734, 766, 798, 810, 828, 906, 946,
    986, 1028, 1072, 1118, 1166, 1216, 1270, 1324, 1382, 1440,
    1504, 1568, 1636, 1706, 1778, 1858, 1940, 2024, 2110, 2202,
    2296, 2400, 2498, 2608, 2724, 2844, 2970, 3092, 3232, 3368,
    3514, 3670, 3822, 4008, 4216, 4342, 4538, 4758, 4940, 5185,
    5386, 5618, 5892, 6164, 6426, 6678, 6990, 7292, 7584, 7960,
    8332, 8694, 9042, 9524, 9836, 10066, 10750, 11184, 11844, 12242,
    12902, 13228, 13856, 14472, 15064, 16128, 16694, 17204,
)

LARGE_LAMP_XP: tuple[int, ...] = (
    248, 276, 308, 340, 372, 416, 492, 508, 576, 612,
    680, 752, 820, 916, 1008, 1044, 1096, 1140, 1192, 1240,
    1296, 1348, 1408, 1468, 1532, 1596, 1620, 1656, 1812, 1892,
    1972, 2056, 2144, 2236, 2332, 2432, 2540, 2648, 2764, 2880,
    3008, 3136, 3272, 3412, 3556, 3716, 3880, 4048, 4220, 4404,
    4592, 4800, 4996, 5216, 5448, 5688, 5940, 6184, 6464, 6736,
    7028, 7340, 7644, 8016, 8432, 8684, 9076, 9516, 9880, 10368,
    10772, 11236, 11786, 12328, 12852, 13356, 13980, 14584, 15168, 15920,
    16664, 17388, 18084, 19048, 19672, 20132, 21500, 22368, 23688, 24484,
    25804, 26456, 27712, 28944, 30128, 32256, 33388, 34408,
)

HUGE_LAMP_XP: tuple[int, ...] = (
    496, 552, 616, 680, 744, 832, 984, 1016, 1152, 1224,
    1360, 1504, 1640, 1832, 2016, 2088, 2192, 2280, 2384, 2480,
    2592, 2696, 2816, 2936, 3064, 3192, 3240, 3312, 3624, 3784,
    3944, 4112, 4288, 4472, 4664, 4864, 5080, 5296, 5528, 5760,
    6016, 6272, 6544, 6824, 7112, 7432, 7760, 8096, 8440, 8808,
    9184, 9600, 9992, 10432, 10896, 11376, 11880, 12368, 12928, 13472,
    14056, 14680, 15288, 16032, 16864, 17368, 18152, 19032, 19760, 20736,
    21544, 22472, 23568, 24656, 25704, 26712, 27960, 29168, 30336, 31840,
    33328, 34776, 36168, 38096, 39344, 40264, 43000, 44736, 47380, 48968,
    51608, 52912, 55424, 57888, 60256, 64512, 66776, 68816,
)


class LampType(Enum):
    """Lamp kinds; the value is the display name."""

    XP = "XP Lamp"
    SMALL_XP = "Small XP Lamp"
    MEDIUM_XP = "Medium XP Lamp"
    LARGE_XP = "Large XP Lamp"
    HUGE_XP = "Huge XP Lamp"
    DRAGONKIN = "Dragonkin Lamp"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_fixed(self) -> bool:
        return self is LampType.XP


_LAMP_TABLES: dict[LampType, tuple[int, ...]] = {
    LampType.SMALL_XP: SMALL_LAMP_XP,
    LampType.MEDIUM_XP: MEDIUM_LAMP_XP,
    LampType.LARGE_XP: LARGE_LAMP_XP,
    LampType.HUGE_XP: HUGE_LAMP_XP,
}


def tiered_lamp_xp(lamp_type: LampType, level: int) -> float:
    """Experience a level-scaled lamp grants at *level*."""
    if lamp_type is LampType.DRAGONKIN:
        n = max(1, level - 1)
        return float((n ** 3 - 2 * n ** 2 + 100 * n) // 20)
    table = _LAMP_TABLES.get(lamp_type)
    if table is None:
        raise ValueError(f"{lamp_type.name} lamps are not level scaled")
    index = max(0, min(len(table), level) - 1)
    return float(table[index])


@dataclass(frozen=True, slots=True)
class LampReward:
    """A lamp attached to a quest's rewards.

    ``choices`` lists the skill combinations the lamp may be used on, in
    catalog order. An empty tuple means any single skill. ``min_level`` is
    the level every skill in a combination must have for the lamp to be
    usable on it.
    """

    type: LampType = LampType.XP
    xp: float = 0.0
    multiplier: float = 1.0
    choices: tuple[frozenset[Skill], ...] = ()
    min_level: int = 1

    @property
    def name(self) -> str:
        return self.type.display_name

    def all_choices(self) -> tuple[frozenset[Skill], ...]:
        if self.choices:
            return self.choices
        return tuple(frozenset({skill}) for skill in Skill)

    def _qualifies(self, player: Player, skills: frozenset[Skill]) -> bool:
        return all(player.level(skill) >= self.min_level for skill in skills)

    def meets_requirements(self, player: Player) -> bool:
        return any(self._qualifies(player, skills) for skills in self.all_choices())

    def valid_choices(
        self,
        player: Player,
        used: list[frozenset[Skill]] | set[frozenset[Skill]],
    ) -> list[frozenset[Skill]]:
        """Qualifying combinations that have not been used yet, in catalog order."""
        return [
            skills
            for skills in self.all_choices()
            if skills not in used and self._qualifies(player, skills)
        ]

    def xp_for_skill(self, player: Player, skill: Skill) -> float:
        if self.type.is_fixed:
            return self.xp * self.multiplier
        return tiered_lamp_xp(self.type, player.level(skill)) * self.multiplier

    def xp_for_skills(self, player: Player, skills: frozenset[Skill]) -> dict[Skill, float]:
        """Experience granted to each skill, in skill order."""
        return {skill: self.xp_for_skill(player, skill) for skill in sorted(skills)}

    def total_xp(self, player: Player, skills: frozenset[Skill]) -> float:
        return sum(self.xp_for_skills(player, skills).values())

    def display_xp(self, player: Player, skills: frozenset[Skill]) -> float | None:
        """Amount shown to the user: per skill for fixed lamps, summed otherwise.

        Returns None when a level-scaled lamp has no skills chosen yet.
        """
        if self.type.is_fixed:
            return self.xp * self.multiplier
        if not skills:
            return None
        return self.total_xp(player, skills)
