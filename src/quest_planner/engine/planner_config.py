"""Configuration knobs for path finding and profile loading.

Defaults match the live RuneScape services.
"""

from dataclasses import dataclass


@dataclass(slots=True)
class PlannerConfig:
    """Tuneable parameters that aren't part of the quest catalog."""

    reward_score_divisor: float = 100.0   # Reward xp per point of quest score
    hiscores_url: str = "https://secure.runescape.com/m=hiscore/index_lite.ws"
    runemetrics_url: str = "https://apps.runescape.com/runemetrics/quests"
    http_timeout: float = 10.0            # Seconds per profile request
