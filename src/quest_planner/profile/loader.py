"""Load a player's skill experience and quest progress from the live services.

Both lookups are best effort: any failure is logged and the player keeps
its default state.
"""

from __future__ import annotations

import csv
import io
import logging

import httpx

from quest_planner.engine.planner_config import PlannerConfig
from quest_planner.models.player import Player
from quest_planner.models.quest import QuestEntry, QuestStatus
from quest_planner.models.skill import Skill

logger = logging.getLogger(__name__)

RUNEMETRICS_STATUSES: dict[str, QuestStatus] = {
    "COMPLETED": QuestStatus.COMPLETED,
    "STARTED": QuestStatus.IN_PROGRESS,
    "NOT_STARTED": QuestStatus.NOT_STARTED,
}


class ProfileLoader:
    """Fetches hiscores and RuneMetrics data into a Player."""

    def __init__(
        self,
        config: PlannerConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or PlannerConfig()
        self._owns_client = http_client is None
        self.client = http_client or httpx.Client(timeout=self._config.http_timeout)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> ProfileLoader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def load(self, player: Player) -> None:
        """Populate *player* in place; a blank name loads nothing."""
        name = (player.name or "").strip()
        if not name:
            return

        try:
            self.load_hiscores(player, name)
        except (httpx.HTTPError, ValueError, IndexError):
            logger.warning("Failed to load hiscores for player: %s", name, exc_info=True)

        try:
            self.load_quests(player, name)
        except (httpx.HTTPError, ValueError, KeyError, TypeError):
            logger.warning("Failed to load quests for player: %s", name, exc_info=True)

    def load_hiscores(self, player: Player, name: str) -> None:
        logger.debug("Loading hiscores for player: %s", name)
        response = self.client.get(self._config.hiscores_url, params={"player": name})
        response.raise_for_status()

        rows = list(csv.reader(io.StringIO(response.text)))
        xps: dict[Skill, float] = {}
        for skill in Skill:
            if int(skill) >= len(rows):
                logger.warning("Hiscores have no row for skill: %s", skill.display_name)
                continue
            row = rows[int(skill)]
            xp = float(row[2])
            # Unranked skills report -1.
            if xp >= 0:
                xps[skill] = xp
        player.skill_xps.update(xps)

    def load_quests(self, player: Player, name: str) -> None:
        logger.debug("Loading quests for player: %s", name)
        response = self.client.get(self._config.runemetrics_url, params={"user": name})
        response.raise_for_status()

        for rm_quest in response.json()["quests"]:
            title = str(rm_quest["title"])
            entry = _find_entry(player, title)
            if entry is None:
                logger.warning("Failed to find RuneMetrics quest: %s", title)
                continue
            entry.set_status(RUNEMETRICS_STATUSES.get(rm_quest.get("status"), QuestStatus.NOT_STARTED))


def _find_entry(player: Player, title: str) -> QuestEntry | None:
    wanted = title.casefold()
    for entry in player.quests:
        if entry.quest.title.casefold() == wanted or entry.quest.name.casefold() == wanted:
            return entry
    return None
