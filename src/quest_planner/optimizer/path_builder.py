"""Path finding: walk a player through every incomplete quest.

The loop repeatedly selects the best available quest, expands it into
actions, applies them to the player and re-checks deferred lamp actions
until no incomplete quests remain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from quest_planner.engine.actions import Action
from quest_planner.engine.planner_config import PlannerConfig
from quest_planner.models.catalog import QuestCatalog
from quest_planner.models.player import Player
from quest_planner.optimizer.errors import PlanningError
from quest_planner.optimizer.future_queue import FutureActionQueue
from quest_planner.optimizer.generator import complete_quest
from quest_planner.optimizer.selector import best_quest
from quest_planner.optimizer.specs import PathRequest
from quest_planner.profile.loader import ProfileLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PathStats:
    percent_complete: float


@dataclass(frozen=True, slots=True)
class Path:
    """Planner output: ordered actions plus completion statistics."""

    actions: tuple[Action, ...] = ()
    stats: PathStats = field(default_factory=lambda: PathStats(100.0))

    def __iter__(self):
        return iter(self.actions)

    def __len__(self) -> int:
        return len(self.actions)


def create_stats(player: Player) -> PathStats:
    total = len(player.quests)
    if total == 0:
        return PathStats(percent_complete=100.0)
    return PathStats(percent_complete=len(player.completed_quests()) / total * 100)


def complete_placeholder_quests(player: Player) -> None:
    """Complete administrative quests without recording their actions.

    Their usable lamps are applied straight away. A lamp that is not usable
    yet is discarded rather than queued, since placeholders never show up in
    a path.
    """
    for entry in player.incomplete_quests():
        if not entry.quest.placeholder:
            continue
        logger.debug("Processing placeholder quest: %s", entry.quest.name)
        for action in complete_quest(player, entry):
            if action.future:
                logger.debug("Discarding future placeholder action: %s", action)
                continue
            action.process(player)


def find_path(player: Player, config: PlannerConfig | None = None) -> Path:
    """Plan the path completing every incomplete quest of *player*.

    *player* is mutated to its end-of-path state.
    """
    config = config or PlannerConfig()
    actions: dict[Action, None] = {}
    queue = FutureActionQueue()

    logger.debug("Finding quest path for player: %s", player.name)

    complete_placeholder_quests(player)

    while True:
        incomplete = player.incomplete_quests()
        if not incomplete:
            break
        entry = best_quest(player, incomplete, config)
        if entry is None:
            stuck = ", ".join(str(e.quest.id) for e in incomplete)
            raise PlanningError(f"Unable to find best quest; stuck quests: {stuck}")

        for action in complete_quest(player, entry):
            if action.future:
                queue.add(action)
                continue
            logger.debug("Processing action: %s", action)
            action.process(player)
            actions[action.copy_for_player(player.copy())] = None

        for action in queue.resolve(player):
            actions[action] = None

    for action in queue.drain(player):
        actions[action] = None

    return Path(actions=tuple(actions), stats=create_stats(player))


def plan_path(
    catalog: QuestCatalog,
    request: PathRequest | None = None,
    *,
    loader: ProfileLoader | None = None,
    config: PlannerConfig | None = None,
) -> Path:
    """Build a fresh player for *request*, load its profile and find its path."""
    request = request or PathRequest()
    logger.debug("Using player profile: %s", request.name)

    entries = catalog.create_entries(
        request.quest_priorities,
        request.access_filter,
        request.type_filter,
    )
    player = Player(
        name=request.name,
        quests=entries,
        lamp_skills=list(request.lamp_skills),
        ironman=request.ironman,
        recommended=request.recommended,
    )
    if loader is not None:
        loader.load(player)

    return find_path(player, config)
