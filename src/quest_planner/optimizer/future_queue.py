"""Deferred lamp actions waiting for their own requirement."""

from __future__ import annotations

import logging

from quest_planner.engine.actions import Action, LampAction
from quest_planner.models.player import Player
from quest_planner.optimizer.lamps import create_lamp_action

logger = logging.getLogger(__name__)


class FutureActionQueue:
    """Insertion-ordered queue of future lamp actions.

    A pending action is re-allocated when it becomes usable, because the
    best skill choice may have changed since it was deferred.
    """

    __slots__ = ("_pending",)

    def __init__(self) -> None:
        self._pending: list[LampAction] = []

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> list[LampAction]:
        return list(self._pending)

    def add(self, action: LampAction) -> None:
        logger.debug("Adding future action: %s", action)
        self._pending.append(action)

    def _resolve_one(self, player: Player, action: LampAction) -> Action:
        resolved = create_lamp_action(player, action.entry, action.lamp)
        logger.debug("Processing future action: %s", resolved)
        resolved.process(player)
        return resolved.copy_for_player(player.copy())

    def resolve(self, player: Player) -> list[Action]:
        """Process every pending action whose requirement now holds.

        Returns the processed actions bound to a snapshot of *player*.
        """
        done: list[Action] = []
        still_pending: list[LampAction] = []
        for action in self._pending:
            if action.meets_requirements(player):
                done.append(self._resolve_one(player, action))
            else:
                still_pending.append(action)
        self._pending = still_pending
        return done

    def drain(self, player: Player) -> list[Action]:
        """Flush the queue once no quests are left.

        Actions that became usable are resolved normally. The rest stay
        future actions in the path, rebound to *player*, with no effect.
        """
        done = self.resolve(player)
        for action in self._pending:
            logger.debug("Adding unresolved future action: %s", action)
            done.append(action.copy_for_player(player.copy()))
        self._pending = []
        return done
