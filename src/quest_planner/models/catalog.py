"""Immutable quest catalog shared across planning runs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from quest_planner.models.quest import Quest, QuestEntry, QuestPriority, QuestStatus, QuestType


class AccessFilter(Enum):
    ALL = "ALL"
    FREE = "FREE"
    MEMBERS = "MEMBERS"

    def accepts(self, quest: Quest) -> bool:
        if self is AccessFilter.FREE:
            return not quest.members
        if self is AccessFilter.MEMBERS:
            return quest.members
        return True


class TypeFilter(Enum):
    ALL = "ALL"
    QUESTS = "QUESTS"
    MINIQUESTS = "MINIQUESTS"
    SAGAS = "SAGAS"

    def accepts(self, quest: Quest) -> bool:
        wanted = _TYPE_FILTER_TYPES.get(self)
        return wanted is None or quest.type is wanted


_TYPE_FILTER_TYPES: dict[TypeFilter, QuestType] = {
    TypeFilter.QUESTS: QuestType.QUEST,
    TypeFilter.MINIQUESTS: QuestType.MINIQUEST,
    TypeFilter.SAGAS: QuestType.SAGA,
}


@dataclass(frozen=True, slots=True)
class QuestCatalog:
    """Quests keyed by id. Never mutated once built."""

    quests: tuple[Quest, ...]

    @classmethod
    def of(cls, quests: Iterable[Quest]) -> QuestCatalog:
        ordered = sorted(quests, key=lambda q: q.id)
        seen: set[int] = set()
        for quest in ordered:
            if quest.id in seen:
                raise ValueError(f"Duplicate quest id: {quest.id}")
            seen.add(quest.id)
        for quest in ordered:
            missing = sorted(quest.requirements.quests - seen)
            if missing:
                raise ValueError(f"Quest {quest.id} requires unknown quests: {missing}")
        return cls(tuple(ordered))

    def __len__(self) -> int:
        return len(self.quests)

    def get(self, quest_id: int) -> Quest | None:
        for quest in self.quests:
            if quest.id == quest_id:
                return quest
        return None

    def create_entries(
        self,
        priorities: Mapping[int, QuestPriority] | None = None,
        access_filter: AccessFilter = AccessFilter.ALL,
        type_filter: TypeFilter = TypeFilter.ALL,
    ) -> list[QuestEntry]:
        """Fresh NOT_STARTED entries for the quests passing both filters.

        Placeholder quests and the prerequisites of every selected quest are
        always included, otherwise the selection could never be completed.
        """
        priorities = priorities or {}
        selected = {
            quest.id
            for quest in self.quests
            if quest.placeholder or (access_filter.accepts(quest) and type_filter.accepts(quest))
        }
        pending = list(selected)
        while pending:
            quest = self.get(pending.pop())
            if quest is None:
                continue
            for prerequisite in quest.requirements.quests:
                if prerequisite not in selected:
                    selected.add(prerequisite)
                    pending.append(prerequisite)

        return [
            QuestEntry(
                quest=quest,
                status=QuestStatus.NOT_STARTED,
                priority=priorities.get(quest.id, QuestPriority.NORMAL),
            )
            for quest in self.quests
            if quest.id in selected
        ]
