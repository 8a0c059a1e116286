"""JSON-safe rendering of a planned path."""

from __future__ import annotations

from dataclasses import asdict
from enum import Enum
from typing import Any

from quest_planner.engine.actions import ActionSnapshot
from quest_planner.optimizer.path_builder import Path


def _json_safe(value: Any) -> Any:
    """Recursively normalize snapshot values for JSON serialization."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, dict):
        return {_json_safe(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def snapshot_to_dict(snapshot: ActionSnapshot) -> dict[str, Any]:
    payload = asdict(snapshot)
    payload["player"]["levels"] = {
        skill.display_name: level for skill, level in snapshot.player.levels.items()
    }
    return _json_safe(payload)


def path_to_dict(path: Path) -> dict[str, Any]:
    return {
        "actions": [snapshot_to_dict(action.snapshot()) for action in path.actions],
        "stats": {"percent_complete": path.stats.percent_complete},
    }
