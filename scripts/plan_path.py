"""Plan a quest path from a catalog JSON file and request options.

Usage examples:
    python -m scripts.plan_path --catalog quests.json
    python -m scripts.plan_path --catalog quests.json --name "Zezima" --lamp-skill herblore
    python -m scripts.plan_path --catalog quests.json --request-json '{"access": "free"}' --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from quest_planner.models.catalog import AccessFilter, TypeFilter
from quest_planner.models.quest import QuestPriority
from quest_planner.models.skill import parse_skill
from quest_planner.optimizer import PathRequest, PlanningError, plan_path
from quest_planner.optimizer.export import path_to_dict
from quest_planner.optimizer.path_builder import Path as QuestPath
from quest_planner.parser.catalog_parser import load_catalog
from quest_planner.profile.loader import ProfileLoader


def _parse_int_like(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("bool is not a valid integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip(), 0)
    raise ValueError(f"Expected integer-like value, got: {value!r}")


def _parse_choice(enum_cls, value: Any):
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        allowed = ", ".join(member.name.lower() for member in enum_cls)
        raise ValueError(f"Unknown {enum_cls.__name__} {value!r}; expected one of: {allowed}") from None


def _load_json_arg(raw_json: str | None, file_path: Path | None) -> dict[str, Any]:
    if raw_json is not None:
        payload = json.loads(raw_json)
    elif file_path is not None:
        payload = json.loads(file_path.read_text())
    else:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object")
    return payload


def _request_from_dict(data: dict[str, Any]) -> PathRequest:
    priorities_raw = data.get("quest_priorities") or {}
    if not isinstance(priorities_raw, dict):
        raise ValueError("quest_priorities must be an object of quest id -> priority")
    return PathRequest(
        name=data.get("name"),
        access_filter=_parse_choice(AccessFilter, data.get("access", "all")),
        type_filter=_parse_choice(TypeFilter, data.get("type", "all")),
        ironman=bool(data.get("ironman", False)),
        recommended=bool(data.get("recommended", False)),
        lamp_skills=[parse_skill(s) for s in data.get("lamp_skills", [])],
        quest_priorities={
            _parse_int_like(qid): _parse_choice(QuestPriority, priority)
            for qid, priority in priorities_raw.items()
        },
    )


def _render_text_result(path: QuestPath) -> str:
    lines: list[str] = [f"completion: {path.stats.percent_complete:.1f}%", ""]
    for index, action in enumerate(path.actions, start=1):
        lines.append(f"{index:>4}. [{action.type.name.lower():<5}] {action.message}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Plan a quest path from a quest catalog")
    parser.add_argument("--catalog", type=Path, required=True, help="Path to quest catalog JSON.")
    request_group = parser.add_mutually_exclusive_group(required=False)
    request_group.add_argument("--request-file", type=Path, help="Path to PathRequest JSON file.")
    request_group.add_argument("--request-json", type=str, help="Inline PathRequest JSON object.")
    parser.add_argument("--name", help="Player name to load progress for (overrides request).")
    parser.add_argument(
        "--lamp-skill",
        action="append",
        default=[],
        help="Preferred lamp skill; repeat in preference order.",
    )
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log planning steps.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    request = _request_from_dict(_load_json_arg(args.request_json, args.request_file))
    if args.name:
        request.name = args.name
    if args.lamp_skill:
        request.lamp_skills = [parse_skill(s) for s in args.lamp_skill]

    catalog = load_catalog(args.catalog)
    try:
        with ProfileLoader() as loader:
            path = plan_path(catalog, request, loader=loader)
    except PlanningError as exc:
        print(f"Planning failed: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(path_to_dict(path), indent=2))
    else:
        print(_render_text_result(path))
    return 0


if __name__ == "__main__":
    sys.exit(main())
