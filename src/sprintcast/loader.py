"""Workbook loading and export.

A workbook file holds groups of alternative plans, the team and the velocity.
Three layouts are read, newest first:

- ``{groups: [...], team: [...], velocity: N}`` (current layout; a
  ``velocityPerSprint`` key overrides ``velocity``)
- ``[plan, plan, ...]`` (oldest layout: a bare list of plans)
- ``{strategies: [...]}`` (a single group's plans)

JSON is read through the YAML loader, so either format works.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .logger import get_logger
from .models import Epic, Plan, PlanGroup, Story, Workbook
from .resources import Team, create_default_team
from .schemas import EpicSchema, GroupSchema, PlanSchema, StorySchema, WorkbookSchema

logger = get_logger()

DEFAULT_VELOCITY = 8.0
V1_GROUP_NAME = "Imported Strategies"
PARTIAL_GROUP_NAME = "Imported Group"


def load_workbook(path: Path | str) -> Workbook:
    """Read a workbook file.

    Raises:
        ParseError: If the file is missing, unreadable, or has no plans section
        ValidationError: If the content does not match the workbook schema
    """
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ParseError(f"Failed to parse {path}: {e}") from e
    except OSError as e:
        raise ParseError(f"Failed to read {path}: {e}") from e

    return parse_workbook(data)


def parse_workbook(data: Any) -> Workbook:
    """Build a Workbook from already-decoded data, migrating older layouts."""
    try:
        schema = _migrate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid workbook structure: {e}") from e

    if not schema.groups:
        raise ParseError("Invalid file format: could not find strategies")

    try:
        team = Team.model_validate({"developers": schema.team}) if schema.team is not None else None
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid team definition: {e}") from e

    velocity = schema.velocity_per_sprint or schema.velocity or DEFAULT_VELOCITY
    return Workbook(
        groups=[_to_group(group) for group in schema.groups],
        team=team if team is not None else create_default_team(),
        velocity=velocity,
    )


def _migrate(data: Any) -> WorkbookSchema:
    """Normalize any supported layout to the current one."""
    if isinstance(data, list):
        logger.changes("Migrating list-of-plans workbook")
        group = GroupSchema(id="imported", name=V1_GROUP_NAME, plans=data)  # type: ignore[arg-type]
        return WorkbookSchema(groups=[group])
    if isinstance(data, dict):
        if "groups" in data:
            return WorkbookSchema.model_validate(data)
        if "strategies" in data:
            logger.changes("Migrating single-group workbook")
            group = GroupSchema(
                id="imported", name=PARTIAL_GROUP_NAME, plans=data["strategies"] or []
            )
            return WorkbookSchema(groups=[group])
    raise ParseError("Invalid file format: could not find strategies")


def _to_story(schema: StorySchema) -> Story:
    return Story(
        id=schema.id,
        name=schema.name,
        points=schema.points,
        dependencies=schema.dependencies,
        bundle=schema.bundle,
        blocked_until=schema.blocked_until,
        min_days=schema.min_days,
        done=schema.done,
        story_type=schema.story_type,
        description=schema.description,
    )


def _to_epic(schema: EpicSchema) -> Epic:
    return Epic(
        id=schema.id,
        name=schema.name,
        stories=[_to_story(s) for s in schema.stories],
        dependencies=schema.dependencies,
        done=schema.done,
    )


def _to_plan(schema: PlanSchema) -> Plan:
    return Plan(
        id=schema.id,
        name=schema.name,
        start_date=schema.start_date,
        target_date=schema.target_date,
        epics=[_to_epic(e) for e in schema.epics],
        description=schema.description,
        color=schema.color,
    )


def _to_group(schema: GroupSchema) -> PlanGroup:
    return PlanGroup(id=schema.id, name=schema.name, plans=[_to_plan(p) for p in schema.plans])


def _story_to_dict(story: Story) -> dict[str, Any]:
    result: dict[str, Any] = {
        "id": story.id,
        "name": story.name,
        "points": story.points,
        "dependencies": list(story.dependencies),
    }
    if story.bundle:
        result["bundleId"] = story.bundle
    if story.blocked_until:
        result["blockedUntil"] = story.blocked_until.isoformat()
    if story.min_days:
        result["minDays"] = story.min_days
    if story.done:
        result["isDone"] = True
    if story.story_type != "story":
        result["type"] = story.story_type
    if story.description:
        result["description"] = story.description
    return result


def _plan_to_dict(plan: Plan) -> dict[str, Any]:
    return {
        "id": plan.id,
        "name": plan.name,
        "description": plan.description,
        "color": plan.color,
        "startDate": plan.start_date.isoformat() if plan.start_date else None,
        "targetDate": plan.target_date.isoformat() if plan.target_date else None,
        "epics": [
            {
                "id": epic.id,
                "name": epic.name,
                "dependencies": list(epic.dependencies),
                "isDone": epic.done,
                "stories": [_story_to_dict(s) for s in epic.stories],
            }
            for epic in plan.epics
        ],
    }


def workbook_to_dict(workbook: Workbook) -> dict[str, Any]:
    """Serialize a workbook in the current layout."""
    return {
        "groups": [
            {
                "id": group.id,
                "name": group.name,
                "strategies": [_plan_to_dict(p) for p in group.plans],
            }
            for group in workbook.groups
        ],
        "team": [
            developer.model_dump(exclude_none=True) for developer in workbook.team.developers
        ],
        "velocity": workbook.velocity,
    }


def dump_workbook(workbook: Workbook, path: Path | str) -> None:
    """Write a workbook; ``.json`` files get JSON, anything else YAML."""
    path = Path(path)
    data = workbook_to_dict(workbook)
    with path.open("w", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            json.dump(data, f, indent=2)
            f.write("\n")
        else:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
