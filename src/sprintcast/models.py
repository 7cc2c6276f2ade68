"""Data models for sprintcast plans."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .business_days import coerce_date
from .exceptions import PlanNotFoundError

VALID_STORY_TYPES = {"story", "task", "bug", "spike", "discovery"}
DEFAULT_STORY_TYPE = "story"

# Leading-number rule: "5", "2.5pts", " .5" parse; "pts5" does not
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Any) -> float:
    """Parse a loosely-typed numeric field, returning 0.0 when unparseable.

    Booleans, None, NaN and infinities all count as unparseable.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if not match:
            return 0.0
        number = float(match.group(0))
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def normalize_id(value: Any) -> str:
    """Ids arrive as ints or strings; compare them as strings."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _normalize_ids(values: Any) -> list[str]:
    if values is None:
        return []
    if isinstance(values, (list, tuple)):
        return [normalize_id(v) for v in values if v is not None and str(v).strip() != ""]
    return [normalize_id(values)]


def _default_str_list() -> list[str]:
    return []


def _default_story_list() -> list[Story]:
    return []


def _default_epic_list() -> list[Epic]:
    return []


@dataclass
class Story:
    """The smallest schedulable unit of work, measured in points."""

    id: str
    name: str = ""
    points: float = 0.0
    dependencies: list[str] = field(default_factory=_default_str_list)
    bundle: str | None = None  # Bundle tag or developer name
    blocked_until: date | None = None
    min_days: float = 0.0  # Minimum calendar span before the story counts as complete
    done: bool = False
    story_type: str = DEFAULT_STORY_TYPE
    description: str = ""

    def __post_init__(self) -> None:
        self.id = normalize_id(self.id)
        self.points = max(0.0, parse_number(self.points))
        self.min_days = max(0.0, parse_number(self.min_days))
        self.dependencies = _normalize_ids(self.dependencies)
        bundle = str(self.bundle).strip() if self.bundle is not None else ""
        self.bundle = bundle or None
        self.blocked_until = coerce_date(self.blocked_until)
        self.done = bool(self.done)
        if self.story_type not in VALID_STORY_TYPES:
            self.story_type = DEFAULT_STORY_TYPE


@dataclass
class Epic:
    """A group of stories with its own dependencies on other epics."""

    id: str
    name: str = ""
    stories: list[Story] = field(default_factory=_default_story_list)
    dependencies: list[str] = field(default_factory=_default_str_list)
    done: bool = False

    def __post_init__(self) -> None:
        self.id = normalize_id(self.id)
        self.dependencies = _normalize_ids(self.dependencies)
        self.done = bool(self.done)

    @property
    def story_ids(self) -> list[str]:
        """Ids of the epic's stories, in order."""
        return [story.id for story in self.stories]

    def is_story_done(self, story: Story) -> bool:
        """A story is effectively done when it or its epic is done."""
        return story.done or self.done


@dataclass
class Plan:
    """One delivery approach: a dated backlog of epics."""

    id: str
    name: str = ""
    start_date: date | None = None
    target_date: date | None = None
    epics: list[Epic] = field(default_factory=_default_epic_list)
    description: str = ""
    color: str = "blue"

    def __post_init__(self) -> None:
        self.id = normalize_id(self.id)
        self.start_date = coerce_date(self.start_date)
        self.target_date = coerce_date(self.target_date)

    def iter_stories(self) -> list[tuple[Epic, Story]]:
        """All (epic, story) pairs in epic order, then story order."""
        return [(epic, story) for epic in self.epics for story in epic.stories]


@dataclass
class PlanGroup:
    """A named set of alternative plans."""

    id: str
    name: str
    plans: list[Plan]

    def __post_init__(self) -> None:
        self.id = normalize_id(self.id)


@dataclass
class Workbook:
    """Everything a workbook file holds: plan groups, the team and the velocity."""

    groups: list[PlanGroup]
    team: Any  # resources.Team; kept loose to avoid an import cycle
    velocity: float

    @property
    def plans(self) -> list[Plan]:
        """Every plan across all groups, in file order."""
        return [plan for group in self.groups for plan in group.plans]

    def find_plan(self, plan_id: Any) -> Plan:
        """Look a plan up by id.

        Raises:
            PlanNotFoundError: If no plan has this id
        """
        wanted = normalize_id(plan_id)
        for plan in self.plans:
            if plan.id == wanted:
                return plan
        raise PlanNotFoundError(f"Plan '{wanted}' not found")
