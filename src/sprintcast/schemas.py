"""Pydantic schemas for workbook data validation.

Workbook files use the camelCase keys of the planning tool's JSON export
(``startDate``, ``isDone``, ``bundleId``...). The snake_case field names are
accepted as well.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .business_days import coerce_date
from .models import normalize_id, parse_number


def _id_list(v: Any) -> list[str]:
    if v is None:
        return []
    if not isinstance(v, list):
        v = [v]
    items: list[Any] = v
    return [normalize_id(item) for item in items if item is not None and str(item).strip() != ""]


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("id", mode="before", check_fields=False)
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        """Ids may be numbers in exported files."""
        return normalize_id(v)

    @field_validator("name", "description", mode="before", check_fields=False)
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Missing text fields become empty strings."""
        return "" if v is None else str(v)


class StorySchema(_Schema):
    """Schema for a story."""

    id: str
    name: str = ""
    points: float = 0.0
    dependencies: list[str] = Field(default_factory=list)
    bundle: str | None = Field(default=None, alias="bundleId")
    blocked_until: date | None = Field(default=None, alias="blockedUntil")
    min_days: float = Field(default=0.0, alias="minDays")
    done: bool = Field(default=False, alias="isDone")
    story_type: str = Field(default="story", alias="type")
    description: str = ""

    @field_validator("points", "min_days", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> float:
        """Unparseable numbers count as zero."""
        return parse_number(v)

    @field_validator("dependencies", mode="before")
    @classmethod
    def coerce_dependencies(cls, v: Any) -> list[str]:
        """Accept a single id or a list of ids."""
        return _id_list(v)

    @field_validator("bundle", mode="before")
    @classmethod
    def coerce_bundle(cls, v: Any) -> str | None:
        """Blank bundle tags mean no bundle."""
        if v is None:
            return None
        return str(v).strip() or None

    @field_validator("blocked_until", mode="before")
    @classmethod
    def coerce_blocked_until(cls, v: Any) -> date | None:
        """Invalid dates are dropped rather than rejected."""
        return coerce_date(v)

    @field_validator("done", mode="before")
    @classmethod
    def coerce_done(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("story_type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> str:
        return str(v) if v else "story"


class EpicSchema(_Schema):
    """Schema for an epic."""

    id: str
    name: str = ""
    stories: list[StorySchema] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    done: bool = Field(default=False, alias="isDone")

    @field_validator("dependencies", mode="before")
    @classmethod
    def coerce_dependencies(cls, v: Any) -> list[str]:
        """Accept a single id or a list of ids."""
        return _id_list(v)

    @field_validator("stories", mode="before")
    @classmethod
    def coerce_stories(cls, v: Any) -> list[Any]:
        return v or []

    @field_validator("done", mode="before")
    @classmethod
    def coerce_done(cls, v: Any) -> bool:
        return bool(v)


class PlanSchema(_Schema):
    """Schema for a plan (strategy)."""

    id: str
    name: str = ""
    description: str = ""
    color: str = "blue"
    start_date: date | None = Field(default=None, alias="startDate")
    target_date: date | None = Field(default=None, alias="targetDate")
    epics: list[EpicSchema] = Field(default_factory=list)

    @field_validator("start_date", "target_date", mode="before")
    @classmethod
    def coerce_dates(cls, v: Any) -> date | None:
        """Invalid dates are dropped rather than rejected."""
        return coerce_date(v)

    @field_validator("epics", mode="before")
    @classmethod
    def coerce_epics(cls, v: Any) -> list[Any]:
        return v or []

    @field_validator("color", mode="before")
    @classmethod
    def coerce_color(cls, v: Any) -> str:
        return str(v) if v else "blue"


class GroupSchema(_Schema):
    """Schema for a group of plans."""

    id: str
    name: str = ""
    plans: list[PlanSchema] = Field(default_factory=list, alias="strategies")


class WorkbookSchema(BaseModel):
    """Schema for the current (v2) workbook layout."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    groups: list[GroupSchema] = Field(default_factory=list)
    team: list[dict[str, Any]] | None = None
    velocity: float | None = None
    velocity_per_sprint: float | None = Field(default=None, alias="velocityPerSprint")

    @field_validator("velocity", "velocity_per_sprint", mode="before")
    @classmethod
    def coerce_velocity(cls, v: Any) -> float | None:
        """Unparseable or zero velocities are treated as absent."""
        if v is None:
            return None
        return parse_number(v) or None
