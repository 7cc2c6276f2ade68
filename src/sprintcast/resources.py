"""Team definition: developers, their capacity and bundle affinity.

A developer's name is the addressing key for bundle tags. Matching is
case-insensitive and ignores surrounding whitespace, so a story tagged
``"  alice "`` goes to the developer named ``Alice``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .models import normalize_id, parse_number

DEFAULT_DEVELOPER_NAME = "Default Dev"
MAX_CAPACITY = 100.0


def normalize_name(name: str) -> str:
    """Key used to compare developer names and bundle tags."""
    return name.strip().lower()


class Developer(BaseModel):
    """A single developer."""

    id: str | None = None
    name: str
    capacity: float = MAX_CAPACITY  # Percent of a full-time developer
    restricted: bool = False  # Only works on bundles tagged with their name

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        """Accept numeric ids."""
        if v is None:
            return None
        return normalize_id(v)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        """Names may arrive as numbers; None becomes empty."""
        return "" if v is None else str(v)

    @field_validator("capacity", mode="before")
    @classmethod
    def coerce_capacity(cls, v: Any) -> float:
        """Unparseable capacity is 0; the value is clamped to 0-100."""
        return min(MAX_CAPACITY, max(0.0, parse_number(v)))

    @field_validator("restricted", mode="before")
    @classmethod
    def coerce_restricted(cls, v: Any) -> bool:
        """Treat any truthy value as restricted."""
        return bool(v)

    def matches(self, tag: str) -> bool:
        """Check whether a bundle tag names this developer."""
        return normalize_name(self.name) == normalize_name(tag)


def _default_developers() -> list[Developer]:
    return []


class Team(BaseModel):
    """Ordered pool of developers (order breaks ties between candidates)."""

    developers: list[Developer] = Field(default_factory=_default_developers)

    def effective_developers(self) -> list[Developer]:
        """The developers to schedule with; a single default developer if empty."""
        if self.developers:
            return list(self.developers)
        return [Developer(name=DEFAULT_DEVELOPER_NAME, capacity=MAX_CAPACITY, restricted=False)]

    def find_developer(self, tag: str) -> int | None:
        """Index of the first effective developer whose name matches ``tag``."""
        for index, developer in enumerate(self.effective_developers()):
            if developer.matches(tag):
                return index
        return None

    def unrestricted_indices(self) -> list[int]:
        """Indices of developers that may take any unbundled story."""
        return [i for i, d in enumerate(self.effective_developers()) if not d.restricted]


def create_default_team() -> Team:
    """Team used when a workbook does not define one."""
    return Team(
        developers=[
            Developer(id="1", name="Lead Dev", capacity=100),
            Developer(id="2", name="Dev 2", capacity=100),
        ]
    )
