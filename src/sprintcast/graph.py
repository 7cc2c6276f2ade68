"""Flattened view of a plan's epic/story hierarchy for scheduling."""

from __future__ import annotations

from collections.abc import Container, Iterator
from dataclasses import dataclass, field

from .logger import get_logger
from .models import Plan, Story

logger = get_logger()


@dataclass(frozen=True)
class GraphItem:
    """A story annotated with its owning epic."""

    story: Story
    epic_id: str
    epic_name: str

    @property
    def id(self) -> str:
        return self.story.id

    @property
    def points(self) -> float:
        return self.story.points


def _default_items() -> dict[str, GraphItem]:
    return {}


def _default_lists() -> dict[str, list[str]]:
    return {}


def _default_flags() -> dict[str, bool]:
    return {}


def _default_order() -> list[str]:
    return []


@dataclass
class WorkGraph:
    """Stories keyed by id, plus the epic-level lookups readiness needs.

    Built once per scheduling run; it holds no run state. ``order`` keeps the
    original epic-then-story sequence, which is the tie-break for equal
    point values.
    """

    items: dict[str, GraphItem] = field(default_factory=_default_items)
    order: list[str] = field(default_factory=_default_order)
    epic_dependencies: dict[str, list[str]] = field(default_factory=_default_lists)
    epic_members: dict[str, list[str]] = field(default_factory=_default_lists)
    epic_done: dict[str, bool] = field(default_factory=_default_flags)

    @classmethod
    def from_plan(cls, plan: Plan) -> WorkGraph:
        """Flatten a plan."""
        graph = cls()
        for epic in plan.epics:
            graph.epic_dependencies[epic.id] = list(epic.dependencies)
            graph.epic_members[epic.id] = epic.story_ids
            graph.epic_done[epic.id] = epic.done
            for story in epic.stories:
                if story.id in graph.items:
                    logger.warning(f"Duplicate story id '{story.id}': later definition wins")
                else:
                    graph.order.append(story.id)
                graph.items[story.id] = GraphItem(story=story, epic_id=epic.id, epic_name=epic.name)
        return graph

    def __iter__(self) -> Iterator[GraphItem]:
        return (self.items[item_id] for item_id in self.order)

    def __len__(self) -> int:
        return len(self.order)

    def is_effectively_done(self, story_id: str) -> bool:
        """True if the story or its epic is flagged done."""
        item = self.items[story_id]
        return item.story.done or self.epic_done.get(item.epic_id, False)

    def blocking_epic_ids(self, story_id: str) -> list[str]:
        """Epics the story's own epic depends on."""
        return self.epic_dependencies.get(self.items[story_id].epic_id, [])

    def is_ready(self, story_id: str, done: Container[str]) -> bool:
        """Check whether a story can be placed given the set of finished stories.

        Ready means: not finished itself; every known story dependency
        finished (unknown ids are ignored); and every story of every epic its
        epic depends on finished.
        """
        if story_id in done:
            return False
        item = self.items[story_id]
        for dep_id in item.story.dependencies:
            if dep_id in self.items and dep_id not in done:
                return False
        for epic_id in self.blocking_epic_ids(story_id):
            for member_id in self.epic_members.get(epic_id, []):
                if member_id not in done:
                    return False
        return True

    def blocking_story_ids(self, story_id: str) -> list[str]:
        """Stories whose completion bounds this story's start.

        Own dependencies first, then every member of each blocking epic.
        Unknown ids are passed through; callers skip what they cannot find.
        """
        blocking = list(self.items[story_id].story.dependencies)
        for epic_id in self.blocking_epic_ids(story_id):
            blocking.extend(self.epic_members.get(epic_id, []))
        return blocking

    def remaining_points(self) -> float:
        """Points over stories that are not effectively done."""
        return sum(item.points for item in self if not self.is_effectively_done(item.id))
