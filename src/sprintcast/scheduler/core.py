"""Core dataclasses for the scheduling engine.

Offsets are measured in working days from the plan's start date and may be
fractional.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sprintcast.resources import Developer


@dataclass(frozen=True)
class Assignment:
    """A story placed on a developer."""

    story_id: str
    story_name: str
    epic_id: str
    epic_name: str
    developer_index: int
    developer_name: str
    start: float
    finish: float  # start + effort duration; when the developer is free again
    completion: float  # finish deferred by the story's minimum duration
    points: float

    @property
    def duration(self) -> float:
        """Effort duration in working days."""
        return self.finish - self.start


@dataclass(frozen=True)
class ScheduleResult:
    """Output of one scheduling run."""

    total_days: float  # Latest completion offset
    has_circular_dependency: bool  # Some stories could not be placed
    assignments: tuple[Assignment, ...] = ()


@dataclass
class DeveloperTimeline:
    """Simulated availability of one developer."""

    index: int
    developer: Developer
    adjusted_velocity: float  # Points per working day at this developer's capacity
    next_free: float = 0.0

    @property
    def name(self) -> str:
        return self.developer.name


def _default_timelines() -> list[DeveloperTimeline]:
    return []


def _default_locks() -> dict[str, int]:
    return {}


def _default_done() -> set[str]:
    return set()


def _default_times() -> dict[str, float]:
    return {}


def _default_assignments() -> list[Assignment]:
    return []


@dataclass
class SchedulingContext:
    """Mutable state of a single scheduling run.

    Created fresh by every run and discarded afterwards.

    Attributes:
        timelines: One entry per developer, in team order
        bundle_locks: Bundle tag -> developer index, fixed by the first placement
            of a story carrying that tag
        done: Ids of stories finished before the run or placed during it
        completion_times: Completion offset per finished story (0 for stories
            done before the run)
        assignments: Placements in the order they were made
        pending: Number of stories still to place
        max_completion: Latest completion offset so far
        iterations: Loop passes used
    """

    timelines: list[DeveloperTimeline] = field(default_factory=_default_timelines)
    bundle_locks: dict[str, int] = field(default_factory=_default_locks)
    done: set[str] = field(default_factory=_default_done)
    completion_times: dict[str, float] = field(default_factory=_default_times)
    assignments: list[Assignment] = field(default_factory=_default_assignments)
    pending: int = 0
    max_completion: float = 0.0
    iterations: int = 0

    def to_result(self) -> ScheduleResult:
        """Freeze the run's outcome."""
        return ScheduleResult(
            total_days=self.max_completion,
            has_circular_dependency=self.pending > 0,
            assignments=tuple(self.assignments),
        )


@dataclass(frozen=True)
class Placement:
    """Best developer found for a ready story."""

    developer_index: int
    earliest_start: float
