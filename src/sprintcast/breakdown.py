"""Per-sprint, per-developer breakdown of a schedule.

Each assignment's points are spread over the sprints its working span
``[start, finish)`` overlaps, in proportion to the overlap.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from .business_days import add_business_days
from .resources import Team
from .scheduler import DEFAULT_WORKING_DAYS_PER_SPRINT, Assignment

PARTIAL_EPSILON = 0.01


@dataclass(frozen=True)
class SprintShare:
    """The part of one assignment that falls inside a sprint."""

    assignment: Assignment
    points: float

    @property
    def is_partial(self) -> bool:
        """True when only some of the story's points land in this sprint."""
        return PARTIAL_EPSILON < self.points < self.assignment.points


@dataclass(frozen=True)
class DeveloperSprintWork:
    """A developer's shares within one sprint."""

    developer: str
    shares: tuple[SprintShare, ...]

    @property
    def total_points(self) -> float:
        return sum(share.points for share in self.shares)


@dataclass(frozen=True)
class SprintSummary:
    """One sprint window of the breakdown."""

    index: int  # 1-based
    start_offset: int
    end_offset: int
    start_date: date
    end_date: date
    developers: tuple[DeveloperSprintWork, ...]

    @property
    def total_points(self) -> float:
        return sum(work.total_points for work in self.developers)


def _share_in_window(assignment: Assignment, window_start: int, window_end: int) -> float | None:
    """Points of an assignment inside ``[window_start, window_end)``; None if outside."""
    if not (assignment.start < window_end and assignment.finish > window_start):
        return None
    duration = assignment.finish - assignment.start
    if duration <= 0:
        return 0.0
    overlap = min(assignment.finish, window_end) - max(assignment.start, window_start)
    return overlap / duration * assignment.points


def build_sprint_breakdown(
    assignments: Sequence[Assignment],
    start_date: date | None,
    team: Team | None = None,
    working_days_per_sprint: int = DEFAULT_WORKING_DAYS_PER_SPRINT,
) -> list[SprintSummary]:
    """Slice a schedule into sprints.

    Args:
        assignments: Scheduler output
        start_date: Plan start date (None falls back to today)
        team: Team whose developers are listed per sprint, in team order
        working_days_per_sprint: Sprint length in working days

    Returns:
        At least one SprintSummary, covering every assignment's working span
    """
    team = team if team is not None else Team()
    last_finish = max((a.finish for a in assignments), default=0.0)
    sprint_total = max(1, math.ceil(last_finish / working_days_per_sprint))

    sprints: list[SprintSummary] = []
    for i in range(sprint_total):
        window_start = i * working_days_per_sprint
        window_end = (i + 1) * working_days_per_sprint

        developers: list[DeveloperSprintWork] = []
        for developer in team.effective_developers():
            shares: list[SprintShare] = []
            for assignment in assignments:
                if assignment.developer_name != developer.name:
                    continue
                points = _share_in_window(assignment, window_start, window_end)
                if points is not None:
                    shares.append(SprintShare(assignment=assignment, points=points))
            developers.append(DeveloperSprintWork(developer=developer.name, shares=tuple(shares)))

        sprints.append(
            SprintSummary(
                index=i + 1,
                start_offset=window_start,
                end_offset=window_end,
                start_date=add_business_days(start_date, window_start),
                end_date=add_business_days(start_date, window_end),
                developers=tuple(developers),
            )
        )
    return sprints
