"""Completion forecast built on top of the scheduler."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from .business_days import add_business_days, business_day_diff
from .graph import WorkGraph
from .logger import get_logger
from .models import Plan
from .resources import Team
from .scheduler import Assignment, SchedulingConfig, calculate_schedule

logger = get_logger()


@dataclass(frozen=True)
class ForecastReport:
    """Summary of when a plan's remaining work finishes."""

    total_points: float  # Points not yet effectively done
    days_to_complete: int  # Working days, rounded up
    projected_end_date: date
    sprint_count: float  # Sprints of elapsed time, one decimal
    is_at_risk: bool  # Projected end is after the target date
    slip_days: int  # Working days past the target (0 when on time)
    has_circular_dependency: bool
    active_developer_count: int
    assignments: tuple[Assignment, ...]


def round_one_decimal(value: float) -> float:
    """Round half away from zero to one decimal place.

    Rounds the exact binary value, so 0.25 gives 0.3 but 0.35 (stored as
    0.34999...) gives 0.3.
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def calculate_forecast(
    plan: Plan,
    team: Team | None = None,
    velocity: float | None = None,
    config: SchedulingConfig | None = None,
) -> ForecastReport:
    """Schedule a plan and summarize the outcome.

    Args:
        plan: Plan to forecast
        team: Developer pool (an empty team schedules on one default developer)
        velocity: Points per developer per sprint
        config: Optional scheduling configuration

    Returns:
        ForecastReport for the plan
    """
    config = config or SchedulingConfig()
    team = team if team is not None else Team()

    total_points = WorkGraph.from_plan(plan).remaining_points()
    schedule = calculate_schedule(plan, team, velocity, config)

    days_to_complete = math.ceil(schedule.total_days)
    sprint_count = round_one_decimal(schedule.total_days / config.working_days_per_sprint)
    projected_end = add_business_days(plan.start_date, days_to_complete)

    is_at_risk = plan.target_date is not None and projected_end > plan.target_date
    slip_days = business_day_diff(plan.target_date, projected_end) if is_at_risk else 0

    if schedule.has_circular_dependency:
        logger.warning(
            f"Plan '{plan.id}': {total_points - sum(a.points for a in schedule.assignments):g} "
            "points could not be scheduled (circular or unsatisfiable dependencies)"
        )
    if is_at_risk:
        logger.changes(f"Plan '{plan.id}' misses its target by {slip_days} working days")

    return ForecastReport(
        total_points=total_points,
        days_to_complete=days_to_complete,
        projected_end_date=projected_end,
        sprint_count=sprint_count,
        is_at_risk=is_at_risk,
        slip_days=slip_days,
        has_circular_dependency=schedule.has_circular_dependency,
        active_developer_count=len(team.developers),
        assignments=schedule.assignments,
    )


def unscheduled_story_ids(plan: Plan, assignments: tuple[Assignment, ...]) -> list[str]:
    """Remaining stories the scheduler could not place, in plan order."""
    graph = WorkGraph.from_plan(plan)
    placed = {a.story_id for a in assignments}
    return [
        item.id
        for item in graph
        if not graph.is_effectively_done(item.id) and item.id not in placed
    ]


def duplicate_story_ids(plan: Plan) -> list[str]:
    """Story ids defined more than once in the plan, in order of first repeat."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for _, story in plan.iter_stories():
        if story.id in seen and story.id not in duplicates:
            duplicates.append(story.id)
        seen.add(story.id)
    return duplicates
