"""Plain-text and JSON renderings of forecasts, schedules and breakdowns."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from .breakdown import SprintSummary
from .forecast import ForecastReport, duplicate_story_ids, unscheduled_story_ids
from .models import Plan
from .scheduler import Assignment

ASSIGNMENT_COLUMNS = [
    "story_id",
    "story_name",
    "epic_name",
    "developer",
    "start_day",
    "finish_day",
    "complete_day",
    "points",
]


def _format_date(value: date | None) -> str:
    return value.isoformat() if value else "N/A"


def _format_points(value: float) -> str:
    return f"{value:.1f}".rstrip("0").rstrip(".")


def format_forecast(plan: Plan, report: ForecastReport) -> str:
    """Summary block for one plan."""
    if report.is_at_risk:
        status = f"AT RISK (misses target by {report.slip_days} working days)"
    else:
        status = "ON TRACK"

    lines = [
        f"{plan.name or plan.id} [{plan.id}]",
        f"  Start:            {_format_date(plan.start_date)}",
        f"  Target:           {_format_date(plan.target_date)}",
        f"  Remaining points: {_format_points(report.total_points)}",
        f"  Timeline:         {report.sprint_count:g} sprints "
        f"({report.days_to_complete} working days)",
        f"  Projected end:    {_format_date(report.projected_end_date)}",
        f"  Status:           {status}",
        f"  Developers:       {report.active_developer_count}",
    ]
    if report.has_circular_dependency:
        missing = unscheduled_story_ids(plan, report.assignments)
        lines.append(
            f"  WARNING: circular or unsatisfiable dependencies; unscheduled: {', '.join(missing)}"
        )
    duplicates = duplicate_story_ids(plan)
    if duplicates:
        lines.append(
            f"  WARNING: duplicate story ids, later definition used: {', '.join(duplicates)}"
        )
    return "\n".join(lines)


def forecast_to_dict(plan: Plan, report: ForecastReport) -> dict[str, Any]:
    """JSON-ready forecast, including the assignment list."""
    return {
        "plan_id": plan.id,
        "plan_name": plan.name,
        "total_points": report.total_points,
        "days_to_complete": report.days_to_complete,
        "projected_end_date": report.projected_end_date.isoformat(),
        "target_date": plan.target_date.isoformat() if plan.target_date else None,
        "sprint_count": report.sprint_count,
        "is_at_risk": report.is_at_risk,
        "slip_days": report.slip_days,
        "has_circular_dependency": report.has_circular_dependency,
        "unscheduled": unscheduled_story_ids(plan, report.assignments),
        "duplicate_story_ids": duplicate_story_ids(plan),
        "active_developer_count": report.active_developer_count,
        "assignments": [assignment_row(a) for a in report.assignments],
    }


def assignment_row(assignment: Assignment) -> dict[str, Any]:
    """One assignment as a flat record keyed by ASSIGNMENT_COLUMNS."""
    return {
        "story_id": assignment.story_id,
        "story_name": assignment.story_name,
        "epic_name": assignment.epic_name,
        "developer": assignment.developer_name,
        "start_day": round(assignment.start, 2),
        "finish_day": round(assignment.finish, 2),
        "complete_day": round(assignment.completion, 2),
        "points": assignment.points,
    }


def format_assignments(assignments: Sequence[Assignment]) -> str:
    """Fixed-width table of assignments in placement order."""
    if not assignments:
        return "No stories scheduled."

    rows = [
        [
            a.story_id,
            a.story_name,
            a.developer_name,
            f"{a.start:.1f}",
            f"{a.finish:.1f}",
            f"{a.completion:.1f}",
            _format_points(a.points),
        ]
        for a in assignments
    ]
    header = ["Story", "Name", "Developer", "Start", "Finish", "Complete", "Points"]
    widths = [max(len(str(row[i])) for row in [header, *rows]) for i in range(len(header))]

    def render(row: list[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()

    lines = [render(header), render(["-" * w for w in widths])]
    lines.extend(render(row) for row in rows)
    return "\n".join(lines)


def format_breakdown(sprints: Sequence[SprintSummary]) -> str:
    """Sprint-by-sprint listing of each developer's share of the work."""
    lines: list[str] = []
    for sprint in sprints:
        lines.append(
            f"Sprint {sprint.index}: {_format_date(sprint.start_date)} - "
            f"{_format_date(sprint.end_date)} "
            f"(total {sprint.total_points:.1f} pts)"
        )
        for work in sprint.developers:
            lines.append(f"  {work.developer}: {work.total_points:.1f} pts")
            if not work.shares:
                lines.append("    (idle)")
            for share in work.shares:
                partial = " (partial)" if share.is_partial else ""
                lines.append(
                    f"    - {share.assignment.story_name or share.assignment.story_id} "
                    f"[{share.assignment.epic_name}]: {share.points:.1f} pts{partial}"
                )
    return "\n".join(lines)
