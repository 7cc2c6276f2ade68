"""sprintcast - schedule and forecast epics and stories over a development team."""

from .breakdown import SprintSummary, build_sprint_breakdown
from .exceptions import ParseError, PlanNotFoundError, SprintcastError, ValidationError
from .forecast import ForecastReport, calculate_forecast
from .loader import dump_workbook, load_workbook, parse_workbook
from .models import Epic, Plan, PlanGroup, Story, Workbook
from .resources import Developer, Team
from .scheduler import Assignment, ScheduleResult, SchedulingConfig, calculate_schedule

__version__ = "0.1.0"

__all__ = [
    "Assignment",
    "Developer",
    "Epic",
    "ForecastReport",
    "ParseError",
    "Plan",
    "PlanGroup",
    "PlanNotFoundError",
    "ScheduleResult",
    "SchedulingConfig",
    "SprintSummary",
    "SprintcastError",
    "Story",
    "Team",
    "ValidationError",
    "Workbook",
    "build_sprint_breakdown",
    "calculate_forecast",
    "calculate_schedule",
    "dump_workbook",
    "load_workbook",
    "parse_workbook",
]
