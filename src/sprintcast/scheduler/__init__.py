"""Scheduler package - greedy list scheduling of stories onto developers.

Main entry points:
- calculate_schedule: Schedule a plan and return a ScheduleResult
- GreedyScheduler: The scheduler itself, for callers that want to inspect it

Configuration:
- SchedulingConfig: Sprint length, iteration bound, velocity floor
- VelocityConfig: Points per developer per sprint and the derived daily rate
"""

from .config import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_POINTS_PER_SPRINT,
    DEFAULT_WORKING_DAYS_PER_SPRINT,
    SchedulingConfig,
    VelocityConfig,
)
from .core import (
    Assignment,
    DeveloperTimeline,
    Placement,
    ScheduleResult,
    SchedulingContext,
)
from .greedy import GreedyScheduler, calculate_schedule

__all__ = [
    # Core dataclasses
    "Assignment",
    "ScheduleResult",
    "DeveloperTimeline",
    "SchedulingContext",
    "Placement",
    # Configuration
    "SchedulingConfig",
    "VelocityConfig",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_POINTS_PER_SPRINT",
    "DEFAULT_WORKING_DAYS_PER_SPRINT",
    # Algorithm
    "GreedyScheduler",
    "calculate_schedule",
]
