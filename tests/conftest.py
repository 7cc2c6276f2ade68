"""Pytest configuration and fixtures for sprintcast tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from typing import Any

import pytest

from sprintcast import context
from sprintcast.logger import reset_logger
from sprintcast.models import Epic, Plan, Story
from sprintcast.resources import Developer, Team
from sprintcast.scheduler import SchedulingConfig

# Monday
PLAN_START = date(2024, 1, 1)


@pytest.fixture(autouse=True)
def reset_global_state() -> Iterator[None]:
    """Clear logger handlers and CLI context between tests."""
    reset_logger()
    context.set_config_path(None)
    context.set_as_of(None)
    yield
    reset_logger()
    context.set_config_path(None)
    context.set_as_of(None)


@pytest.fixture
def one_dev() -> Team:
    """A single full-time developer."""
    return Team(developers=[Developer(name="Alice")])


@pytest.fixture
def two_devs() -> Team:
    """Two full-time developers."""
    return Team(developers=[Developer(name="Alice"), Developer(name="Bob")])


def story(story_id: str, points: float, *dependencies: str, **kwargs: Any) -> Story:
    """Create a story with positional dependencies.

    Example:
        story("b", 8, "a", bundle="api")
    """
    return Story(
        id=story_id,
        name=story_id.upper(),
        points=points,
        dependencies=list(dependencies),
        **kwargs,
    )


def epic(
    epic_id: str,
    *stories: Story,
    dependencies: list[str] | None = None,
    done: bool = False,
) -> Epic:
    """Create an epic from stories."""
    return Epic(
        id=epic_id,
        name=f"Epic {epic_id}",
        stories=list(stories),
        dependencies=dependencies or [],
        done=done,
    )


def plan(
    *epics: Epic,
    start_date: date | None = PLAN_START,
    target_date: date | None = None,
) -> Plan:
    """Create a plan starting on PLAN_START by default."""
    return Plan(
        id="p1",
        name="Plan 1",
        start_date=start_date,
        target_date=target_date,
        epics=list(epics),
    )


def unit_velocity_config() -> tuple[float, SchedulingConfig]:
    """Velocity and config giving a full-time developer exactly 1 point per day.

    Sprints are 20 days long so stories up to 20 points never straddle a
    boundary when they start on day 0.
    """
    return 20.0, SchedulingConfig(working_days_per_sprint=20)
