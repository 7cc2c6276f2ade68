"""Tests for completion forecasts."""

from datetime import date

import pytest

from sprintcast import context
from sprintcast.forecast import (
    calculate_forecast,
    duplicate_story_ids,
    round_one_decimal,
    unscheduled_story_ids,
)
from sprintcast.resources import Team
from sprintcast.scheduler import SchedulingConfig
from tests.conftest import epic, plan, story


class TestCalculateForecast:
    """Test ForecastReport fields."""

    def test_single_story(self, one_dev: Team) -> None:
        report = calculate_forecast(plan(epic("e1", story("a", 5))), one_dev, 10)

        assert report.total_points == 5
        assert report.days_to_complete == 5
        assert report.projected_end_date == date(2024, 1, 8)
        assert report.sprint_count == 0.5
        assert not report.is_at_risk
        assert report.slip_days == 0
        assert report.active_developer_count == 1
        assert len(report.assignments) == 1

    def test_at_risk_with_slip(self, one_dev: Team) -> None:
        report = calculate_forecast(
            plan(epic("e1", story("a", 5)), target_date=date(2024, 1, 3)), one_dev, 10
        )
        assert report.is_at_risk
        # Thu 4th, Fri 5th, Mon 8th
        assert report.slip_days == 3

    def test_finishing_on_target_is_on_track(self, one_dev: Team) -> None:
        report = calculate_forecast(
            plan(epic("e1", story("a", 5)), target_date=date(2024, 1, 8)), one_dev, 10
        )
        assert not report.is_at_risk
        assert report.slip_days == 0

    def test_days_round_up(self, one_dev: Team) -> None:
        report = calculate_forecast(plan(epic("e1", story("a", 2.5))), one_dev, 10)
        assert report.days_to_complete == 3
        assert report.projected_end_date == date(2024, 1, 4)
        assert report.sprint_count == 0.3

    def test_done_work_excluded(self, one_dev: Team) -> None:
        report = calculate_forecast(
            plan(
                epic("e1", story("a", 5, done=True), story("b", 3)),
                epic("e2", story("c", 8), done=True),
            ),
            one_dev,
            10,
        )
        assert report.total_points == 3
        assert report.days_to_complete == 3

    def test_empty_plan(self, one_dev: Team) -> None:
        report = calculate_forecast(plan(target_date=date(2024, 1, 1)), one_dev, 10)
        assert report.total_points == 0
        assert report.days_to_complete == 0
        assert report.projected_end_date == date(2024, 1, 1)
        assert report.sprint_count == 0
        assert not report.is_at_risk

    def test_missing_start_date_uses_today(self, one_dev: Team) -> None:
        context.set_as_of(date(2024, 3, 4))
        report = calculate_forecast(plan(epic("e1", story("a", 5)), start_date=None), one_dev, 10)
        assert report.projected_end_date == date(2024, 3, 4)

    def test_empty_team_counts_no_developers(self) -> None:
        report = calculate_forecast(plan(epic("e1", story("a", 5))), Team(), 10)
        assert report.active_developer_count == 0
        assert report.days_to_complete == 5

    def test_circular_dependency_reported(self, one_dev: Team) -> None:
        p = plan(epic("e1", story("a", 3, "b"), story("b", 3, "a"), story("c", 2)))
        report = calculate_forecast(p, one_dev, 10)

        assert report.has_circular_dependency
        assert report.total_points == 8
        assert report.days_to_complete == 2
        assert unscheduled_story_ids(p, report.assignments) == ["a", "b"]

    def test_sprint_count_uses_configured_sprint_length(self, one_dev: Team) -> None:
        report = calculate_forecast(
            plan(epic("e1", story("a", 5))), one_dev, 5, SchedulingConfig(working_days_per_sprint=5)
        )
        assert report.days_to_complete == 5
        assert report.sprint_count == 1.0


class TestDuplicateStoryIds:
    """Test reporting of story ids defined more than once."""

    def test_none(self) -> None:
        assert duplicate_story_ids(plan(epic("e1", story("a", 1), story("b", 1)))) == []

    def test_across_epics_listed_once(self) -> None:
        p = plan(
            epic("e1", story("x", 3), story("y", 1)),
            epic("e2", story("x", 5), story("y", 2), story("x", 1)),
        )
        assert duplicate_story_ids(p) == ["x", "y"]


class TestRounding:
    """Test half-up rounding to one decimal."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.25, 0.3), (0.35, 0.3), (0.5, 0.5), (1.04, 1.0), (2.0, 2.0), (0.0, 0.0)],
    )
    def test_round_one_decimal(self, value: float, expected: float) -> None:
        assert round_one_decimal(value) == expected
