"""Tests for logger configuration and scheduler logging."""

import io
import logging

import pytest

from sprintcast.logger import (
    CHANGES_LEVEL,
    CHECKS_LEVEL,
    changes_enabled,
    checks_enabled,
    debug_enabled,
    get_logger,
    setup_logger,
)
from sprintcast.resources import Team
from sprintcast.scheduler import calculate_schedule
from tests.conftest import epic, plan, story


class TestLogger:
    """Test verbosity levels."""

    def test_level_names(self) -> None:
        assert logging.getLevelName(CHANGES_LEVEL) == "CHANGES"
        assert logging.getLevelName(CHECKS_LEVEL) == "CHECKS"

    def test_silent_by_default(self) -> None:
        setup_logger(0)
        assert not changes_enabled()
        assert not checks_enabled()
        assert not debug_enabled()

    def test_verbosity_levels(self) -> None:
        setup_logger(1)
        assert changes_enabled()
        assert not checks_enabled()

        setup_logger(2)
        assert checks_enabled()
        assert not debug_enabled()

        setup_logger(3)
        assert debug_enabled()

    def test_setup_replaces_handlers(self) -> None:
        setup_logger(1)
        setup_logger(2)
        assert len(get_logger().handlers) == 1

    def test_custom_methods_write_messages(self) -> None:
        stream = io.StringIO()
        setup_logger(2, stream)
        logger = get_logger()
        logger.changes("placed a story")
        logger.checks("checked readiness")
        logger.debug("hidden arithmetic")

        output = stream.getvalue()
        assert "placed a story" in output
        assert "checked readiness" in output
        assert "hidden arithmetic" not in output


class TestSchedulerLogging:
    """Test what the scheduler reports at each verbosity."""

    def test_placements_at_verbosity_one(self, one_dev: Team) -> None:
        stream = io.StringIO()
        setup_logger(1, stream)
        calculate_schedule(plan(epic("e1", story("a", 5, bundle="api"))), one_dev, 10)

        output = stream.getvalue()
        assert "Bundle 'api' locked to Alice" in output
        assert "a -> Alice: start=0.00 finish=5.00 complete=5.00 (5 pts)" in output
        assert "ready=" not in output

    def test_checks_at_verbosity_two(self, one_dev: Team) -> None:
        stream = io.StringIO()
        setup_logger(2, stream)
        calculate_schedule(plan(epic("e1", story("a", 5), story("b", 3, "a"))), one_dev, 10)

        output = stream.getvalue()
        assert "Pass 1: ready=['a']" in output
        assert "Pass 2: ready=['b']" in output

    def test_stuck_graph_reported(self, one_dev: Team) -> None:
        stream = io.StringIO()
        setup_logger(1, stream)
        calculate_schedule(plan(epic("e1", story("a", 5, "a"))), one_dev, 10)
        assert "No ready stories with 1 pending; stopping" in stream.getvalue()

    def test_candidate_arithmetic_at_verbosity_three(self, two_devs: Team) -> None:
        stream = io.StringIO()
        setup_logger(3, stream)
        calculate_schedule(plan(epic("e1", story("a", 5))), two_devs, 10)

        output = stream.getvalue()
        assert "a on Alice: earliest start 0.00" in output
        assert "a on Bob: earliest start 0.00" in output

    def test_quiet_run_skips_message_formatting(
        self, two_devs: Team, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        setup_logger(0)
        calls: list[str] = []
        logger = get_logger()
        monkeypatch.setattr(logger, "changes", lambda msg, *a, **kw: calls.append(msg))
        monkeypatch.setattr(logger, "checks", lambda msg, *a, **kw: calls.append(msg))
        monkeypatch.setattr(logger, "debug", lambda msg, *a, **kw: calls.append(msg))

        result = calculate_schedule(
            plan(epic("e1", story("a", 5), story("b", 3, "a"), story("c", 2))), two_devs, 10
        )

        assert len(result.assignments) == 3
        assert calls == []
