"""Tests for developers and teams."""

import pytest

from sprintcast.resources import (
    DEFAULT_DEVELOPER_NAME,
    Developer,
    Team,
    create_default_team,
    normalize_name,
)


class TestDeveloper:
    """Test Developer validation."""

    def test_defaults(self) -> None:
        dev = Developer(name="Alice")
        assert dev.capacity == 100.0
        assert dev.restricted is False
        assert dev.id is None

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(50, 50.0), ("80", 80.0), (150, 100.0), (-20, 0.0), ("abc", 0.0), (None, 0.0)],
    )
    def test_capacity_clamped(self, raw: object, expected: float) -> None:
        assert Developer(name="Alice", capacity=raw).capacity == expected  # type: ignore[arg-type]

    def test_numeric_id_and_name(self) -> None:
        dev = Developer(id=1, name=42)  # type: ignore[arg-type]
        assert dev.id == "1"
        assert dev.name == "42"

    def test_matches_is_trimmed_and_case_insensitive(self) -> None:
        dev = Developer(name="Alice")
        assert dev.matches("  alice ")
        assert dev.matches("ALICE")
        assert not dev.matches("alic")

    def test_normalize_name(self) -> None:
        assert normalize_name("  Bob Smith ") == "bob smith"


class TestTeam:
    """Test Team lookups."""

    def test_empty_team_gets_default_developer(self) -> None:
        developers = Team().effective_developers()
        assert len(developers) == 1
        assert developers[0].name == DEFAULT_DEVELOPER_NAME
        assert developers[0].capacity == 100.0
        assert not developers[0].restricted

    def test_find_developer_returns_first_match(self) -> None:
        team = Team(
            developers=[
                Developer(name="Alice"),
                Developer(name="Bob"),
                Developer(name="bob"),
            ]
        )
        assert team.find_developer("BOB") == 1
        assert team.find_developer("Carol") is None

    def test_unrestricted_indices(self) -> None:
        team = Team(
            developers=[
                Developer(name="Alice", restricted=True),
                Developer(name="Bob"),
                Developer(name="Carol"),
            ]
        )
        assert team.unrestricted_indices() == [1, 2]

    def test_default_team(self) -> None:
        team = create_default_team()
        assert [d.name for d in team.developers] == ["Lead Dev", "Dev 2"]
        assert all(d.capacity == 100.0 for d in team.developers)

    def test_from_dicts(self) -> None:
        team = Team.model_validate(
            {"developers": [{"name": "Alice", "capacity": "60"}, {"name": "Bob", "restricted": 1}]}
        )
        assert team.developers[0].capacity == 60.0
        assert team.developers[1].restricted is True
