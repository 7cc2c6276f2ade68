"""Process-wide settings shared by the CLI and the library."""

from __future__ import annotations

from datetime import date
from pathlib import Path


class _Context:
    """Holds the config path and the as-of date chosen on the command line."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.as_of: date | None = None


_context = _Context()


def get_config_path() -> Path | None:
    """Get the global config path."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    """Set the global config path."""
    _context.config_path = path


def get_today() -> date:
    """Return the as-of date, or the real current date when none was set.

    Used wherever a missing or invalid plan start date falls back to "today".
    """
    return _context.as_of or date.today()  # noqa: DTZ011


def set_as_of(value: date | None) -> None:
    """Pin "today" to a fixed date (None restores the real clock)."""
    _context.as_of = value
