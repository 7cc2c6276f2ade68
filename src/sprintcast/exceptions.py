"""Custom exceptions for sprintcast."""


class SprintcastError(Exception):
    """Base exception for all sprintcast errors."""

    pass


class ValidationError(SprintcastError):
    """Raised when workbook or config data fails validation."""

    pass


class ParseError(SprintcastError):
    """Raised when a workbook file cannot be read or has an unknown layout."""

    pass


class PlanNotFoundError(SprintcastError):
    """Raised when a plan id does not exist in the workbook."""

    pass
