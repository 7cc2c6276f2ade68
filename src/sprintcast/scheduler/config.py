"""Configuration classes for the scheduling engine."""

from pydantic import BaseModel, field_validator

DEFAULT_POINTS_PER_SPRINT = 13.0  # Used when a velocity of 0/None is passed
DEFAULT_WORKING_DAYS_PER_SPRINT = 10
DEFAULT_MAX_ITERATIONS = 3000
DEFAULT_MIN_VELOCITY = 0.01


class SchedulingConfig(BaseModel):
    """Knobs for the greedy scheduler and the reports built on it."""

    working_days_per_sprint: int = DEFAULT_WORKING_DAYS_PER_SPRINT
    # Safety bound on loop passes; running out counts as unresolved
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    # Floor on a developer's daily velocity (guards 0% capacity)
    min_velocity: float = DEFAULT_MIN_VELOCITY

    @field_validator("working_days_per_sprint", "max_iterations")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Sprint length and iteration bound must be at least 1."""
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("min_velocity")
    @classmethod
    def validate_min_velocity(cls, v: float) -> float:
        """The velocity floor must be positive."""
        if v <= 0:
            raise ValueError("min_velocity must be positive")
        return v


class VelocityConfig(BaseModel):
    """Team velocity expressed per developer per sprint."""

    points_per_developer_per_sprint: float = DEFAULT_POINTS_PER_SPRINT
    working_days_per_sprint: int = DEFAULT_WORKING_DAYS_PER_SPRINT

    @classmethod
    def resolve(cls, velocity: float | None, config: SchedulingConfig) -> "VelocityConfig":
        """Build from a raw velocity; 0 or None falls back to the default rate."""
        return cls(
            points_per_developer_per_sprint=velocity or DEFAULT_POINTS_PER_SPRINT,
            working_days_per_sprint=config.working_days_per_sprint,
        )

    @property
    def daily_velocity(self) -> float:
        """Points a full-capacity developer finishes per working day."""
        return self.points_per_developer_per_sprint / self.working_days_per_sprint
