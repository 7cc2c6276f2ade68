"""Optional configuration file (sprintcast_config.yaml).

Lets a team keep its roster, velocity and scheduler settings outside the
workbook. Values found here override the workbook; CLI flags override both.

Example::

    velocity: 10
    team:
      - name: Alice
        capacity: 80
      - name: Bob
        restricted: true
    scheduler:
      working_days_per_sprint: 10
      max_iterations: 3000
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, field_validator

from . import context
from .models import parse_number
from .resources import Developer, Team
from .scheduler import SchedulingConfig

CONFIG_FILENAME = "sprintcast_config.yaml"


class UnifiedConfig(BaseModel):
    """Settings that can override what a workbook declares."""

    team: list[Developer] | None = None
    velocity: float | None = None
    scheduler: SchedulingConfig = SchedulingConfig()

    @field_validator("velocity", mode="before")
    @classmethod
    def coerce_velocity(cls, v: Any) -> float | None:
        """Zero or unparseable velocity means "not set"."""
        if v is None:
            return None
        return parse_number(v) or None

    def team_override(self) -> Team | None:
        """The configured team, if one is configured."""
        if self.team is None:
            return None
        return Team(developers=self.team)


def load_config(config_path: Path | str) -> UnifiedConfig:
    """Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a mapping
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping")

    return UnifiedConfig.model_validate(data)


def discover_config(
    workbook_path: Path | str | None = None,
    config_path: Path | None = None,
) -> UnifiedConfig | None:
    """Find and load the config file, if any.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. Workbook directory / sprintcast_config.yaml
    4. Current directory / sprintcast_config.yaml
    """
    if config_path and config_path.exists():
        return load_config(config_path)

    ctx_config = context.get_config_path()
    if ctx_config and ctx_config.exists():
        return load_config(ctx_config)

    if workbook_path is not None:
        dir_config = Path(workbook_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return None
