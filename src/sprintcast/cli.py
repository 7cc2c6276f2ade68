"""Command-line interface for sprintcast."""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .breakdown import build_sprint_breakdown
from .exceptions import SprintcastError
from .forecast import calculate_forecast
from .loader import dump_workbook, load_workbook
from .logger import setup_logger
from .models import Plan, Workbook
from .report import (
    ASSIGNMENT_COLUMNS,
    assignment_row,
    forecast_to_dict,
    format_assignments,
    format_breakdown,
    format_forecast,
)
from .resources import Team
from .scheduler import SchedulingConfig, calculate_schedule
from .unified_config import discover_config

app = typer.Typer(
    name="sprintcast",
    help="Forecast when a backlog of epics and stories finishes with a given team",
    add_completion=False,
)

FileArgument = Annotated[Path, typer.Argument(help="Path to the workbook (YAML or JSON)")]
PlanOption = Annotated[str | None, typer.Option("--plan", "-p", help="Plan id")]
VelocityOption = Annotated[
    float | None,
    typer.Option("--velocity", help="Points per developer per sprint (overrides file values)"),
]


@dataclass
class _Inputs:
    """Resolved inputs for one command."""

    workbook: Workbook
    team: Team
    velocity: float
    config: SchedulingConfig


def _parse_date_option(value: str | None, option_name: str) -> date | None:
    """Parse a date option string to a date object."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid date format for --{option_name}: {value}") from e


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _load_inputs(file: Path, velocity: float | None) -> _Inputs:
    """Load the workbook and apply config-file and CLI overrides."""
    try:
        workbook = load_workbook(file)
        config = discover_config(file)
    except (SprintcastError, FileNotFoundError, ValueError) as e:
        raise _fail(str(e)) from None

    team = workbook.team
    effective_velocity = workbook.velocity
    scheduling_config = SchedulingConfig()
    if config is not None:
        team = config.team_override() or team
        effective_velocity = config.velocity or effective_velocity
        scheduling_config = config.scheduler
    if velocity is not None:
        effective_velocity = velocity

    return _Inputs(
        workbook=workbook,
        team=team,
        velocity=effective_velocity,
        config=scheduling_config,
    )


def _select_plan(workbook: Workbook, plan_id: str | None) -> Plan:
    """Pick the requested plan; without an id the workbook must hold exactly one."""
    if plan_id is None:
        plans = workbook.plans
        if len(plans) == 1:
            return plans[0]
        available = ", ".join(p.id for p in plans)
        raise _fail(f"Workbook has {len(plans)} plans; choose one with --plan ({available})")
    try:
        return workbook.find_plan(plan_id)
    except SprintcastError as e:
        raise _fail(str(e)) from None


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=placements, 2=all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: sprintcast_config.yaml)",
        ),
    ] = None,
    as_of: Annotated[
        str | None,
        typer.Option(
            "--as-of",
            help="Date used in place of today for plans without a start date (YYYY-MM-DD)",
        ),
    ] = None,
) -> None:
    """Global options for sprintcast commands."""
    setup_logger(verbose)
    context.set_config_path(config)
    context.set_as_of(_parse_date_option(as_of, "as-of"))


@app.command()
def forecast(
    file: FileArgument,
    plan_id: PlanOption = None,
    velocity: VelocityOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON instead of text")] = False,
) -> None:
    """Forecast completion for one plan, or every plan in the workbook."""
    inputs = _load_inputs(file, velocity)
    plans = [_select_plan(inputs.workbook, plan_id)] if plan_id else inputs.workbook.plans

    results = [
        (plan, calculate_forecast(plan, inputs.team, inputs.velocity, inputs.config))
        for plan in plans
    ]

    if as_json:
        typer.echo(json.dumps([forecast_to_dict(p, r) for p, r in results], indent=2))
        return

    typer.echo(f"Velocity: {inputs.velocity:g} pts/developer/sprint")
    for plan, report in results:
        typer.echo("")
        typer.echo(format_forecast(plan, report))


@app.command()
def schedule(
    file: FileArgument,
    plan_id: PlanOption = None,
    velocity: VelocityOption = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write assignments to a CSV file")
    ] = None,
) -> None:
    """Show the story-by-story schedule for a plan."""
    inputs = _load_inputs(file, velocity)
    plan = _select_plan(inputs.workbook, plan_id)
    result = calculate_schedule(plan, inputs.team, inputs.velocity, inputs.config)

    if output:
        try:
            with output.open("w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=ASSIGNMENT_COLUMNS)
                writer.writeheader()
                writer.writerows(assignment_row(a) for a in result.assignments)
        except OSError as e:
            raise _fail(f"Failed to write {output}: {e}") from None
        typer.echo(f"Schedule written to {output} ({len(result.assignments)} stories)")
    else:
        typer.echo(format_assignments(result.assignments))

    if result.has_circular_dependency:
        typer.echo(
            "Warning: some stories could not be scheduled (circular or unsatisfiable dependencies)",
            err=True,
        )


@app.command()
def breakdown(
    file: FileArgument,
    plan_id: PlanOption = None,
    velocity: VelocityOption = None,
) -> None:
    """Show each developer's points per sprint for a plan."""
    inputs = _load_inputs(file, velocity)
    plan = _select_plan(inputs.workbook, plan_id)
    result = calculate_schedule(plan, inputs.team, inputs.velocity, inputs.config)
    sprints = build_sprint_breakdown(
        result.assignments,
        plan.start_date,
        inputs.team,
        inputs.config.working_days_per_sprint,
    )
    typer.echo(format_breakdown(sprints))


@app.command()
def export(
    file: FileArgument,
    output: Annotated[Path, typer.Option("--output", "-o", help="Destination (.json or .yaml)")],
) -> None:
    """Rewrite a workbook in the current layout (migrating older files)."""
    try:
        workbook = load_workbook(file)
    except SprintcastError as e:
        raise _fail(str(e)) from None
    try:
        dump_workbook(workbook, output)
    except OSError as e:
        raise _fail(f"Failed to write {output}: {e}") from None
    typer.echo(f"Workbook written to {output} ({len(workbook.plans)} plans)")


def main() -> None:
    """Entry point for the sprintcast CLI."""
    app()


if __name__ == "__main__":
    main()
