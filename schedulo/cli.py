"""
Command-line interface for the Schedulo timetable engine.

Usage:
    python -m schedulo generate request.json -o timetable.json
    python -m schedulo validate request.json
    python -m schedulo view timetable.json --faculty F001
    python -m schedulo sample -o request.json --seed 42
    python -m schedulo bound request.json
"""

from __future__ import annotations

import json
import warnings
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import configure_logging, get_settings
from .constraints import rooms_for_course
from .data.generator import (
    GeneratorConfig,
    generate_sample_request,
    get_generation_stats,
    save_request,
)
from .data.loader import load_request
from .data.models import ScheduleRequest
from .errors import InvalidInputError, UnplaceableCourseWarning
from .exact import BoundStatus, max_placeable
from .output.builder import build
from .output.formatters import (
    ConsoleFormatter,
    format_console,
    format_csv,
    format_day_view,
    format_faculty_view,
    format_json,
    format_room_view,
    print_summary,
)
from .output.schema import ScheduleOutput
from .scheduler import Scheduler, SchedulerOptions

# Create Typer app
app = typer.Typer(
    name="schedulo",
    help="Deterministic greedy timetable scheduler for one program/department.",
    add_completion=False,
)

# Rich console for pretty output
console = Console()


class OutputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    TABLE = "table"


# =============================================================================
# Helper Functions
# =============================================================================

def load_input(input_path: Path) -> ScheduleRequest:
    """Load and validate a request, exiting with code 1 on any problem."""
    settings = get_settings()
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(code=1)

    try:
        return load_request(
            input_path,
            default_days=settings.default_days,
            default_periods_per_day=settings.default_periods_per_day,
        )
    except InvalidInputError as e:
        print_input_errors(e)
        raise typer.Exit(code=1)


def load_output(output_path: Path) -> ScheduleOutput:
    """Load a saved ScheduleOutput JSON file."""
    if not output_path.exists():
        console.print(f"[red]Error:[/red] Output file not found: {output_path}")
        raise typer.Exit(code=1)

    try:
        with open(output_path) as f:
            data = json.load(f)
        return ScheduleOutput.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Error loading output:[/red] {e}")
        raise typer.Exit(code=1)


def print_input_errors(error: InvalidInputError) -> None:
    console.print("[red]Invalid input:[/red]")
    for message in error.errors:
        console.print(f"  [red]✗[/red] {message}")


def resolve_options(single_session_per_period: Optional[bool]) -> SchedulerOptions:
    """Command-line flag wins over the SCHEDULO_ setting."""
    if single_session_per_period is None:
        single_session_per_period = get_settings().single_session_per_period
    return SchedulerOptions(single_session_per_period=single_session_per_period)


def print_request_summary(request: ScheduleRequest) -> None:
    summary = request.summary()
    table = Table(title="Request", show_header=False, box=None)
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Program / Department", f"{summary['program']} / {summary['department']}")
    table.add_row("Grid", f"{summary['days']} days x {summary['periods_per_day']} periods")
    table.add_row("Courses", str(summary["courses"]))
    if summary["ignored_courses"]:
        table.add_row("Ignored Courses", str(summary["ignored_courses"]))
    table.add_row("Faculty", str(summary["faculty"]))
    table.add_row("Rooms", str(summary["rooms"]))
    table.add_row("Sessions Requested", str(summary["total_sessions"]))
    table.add_row("Room-Period Cells", str(summary["total_cells"]))
    if summary["pinned"]:
        table.add_row("Pinned Sessions", str(summary["pinned"]))

    console.print(table)


# =============================================================================
# Commands
# =============================================================================

@app.command()
def generate(
    input_file: Path = typer.Argument(
        ...,
        help="Path to request JSON file",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Path to write the result",
    ),
    output_format: Optional[OutputFormat] = typer.Option(
        None,
        "--format", "-f",
        help="Result format (default: json with --output, table otherwise)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with code 2 if any course could not be placed",
    ),
    single_session_per_period: Optional[bool] = typer.Option(
        None,
        "--single-session-per-period/--multiple-sessions-per-period",
        help=(
            "At most one class per period, so one student group never has two classes at "
            "once. Off by default: parallel classes are allowed unless this is set"
        ),
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Log every placement decision",
    ),
) -> None:
    """
    Generate a timetable for a request.

    Example:
        python -m schedulo generate request.json -o timetable.json
    """
    configure_logging("DEBUG" if verbose else None)
    settings = get_settings()

    request = load_input(input_file)
    options = resolve_options(single_session_per_period)

    try:
        scheduler = Scheduler(request, options)
    except InvalidInputError as e:
        print_input_errors(e)
        raise typer.Exit(code=1)

    # Failures are reported in the summary below
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UnplaceableCourseWarning)
        result = scheduler.run()

    schedule_output = build(result)
    output_format = output_format or (OutputFormat.JSON if output else OutputFormat.TABLE)

    if output_format == OutputFormat.JSON:
        rendered = format_json(schedule_output, indent=settings.json_indent)
    elif output_format == OutputFormat.CSV:
        rendered = format_csv(schedule_output)
    else:
        rendered = None

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        if rendered is None:
            rendered = format_console(schedule_output)
        output.write_text(rendered, encoding="utf-8")
        print_summary(schedule_output, console)
        console.print(f"\n[green]Timetable saved to:[/green] {output}")
    elif rendered is None:
        ConsoleFormatter().print(schedule_output, console)
    else:
        console.out(rendered, highlight=False)

    if strict and not result.is_complete:
        raise typer.Exit(code=2)


@app.command()
def validate(
    input_file: Path = typer.Argument(
        ...,
        help="Path to request JSON file to validate",
    ),
) -> None:
    """
    Validate a request without scheduling it.

    Checks structure and references, then flags courses that cannot be
    placed whatever the scheduler does.

    Example:
        python -m schedulo validate request.json
    """
    configure_logging()
    console.print(f"\n[bold]Validating:[/bold] {input_file}\n")

    request = load_input(input_file)
    console.print("[green]Structure and references are valid[/green]\n")
    print_request_summary(request)

    problems = []
    for course in request.scheduled_courses:
        if not request.eligible_faculty(course.id):
            problems.append(f"{course.id}: no eligible faculty")
        if request.rooms and not rooms_for_course(course, request.rooms):
            problems.append(f"{course.id}: no room seats {course.expected_enrollment} students")
        if course.sessions > request.days:
            problems.append(f"{course.id}: {course.sessions} sessions but only {request.days} days")
    if not request.rooms:
        problems.append("no rooms: nothing can be placed")

    stats = get_generation_stats(request)
    if stats["utilization_percent"] > 100:
        problems.append(
            f"{stats['total_sessions']} sessions requested for {stats['total_cells']} room-period cells"
        )

    if problems:
        console.print("\n[bold yellow]Warnings:[/bold yellow]")
        for problem in problems:
            console.print(f"  [yellow]*[/yellow] {problem}")
    else:
        console.print("\n[green]No capacity problems found[/green]")


@app.command()
def view(
    output_file: Path = typer.Argument(
        ...,
        help="Path to a saved timetable JSON file",
    ),
    faculty: Optional[str] = typer.Option(
        None,
        "--faculty",
        help="Show one faculty member's schedule",
    ),
    room: Optional[str] = typer.Option(
        None,
        "--room",
        help="Show one room's schedule",
    ),
    day: Optional[int] = typer.Option(
        None,
        "--day",
        help="Show one day (1-based, as in 'Day 1')",
        min=1,
    ),
) -> None:
    """
    View a saved timetable.

    Example:
        python -m schedulo view timetable.json --faculty F001
    """
    schedule_output = load_output(output_file)

    if faculty:
        if faculty not in schedule_output.views.by_faculty:
            console.print(f"[red]Error:[/red] No schedule for faculty: {faculty}")
            raise typer.Exit(code=1)
        console.out(format_faculty_view(schedule_output, faculty), highlight=False)
    elif room:
        if room not in schedule_output.views.by_room:
            console.print(f"[red]Error:[/red] No schedule for room: {room}")
            raise typer.Exit(code=1)
        console.out(format_room_view(schedule_output, room), highlight=False)
    elif day is not None:
        console.out(format_day_view(schedule_output, day - 1), highlight=False)
    else:
        ConsoleFormatter().print(schedule_output, console)


@app.command()
def sample(
    output: Path = typer.Option(
        Path("sample_request.json"),
        "--output", "-o",
        help="Path to write the sample request",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for reproducible data",
    ),
    courses: int = typer.Option(
        12,
        "--courses",
        help="Number of courses in the scheduled department",
        min=1,
    ),
    rooms: int = typer.Option(
        4,
        "--rooms",
        help="Number of rooms",
        min=0,
    ),
) -> None:
    """
    Write a generated sample request.

    Example:
        python -m schedulo sample -o request.json --seed 42
    """
    settings = get_settings()
    request = generate_sample_request(GeneratorConfig(
        num_courses=courses,
        num_rooms=rooms,
        days=settings.default_days,
        periods_per_day=settings.default_periods_per_day,
        seed=seed,
    ))
    save_request(request, output)

    stats = get_generation_stats(request)
    console.print(f"[green]Sample request saved to:[/green] {output}")
    console.print(
        f"  {stats['courses']} courses ({stats['ignored_courses']} from other departments), "
        f"{stats['faculty']} faculty, {stats['rooms']} rooms, "
        f"{stats['total_sessions']} sessions ({stats['utilization_percent']}% of cells)"
    )


@app.command()
def bound(
    input_file: Path = typer.Argument(
        ...,
        help="Path to request JSON file",
    ),
    timeout: int = typer.Option(
        30,
        "--timeout", "-t",
        help="Maximum CP-SAT solving time in seconds",
        min=1,
        max=3600,
    ),
    single_session_per_period: Optional[bool] = typer.Option(
        None,
        "--single-session-per-period/--multiple-sessions-per-period",
        help=(
            "At most one class per period, so one student group never has two classes at "
            "once. Off by default: parallel classes are allowed unless this is set"
        ),
    ),
) -> None:
    """
    Compare the greedy result with the exact optimum from CP-SAT.

    Example:
        python -m schedulo bound request.json --timeout 60
    """
    configure_logging()
    request = load_input(input_file)
    options = resolve_options(single_session_per_period)

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UnplaceableCourseWarning)
            result = Scheduler(request, options).run()
        exact = max_placeable(request, options, time_limit_seconds=timeout)
    except InvalidInputError as e:
        print_input_errors(e)
        raise typer.Exit(code=1)

    greedy_sessions = sum(1 for slot in result.grid)
    table = Table(title="Greedy vs. Exact", show_header=True, header_style="bold cyan")
    table.add_column("")
    table.add_column("Courses Placed", justify="right")
    table.add_column("Sessions Placed", justify="right")
    table.add_row("Greedy", str(len(result.placed_course_ids)), str(greedy_sessions))
    table.add_row(
        f"CP-SAT ({exact.status.value})",
        "-" if exact.max_courses is None else str(exact.max_courses),
        "-" if exact.max_sessions is None else str(exact.max_sessions),
    )
    table.add_row("Requested", str(exact.total_courses), str(exact.total_sessions))
    console.print(table)

    if exact.status not in (BoundStatus.OPTIMAL, BoundStatus.FEASIBLE):
        console.print(f"[red]CP-SAT found no solution ({exact.status.value})[/red]")
        raise typer.Exit(code=1)

    gap = exact.course_gap(result)
    if gap:
        console.print(f"[yellow]Greedy placed {gap} fewer course(s) than possible[/yellow]")
    elif exact.is_proven:
        console.print("[green]Greedy result is optimal[/green]")
    else:
        console.print("[green]Greedy matches the best solution found[/green]")


# =============================================================================
# Main Entry Point
# =============================================================================

def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
