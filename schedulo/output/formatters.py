"""
Output formatters for scheduling results.

This module provides formatters for different output formats:
- JSON: Complete output with summary, views and metrics
- CSV: Flat timetable rows for spreadsheets
- Console: rich grid and summary for the CLI
- Entity views: one faculty member's, room's or day's schedule
"""

from __future__ import annotations

import csv
import json
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TextIO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .timeslots import day_label, period_label

if TYPE_CHECKING:
    from .schema import EntitySchedule, ScheduleOutput, TimetableEntry


STATUS_COLORS = {
    "complete": "green",
    "partial": "yellow",
    "failed": "red",
    "empty": "dim",
}


# =============================================================================
# JSON Formatter
# =============================================================================

class JSONFormatter:
    """Formats schedule output as JSON."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, output: ScheduleOutput) -> str:
        return output.to_json(indent=self.indent)

    def format_entries_only(self, output: ScheduleOutput) -> str:
        """Format only the timetable entries, the shape persisted per row."""
        entries = [entry.model_dump(by_alias=True) for entry in output.timetable.entries]
        return json.dumps(entries, indent=self.indent)


def format_json(output: ScheduleOutput, indent: int = 2) -> str:
    """Convenience function for JSON formatting."""
    return JSONFormatter(indent=indent).format(output)


# =============================================================================
# CSV Formatter
# =============================================================================

class CSVFormatter:
    """Formats the timetable as CSV."""

    DEFAULT_COLUMNS = [
        'day', 'time', 'course_id', 'course_name', 'faculty_id', 'faculty',
        'room_id', 'room', 'credits', 'program', 'department', 'pinned',
    ]

    def __init__(self, columns: list[str] | None = None, include_header: bool = True):
        self.columns = columns or self.DEFAULT_COLUMNS
        self.include_header = include_header

    def format(self, output: ScheduleOutput) -> str:
        buffer = StringIO()
        self.write(output, buffer)
        return buffer.getvalue()

    def write(self, output: ScheduleOutput, file: TextIO) -> None:
        writer = csv.writer(file)
        if self.include_header:
            writer.writerow(self.columns)
        for entry in output.timetable.entries:
            writer.writerow(self._entry_to_row(entry))

    def _entry_to_row(self, entry: TimetableEntry) -> list[str]:
        values = entry.model_dump()
        return [str(values.get(col, '')) for col in self.columns]


def format_csv(output: ScheduleOutput, columns: list[str] | None = None) -> str:
    """Convenience function for CSV formatting."""
    return CSVFormatter(columns=columns).format(output)


# =============================================================================
# Console Formatter
# =============================================================================

class ConsoleFormatter:
    """Prints schedule output as a rich day x period grid plus a summary."""

    def __init__(self, width: int | None = None):
        self.width = width

    def format(self, output: ScheduleOutput) -> str:
        """Render to plain text (via a recording console)."""
        console = Console(record=True, width=self.width or 120)
        self.print(output, console)
        return console.export_text()

    def print(self, output: ScheduleOutput, console: Optional[Console] = None) -> None:
        console = console or Console(width=self.width)
        status = output.status.value
        timetable = output.timetable

        console.print(Panel(
            Text(status.upper(), style=f"bold {STATUS_COLORS.get(status, 'white')}"),
            title=f"Timetable {timetable.program} / {timetable.department}",
            subtitle=f"Built in {output.solve_time_ms}ms",
        ))
        console.print(self.grid_table(output))
        print_summary(output, console)

    def grid_table(self, output: ScheduleOutput) -> Table:
        """Table with one row per period and one column per day."""
        timetable = output.timetable
        table = Table(title="Weekly Schedule", show_header=True, header_style="bold cyan")
        table.add_column("Time", style="dim")
        for day in range(timetable.days):
            table.add_column(day_label(day), justify="center")

        cells: dict[tuple[int, int], list[str]] = {}
        for entry in timetable.entries:
            cells.setdefault((entry.day_index, entry.period), []).append(
                f"{entry.course_id}\n{entry.faculty_id} @ {entry.room_id}"
            )

        for period in range(timetable.periods_per_day):
            row = [period_label(period)]
            for day in range(timetable.days):
                row.append("\n".join(cells.get((day, period), ["-"])))
            table.add_row(*row)
        return table


def print_summary(output: ScheduleOutput, console: Console) -> None:
    """Print the summary counts and every failed course."""
    summary = output.summary
    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Courses placed: {summary.placed_count}/{summary.total_courses}")
    console.print(f"  Sessions placed: {summary.sessions_placed}")
    console.print(f"  Carried over: {summary.carried_over}")
    console.print(f"  Conflicts avoided: {summary.conflicts_avoided}")

    if summary.failures:
        console.print(f"\n[bold red]Failed courses ({summary.failed_count}):[/bold red]")
        for failure in summary.failures:
            console.print(f"  [red]✗[/red] {failure.course_id} {failure.course_name}: {failure.reason}")


def format_console(output: ScheduleOutput) -> str:
    """Convenience function for console formatting."""
    return ConsoleFormatter().format(output)


# =============================================================================
# Entity View Formatter
# =============================================================================

class EntityViewFormatter:
    """Formats one faculty member's or room's schedule."""

    def __init__(self, kind: str):
        self.kind = kind

    def format(self, schedule: Optional[EntitySchedule], entity_id: str) -> str:
        if schedule is None:
            return f"No schedule found for {self.kind}: {entity_id}"

        console = Console(record=True, width=100)
        table = Table(title=f"{self.kind.title()}: {schedule.name} ({schedule.id})")
        table.add_column("Day")
        table.add_column("Time")
        table.add_column("Course")
        table.add_column("Faculty" if self.kind == "room" else "Room")

        for day in sorted(schedule.by_day):
            for entry in schedule.by_day[day]:
                table.add_row(
                    entry.day,
                    entry.time,
                    f"{entry.course_name} ({entry.course_id})",
                    entry.faculty if self.kind == "room" else entry.room,
                )
        console.print(table)
        return console.export_text()


def format_faculty_view(output: ScheduleOutput, faculty_id: str) -> str:
    return EntityViewFormatter("faculty").format(output.views.by_faculty.get(faculty_id), faculty_id)


def format_room_view(output: ScheduleOutput, room_id: str) -> str:
    return EntityViewFormatter("room").format(output.views.by_room.get(room_id), room_id)


def format_day_view(output: ScheduleOutput, day: int) -> str:
    """Format one day (0-based index) of the timetable."""
    schedule = output.views.by_day.get(day)
    if schedule is None:
        return f"No sessions on {day_label(day)}"

    console = Console(record=True, width=100)
    table = Table(title=schedule.day)
    for column in ("Time", "Course", "Faculty", "Room"):
        table.add_column(column)
    for entry in schedule.entries:
        table.add_row(entry.time, f"{entry.course_name} ({entry.course_id})", entry.faculty, entry.room)
    console.print(table)
    return console.export_text()


# =============================================================================
# File Output
# =============================================================================

def save_json(output: ScheduleOutput, path: str | Path, indent: int = 2) -> None:
    """Save output as JSON file."""
    Path(path).write_text(format_json(output, indent=indent), encoding="utf-8")


def save_csv(output: ScheduleOutput, path: str | Path) -> None:
    """Save the timetable as CSV file."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        CSVFormatter().write(output, f)
