"""Timetable output: schema, builder, metrics and formatters."""

from .schema import (
    OutputStatus,
    TimetableEntry,
    Timetable,
    CourseFailure,
    Summary,
    DaySchedule,
    EntitySchedule,
    TimetableViews,
    LoadMetrics,
    ScheduleOutput,
)
from .timeslots import (
    TIME_SLOT_TABLE,
    period_bounds,
    period_label,
    period_labels,
    day_label,
    minutes_to_clock,
)
from .builder import (
    ResultBuilder,
    build,
    build_to_json,
    build_timetable,
    slot_to_entry,
)
from .metrics import compute_load_metrics, room_utilization, std_dev
from .formatters import (
    # Formatter classes
    JSONFormatter,
    CSVFormatter,
    ConsoleFormatter,
    EntityViewFormatter,
    # Convenience functions
    format_json,
    format_csv,
    format_console,
    format_faculty_view,
    format_room_view,
    format_day_view,
    print_summary,
    # File utilities
    save_json,
    save_csv,
)

__all__ = [
    # Schema
    "OutputStatus",
    "TimetableEntry",
    "Timetable",
    "CourseFailure",
    "Summary",
    "DaySchedule",
    "EntitySchedule",
    "TimetableViews",
    "LoadMetrics",
    "ScheduleOutput",
    # Time slots
    "TIME_SLOT_TABLE",
    "period_bounds",
    "period_label",
    "period_labels",
    "day_label",
    "minutes_to_clock",
    # Builder
    "ResultBuilder",
    "build",
    "build_to_json",
    "build_timetable",
    "slot_to_entry",
    # Metrics
    "compute_load_metrics",
    "room_utilization",
    "std_dev",
    # Formatters
    "JSONFormatter",
    "CSVFormatter",
    "ConsoleFormatter",
    "EntityViewFormatter",
    "format_json",
    "format_csv",
    "format_console",
    "format_faculty_view",
    "format_room_view",
    "format_day_view",
    "print_summary",
    "save_json",
    "save_csv",
]
