"""Output formatting utilities."""

from .time_formatter import format_duration
from .interval_merger import merge_intervals, calculate_wall_clock, calculate_parallelism_factor
from .report_formatter import ReportFormatter

__all__ = [
    "format_duration",
    "merge_intervals",
    "calculate_wall_clock",
    "calculate_parallelism_factor",
    "ReportFormatter",
]
