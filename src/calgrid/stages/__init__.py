"""Pure pipeline stages and the event aggregator."""

from .cell_annotator import annotate_cells
from .event_aggregator import EventAggregator, fetch_window, filter_events
from .focus_resolver import resolve_focus
from .grid_builder import build_month_grid, grid_start
from .week_metadata import (
    cell_size,
    month_title,
    week_numbers,
    week_numbers_width,
    weekday_headers,
)

__all__ = [
    "annotate_cells",
    "EventAggregator",
    "fetch_window",
    "filter_events",
    "resolve_focus",
    "build_month_grid",
    "grid_start",
    "cell_size",
    "month_title",
    "week_numbers",
    "week_numbers_width",
    "weekday_headers",
]
