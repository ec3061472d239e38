"""Builds the fixed 42-day grid for a displayed month."""

import logging

from ..calendar_rules import CalendarRules
from ..types import GRID_SIZE, CalendarCell, CalendarDay, DateRange, MonthGrid

logger = logging.getLogger(__name__)


def grid_start(month_start: CalendarDay, first_weekday: int, rules: CalendarRules) -> CalendarDay:
    """Most recent ``first_weekday`` on or before the first day of the month."""
    offset = (rules.weekday(month_start) - first_weekday) % 7
    return rules.add_days(month_start, -offset)


def build_month_grid(
    month: DateRange, first_weekday: int, rules: CalendarRules
) -> MonthGrid:
    """Build the 42 consecutive cells covering ``month``.

    Args:
        month: Interval of the displayed month
        first_weekday: First column of the grid, 0 = Sunday
        rules: Calendar used for weekday and month arithmetic

    Returns:
        MonthGrid with undecorated cells (no flags, events or videos)
    """
    start = grid_start(month.start, first_weekday, rules)
    cells = []
    for offset in range(GRID_SIZE):
        day = rules.add_days(start, offset)
        cells.append(
            CalendarCell(date=day, in_month=rules.is_same_month(day, month.start))
        )
    logger.debug(f"Built grid for {month.start:%Y-%m} starting {start.isoformat()}")
    return MonthGrid(cells=tuple(cells))
