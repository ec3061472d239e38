"""Month title, weekday headers and week-number column."""

from typing import AbstractSet, Optional, Tuple

from ..calendar_rules import CalendarRules
from ..types import DAYS_PER_WEEK, CalendarDay, MonthGrid, WeekDay

BASE_CELL_SIZE = 25.0
WEEK_NUMBER_CELL_RATIO = 0.85


def month_title(rules: CalendarRules, month_start: CalendarDay, locale_version: int = 0) -> str:
    # locale_version only forces re-evaluation after a locale change
    return rules.format_month_title(month_start)


def weekday_headers(
    rules: CalendarRules,
    first_weekday: int,
    highlighted_weekdays: AbstractSet[int],
    locale_version: int = 0,
) -> Tuple[WeekDay, ...]:
    """The seven header labels starting at ``first_weekday``."""
    headers = []
    for position in range(first_weekday, first_weekday + DAYS_PER_WEEK):
        index = position % DAYS_PER_WEEK
        headers.append(
            WeekDay(
                title=rules.weekday_symbol(index),
                is_highlighted=index in highlighted_weekdays,
                index=index,
            )
        )
    return tuple(headers)


def week_numbers(
    grid: MonthGrid, show_week_numbers: bool, rules: CalendarRules
) -> Optional[Tuple[int, ...]]:
    """Week number of each displayed row, or None when the column is hidden."""
    if not show_week_numbers:
        return None
    return tuple(rules.week_of_year(row[0].date) for row in grid.rows())


def cell_size(calendar_scaling: float) -> float:
    return BASE_CELL_SIZE * calendar_scaling + 10 * (calendar_scaling - 1)


def week_numbers_width(
    numbers: Optional[Tuple[int, ...]], size: float
) -> float:
    return size * WEEK_NUMBER_CELL_RATIO if numbers is not None else 0.0
