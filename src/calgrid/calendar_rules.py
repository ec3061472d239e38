"""Calendar rules: timezone-aware day arithmetic and localized symbols."""

import calendar
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, time, timedelta, tzinfo
from typing import Tuple
from zoneinfo import ZoneInfo

from .exceptions import CalendarArithmeticError
from .types import CalendarDay, DateRange

logger = logging.getLogger(__name__)

__all__ = ["CalendarRules", "default_month_names", "default_weekday_symbols"]


def default_month_names() -> Tuple[str, ...]:
    """Abbreviated month names of the process locale, January first."""
    return tuple(calendar.month_abbr[month] for month in range(1, 13))


def default_weekday_symbols() -> Tuple[str, ...]:
    """Very short weekday symbols of the process locale, Sunday first."""
    # calendar.day_abbr starts on Monday
    return tuple(calendar.day_abbr[(index - 1) % 7][:1] for index in range(7))


@dataclass(frozen=True)
class CalendarRules:
    """Day/month arithmetic in a fixed timezone.

    Weekdays are indexed 0 = Sunday .. 6 = Saturday throughout the package.
    Rules are immutable; a timezone or locale change produces a new instance,
    which is how downstream stages detect they must re-evaluate.
    """

    timezone: tzinfo
    first_weekday: int = 0
    month_names: Tuple[str, ...] = field(default_factory=default_month_names)
    weekday_symbols: Tuple[str, ...] = field(default_factory=default_weekday_symbols)

    @classmethod
    def for_timezone(cls, name: str, first_weekday: int = 0) -> "CalendarRules":
        return cls(timezone=ZoneInfo(name), first_weekday=first_weekday)

    def with_timezone(self, timezone: tzinfo) -> "CalendarRules":
        return replace(self, timezone=timezone)

    def with_symbols(
        self, month_names: Tuple[str, ...], weekday_symbols: Tuple[str, ...]
    ) -> "CalendarRules":
        if len(month_names) != 12 or len(weekday_symbols) != 7:
            raise ValueError("Expected 12 month names and 7 weekday symbols")
        return replace(
            self, month_names=tuple(month_names), weekday_symbols=tuple(weekday_symbols)
        )

    # Instants
    def localize(self, instant: datetime) -> datetime:
        """Express an instant in this calendar's timezone (naive means local)."""
        if instant.tzinfo is None:
            return instant.replace(tzinfo=self.timezone)
        return instant.astimezone(self.timezone)

    def day_of(self, instant: datetime) -> CalendarDay:
        return self.localize(instant).date()

    def is_same_day(self, a: datetime, b: datetime) -> bool:
        return self.day_of(a) == self.day_of(b)

    def start_of_day(self, day: CalendarDay) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.timezone)

    def end_of_day(self, day: CalendarDay) -> datetime:
        return self.start_of_day(self.add_days(day, 1)) - timedelta(microseconds=1)

    def overlaps_day(self, day: CalendarDay, start: datetime, end: datetime) -> bool:
        """Whether the interval [start, end) touches the given day.

        Zero-length items (reminders, instants) belong to the day they fall on.
        """
        day_start = self.start_of_day(day)
        next_start = self.start_of_day(self.add_days(day, 1))
        start = self.localize(start)
        end = self.localize(end)
        if start == end:
            return day_start <= start < next_start
        return start < next_start and end > day_start

    # Days
    def add_days(self, day: CalendarDay, days: int) -> CalendarDay:
        try:
            return day + timedelta(days=days)
        except OverflowError as e:
            raise CalendarArithmeticError(f"Cannot shift {day} by {days} days") from e

    def weekday(self, day: CalendarDay) -> int:
        return day.isoweekday() % 7

    def week_of_year(self, day: CalendarDay) -> int:
        return day.isocalendar()[1]

    def month_interval(self, day: CalendarDay) -> DateRange:
        """First and last day of the month containing ``day``."""
        _, days_in_month = calendar.monthrange(day.year, day.month)
        return DateRange(start=day.replace(day=1), end=day.replace(day=days_in_month))

    def is_same_month(self, a: CalendarDay, b: CalendarDay) -> bool:
        return (a.year, a.month) == (b.year, b.month)

    # Formatting
    def format_month_title(self, day: CalendarDay) -> str:
        """Month title in "MMM yyyy" form, capitalized for sentence start."""
        name = self.month_names[day.month - 1]
        return f"{name[:1].upper()}{name[1:]} {day.year}"

    def weekday_symbol(self, index: int) -> str:
        return self.weekday_symbols[index % 7]
