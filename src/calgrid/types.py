from __future__ import annotations

import logging
from datetime import date, timedelta
from enum import Enum
from typing import Callable, List, Optional, Tuple

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

CalendarDay = date

GRID_SIZE = 42
DAYS_PER_WEEK = 7
WEEKS_PER_GRID = GRID_SIZE // DAYS_PER_WEEK

OUT_OF_MONTH_ALPHA = 0.3


class WeekDay(BaseModel):
    """A weekday header label."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Localized very short weekday symbol")
    is_highlighted: bool = Field(description="Whether the weekday is highlighted")
    index: int = Field(ge=0, le=6, description="Weekday index, 0 = Sunday")


class Person(BaseModel):
    """An event participant."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name of the participant")
    email: Optional[str] = Field(None, description="Email address")


class EventStatus(str, Enum):
    CONFIRMED = "confirmed"
    TENTATIVE = "tentative"
    DECLINED = "declined"
    UNKNOWN = "unknown"


class EventType(str, Enum):
    EVENT = "event"
    REMINDER = "reminder"
    BIRTHDAY = "birthday"

    @property
    def is_reminder(self) -> bool:
        return self is EventType.REMINDER


class EventModel(BaseModel):
    """A calendar event or reminder, owned by the calendar service."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Provider-specific event identifier")
    title: str = Field(description="Event title")
    start: AwareDatetime = Field(description="Start instant")
    end: AwareDatetime = Field(description="End instant (exclusive)")
    is_all_day: bool = Field(False, description="Whether the event spans whole days")
    status: EventStatus = Field(EventStatus.CONFIRMED, description="Attendance status")
    type: EventType = Field(EventType.EVENT, description="Kind of calendar item")
    calendar_id: str = Field("", description="Identifier of the owning calendar")
    calendar_color: Optional[str] = Field(
        None, description="Display color of the owning calendar"
    )
    location: Optional[str] = Field(None, description="Event location")
    url: Optional[str] = Field(None, description="Event URL")
    notes: Optional[str] = Field(None, description="Free-form notes")
    participants: Tuple[Person, ...] = Field(
        default_factory=tuple, description="Event participants"
    )

    @model_validator(mode="after")
    def check_interval(self) -> "EventModel":
        if self.end < self.start:
            raise ValueError(f"Event {self.id} ends before it starts")
        return self

    def matches(self, search_term: str) -> bool:
        """Case-insensitive substring match against the searchable fields."""
        needle = search_term.casefold()
        haystacks = [
            self.title,
            self.location,
            self.url,
            self.notes,
            " ".join(person.name for person in self.participants),
        ]
        return any(
            haystack is not None and needle in haystack.casefold()
            for haystack in haystacks
        )


class CellHighlight(str, Enum):
    """Border highlight of a cell, in precedence order."""

    TODAY = "today"
    SELECTED = "selected"
    HOVERED = "hovered"
    NONE = "none"


class CalendarCell(BaseModel):
    """One day slot of the month grid."""

    model_config = ConfigDict(frozen=True)

    date: CalendarDay = Field(description="Calendar day of the cell")
    in_month: bool = Field(description="Whether the day belongs to the displayed month")
    is_today: bool = False
    is_selected: bool = False
    is_hovered: bool = False
    events: Tuple[EventModel, ...] = Field(default_factory=tuple)
    has_video: bool = False

    @property
    def text(self) -> str:
        return str(self.date.day)

    @property
    def alpha(self) -> float:
        return 1.0 if self.in_month else OUT_OF_MONTH_ALPHA

    @property
    def highlight(self) -> CellHighlight:
        if self.is_today:
            return CellHighlight.TODAY
        if self.is_selected:
            return CellHighlight.SELECTED
        if self.is_hovered:
            return CellHighlight.HOVERED
        return CellHighlight.NONE

    @property
    def dots(self) -> Tuple[str, ...]:
        """Distinct calendar colors of the cell's events, in event order."""
        colors: List[str] = []
        for event in self.events:
            if event.calendar_color and event.calendar_color not in colors:
                colors.append(event.calendar_color)
        return tuple(colors)


class MonthGrid(BaseModel):
    """The 42 consecutive day cells covering six displayed weeks."""

    model_config = ConfigDict(frozen=True)

    cells: Tuple[CalendarCell, ...]

    @model_validator(mode="after")
    def check_cells(self) -> "MonthGrid":
        if len(self.cells) != GRID_SIZE:
            raise ValueError(f"Month grid needs {GRID_SIZE} cells, got {len(self.cells)}")

        first = self.cells[0].date
        for offset, cell in enumerate(self.cells):
            if cell.date != first + timedelta(days=offset):
                raise ValueError(f"Cell {offset} is not consecutive: {cell.date}")

        flags = [cell.in_month for cell in self.cells]
        if True not in flags:
            raise ValueError("Month grid has no in-month cells")
        start = flags.index(True)
        end = start + flags[start:].index(False) if False in flags[start:] else len(flags)
        if any(flags[end:]):
            raise ValueError("In-month cells must form one contiguous run")
        return self

    @property
    def first_day(self) -> CalendarDay:
        return self.cells[0].date

    @property
    def last_day(self) -> CalendarDay:
        return self.cells[-1].date

    def rows(self) -> List[Tuple[CalendarCell, ...]]:
        """The grid split into its six weeks."""
        return [
            self.cells[row * DAYS_PER_WEEK : (row + 1) * DAYS_PER_WEEK]
            for row in range(WEEKS_PER_GRID)
        ]

    def find(self, predicate: Callable[[CalendarCell], bool]) -> Optional[CalendarCell]:
        """First cell matching the predicate, in grid order."""
        return next((cell for cell in self.cells if predicate(cell)), None)

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> CalendarCell:
        return self.cells[index]


class DateRange(BaseModel):
    """An inclusive range of calendar days."""

    model_config = ConfigDict(frozen=True)

    start: CalendarDay
    end: CalendarDay

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError(f"Invalid range: {self.start} > {self.end}")
        return self

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end


class FocusedSelection(BaseModel):
    """The day whose events are listed next to the grid."""

    model_config = ConfigDict(frozen=True)

    date: CalendarDay
    events: Tuple[EventModel, ...] = Field(default_factory=tuple)
