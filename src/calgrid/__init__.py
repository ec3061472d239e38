"""
calgrid

Reactive view model for calendar month widgets.
"""

from .calendar_rules import CalendarRules
from .config import AppConfig, get_current_config
from .exceptions import CalendarArithmeticError, CalgridError, EventFetchError
from .settings import SettingsStore
from .stream import NO_VALUE, Memo, Signal, Stream
from .types import (
    CalendarCell,
    CalendarDay,
    CellHighlight,
    DateRange,
    EventModel,
    EventStatus,
    EventType,
    FocusedSelection,
    MonthGrid,
    Person,
    WeekDay,
)
from .view_model import CalendarViewModel

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "get_current_config",
    "CalendarRules",
    "CalendarViewModel",
    "SettingsStore",
    "CalgridError",
    "EventFetchError",
    "CalendarArithmeticError",
    "NO_VALUE",
    "Memo",
    "Signal",
    "Stream",
    "CalendarCell",
    "CalendarDay",
    "CellHighlight",
    "DateRange",
    "EventModel",
    "EventStatus",
    "EventType",
    "FocusedSelection",
    "MonthGrid",
    "Person",
    "WeekDay",
]
