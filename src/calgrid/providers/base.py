"""Abstract base classes for the collaborators the view model consumes."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Collection, List, Optional, Set

from ..calendar_rules import CalendarRules
from ..stream import Signal
from ..types import CalendarDay, EventModel


class BaseDateProvider(ABC):
    """Source of the current instant and of the active calendar rules."""

    def __init__(self) -> None:
        self.timezone_changed = Signal("timezone_changed")
        self.locale_changed = Signal("locale_changed")

    @abstractmethod
    def now(self) -> datetime:
        """Current instant (timezone aware)."""

    @property
    @abstractmethod
    def rules(self) -> CalendarRules:
        """Calendar rules currently in effect."""

    def today(self) -> CalendarDay:
        return self.rules.day_of(self.now())


class BaseCalendarService(ABC):
    """Asynchronous event source."""

    def __init__(self) -> None:
        self.changes = Signal("calendar_changes")

    @abstractmethod
    async def fetch_events(
        self, start: datetime, end: datetime, calendar_ids: Collection[str]
    ) -> List[EventModel]:
        """Fetch events overlapping [start, end] from the given calendars."""


class BaseVideoIndex(ABC):
    """Index of days that have a video recording."""

    @abstractmethod
    def dates_with_video(self) -> Set[CalendarDay]:
        """All days with at least one recording."""

    @abstractmethod
    def video_url_for(self, day: CalendarDay) -> Optional[str]:
        """URL of the recording for a day, if any."""

    def has_video(self, day: CalendarDay) -> bool:
        return self.video_url_for(day) is not None
