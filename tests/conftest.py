"""Shared test fixtures and fakes for calgrid tests.

This module contains the controllable collaborators (clock, calendar service,
video index) and event factories used across the test suite.
"""

import asyncio
import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Collection, Dict, FrozenSet, Iterable, List, Optional
from zoneinfo import ZoneInfo

import pytest

from calgrid.calendar_rules import CalendarRules
from calgrid.providers.base import BaseCalendarService, BaseDateProvider
from calgrid.providers.video import StaticVideoIndex
from calgrid.settings import SettingsStore
from calgrid.types import EventModel, EventStatus, EventType, Person

MONTH_NAMES = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)
WEEKDAY_SYMBOLS = ("S", "M", "T", "W", "T", "F", "S")

# Saturday, 10 October 2026 at noon UTC
NOW = datetime(2026, 10, 10, 12, 0, tzinfo=timezone.utc)
TODAY = date(2026, 10, 10)


def make_rules(tz: str = "UTC", first_weekday: int = 0) -> CalendarRules:
    return CalendarRules(
        timezone=ZoneInfo(tz),
        first_weekday=first_weekday,
        month_names=MONTH_NAMES,
        weekday_symbols=WEEKDAY_SYMBOLS,
    )


class FakeDateProvider(BaseDateProvider):
    """Date provider with a settable clock and timezone."""

    def __init__(self, now: datetime = NOW, rules: Optional[CalendarRules] = None) -> None:
        super().__init__()
        self._now = now
        self._rules = rules or make_rules()

    def now(self) -> datetime:
        return self._now

    @property
    def rules(self) -> CalendarRules:
        return self._rules

    def set_now(self, now: datetime) -> None:
        self._now = now

    def set_timezone(self, name: str) -> None:
        self._rules = self._rules.with_timezone(ZoneInfo(name))
        self.timezone_changed.emit()

    def set_symbols(self, month_names: Iterable[str], weekday_symbols: Iterable[str]) -> None:
        self._rules = self._rules.with_symbols(tuple(month_names), tuple(weekday_symbols))
        self.locale_changed.emit()


@dataclass
class FetchCall:
    start: datetime
    end: datetime
    calendar_ids: FrozenSet[str]
    future: "asyncio.Future[List[EventModel]]"


class ControlledCalendarService(BaseCalendarService):
    """Calendar service whose fetches complete only when the test says so."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[FetchCall] = []

    async def fetch_events(
        self, start: datetime, end: datetime, calendar_ids: Collection[str]
    ) -> List[EventModel]:
        future: "asyncio.Future[List[EventModel]]" = (
            asyncio.get_running_loop().create_future()
        )
        self.calls.append(FetchCall(start, end, frozenset(calendar_ids), future))
        return await future

    def resolve(self, index: int, events: Iterable[EventModel]) -> bool:
        """Complete a fetch; returns False if it was already cancelled."""
        future = self.calls[index].future
        if future.done():
            return False
        future.set_result(list(events))
        return True

    def fail(self, index: int, error: Exception) -> None:
        self.calls[index].future.set_exception(error)


async def settle(rounds: int = 5) -> None:
    """Let pending tasks and callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def create_event(
    id: str,
    title: str,
    day: date,
    hour: int = 9,
    duration: timedelta = timedelta(hours=1),
    **fields: Any,
) -> EventModel:
    start = datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)
    fields.setdefault("calendar_id", "personal")
    return EventModel(id=id, title=title, start=start, end=start + duration, **fields)


def create_reminder(id: str, title: str, day: date, hour: int = 8) -> EventModel:
    return create_event(
        id, title, day, hour=hour, duration=timedelta(0), type=EventType.REMINDER
    )


# Shared fixtures
@pytest.fixture
def rules() -> CalendarRules:
    return make_rules()


@pytest.fixture
def date_provider() -> FakeDateProvider:
    return FakeDateProvider()


@pytest.fixture
def settings() -> SettingsStore:
    return SettingsStore(first_weekday=0, highlighted_weekdays={0, 6})


@pytest.fixture
def video_index() -> StaticVideoIndex:
    return StaticVideoIndex({date(2026, 10, 3): "https://example.com/video.mp4"})


@pytest.fixture
def controlled_service() -> ControlledCalendarService:
    return ControlledCalendarService()


@pytest.fixture
def make_event() -> Callable[..., EventModel]:
    return create_event


@pytest.fixture
def make_reminder() -> Callable[..., EventModel]:
    return create_reminder


@pytest.fixture
def sample_events() -> List[EventModel]:
    """A small mix of events around TODAY."""
    return [
        create_event("sync", "Team Sync", TODAY, hour=10, calendar_id="work",
                     calendar_color="blue",
                     participants=(Person(name="Grace Hopper"),)),
        create_event("dentist", "Dentist", TODAY + timedelta(days=2), hour=14,
                     location="Main Street 12", calendar_color="green"),
        create_event("party", "Party", TODAY + timedelta(days=4),
                     status=EventStatus.DECLINED, calendar_color="green"),
        create_reminder("rent", "Pay rent", TODAY - timedelta(days=2)),
    ]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Dict[str, str]:
    """Clear calgrid environment variables for the duration of a test."""
    removed = {key: value for key, value in os.environ.items() if key.startswith("CALGRID_")}
    for key in removed:
        monkeypatch.delenv(key)
    return removed
