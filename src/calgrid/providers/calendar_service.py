"""In-memory calendar service."""

import asyncio
import logging
from datetime import datetime
from typing import Collection, Iterable, List, Optional

from ..exceptions import EventFetchError
from ..types import EventModel
from .base import BaseCalendarService

logger = logging.getLogger(__name__)


class InMemoryCalendarService(BaseCalendarService):
    """Calendar service serving events held in memory.

    An optional latency simulates a slow backend so cancellation of superseded
    fetches can be exercised end to end.
    """

    def __init__(
        self,
        events: Optional[Iterable[EventModel]] = None,
        latency: float = 0.0,
    ) -> None:
        super().__init__()
        self._events: List[EventModel] = list(events or [])
        self.latency = latency
        self.fail_with: Optional[Exception] = None
        self.fetch_count = 0

    @property
    def events(self) -> List[EventModel]:
        return list(self._events)

    async def fetch_events(
        self, start: datetime, end: datetime, calendar_ids: Collection[str]
    ) -> List[EventModel]:
        self.fetch_count += 1
        if self.latency:
            await asyncio.sleep(self.latency)
        if self.fail_with is not None:
            raise EventFetchError(
                f"Failed to fetch events: {self.fail_with}"
            ) from self.fail_with

        enabled = set(calendar_ids)
        results = [
            event
            for event in self._events
            if event.calendar_id in enabled and _overlaps(event, start, end)
        ]
        results.sort(key=lambda event: (event.start, event.end, event.id))
        logger.debug(
            f"Fetched {len(results)} events between {start.isoformat()} and {end.isoformat()}"
        )
        return results

    def add_event(self, event: EventModel) -> None:
        self._events.append(event)
        self.changes.emit()

    def remove_event(self, event_id: str) -> bool:
        remaining = [event for event in self._events if event.id != event_id]
        if len(remaining) == len(self._events):
            return False
        self._events = remaining
        self.changes.emit()
        return True

    def replace_events(self, events: Iterable[EventModel]) -> None:
        self._events = list(events)
        self.changes.emit()


def _overlaps(event: EventModel, start: datetime, end: datetime) -> bool:
    if event.start == event.end:
        return start <= event.start <= end
    return event.start <= end and event.end > start
