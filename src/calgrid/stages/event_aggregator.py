"""Fetches events for the visible grid and filters them."""

import asyncio
import logging
from datetime import datetime
from typing import AbstractSet, Iterable, Optional, Tuple

from ..calendar_rules import CalendarRules
from ..providers.base import BaseCalendarService
from ..stream import Stream
from ..types import EventModel, EventStatus, MonthGrid

logger = logging.getLogger(__name__)

EventSet = Tuple[EventModel, ...]

__all__ = ["EventAggregator", "EventSet", "fetch_window", "filter_events"]


def fetch_window(grid: MonthGrid, rules: CalendarRules) -> Tuple[datetime, datetime]:
    """Instants spanning the whole grid, from the first cell to the last."""
    return rules.start_of_day(grid.first_day), rules.end_of_day(grid.last_day)


def filter_events(
    events: Optional[Iterable[EventModel]],
    show_declined_events: bool,
    search_term: str,
) -> Optional[EventSet]:
    """Apply the declined-status and search filters.

    ``None`` means no fetch has completed yet and is passed through, so callers
    can tell "nothing loaded" apart from "loaded, but empty".
    """
    if events is None:
        return None
    return tuple(
        event
        for event in events
        if (show_declined_events or event.status != EventStatus.DECLINED)
        and (not search_term or event.matches(search_term))
    )


class EventAggregator:
    """Owns the current event set and the latest-wins fetch protocol.

    Every ``request`` supersedes the previous one: the in-flight task is cancelled
    and its generation retired, so a late completion is dropped even when the
    backend ignores cancellation. Failures keep the previous event set.
    """

    def __init__(
        self, calendar_service: BaseCalendarService, timeout: Optional[float] = None
    ) -> None:
        self._calendar_service = calendar_service
        self.timeout = timeout
        self.events: Stream[EventSet] = Stream("events")
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self.failures = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def request(
        self, start: datetime, end: datetime, calendar_ids: AbstractSet[str]
    ) -> asyncio.Task:
        """Start a fetch for [start, end], superseding any in-flight one.

        Must be called from within a running event loop.
        """
        self.cancel()
        self._generation += 1
        logger.debug(
            f"Requesting events (generation {self._generation}) "
            f"{start.isoformat()} - {end.isoformat()} for {sorted(calendar_ids)}"
        )
        self._task = asyncio.get_running_loop().create_task(
            self._fetch(self._generation, start, end, frozenset(calendar_ids)),
            name=f"calgrid-fetch-{self._generation}",
        )
        return self._task

    def cancel(self) -> None:
        """Cancel the in-flight fetch, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait_idle(self) -> None:
        """Wait until no fetch is in flight, following superseding requests."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    async def _fetch(
        self,
        generation: int,
        start: datetime,
        end: datetime,
        calendar_ids: AbstractSet[str],
    ) -> None:
        try:
            pending = self._calendar_service.fetch_events(start, end, calendar_ids)
            if self.timeout is not None:
                events = await asyncio.wait_for(pending, self.timeout)
            else:
                events = await pending
        except asyncio.CancelledError:
            logger.debug(f"Event fetch generation {generation} cancelled")
            raise
        except Exception as e:
            if generation == self._generation:
                self.failures += 1
                logger.warning(f"Event fetch failed, keeping previous events: {e}")
            return

        if generation != self._generation:
            logger.debug(
                f"Discarding stale events from generation {generation} "
                f"(current {self._generation})"
            )
            return

        if self.events.publish(tuple(events)):
            logger.debug(f"Published {len(events)} events (generation {generation})")
