"""Reactive view model behind the calendar month widget.

The view model turns independent inputs (selected date, hover, search term,
enabled calendars, settings, locale/timezone changes, calendar change
notifications and the video index) into a set of replaying, equality-gated
output streams.

Each input change is queued and processed by a single run loop: the change is
applied, then every stage is evaluated in dependency order before the next
change is taken from the queue. Stages are pure functions wrapped in ``Memo`` so
they only run when one of their inputs changed, and every output is a ``Stream``
that swallows structurally equal values. The event fetch is the only
asynchronous step; it is delegated to ``EventAggregator``.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import date, datetime
from typing import (
    Callable,
    Deque,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Tuple,
    Union,
)

from .calendar_rules import CalendarRules
from .exceptions import CalendarArithmeticError
from .providers.base import BaseCalendarService, BaseDateProvider, BaseVideoIndex
from .settings import SettingsStore
from .stages import (
    EventAggregator,
    annotate_cells,
    build_month_grid,
    cell_size,
    fetch_window,
    filter_events,
    month_title,
    resolve_focus,
    week_numbers,
    week_numbers_width,
    weekday_headers,
)
from .stream import Memo, Stream, Unsubscribe
from .types import CalendarDay, DateRange, FocusedSelection, MonthGrid, WeekDay

logger = logging.getLogger(__name__)

DateInput = Union[date, datetime]

__all__ = ["CalendarViewModel"]


class CalendarViewModel:
    """Month grid view model.

    Must be created inside a running event loop, since the initial event fetch
    starts right away.

    Outputs:
        title: Month title, e.g. "Oct 2026"
        weekdays: The seven weekday headers
        week_numbers: Week number per row, or None when hidden
        grid: The annotated 42-cell month grid
        focused: Day and events shown in the side list
        calendar_scaling / cell_size / week_numbers_width: Display metrics
    """

    def __init__(
        self,
        calendar_service: BaseCalendarService,
        date_provider: BaseDateProvider,
        settings: SettingsStore,
        video_index: BaseVideoIndex,
        selected_date: Optional[DateInput] = None,
        enabled_calendars: Iterable[str] = (),
        fetch_timeout: Optional[float] = None,
    ) -> None:
        self._calendar_service = calendar_service
        self._date_provider = date_provider
        self._settings = settings
        self._video_index = video_index

        # Inputs
        self._selected: CalendarDay = (
            self._to_day(selected_date)
            if selected_date is not None
            else date_provider.today()
        )
        self._hovered: Optional[CalendarDay] = None
        self._search_term = ""
        self._enabled_calendars: FrozenSet[str] = frozenset(enabled_calendars)
        self._video_dates: FrozenSet[CalendarDay] = frozenset(
            video_index.dates_with_video()
        )
        self._locale_version = 0
        self._refresh_requested = False
        self._fetch_key: Optional[Tuple[datetime, datetime, FrozenSet[str]]] = None

        # Outputs
        self.title: Stream[str] = Stream("title")
        self.weekdays: Stream[Tuple[WeekDay, ...]] = Stream("weekdays")
        self.week_numbers: Stream[Optional[Tuple[int, ...]]] = Stream("week_numbers")
        self.grid: Stream[MonthGrid] = Stream("grid")
        self.focused: Stream[FocusedSelection] = Stream("focused")
        self.calendar_scaling: Stream[float] = settings.calendar_scaling
        self.cell_size: Stream[float] = Stream("cell_size")
        self.week_numbers_width: Stream[float] = Stream("week_numbers_width")

        # Intermediate stages
        self._month: Stream[DateRange] = Stream("month")
        self._aggregator = EventAggregator(calendar_service, timeout=fetch_timeout)
        self._build_grid = Memo(build_month_grid)
        self._title = Memo(month_title)
        self._weekdays = Memo(weekday_headers)
        self._week_numbers = Memo(week_numbers)
        self._filter = Memo(filter_events)
        self._annotate = Memo(annotate_cells)
        self._focus = Memo(resolve_focus)

        # Run loop
        self._pending: Deque[Tuple[str, Callable[[], None]]] = deque()
        self._running = False
        self._started = False
        self._closed = False
        self._passes = 0

        self._subscriptions: List[Unsubscribe] = [
            self._aggregator.events.subscribe(lambda _: self._submit("events")),
            calendar_service.changes.connect(
                lambda: self._submit("calendar_changed", self._request_refresh)
            ),
            date_provider.timezone_changed.connect(
                lambda: self._submit("timezone_changed")
            ),
            date_provider.locale_changed.connect(self.notify_locale_changed),
            settings.first_weekday.subscribe(lambda _: self._submit("first_weekday")),
            settings.highlighted_weekdays.subscribe(
                lambda _: self._submit("highlighted_weekdays")
            ),
            settings.show_week_numbers.subscribe(
                lambda _: self._submit("show_week_numbers")
            ),
            settings.show_declined_events.subscribe(
                lambda _: self._submit("show_declined_events")
            ),
            settings.calendar_scaling.subscribe(
                lambda _: self._submit("calendar_scaling")
            ),
        ]

        self._started = True
        self._submit("init")

    # Inputs
    def select_date(self, value: DateInput) -> None:
        """Change the selected day (may move the grid to another month)."""
        day = self._to_day(value)
        self._submit("select_date", lambda: setattr(self, "_selected", day))

    def hover(self, value: Optional[DateInput]) -> None:
        """Set or clear the hovered day."""
        day = self._to_day(value) if value is not None else None
        self._submit("hover", lambda: setattr(self, "_hovered", day))

    def search(self, term: str) -> None:
        self._submit("search", lambda: setattr(self, "_search_term", term))

    def set_enabled_calendars(self, calendar_ids: Iterable[str]) -> None:
        ids = frozenset(calendar_ids)
        self._submit(
            "enabled_calendars", lambda: setattr(self, "_enabled_calendars", ids)
        )

    def refresh_video_dates(self) -> None:
        """Poll the video index and update the video indicators."""
        dates = frozenset(self._video_index.dates_with_video())
        self._submit("video_dates", lambda: setattr(self, "_video_dates", dates))

    def tick(self) -> None:
        """Re-sample the clock, e.g. from a timer, to catch day rollover."""
        self._submit("tick")

    def notify_locale_changed(self) -> None:
        """Rebuild localized labels after the locale changed."""
        self._submit("locale_changed", self._bump_locale)

    async def wait_for_events(self) -> None:
        """Wait until the in-flight event fetch (if any) settled."""
        await self._aggregator.wait_idle()

    def close(self) -> None:
        """Cancel the in-flight fetch and stop observing collaborators."""
        if self._closed:
            return
        self._closed = True
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
        self._aggregator.cancel()
        self._pending.clear()
        logger.debug("Calendar view model closed")

    # Introspection
    @property
    def selected_date(self) -> CalendarDay:
        return self._selected

    @property
    def hovered_date(self) -> Optional[CalendarDay]:
        return self._hovered

    @property
    def aggregator(self) -> EventAggregator:
        return self._aggregator

    @property
    def passes(self) -> int:
        """Number of completed recomputation passes."""
        return self._passes

    # Run loop
    def _submit(self, reason: str, apply: Optional[Callable[[], None]] = None) -> None:
        if self._closed:
            return
        if not self._started:
            if apply is not None:
                apply()
            return

        self._pending.append((reason, apply or _noop))
        if self._running:
            return

        self._running = True
        try:
            while self._pending and not self._closed:
                current, change = self._pending.popleft()
                change()
                self._recompute(current)
        finally:
            self._running = False

    def _request_refresh(self) -> None:
        self._refresh_requested = True

    def _bump_locale(self) -> None:
        self._locale_version += 1

    def _to_day(self, value: DateInput) -> CalendarDay:
        if isinstance(value, datetime):
            return self._date_provider.rules.day_of(value)
        return value

    def _recompute(self, reason: str) -> None:
        rules = self._date_provider.rules
        settings = self._settings
        first_weekday = settings.first_weekday.value

        try:
            month = rules.month_interval(self._selected)
            base_grid = self._build_grid(month, first_weekday, rules)
        except CalendarArithmeticError as e:
            logger.warning(f"Skipping grid update after {reason}: {e}")
            return

        month_changed = self._month.has_value and self._month.value != month
        self._month.publish(month)
        if month_changed:
            logger.debug(f"Displayed month changed to {month.start:%Y-%m}, clearing hover")
            self._hovered = None

        self.title.publish(self._title(rules, month.start, self._locale_version))
        self.weekdays.publish(
            self._weekdays(
                rules,
                first_weekday,
                settings.highlighted_weekdays.value,
                self._locale_version,
            )
        )
        numbers = self._week_numbers(
            base_grid, settings.show_week_numbers.value, rules
        )
        self.week_numbers.publish(numbers)

        # an observer may have closed the view model while outputs were published
        if self._closed:
            return
        self._maybe_fetch(base_grid, rules)

        events = self._aggregator.events
        filtered = self._filter(
            events.value if events.has_value else None,
            settings.show_declined_events.value,
            self._search_term,
        )

        today = rules.day_of(self._date_provider.now())
        grid = self._annotate(
            base_grid,
            filtered,
            today,
            self._selected,
            self._hovered,
            self._video_dates,
            rules,
        )
        self.grid.publish(grid)

        focused = self._focus(grid, today)
        if focused is not None:
            self.focused.publish(focused)

        size = cell_size(settings.calendar_scaling.value)
        self.cell_size.publish(size)
        self.week_numbers_width.publish(week_numbers_width(numbers, size))

        self._passes += 1

    def _maybe_fetch(self, grid: MonthGrid, rules: CalendarRules) -> None:
        start, end = fetch_window(grid, rules)
        key = (start, end, self._enabled_calendars)
        if key == self._fetch_key and not self._refresh_requested:
            return
        self._fetch_key = key
        self._refresh_requested = False
        self._aggregator.request(start, end, self._enabled_calendars)


def _noop() -> None:
    return None
