"""Decorates grid cells with today/selection/hover flags, events and videos."""

import logging
from typing import AbstractSet, Optional, Sequence

from ..calendar_rules import CalendarRules
from ..types import CalendarCell, CalendarDay, EventModel, MonthGrid

logger = logging.getLogger(__name__)


def annotate_cells(
    grid: MonthGrid,
    filtered_events: Optional[Sequence[EventModel]],
    today: CalendarDay,
    selected: CalendarDay,
    hovered: Optional[CalendarDay],
    video_dates: AbstractSet[CalendarDay],
    rules: CalendarRules,
) -> MonthGrid:
    """Return a new grid with every cell's flags and contents recomputed.

    When ``filtered_events`` is None (nothing fetched yet) each cell keeps the
    events it already carries instead of being emptied.
    """
    cells = []
    for cell in grid.cells:
        if filtered_events is None:
            events = cell.events
        else:
            events = tuple(
                event
                for event in filtered_events
                if rules.overlaps_day(cell.date, event.start, event.end)
            )
        cells.append(
            CalendarCell(
                date=cell.date,
                in_month=cell.in_month,
                is_today=cell.date == today,
                is_selected=cell.date == selected,
                is_hovered=hovered is not None and cell.date == hovered,
                events=events,
                has_video=cell.date in video_dates,
            )
        )
    return MonthGrid(cells=tuple(cells))
