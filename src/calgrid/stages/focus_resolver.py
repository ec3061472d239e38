"""Picks the focused day and the events listed for it."""

from typing import List, Optional

from ..types import CalendarDay, EventModel, FocusedSelection, MonthGrid


def resolve_focus(grid: MonthGrid, today: CalendarDay) -> Optional[FocusedSelection]:
    """Hovered cell first, then the selected one.

    When the focused cell is today, reminders from earlier days of the grid are
    listed first as overdue items, followed by today's own events.
    Returns None if no cell is hovered or selected.
    """
    focused = grid.find(lambda cell: cell.is_hovered) or grid.find(
        lambda cell: cell.is_selected
    )
    if focused is None:
        return None

    if not focused.is_today:
        return FocusedSelection(date=focused.date, events=focused.events)

    overdue: List[EventModel] = [
        event
        for cell in grid.cells
        if cell.date < today
        for event in cell.events
        if event.type.is_reminder
    ]
    return FocusedSelection(date=focused.date, events=tuple(overdue) + focused.events)
