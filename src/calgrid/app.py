"""Text demo of the calendar view model."""

import argparse
import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from .calendar_rules import CalendarRules
from .config import get_current_config
from .providers import FileSystemVideoIndex, InMemoryCalendarService, SystemDateProvider
from .settings import SettingsStore
from .types import CalendarCell, EventModel, EventStatus, EventType, FocusedSelection, Person
from .view_model import CalendarViewModel

logger = logging.getLogger(__name__)

DEMO_CALENDARS = ("personal", "work")


def demo_events(rules: CalendarRules, today: date) -> List[EventModel]:
    """A handful of events around today so the demo grid is not empty."""

    def at(day: date, hour: int) -> datetime:
        return rules.start_of_day(day) + timedelta(hours=hour)

    return [
        EventModel(
            id="standup",
            title="Team Sync",
            start=at(today, 9),
            end=at(today, 10),
            calendar_id="work",
            calendar_color="blue",
            participants=(Person(name="Ada"), Person(name="Linus")),
        ),
        EventModel(
            id="dentist",
            title="Dentist",
            start=at(today + timedelta(days=3), 14),
            end=at(today + timedelta(days=3), 15),
            calendar_id="personal",
            calendar_color="green",
            location="Main Street 12",
        ),
        EventModel(
            id="pay-rent",
            title="Pay rent",
            start=at(today - timedelta(days=2), 8),
            end=at(today - timedelta(days=2), 8),
            type=EventType.REMINDER,
            calendar_id="personal",
            calendar_color="green",
        ),
        EventModel(
            id="offsite",
            title="Offsite",
            start=at(today + timedelta(days=7), 0),
            end=at(today + timedelta(days=9), 0),
            is_all_day=True,
            status=EventStatus.TENTATIVE,
            calendar_id="work",
            calendar_color="blue",
        ),
    ]


def _cell_text(cell: CalendarCell) -> str:
    marker = " "
    if cell.is_today:
        marker = "*"
    elif cell.is_selected:
        marker = ">"
    text = f"{marker}{cell.text:>2}" if cell.in_month else f" {'':>2}"
    suffix = ("." if cell.events else " ") + ("v" if cell.has_video else " ")
    return text + suffix


def render(view_model: CalendarViewModel) -> str:
    """Render the current outputs of the view model as plain text."""
    numbers: Optional[Sequence[int]] = view_model.week_numbers.value
    lines = [view_model.title.value]

    prefix = "Wk " if numbers is not None else ""
    lines.append(prefix + "".join(f"  {day.title:<3}" for day in view_model.weekdays.value))
    for row_index, row in enumerate(view_model.grid.value.rows()):
        row_prefix = f"{numbers[row_index]:>2} " if numbers is not None else ""
        lines.append(row_prefix + "".join(_cell_text(cell) for cell in row))

    if view_model.focused.has_value:
        lines.append("")
        lines.extend(_render_focus(view_model.focused.value))
    return "\n".join(lines)


def _render_focus(focused: FocusedSelection) -> List[str]:
    lines = [focused.date.strftime("%A, %d %B %Y")]
    if not focused.events:
        lines.append("  (no events)")
    for event in focused.events:
        kind = "reminder" if event.type.is_reminder else event.status.value
        lines.append(f"  {event.start:%H:%M} {event.title} [{kind}]")
    return lines


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a month grid")
    parser.add_argument("--month", help="Month to display as YYYY-MM (default: current)")
    parser.add_argument("--search", default="", help="Only show events matching this text")
    parser.add_argument(
        "--week-numbers", action="store_true", help="Show the week number column"
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> str:
    config = get_current_config()
    date_provider = SystemDateProvider.for_timezone(config.timezone, config.first_weekday)
    settings = SettingsStore.from_config(config)
    if args.week_numbers:
        settings.set_show_week_numbers(True)

    today = date_provider.today()
    selected = today
    if args.month:
        selected = datetime.strptime(args.month, "%Y-%m").date()

    view_model = CalendarViewModel(
        calendar_service=InMemoryCalendarService(demo_events(date_provider.rules, today)),
        date_provider=date_provider,
        settings=settings,
        video_index=FileSystemVideoIndex(config.video_path),
        selected_date=selected,
        enabled_calendars=DEMO_CALENDARS,
        fetch_timeout=config.fetch_timeout,
    )
    try:
        if args.search:
            view_model.search(args.search)
        await view_model.wait_for_events()
        return render(view_model)
    finally:
        view_model.close()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, get_current_config().log_level))
    logger.debug("Starting calendar demo")
    print(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
