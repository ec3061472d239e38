from datetime import date, timedelta

from conftest import TODAY, create_event, create_reminder

from calgrid.calendar_rules import CalendarRules
from calgrid.stages.cell_annotator import annotate_cells
from calgrid.stages.grid_builder import build_month_grid
from calgrid.types import CellHighlight, MonthGrid


def october(rules: CalendarRules) -> MonthGrid:
    return build_month_grid(rules.month_interval(date(2026, 10, 1)), 0, rules)


def cell_for(grid: MonthGrid, day: date):
    cell = grid.find(lambda c: c.date == day)
    assert cell is not None
    return cell


class TestAnnotateCells:
    def test_flags(self, rules: CalendarRules) -> None:
        selected = date(2026, 10, 14)
        hovered = date(2026, 10, 20)
        grid = annotate_cells(
            october(rules), (), TODAY, selected, hovered, frozenset(), rules
        )

        assert [c.date for c in grid.cells if c.is_today] == [TODAY]
        assert [c.date for c in grid.cells if c.is_selected] == [selected]
        assert [c.date for c in grid.cells if c.is_hovered] == [hovered]
        assert cell_for(grid, TODAY).highlight == CellHighlight.TODAY
        assert cell_for(grid, selected).highlight == CellHighlight.SELECTED
        assert cell_for(grid, hovered).highlight == CellHighlight.HOVERED

    def test_today_wins_over_selection(self, rules: CalendarRules) -> None:
        grid = annotate_cells(october(rules), (), TODAY, TODAY, TODAY, frozenset(), rules)
        cell = cell_for(grid, TODAY)
        assert cell.is_today and cell.is_selected and cell.is_hovered
        assert cell.highlight == CellHighlight.TODAY

    def test_events_assigned_to_overlapping_days(self, rules: CalendarRules) -> None:
        single = create_event("single", "Lunch", TODAY, hour=12)
        multi = create_event(
            "multi", "Trip", date(2026, 10, 20), hour=18, duration=timedelta(days=2)
        )
        reminder = create_reminder("rem", "Call mom", date(2026, 10, 5))
        grid = annotate_cells(
            october(rules), (single, multi, reminder), TODAY, TODAY, None, frozenset(), rules
        )

        assert cell_for(grid, TODAY).events == (single,)
        for day in (date(2026, 10, 20), date(2026, 10, 21), date(2026, 10, 22)):
            assert cell_for(grid, day).events == (multi,)
        assert cell_for(grid, date(2026, 10, 23)).events == ()
        assert cell_for(grid, date(2026, 10, 5)).events == (reminder,)

    def test_event_ending_at_midnight_stays_on_its_day(self, rules: CalendarRules) -> None:
        late = create_event("late", "Late show", TODAY, hour=22, duration=timedelta(hours=2))
        grid = annotate_cells(october(rules), (late,), TODAY, TODAY, None, frozenset(), rules)

        assert cell_for(grid, TODAY).events == (late,)
        assert cell_for(grid, TODAY + timedelta(days=1)).events == ()

    def test_adjacent_month_cells_get_events(self, rules: CalendarRules) -> None:
        early = create_event("early", "Early", date(2026, 9, 28))
        grid = annotate_cells(october(rules), (early,), TODAY, TODAY, None, frozenset(), rules)

        cell = cell_for(grid, date(2026, 9, 28))
        assert not cell.in_month
        assert cell.events == (early,)
        assert cell.alpha == 0.3

    def test_unloaded_events_keep_cell_contents(self, rules: CalendarRules) -> None:
        event = create_event("1", "Lunch", TODAY)
        loaded = annotate_cells(october(rules), (event,), TODAY, TODAY, None, frozenset(), rules)
        again = annotate_cells(loaded, None, TODAY, TODAY, None, frozenset(), rules)

        assert cell_for(again, TODAY).events == (event,)

    def test_video_flags(self, rules: CalendarRules) -> None:
        videos = frozenset({date(2026, 10, 3), date(2026, 11, 2), date(2025, 1, 1)})
        grid = annotate_cells(october(rules), (), TODAY, TODAY, None, videos, rules)

        assert {c.date for c in grid.cells if c.has_video} == {
            date(2026, 10, 3),
            date(2026, 11, 2),
        }

    def test_same_inputs_give_equal_grids(self, rules: CalendarRules) -> None:
        args = (october(rules), (create_event("1", "Lunch", TODAY),), TODAY, TODAY, None)
        first = annotate_cells(*args, frozenset(), rules)
        second = annotate_cells(*args, frozenset(), rules)
        assert first == second
        assert first is not second

    def test_dots_follow_calendar_colors(self, rules: CalendarRules) -> None:
        events = (
            create_event("1", "A", TODAY, hour=8, calendar_color="blue"),
            create_event("2", "B", TODAY, hour=9, calendar_color="green"),
            create_event("3", "C", TODAY, hour=10, calendar_color="blue"),
        )
        grid = annotate_cells(october(rules), events, TODAY, TODAY, None, frozenset(), rules)
        assert cell_for(grid, TODAY).dots == ("blue", "green")
