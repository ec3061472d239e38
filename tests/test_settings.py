from typing import List

import pytest

from calgrid.config import AppConfig
from calgrid.settings import SettingsStore


class TestSettingsStore:
    def test_defaults(self) -> None:
        settings = SettingsStore()
        assert settings.first_weekday.value == 0
        assert settings.highlighted_weekdays.value == frozenset({0, 6})
        assert settings.show_week_numbers.value is False
        assert settings.show_declined_events.value is False
        assert settings.calendar_scaling.value == 1.0

    def test_from_config(self) -> None:
        config = AppConfig(
            timezone="UTC",
            first_weekday=1,
            highlighted_weekdays=frozenset({5}),
            show_week_numbers=True,
            show_declined_events=True,
            calendar_scaling=2.0,
            video_folder="videos",
            log_level="INFO",
        )
        settings = SettingsStore.from_config(config)

        assert settings.first_weekday.value == 1
        assert settings.highlighted_weekdays.value == frozenset({5})
        assert settings.show_week_numbers.value is True
        assert settings.show_declined_events.value is True
        assert settings.calendar_scaling.value == 2.0

    def test_only_changes_are_published(self) -> None:
        settings = SettingsStore()
        seen: List[int] = []
        settings.first_weekday.subscribe(seen.append)

        settings.set_first_weekday(0)
        settings.set_first_weekday(1)
        settings.set_first_weekday(1)

        assert seen == [0, 1]

    def test_highlighted_weekdays_compare_as_sets(self) -> None:
        settings = SettingsStore(highlighted_weekdays={6, 0})
        settings.set_highlighted_weekdays([0, 6])
        assert settings.highlighted_weekdays.emissions == 1

    @pytest.mark.parametrize("value", [-1, 7])
    def test_invalid_first_weekday(self, value: int) -> None:
        with pytest.raises(ValueError):
            SettingsStore().set_first_weekday(value)

    def test_invalid_highlighted_weekdays(self) -> None:
        with pytest.raises(ValueError):
            SettingsStore(highlighted_weekdays={0, 8})

    def test_invalid_scaling(self) -> None:
        settings = SettingsStore()
        with pytest.raises(ValueError):
            settings.set_calendar_scaling(0)
        assert settings.calendar_scaling.value == 1.0
