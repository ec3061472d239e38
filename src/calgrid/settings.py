"""Observable calendar settings."""

import logging
from typing import AbstractSet, Optional

from .config import AppConfig
from .stream import Stream

logger = logging.getLogger(__name__)


class SettingsStore:
    """Holds the user-facing calendar settings as replaying streams.

    Every setting is published through its own equality-gated ``Stream`` so
    observers are only notified when a value actually changes.
    """

    def __init__(
        self,
        first_weekday: int = 0,
        highlighted_weekdays: Optional[AbstractSet[int]] = None,
        show_week_numbers: bool = False,
        show_declined_events: bool = False,
        calendar_scaling: float = 1.0,
    ) -> None:
        self.first_weekday: Stream[int] = Stream("first_weekday")
        self.highlighted_weekdays: Stream[frozenset] = Stream("highlighted_weekdays")
        self.show_week_numbers: Stream[bool] = Stream("show_week_numbers")
        self.show_declined_events: Stream[bool] = Stream("show_declined_events")
        self.calendar_scaling: Stream[float] = Stream("calendar_scaling")

        self.set_first_weekday(first_weekday)
        self.set_highlighted_weekdays(
            highlighted_weekdays if highlighted_weekdays is not None else {0, 6}
        )
        self.set_show_week_numbers(show_week_numbers)
        self.set_show_declined_events(show_declined_events)
        self.set_calendar_scaling(calendar_scaling)

    @classmethod
    def from_config(cls, config: AppConfig) -> "SettingsStore":
        return cls(
            first_weekday=config.first_weekday,
            highlighted_weekdays=config.highlighted_weekdays,
            show_week_numbers=config.show_week_numbers,
            show_declined_events=config.show_declined_events,
            calendar_scaling=config.calendar_scaling,
        )

    def set_first_weekday(self, value: int) -> None:
        if not 0 <= value <= 6:
            raise ValueError(f"first_weekday must be between 0 and 6, got {value}")
        if self.first_weekday.publish(value):
            logger.debug(f"first_weekday set to {value}")

    def set_highlighted_weekdays(self, value: AbstractSet[int]) -> None:
        invalid = sorted(day for day in value if not 0 <= day <= 6)
        if invalid:
            raise ValueError(f"Invalid highlighted weekdays: {invalid}")
        self.highlighted_weekdays.publish(frozenset(value))

    def set_show_week_numbers(self, value: bool) -> None:
        self.show_week_numbers.publish(bool(value))

    def set_show_declined_events(self, value: bool) -> None:
        self.show_declined_events.publish(bool(value))

    def set_calendar_scaling(self, value: float) -> None:
        if value <= 0:
            raise ValueError("calendar_scaling must be positive")
        self.calendar_scaling.publish(float(value))
