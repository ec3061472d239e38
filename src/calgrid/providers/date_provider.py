"""Wall-clock date provider."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from ..calendar_rules import CalendarRules
from .base import BaseDateProvider

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SystemDateProvider(BaseDateProvider):
    """Date provider backed by the system clock and a configurable timezone."""

    def __init__(self, rules: CalendarRules, clock: Optional[Clock] = None) -> None:
        super().__init__()
        self._rules = rules
        self._clock = clock or _utc_now

    @classmethod
    def for_timezone(cls, name: str, first_weekday: int = 0) -> "SystemDateProvider":
        return cls(CalendarRules.for_timezone(name, first_weekday))

    def now(self) -> datetime:
        return self._rules.localize(self._clock())

    @property
    def rules(self) -> CalendarRules:
        return self._rules

    def set_timezone(self, name: str) -> None:
        """Switch timezone and notify observers."""
        rules = CalendarRules.for_timezone(name, self._rules.first_weekday)
        rules = rules.with_symbols(self._rules.month_names, self._rules.weekday_symbols)
        if rules == self._rules:
            return
        self._rules = rules
        logger.info(f"Timezone changed to {name}")
        self.timezone_changed.emit()

    def set_locale_symbols(
        self, month_names: Tuple[str, ...], weekday_symbols: Tuple[str, ...]
    ) -> None:
        """Replace localized symbols and notify observers."""
        self._rules = self._rules.with_symbols(month_names, weekday_symbols)
        logger.info("Locale symbols changed")
        self.locale_changed.emit()
