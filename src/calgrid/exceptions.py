"""Exceptions for calendar grid computation."""


class CalgridError(Exception):
    """Base exception for calgrid errors."""


class EventFetchError(CalgridError):
    """Exception raised when the calendar service cannot deliver events."""


class CalendarArithmeticError(CalgridError):
    """Exception raised when date arithmetic produces no valid calendar day."""
