"""Collaborator interfaces and their bundled implementations."""

from .base import BaseCalendarService, BaseDateProvider, BaseVideoIndex
from .calendar_service import InMemoryCalendarService
from .date_provider import SystemDateProvider
from .video import FileSystemVideoIndex, StaticVideoIndex

__all__ = [
    "BaseCalendarService",
    "BaseDateProvider",
    "BaseVideoIndex",
    "InMemoryCalendarService",
    "SystemDateProvider",
    "FileSystemVideoIndex",
    "StaticVideoIndex",
]
