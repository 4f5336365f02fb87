"""Pydantic models for notecal."""

from notecal.models.event import CalendarEvent, EventRecord, EventSource
from notecal.models.settings import ViewSettings
from notecal.models.source import CalendarSource, ICSSource, LocalSource, RemoteSource

__all__ = [
    "EventRecord",
    "CalendarEvent",
    "EventSource",
    "CalendarSource",
    "LocalSource",
    "RemoteSource",
    "ICSSource",
    "ViewSettings",
]
