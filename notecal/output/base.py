"""Base classes for calendar writers."""

from pathlib import Path
from typing import Protocol

from notecal.models.event import CalendarEvent


class CalendarWriter(Protocol):
    """Protocol for calendar writers."""

    def write(self, events: list[CalendarEvent], path: Path, name: str = "Calendar") -> None:
        """Write events to file path."""
        ...

    def get_extension(self) -> str:
        """Returns file extension (e.g., 'ics', 'json')."""
        ...
