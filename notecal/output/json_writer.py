"""JSON writer for the widget event-source feed."""

import json
from pathlib import Path

from notecal.exceptions import ExportError
from notecal.models.event import CalendarEvent


class JSONWriter:
    """Writer for JSON event feeds."""

    def write(self, events: list[CalendarEvent], path: Path, name: str = "Calendar") -> None:
        """Write events in the widget's event-input shape."""
        data = {"name": name, "events": [e.to_input() for e in events]}
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise ExportError(f"Failed to write {path}: {e}") from e

    def get_extension(self) -> str:
        """Returns file extension."""
        return "json"
