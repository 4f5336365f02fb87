"""ICS file writer for calendar exports."""

from datetime import datetime, timedelta
from pathlib import Path

from icalendar import Calendar, Event

from notecal.exceptions import ExportError
from notecal.models.event import CalendarEvent


class ICSWriter:
    """Writer for ICS calendar files."""

    def build(self, events: list[CalendarEvent], name: str = "Calendar") -> Calendar:
        """Build an iCalendar object for the given events.

        The document path is used as the UID so repeated exports of the same
        vault produce stable identifiers.
        """
        cal = Calendar()
        cal.add("prodid", "-//notecal//EN")
        cal.add("version", "2.0")
        cal.add("X-WR-CALNAME", name)

        for event_model in events:
            event = Event()
            event.add("summary", event_model.title)
            event.add("uid", event_model.id)
            event.add("dtstamp", datetime.now())

            if event_model.all_day:
                # End date is exclusive in iCalendar, as it is in the model
                end = event_model.end or event_model.start + timedelta(days=1)
                event.add("dtstart", event_model.start)
                event.add("dtend", end)
            else:
                event.add("dtstart", event_model.start)
                if event_model.end is not None:
                    event.add("dtend", event_model.end)

            if event_model.event_color:
                event.add("color", event_model.event_color)

            cal.add_component(event)
        return cal

    def write(self, events: list[CalendarEvent], path: Path, name: str = "Calendar") -> None:
        """Write events to an ICS file.

        Raises:
            ExportError: If the file cannot be written
        """
        try:
            ical_content = self.build(events, name).to_ical()
            if not ical_content:
                raise ExportError("Calendar.to_ical() returned empty content")
            path.write_bytes(ical_content)
        except OSError as e:
            raise ExportError(f"Failed to write {path}: {e}") from e

    def get_extension(self) -> str:
        """Returns file extension."""
        return "ics"
