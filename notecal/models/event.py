"""Event models with Pydantic v2 validation."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, model_validator


def _iso(value: date | datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


class EventRecord(BaseModel):
    """Event decoded from a document's front-matter.

    The id is the backing document's vault path. All-day records carry plain
    dates with an exclusive end; timed records carry datetimes.
    """

    id: str
    title: str
    start: datetime | date
    end: datetime | date | None = None
    all_day: bool = False
    color: str | None = None

    @model_validator(mode="after")
    def validate_range(self):
        """Endpoint types must agree with the all-day flag."""
        for value in (self.start, self.end):
            if value is None:
                continue
            if self.all_day and isinstance(value, datetime):
                raise ValueError("all-day events take date endpoints")
            if not self.all_day and not isinstance(value, datetime):
                raise ValueError("timed events take datetime endpoints")
        if self.end is not None and self.end < self.start:
            raise ValueError("end must be >= start")
        return self


class CalendarEvent(BaseModel):
    """Live event as held by the calendar model and shown by the widget."""

    id: str
    title: str
    start: datetime | date
    end: datetime | date | None = None
    all_day: bool = False
    color: str | None = None
    text_color: str | None = None
    editable: bool = True
    # Colour set in the document itself, kept so write-back preserves it
    event_color: str | None = None

    @classmethod
    def from_record(
        cls,
        record: EventRecord,
        color: str,
        text_color: str,
        editable: bool = True,
    ) -> "CalendarEvent":
        """Build the displayed event for a decoded record."""
        return cls(
            id=record.id,
            title=record.title,
            start=record.start,
            end=record.end,
            all_day=record.all_day,
            color=color,
            text_color=text_color,
            editable=editable,
            event_color=record.color,
        )

    def with_range(
        self,
        start: datetime | date,
        end: datetime | date | None,
        all_day: bool,
    ) -> "CalendarEvent":
        """Copy of this event moved or resized to a new range."""
        return self.model_copy(update={"start": start, "end": end, "all_day": all_day})

    def to_input(self) -> dict[str, Any]:
        """Widget event-input shape."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "start": _iso(self.start),
            "allDay": self.all_day,
            "color": self.color,
            "textColor": self.text_color,
            "editable": self.editable,
        }
        if self.end is not None:
            data["end"] = _iso(self.end)
        return data


class EventSource(BaseModel):
    """Event source handed to the widget.

    Local sources carry their events; remote sources only carry the remote
    calendar id and are fetched by the widget itself.
    """

    events: list[CalendarEvent] | None = None
    remote_id: str | None = None
    editable: bool = True
    color: str | None = None
    text_color: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.remote_id is not None

    def to_input(self) -> dict[str, Any]:
        """Widget event-source shape."""
        data: dict[str, Any] = {
            "editable": self.editable,
            "color": self.color,
            "textColor": self.text_color,
        }
        if self.remote_id is not None:
            data["googleCalendarId"] = self.remote_id
        if self.events is not None:
            data["events"] = [e.to_input() for e in self.events]
        return data
