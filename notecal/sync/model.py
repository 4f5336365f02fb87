"""In-memory calendar model."""

import logging
from typing import Dict, List

from notecal.exceptions import CalendarError, DuplicateIdentityError
from notecal.models.event import CalendarEvent, EventSource

logger = logging.getLogger(__name__)


class CalendarModel:
    """Live events keyed by identity, as the rendering widget holds them.

    At most one event exists per id. ``add_event`` refuses duplicates, so
    updates must remove the old event first.
    """

    def __init__(self, sources: List[EventSource] | None = None):
        self._events: Dict[str, CalendarEvent] = {}
        self._remote_sources: List[EventSource] = []
        self._destroyed = False
        for source in sources or []:
            self.add_event_source(source)

    def _check_alive(self) -> None:
        if self._destroyed:
            raise CalendarError("Calendar has been destroyed")

    def add_event_source(self, source: EventSource) -> None:
        """Load a source: local events are added, remote ones are kept as declarations."""
        self._check_alive()
        if source.is_remote:
            self._remote_sources.append(source)
            return
        for event in source.events or []:
            self.add_event(event)

    def add_event(self, event: CalendarEvent) -> CalendarEvent:
        self._check_alive()
        if event.id in self._events:
            raise DuplicateIdentityError(f"Event already present: {event.id}")
        self._events[event.id] = event
        logger.debug(f"Added event {event.id}")
        return event

    def remove_event(self, event_id: str) -> bool:
        """Remove an event. Removing an unknown id is a no-op."""
        self._check_alive()
        removed = self._events.pop(event_id, None)
        if removed is not None:
            logger.debug(f"Removed event {event_id}")
        return removed is not None

    def get_event_by_id(self, event_id: str) -> CalendarEvent | None:
        self._check_alive()
        return self._events.get(event_id)

    def events(self) -> List[CalendarEvent]:
        """Events ordered by start, then id."""
        self._check_alive()
        return sorted(self._events.values(), key=lambda e: (e.start.isoformat(), e.id))

    @property
    def remote_sources(self) -> List[EventSource]:
        return list(self._remote_sources)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events

    def destroy(self) -> None:
        """Release every event and source. The model cannot be used afterwards."""
        self._events.clear()
        self._remote_sources.clear()
        self._destroyed = True
