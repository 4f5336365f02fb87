"""Read-only remote calendar sources."""

from notecal.config import CalendarConfig
from notecal.models.event import EventSource
from notecal.models.source import RemoteSource
from notecal.sources.colors import resolve_color


def build_remote_source(source: RemoteSource, config: CalendarConfig) -> EventSource:
    """Wrap a remote calendar id for the widget. Nothing is fetched here."""
    return EventSource(
        remote_id=source.url,
        editable=False,
        color=resolve_color(source, None, config),
        text_color=config.text_on_accent,
    )
