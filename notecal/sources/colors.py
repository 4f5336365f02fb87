"""Display colour resolution."""

from typing_extensions import assert_never

from notecal.config import CalendarConfig
from notecal.models.source import CalendarSource, ICSSource, LocalSource, RemoteSource


def resolve_color(
    source: CalendarSource, event_color: str | None, config: CalendarConfig
) -> str:
    """Event colour, else source colour, else the theme accent."""
    if event_color:
        return event_color
    match source:
        case LocalSource(color=color) | RemoteSource(color=color) | ICSSource(color=color):
            return color or config.accent_color
        case _:
            assert_never(source)
