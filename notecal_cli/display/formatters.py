"""Pure formatting functions for display output."""

from datetime import date, datetime, timedelta

from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.text import Text


def format_when(value: date | datetime) -> str:
    """Format an event endpoint.

    Returns:
        "2024-01-05" for dates, "2024-01-05 09:30" for datetimes.
    """
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    return value.isoformat()


def format_range(start: date | datetime, end: date | datetime | None, all_day: bool) -> str:
    """Format an event range for display.

    All-day ends are exclusive in the model and shown inclusive here.
    """
    if end is None:
        return format_when(start) if not all_day else f"{format_when(start)} (all day)"
    if all_day:
        last_day = end - timedelta(days=1)
        if last_day <= start:
            return f"{format_when(start)} (all day)"
        return f"{format_when(start)} → {format_when(last_day)} (all day)"
    if isinstance(start, datetime) and isinstance(end, datetime) and start.date() == end.date():
        return f"{format_when(start)}–{end.strftime('%H:%M')}"
    return f"{format_when(start)} → {format_when(end)}"


def swatch(color: str | None, label: str = "") -> Text:
    """Coloured square followed by a label; unstyled if the colour is unknown to Rich."""
    text = Text()
    if color:
        try:
            text.append("■ ", style=Style.parse(color))
        except StyleSyntaxError:
            text.append("■ ")
    text.append(label)
    return text
