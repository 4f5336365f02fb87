"""Output layer for calendar exports."""

from notecal.exceptions import UnsupportedFormatError
from notecal.output.base import CalendarWriter
from notecal.output.ics_writer import ICSWriter
from notecal.output.json_writer import JSONWriter


def setup_writer(format: str) -> CalendarWriter:
    """Get writer for format."""
    if format == "ics":
        return ICSWriter()
    elif format == "json":
        return JSONWriter()
    else:
        raise UnsupportedFormatError(f"Unsupported output format: {format}")


__all__ = [
    "CalendarWriter",
    "ICSWriter",
    "JSONWriter",
    "setup_writer",
]
