"""notecal: calendar view over events stored as front-matter in markdown notes."""

from notecal.config import CalendarConfig
from notecal.view import CalendarView

__version__ = "0.1.0"

__all__ = ["CalendarConfig", "CalendarView", "__version__"]
