"""Exception hierarchy for calendar operations."""


class CalendarError(Exception):
    """Base exception for calendar operations."""

    pass


class DirectoryMissingError(CalendarError):
    """Configured source directory does not exist or is not a directory."""

    pass


class IdentityNotFoundError(CalendarError):
    """No backing document could be found for an event."""

    pass


class IdentityAmbiguousError(CalendarError):
    """Two or more documents collide under the same derived identity."""

    def __init__(self, message: str, candidates: list[str] | None = None):
        super().__init__(message)
        self.candidates = candidates or []


class WriteFailureError(CalendarError):
    """Writing a document or its metadata failed."""

    pass


class DuplicateIdentityError(CalendarError):
    """An event with the same id is already present in the calendar model."""

    pass


class SettingsError(CalendarError):
    """View settings file could not be read or validated."""

    pass


class UnsupportedFormatError(CalendarError):
    """Export format not supported."""

    pass


class ExportError(CalendarError):
    """Error during calendar export."""

    pass
