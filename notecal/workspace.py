"""Host UI services the calendar view calls back into."""

from typing import Any, Protocol


class Workspace(Protocol):
    """Protocol for the host application's UI surface."""

    def show_notice(self, message: str) -> None:
        """Show a transient, user-visible notice."""
        ...

    def open_document(self, path: str) -> None:
        """Open a backing document for direct editing."""
        ...

    def open_edit_dialog(self, fields: dict[str, Any], event_id: str | None = None) -> None:
        """Open the event dialog pre-populated with fields.

        ``event_id`` is set when editing an existing event and None when the
        dialog creates a new one.
        """
        ...

    def show_hover(self, path: str) -> None:
        """Show a hover preview of a backing document."""
        ...
