"""Console implementation of the host workspace."""

import logging
from typing import Any

from notecal_cli.display.console import console

logger = logging.getLogger(__name__)


class ConsoleWorkspace:
    """Prints what a desktop host would show in its UI.

    Dialog requests are recorded so commands can act on them (the ``new``
    command submits the dialog it opened).
    """

    def __init__(self):
        self.notices: list[str] = []
        self.dialogs: list[tuple[dict[str, Any], str | None]] = []

    def show_notice(self, message: str) -> None:
        self.notices.append(message)
        console.print(f"[yellow]{message}[/yellow]")

    def open_document(self, path: str) -> None:
        console.print(f"Open [cyan]{path}[/cyan]")

    def open_edit_dialog(self, fields: dict[str, Any], event_id: str | None = None) -> None:
        self.dialogs.append((fields, event_id))
        logger.debug(f"Edit dialog requested for {event_id or 'new event'}: {fields}")

    def show_hover(self, path: str) -> None:
        console.print(f"[dim]{path}[/dim]")
