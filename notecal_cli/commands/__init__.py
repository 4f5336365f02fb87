"""CLI commands package."""

from notecal_cli.commands.events import events
from notecal_cli.commands.export import export
from notecal_cli.commands.move import move
from notecal_cli.commands.new import new
from notecal_cli.commands.sources import sources
from notecal_cli.commands.watch import watch

__all__ = [
    "events",
    "export",
    "move",
    "new",
    "sources",
    "watch",
]
