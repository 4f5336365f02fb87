"""Table renderer for sources and events."""

from dataclasses import dataclass

from rich.table import Table

from notecal.models.event import CalendarEvent
from notecal_cli.display.console import console
from notecal_cli.display.formatters import format_range, swatch


@dataclass
class SourceInfo:
    """Information about a configured source for display."""

    kind: str
    location: str
    color: str
    status: str


class TableRenderer:
    """Render tables for sources and events.

    Uses Rich's Table class for consistent, well-formatted output.
    """

    def render_sources(self, sources: list[SourceInfo], recursive: bool) -> None:
        if not sources:
            console.print("No calendar sources configured")
            return

        mode = "recursive" if recursive else "top-level only"
        console.print(f"Calendar sources ({mode}):")
        console.print()

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("#", style="dim")
        table.add_column("KIND", style="cyan")
        table.add_column("LOCATION")
        table.add_column("COLOR")
        table.add_column("STATUS")

        for index, info in enumerate(sources, 1):
            status = {
                "ok": "[green]ok[/green]",
                "missing": "[red]missing[/red]",
                "disabled": "[dim]disabled[/dim]",
            }.get(info.status, info.status)
            table.add_row(
                str(index),
                info.kind,
                info.location,
                swatch(info.color, info.color),
                status,
            )

        console.print(table)

    def render_events(self, events: list[CalendarEvent]) -> None:
        if not events:
            console.print("No events found")
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("WHEN", style="dim")
        table.add_column("TITLE", style="bold")
        table.add_column("DOCUMENT", style="cyan")

        for event in events:
            table.add_row(
                format_range(event.start, event.end, event.all_day),
                swatch(event.color, event.title),
                event.id,
            )

        console.print(table)
        console.print(f"\n[dim]{len(events)} event(s)[/dim]")
