"""Show the events the calendar view would display."""

import asyncio

import typer

from notecal_cli.context import get_context
from notecal_cli.display import TableRenderer, console


def events() -> None:
    """Open the calendar view and list its events."""
    asyncio.run(_events())


async def _events() -> None:
    ctx = get_context()
    async with ctx.view().session() as view:
        if view.error_message:
            console.print(f"[red]{view.error_message}[/red]")
            raise typer.Exit(1)
        TableRenderer().render_events(view.events())
        remote = view.calendar.remote_sources if view.calendar else []
        if remote:
            console.print(f"[dim]{len(remote)} read-only remote source(s) not listed[/dim]")
        for url in view.skipped_sources:
            console.print(f"[dim]ICS source not loaded: {url}[/dim]")
