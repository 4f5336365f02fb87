"""Keep the calendar view open and follow changes to the vault."""

import asyncio
import logging

import typer
from typing_extensions import Annotated

from notecal.storage.watcher import VaultWatcher
from notecal_cli.context import get_context
from notecal_cli.display import console

logger = logging.getLogger(__name__)


def watch(
    interval: Annotated[
        float | None,
        typer.Option("--interval", "-i", min=0.05, help="Seconds between vault scans"),
    ] = None,
) -> None:
    """Open the calendar view and sync it with the vault until interrupted."""
    ctx = get_context()
    try:
        asyncio.run(_watch(interval or ctx.config.poll_interval))
    except KeyboardInterrupt:
        console.print("\nStopped watching")


async def _watch(interval: float) -> None:
    ctx = get_context()
    view = ctx.view()

    async def report(*paths: str) -> None:
        if view.calendar is not None:
            console.print(
                f"[dim]{' -> '.join(paths)}[/dim]  {len(view.calendar)} event(s) shown"
            )

    async with view.session():
        if view.error_message:
            console.print(f"[red]{view.error_message}[/red]")
            raise typer.Exit(1)

        console.print(
            f"Watching [cyan]{ctx.vault.root}[/cyan] with {len(view.calendar or [])} event(s)"
        )
        watcher = VaultWatcher(ctx.vault)
        # Registered after the view, so reports see the updated model
        with ctx.bus.on_changed(report), ctx.bus.on_deleted(report), ctx.bus.on_renamed(report):
            await asyncio.gather(ctx.bus.run(), watcher.run(interval))
