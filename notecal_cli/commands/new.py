"""Create an event document, the way selecting a range in the calendar would."""

import asyncio
from datetime import datetime

import typer
from typing_extensions import Annotated

from notecal_cli.context import get_context
from notecal_cli.display import console
from notecal_cli.utils import build_range, parse_time_option


def new(
    title: Annotated[str, typer.Argument(help="Event title")],
    on: Annotated[
        datetime,
        typer.Option("--date", "-d", formats=["%Y-%m-%d"], help="Start date"),
    ],
    end_date: Annotated[
        datetime | None,
        typer.Option("--end-date", formats=["%Y-%m-%d"], help="Last day"),
    ] = None,
    start: Annotated[str | None, typer.Option("--start", help="Start time (HH:MM)")] = None,
    end: Annotated[str | None, typer.Option("--end", help="End time (HH:MM)")] = None,
    directory: Annotated[
        str | None,
        typer.Option("--directory", help="Target directory (default: first local source)"),
    ] = None,
) -> None:
    """Create a new event document."""
    start_time = parse_time_option(start, "--start")
    end_time = parse_time_option(end, "--end")
    range_ = build_range(
        on.date(), end_date.date() if end_date else None, start_time, end_time, False
    )
    asyncio.run(_new(title, range_, directory))


async def _new(title, range_, directory) -> None:
    ctx = get_context()
    async with ctx.view().session() as view:
        if view.error_message:
            console.print(f"[red]{view.error_message}[/red]")
            raise typer.Exit(1)

        view.on_select(*range_)
        fields, _ = ctx.workspace.dialogs[-1]
        path = await view.create_event(title, fields, directory)
        if path is None:
            raise typer.Exit(1)

        await ctx.bus.drain()
        if view.calendar is not None and path in view.calendar:
            console.print(f"Created [bold]{title}[/bold] at [cyan]{path}[/cyan]")
        else:
            console.print(
                f"Created [cyan]{path}[/cyan] (outside the configured calendar sources)"
            )
