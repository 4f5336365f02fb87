"""Move or resize an event, the way a drag in the calendar would."""

import asyncio
import logging
from datetime import datetime, timedelta

import typer
from typing_extensions import Annotated

from notecal_cli.context import get_context
from notecal_cli.display import console, format_range
from notecal_cli.utils import build_range, parse_time_option

logger = logging.getLogger(__name__)


def move(
    path: Annotated[str, typer.Argument(help="Vault path of the event document")],
    on: Annotated[
        datetime,
        typer.Option("--date", "-d", formats=["%Y-%m-%d"], help="New start date"),
    ],
    end_date: Annotated[
        datetime | None,
        typer.Option("--end-date", formats=["%Y-%m-%d"], help="New last day"),
    ] = None,
    start: Annotated[str | None, typer.Option("--start", help="Start time (HH:MM)")] = None,
    end: Annotated[str | None, typer.Option("--end", help="End time (HH:MM)")] = None,
    all_day: Annotated[bool, typer.Option("--all-day", help="Make it an all-day event")] = False,
) -> None:
    """Move or resize an event and write the change back to its document."""
    start_time = parse_time_option(start, "--start")
    end_time = parse_time_option(end, "--end")
    asyncio.run(
        _move(
            path,
            on.date(),
            end_date.date() if end_date else None,
            start_time,
            end_time,
            all_day,
        )
    )


async def _move(path, on, end_date, start_time, end_time, all_day) -> None:
    ctx = get_context()
    async with ctx.view().session() as view:
        if view.error_message or view.calendar is None:
            console.print(f"[red]{view.error_message}[/red]")
            raise typer.Exit(1)

        event = view.calendar.get_event_by_id(path)
        if event is None:
            console.print(f"[red]No event for '{path}'[/red]")
            raise typer.Exit(1)

        if start_time is None and not all_day and not event.all_day and isinstance(
            event.start, datetime
        ):
            start_time = event.start.time()
        if end_date is None and end_time is None and event.end is not None:
            # Keep the event's length when only the start moves
            span = event.end - event.start
            if event.all_day and (all_day or start_time is None):
                end_date = on + span - timedelta(days=1)
            elif not event.all_day and start_time is not None and not all_day:
                end_dt = datetime.combine(on, start_time) + span
                end_date, end_time = end_dt.date(), end_dt.time()
        new_start, new_end, new_all_day = build_range(
            on, end_date, start_time, end_time, all_day
        )
        edited = event.with_range(new_start, new_end, new_all_day)

        if not await view.on_event_modified(edited):
            # The widget would revert the drag; the model was never touched
            raise typer.Exit(1)

        await ctx.bus.drain()
        updated = view.calendar.get_event_by_id(path)
        if updated is not None:
            console.print(
                f"Moved [bold]{updated.title}[/bold] to "
                f"{format_range(updated.start, updated.end, updated.all_day)}"
            )
