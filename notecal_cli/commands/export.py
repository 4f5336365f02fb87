"""Export the events shown by the calendar view."""

import asyncio
from pathlib import Path

import typer
from typing_extensions import Annotated

from notecal.exceptions import UnsupportedFormatError
from notecal.output import setup_writer
from notecal_cli.context import get_context
from notecal_cli.display import console


def export(
    output: Annotated[Path, typer.Argument(help="Output file")],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: ics or json"),
    ] = "ics",
    name: Annotated[str, typer.Option("--name", help="Calendar name")] = "Calendar",
) -> None:
    """Export local events to an ICS or JSON file."""
    try:
        writer = setup_writer(format)
    except UnsupportedFormatError as e:
        raise typer.BadParameter(str(e), param_hint="--format")
    asyncio.run(_export(writer, output, name))


async def _export(writer, output: Path, name: str) -> None:
    ctx = get_context()
    async with ctx.view().session() as view:
        if view.error_message:
            console.print(f"[red]{view.error_message}[/red]")
            raise typer.Exit(1)
        events = view.events()
        writer.write(events, output, name=name)
        console.print(f"Exported {len(events)} event(s) to [cyan]{output}[/cyan]")
