"""CLI app definition and command routing."""

import typer
from typing_extensions import Annotated

from notecal_cli import setup_logging
from notecal_cli.commands import events, export, move, new, sources, watch
from notecal_cli.context import CLIContext, set_context

app = typer.Typer(
    help="Calendar view over events stored in markdown front-matter.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show info messages")
    ] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only show errors")] = False,
) -> None:
    """Set up logging and the shared command context."""
    ctx = CLIContext(verbose=verbose, quiet=quiet)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)
    set_context(ctx)


app.command("sources")(sources)
app.command("events")(events)
app.command("move")(move)
app.command("new")(new)
app.command("watch")(watch)
app.command("export")(export)
