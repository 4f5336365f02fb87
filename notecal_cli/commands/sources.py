"""List configured calendar sources."""

from typing_extensions import assert_never

from notecal.models.source import ICSSource, LocalSource, RemoteSource
from notecal.sources import resolve_color
from notecal_cli.context import get_context
from notecal_cli.display.table_renderer import SourceInfo, TableRenderer


def sources() -> None:
    """List calendar sources from the view settings, with their status."""
    ctx = get_context()
    settings = ctx.load_settings()
    renderer = TableRenderer()

    infos = []
    for source in settings.calendar_sources:
        color = resolve_color(source, None, ctx.config)
        match source:
            case LocalSource():
                try:
                    exists = ctx.vault.absolute(source.directory).is_dir()
                except ValueError:
                    exists = False
                infos.append(
                    SourceInfo(
                        kind="local",
                        location=source.directory or "/",
                        color=color,
                        status="ok" if exists else "missing",
                    )
                )
            case RemoteSource():
                infos.append(SourceInfo("remote", source.url, color, "ok"))
            case ICSSource():
                infos.append(SourceInfo("ics", source.url, color, "disabled"))
            case _:
                assert_never(source)

    renderer.render_sources(infos, settings.recursive_local)
