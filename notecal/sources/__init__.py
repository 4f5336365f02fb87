"""Source adapter: turn configured calendar sources into widget event sources."""

import logging
from dataclasses import dataclass, field

from typing_extensions import assert_never

from notecal.config import CalendarConfig
from notecal.models.event import EventSource
from notecal.models.settings import ViewSettings
from notecal.models.source import ICSSource, LocalSource, RemoteSource
from notecal.sources.colors import resolve_color
from notecal.sources.local import build_local_source, source_owns, to_calendar_event
from notecal.sources.remote import build_remote_source
from notecal.storage.base import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class SourceBuildResult:
    """Outcome of building every configured source."""

    sources: list[EventSource] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing


def owning_source(settings: ViewSettings, path: str) -> LocalSource | None:
    """First local source, in settings order, whose scope contains path."""
    for source in settings.local_sources:
        if source_owns(source, path, settings.recursive_local):
            return source
    return None


async def build_event_sources(
    store: DocumentStore, settings: ViewSettings, config: CalendarConfig
) -> SourceBuildResult:
    """
    Build event sources for every configured calendar source, in order.

    A document that falls inside two overlapping local sources belongs to the
    first one only, so each identity appears once across all sources.
    """
    result = SourceBuildResult()
    for source in settings.calendar_sources:
        match source:
            case LocalSource():
                built = await build_local_source(
                    store, source, settings.recursive_local, config
                )
                if built is None:
                    result.missing.append(source.directory)
                    continue
                built.events = [
                    e for e in built.events or [] if owning_source(settings, e.id) is source
                ]
                result.sources.append(built)
            case RemoteSource():
                result.sources.append(build_remote_source(source, config))
            case ICSSource():
                logger.info(f"ICS source not supported yet, skipping: {source.url}")
                result.skipped.append(source.url)
            case _:
                assert_never(source)
    return result


__all__ = [
    "SourceBuildResult",
    "build_event_sources",
    "build_local_source",
    "build_remote_source",
    "owning_source",
    "resolve_color",
    "source_owns",
    "to_calendar_event",
]
