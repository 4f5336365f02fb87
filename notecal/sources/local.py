"""Local calendar sources: documents under a vault directory."""

import logging

from notecal.codec.frontmatter import decode
from notecal.config import CalendarConfig
from notecal.exceptions import DirectoryMissingError
from notecal.models.event import CalendarEvent, EventRecord, EventSource
from notecal.models.source import LocalSource
from notecal.sources.colors import resolve_color
from notecal.storage.base import DocumentStore
from notecal.utils import is_within

logger = logging.getLogger(__name__)


def source_owns(source: LocalSource, path: str, recursive: bool) -> bool:
    """True if a document path lies inside the source's directory scope."""
    return is_within(path, source.directory, recursive=recursive)


def to_calendar_event(
    record: EventRecord, source: LocalSource, config: CalendarConfig
) -> CalendarEvent:
    """Displayed event for a record owned by a local source."""
    return CalendarEvent.from_record(
        record,
        color=resolve_color(source, record.color, config),
        text_color=config.text_on_accent,
    )


async def load_records(
    store: DocumentStore, source: LocalSource, recursive: bool
) -> list[EventRecord]:
    """Decode every event document in the source's directory.

    Raises:
        DirectoryMissingError: If the source directory does not exist
    """
    paths = await store.list_directory(source.directory, recursive)
    records = []
    for path in paths:
        if not source_owns(source, path, recursive):
            continue
        record = decode(await store.read_metadata(path), path=path)
        if record is None:
            logger.debug(f"Not an event document: {path}")
            continue
        records.append(record)
    return records


async def build_local_source(
    store: DocumentStore,
    source: LocalSource,
    recursive: bool,
    config: CalendarConfig,
) -> EventSource | None:
    """
    Build the widget event source for a local directory.

    Args:
        store: Document store to read from
        source: Local source declaration
        recursive: Whether subdirectories are included
        config: Config for colour fallbacks

    Returns:
        EventSource with one event per event document, or None if the
        directory does not exist
    """
    try:
        records = await load_records(store, source, recursive)
    except DirectoryMissingError as e:
        logger.warning(f"Local calendar source unavailable: {e}")
        return None

    events = [to_calendar_event(record, source, config) for record in records]
    logger.info(f"Loaded {len(events)} event(s) from {source.directory or '/'}")
    return EventSource(
        events=events,
        editable=True,
        color=resolve_color(source, None, config),
        text_color=config.text_on_accent,
    )
