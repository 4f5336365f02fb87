"""Sync engine: keep the calendar model and the documents consistent.

Document notifications (changed, deleted, renamed) update the in-memory
model. Calendar edits (move, resize, create) are written back to documents
and reach the model only through the notification the write triggers.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Set

from notecal.codec.frontmatter import (
    decode,
    derive_basename,
    encode,
    encode_from_calendar_event,
    merge_metadata,
    parse_date,
)
from notecal.config import CalendarConfig
from notecal.exceptions import (
    IdentityAmbiguousError,
    IdentityNotFoundError,
    WriteFailureError,
)
from notecal.models.event import CalendarEvent
from notecal.models.settings import ViewSettings
from notecal.sources import owning_source, to_calendar_event
from notecal.storage.base import DocumentStore
from notecal.sync.model import CalendarModel
from notecal.sync.resolver import IdentityResolver
from notecal.utils import normalize_path, path_prefix
from notecal.workspace import Workspace

logger = logging.getLogger(__name__)

AMBIGUOUS_NOTICE = (
    "Multiple events with the same name on the same date are not yet supported. "
    "Please rename your event before moving it."
)
NOT_FOUND_NOTICE = (
    "Could not find the note for this event. It may have been moved or deleted."
)
BUSY_NOTICE = "This event is still being saved. Please try again in a moment."


class EditFailure(str, Enum):
    """Why a calendar edit was not written back."""

    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    WRITE_FAILED = "write_failed"
    BUSY = "busy"


@dataclass(frozen=True)
class EditResult:
    """Outcome of a write-back. Truthy on success."""

    ok: bool
    failure: EditFailure | None = None
    message: str | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "EditResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, failure: EditFailure, message: str) -> "EditResult":
        return cls(ok=False, failure=failure, message=message)


class SyncEngine:
    """State machine over the calendar model, one state per identity.

    The settings snapshot and the calendar model belong to the view that
    created the engine; nothing else mutates the model.
    """

    def __init__(
        self,
        store: DocumentStore,
        resolver: IdentityResolver,
        settings: ViewSettings,
        config: CalendarConfig,
        calendar: CalendarModel,
        workspace: Workspace,
    ):
        self.store = store
        self.resolver = resolver
        self.settings = settings
        self.config = config
        self.calendar = calendar
        self.workspace = workspace
        # Identities with a write-back in progress
        self._in_flight: Set[str] = set()
        # Change notifications that arrived for an in-flight identity
        self._deferred: Set[str] = set()
        self._closed = False

    def is_in_flight(self, path: str) -> bool:
        return normalize_path(path) in self._in_flight

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Stop touching the model and the workspace.

        Write-backs already in progress still finish, but their deferred
        change notifications are dropped along with the model.
        """
        self._closed = True
        self._deferred.clear()

    # ------------------------------------------------------------------ #
    # Document notifications                                              #
    # ------------------------------------------------------------------ #

    async def on_metadata_changed(self, path: str) -> None:
        """Re-derive the event for a document whose metadata changed.

        A document that no longer decodes keeps its current event; only a
        delete or rename removes one.
        """
        path = normalize_path(path)
        if self._closed:
            return
        if path in self._in_flight:
            logger.debug(f"Deferring change for {path} until its write-back completes")
            self._deferred.add(path)
            return

        source = owning_source(self.settings, path)
        if source is None:
            return

        record = decode(await self.store.read_metadata(path), path=path)
        if record is None:
            logger.debug(f"Not an event document: {path}")
            return
        if self._closed:
            return

        self.calendar.remove_event(path)
        self.calendar.add_event(to_calendar_event(record, source, self.config))
        logger.debug(f"Synced event {path}")

    async def on_deleted(self, path: str) -> None:
        if self._closed:
            return
        path = normalize_path(path)
        if self.calendar.remove_event(path):
            logger.debug(f"Removed event for deleted document {path}")

    async def on_renamed(self, old_path: str, new_path: str) -> None:
        """Drop the old identity and derive the new one from scratch."""
        if self._closed:
            return
        self.calendar.remove_event(normalize_path(old_path))
        await self.on_metadata_changed(new_path)

    # ------------------------------------------------------------------ #
    # Calendar edits                                                      #
    # ------------------------------------------------------------------ #

    async def modify_event(self, event: CalendarEvent) -> EditResult:
        """
        Write a moved or resized event back to its document.

        The model is left as the widget rendered it; on failure the widget
        reverts the change itself.

        Returns:
            EditResult, truthy only after the write succeeded
        """
        path = normalize_path(event.id)
        if path in self._in_flight:
            logger.warning(f"Rejected overlapping edit for {path}")
            return self._fail(EditFailure.BUSY, BUSY_NOTICE)

        self._in_flight.add(path)
        try:
            return await self._write_back(path, event)
        finally:
            self._in_flight.discard(path)
            if path in self._deferred and not self._closed:
                self._deferred.discard(path)
                await self.on_metadata_changed(path)

    async def _write_back(self, path: str, event: CalendarEvent) -> EditResult:
        try:
            (await self.resolver.resolve_by_path(path)).unwrap()
            encoded = encode_from_calendar_event(event)
            (
                await self.resolver.resolve_by_directory_and_title(
                    path_prefix(path), event.title, on=encoded["date"], pending=path
                )
            ).unwrap()
        except IdentityNotFoundError:
            logger.warning(f"No backing document for edited event {path}")
            return self._fail(EditFailure.NOT_FOUND, NOT_FOUND_NOTICE)
        except IdentityAmbiguousError as e:
            logger.warning(f"Refusing to write {path}: {e}")
            return self._fail(EditFailure.AMBIGUOUS, AMBIGUOUS_NOTICE)

        existing = await self.store.read_metadata(path)
        try:
            await self.store.write_metadata(path, merge_metadata(existing, encoded))
        except WriteFailureError as e:
            logger.warning(f"Write-back failed for {path}: {e}")
            return self._fail(EditFailure.WRITE_FAILED, f"Could not save {path}: {e}")

        logger.info(f"Wrote calendar edit to {path}")
        return EditResult.success()

    def _fail(self, failure: EditFailure, message: str) -> EditResult:
        if not self._closed:
            self.workspace.show_notice(message)
        return EditResult.failed(failure, message)

    def selection_metadata(
        self, start: date | datetime, end: date | datetime | None, all_day: bool
    ) -> dict[str, Any]:
        """Partial metadata for a range selected in the calendar."""
        return encode(start, end, all_day)

    async def create_event(
        self,
        title: str,
        metadata: dict[str, Any],
        directory: str | None = None,
    ) -> str | None:
        """
        Create a document for a new event.

        The model is not touched; the new document's change notification
        adds the event.

        Args:
            title: Event title
            metadata: Range metadata, usually from selection_metadata
            directory: Target directory (default: first local source)

        Returns:
            Path of the created document, or None on failure
        """
        if directory is None:
            local_sources = self.settings.local_sources
            if not local_sources:
                self.workspace.show_notice("No local calendar is configured to hold new events.")
                return None
            directory = local_sources[0].directory

        fields = {"title": title, **metadata}
        record = decode(fields, path=f"{directory}/{title}.md")
        if record is None:
            self.workspace.show_notice(f"Cannot create event '{title}': invalid date range.")
            return None
        fields["date"] = parse_date(fields["date"])
        if "endDate" in fields:
            fields["endDate"] = parse_date(fields["endDate"])

        name = derive_basename(record.start, title)
        try:
            path = await self.store.create_document(directory, name, fields)
        except WriteFailureError as e:
            logger.warning(f"Failed to create event '{title}': {e}")
            self.workspace.show_notice(f"Could not create event '{title}': {e}")
            return None
        logger.info(f"Created event document {path}")
        return path

    async def open_event(self, event_id: str, modifier_held: bool) -> None:
        """Open the backing document (modifier held) or the edit dialog."""
        path = normalize_path(event_id)
        if modifier_held:
            if (await self.resolver.resolve_by_path(path)).found:
                self.workspace.open_document(path)
            else:
                self.workspace.show_notice(NOT_FOUND_NOTICE)
            return

        event = self.calendar.get_event_by_id(path)
        if event is None:
            logger.debug(f"Clicked event {path} is not in the calendar")
            return
        self.workspace.open_edit_dialog(encode_from_calendar_event(event), event_id=path)

    def hover_event(self, event_id: str) -> None:
        self.workspace.show_hover(normalize_path(event_id))
