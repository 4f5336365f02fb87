"""Calendar view: owns the calendar model and wires it to the documents."""

import logging
from contextlib import ExitStack, asynccontextmanager
from datetime import date, datetime
from typing import Any, AsyncIterator

from notecal.config import CalendarConfig
from notecal.models.event import CalendarEvent
from notecal.models.settings import ViewSettings
from notecal.sources import build_event_sources
from notecal.storage.base import DocumentStore, NotificationBus
from notecal.sync.engine import EditResult, SyncEngine
from notecal.sync.model import CalendarModel
from notecal.sync.resolver import IdentityResolver
from notecal.workspace import Workspace

logger = logging.getLogger(__name__)

MISSING_DIRECTORY_MESSAGE = (
    "Error: the events directory was not a directory. "
    "Please change your events directory in settings."
)


class CalendarView:
    """One open calendar.

    ``open`` takes a settings snapshot, builds the sources and subscribes to
    document notifications; ``close`` releases all of it in one step.
    """

    def __init__(
        self,
        store: DocumentStore,
        bus: NotificationBus,
        config: CalendarConfig,
        workspace: Workspace,
    ):
        self.store = store
        self.bus = bus
        self.config = config
        self.workspace = workspace

        self.settings: ViewSettings | None = None
        self.calendar: CalendarModel | None = None
        self.engine: SyncEngine | None = None
        self.error_message: str | None = None
        # Declared sources that are not loaded (ICS feeds)
        self.skipped_sources: list[str] = []
        self._subscriptions: ExitStack | None = None

    @property
    def is_open(self) -> bool:
        return self.calendar is not None

    async def open(self, settings: ViewSettings | None = None) -> None:
        """Load settings, build sources and start listening for changes.

        When a local source directory is missing the view shows an inline
        message instead of a calendar and registers no listeners.
        """
        if self.is_open:
            await self.close()

        self.settings = settings or ViewSettings.load(self.config.settings_path)
        self.error_message = None

        result = await build_event_sources(self.store, self.settings, self.config)
        self.skipped_sources = list(result.skipped)
        if not result.ok:
            logger.warning(f"Missing calendar directories: {', '.join(result.missing)}")
            self.error_message = MISSING_DIRECTORY_MESSAGE
            return

        self.calendar = CalendarModel(result.sources)
        self.engine = SyncEngine(
            self.store,
            IdentityResolver(self.store),
            self.settings,
            self.config,
            self.calendar,
            self.workspace,
        )

        with ExitStack() as stack:
            stack.enter_context(self.bus.on_changed(self.engine.on_metadata_changed))
            stack.enter_context(self.bus.on_deleted(self.engine.on_deleted))
            stack.enter_context(self.bus.on_renamed(self.engine.on_renamed))
            self._subscriptions = stack.pop_all()

        logger.info(f"Calendar view opened with {len(self.calendar)} event(s)")

    async def close(self) -> None:
        """Detach every listener and release the calendar. Safe to call twice."""
        if self._subscriptions is not None:
            self._subscriptions.close()
            self._subscriptions = None
        if self.engine is not None:
            self.engine.close()
        if self.calendar is not None:
            self.calendar.destroy()
            self.calendar = None
        self.engine = None
        logger.info("Calendar view closed")

    @asynccontextmanager
    async def session(self, settings: ViewSettings | None = None) -> AsyncIterator["CalendarView"]:
        """Open the view for the duration of a block."""
        await self.open(settings)
        try:
            yield self
        finally:
            await self.close()

    def events(self) -> list[CalendarEvent]:
        if self.calendar is None:
            return []
        return self.calendar.events()

    def event_sources(self) -> list[dict[str, Any]]:
        """Widget input for everything the view shows."""
        if self.calendar is None:
            return []
        local = {"editable": True, "events": [e.to_input() for e in self.calendar.events()]}
        return [local] + [s.to_input() for s in self.calendar.remote_sources]

    # ------------------------------------------------------------------ #
    # Widget callbacks                                                    #
    # ------------------------------------------------------------------ #

    async def on_event_click(self, event_id: str, modifier_held: bool = False) -> None:
        if self.engine is not None:
            await self.engine.open_event(event_id, modifier_held)

    def on_select(
        self, start: date | datetime, end: date | datetime | None, all_day: bool
    ) -> None:
        """Open the dialog for a new event over the selected range."""
        if self.engine is None:
            return
        self.workspace.open_edit_dialog(self.engine.selection_metadata(start, end, all_day))

    async def on_event_modified(self, event: CalendarEvent) -> bool:
        """Persist a move or resize. False tells the widget to revert."""
        if self.engine is None:
            return False
        result: EditResult = await self.engine.modify_event(event)
        return bool(result)

    def on_event_hover(self, event_id: str) -> None:
        if self.engine is not None:
            self.engine.hover_event(event_id)

    async def create_event(
        self, title: str, metadata: dict[str, Any], directory: str | None = None
    ) -> str | None:
        """Submit handler for the new-event dialog."""
        if self.engine is None:
            return None
        return await self.engine.create_event(title, metadata, directory)
