"""Document store protocol and change notifications."""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Protocol

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Protocol for the host file/metadata layer.

    Paths are vault-relative POSIX strings; a document's path is the identity
    of the event it describes.
    """

    async def read_metadata(self, path: str) -> dict[str, Any] | None:
        """Front-matter of a document, or None if missing or absent."""
        ...

    async def write_metadata(self, path: str, metadata: dict[str, Any]) -> None:
        """Replace a document's front-matter. Raises WriteFailureError."""
        ...

    async def list_directory(self, path: str, recursive: bool) -> list[str]:
        """Document paths under a directory. Raises DirectoryMissingError."""
        ...

    async def create_document(
        self, directory: str, name: str, metadata: dict[str, Any], body: str = ""
    ) -> str:
        """Create a new document and return its path. Raises WriteFailureError."""
        ...

    async def exists(self, path: str) -> bool:
        """True if a document exists at path."""
        ...


class NotificationKind(str, Enum):
    """Kinds of change notification."""

    CHANGED = "changed"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True)
class Notification:
    """A single change notification. ``old_path`` is only set for renames."""

    kind: NotificationKind
    path: str
    old_path: str | None = None


Handler = Callable[..., Awaitable[None]]


@dataclass(eq=False)
class Subscription:
    """Handle for a registered handler; closing it detaches the handler."""

    bus: "NotificationBus"
    kind: NotificationKind
    handler: Handler
    closed: bool = field(default=False)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.bus._detach(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class NotificationBus:
    """Ordered, one-at-a-time delivery of change notifications.

    ``publish`` only queues. ``drain`` delivers queued notifications in
    arrival order and awaits every handler of one notification before moving
    to the next. Handlers are looked up at delivery time, so a closed
    subscription never sees notifications that were queued before it closed.
    """

    def __init__(self):
        self._handlers: Dict[NotificationKind, List[Subscription]] = {
            kind: [] for kind in NotificationKind
        }
        self._pending: deque[Notification] = deque()
        self._wakeup = asyncio.Event()

    def subscribe(self, kind: NotificationKind, handler: Handler) -> Subscription:
        """Register an async handler for a notification kind."""
        subscription = Subscription(self, kind, handler)
        self._handlers[kind].append(subscription)
        return subscription

    def on_changed(self, handler: Callable[[str], Awaitable[None]]) -> Subscription:
        return self.subscribe(NotificationKind.CHANGED, handler)

    def on_deleted(self, handler: Callable[[str], Awaitable[None]]) -> Subscription:
        return self.subscribe(NotificationKind.DELETED, handler)

    def on_renamed(
        self, handler: Callable[[str, str], Awaitable[None]]
    ) -> Subscription:
        return self.subscribe(NotificationKind.RENAMED, handler)

    def _detach(self, subscription: Subscription) -> None:
        handlers = self._handlers[subscription.kind]
        if subscription in handlers:
            handlers.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        return sum(len(subs) for subs in self._handlers.values())

    @property
    def pending(self) -> int:
        return len(self._pending)

    def publish(self, notification: Notification) -> None:
        """Queue a notification for delivery."""
        logger.debug("Queued %s notification for %s", notification.kind.value, notification.path)
        self._pending.append(notification)
        self._wakeup.set()

    def changed(self, path: str) -> None:
        self.publish(Notification(NotificationKind.CHANGED, path))

    def deleted(self, path: str) -> None:
        self.publish(Notification(NotificationKind.DELETED, path))

    def renamed(self, old_path: str, new_path: str) -> None:
        self.publish(Notification(NotificationKind.RENAMED, new_path, old_path=old_path))

    async def drain(self) -> int:
        """Deliver every queued notification. Returns how many were delivered."""
        delivered = 0
        while self._pending:
            notification = self._pending.popleft()
            await self._deliver(notification)
            delivered += 1
        return delivered

    async def _deliver(self, notification: Notification) -> None:
        for subscription in list(self._handlers[notification.kind]):
            if subscription.closed:
                continue
            if notification.kind is NotificationKind.RENAMED:
                await subscription.handler(notification.old_path, notification.path)
            else:
                await subscription.handler(notification.path)

    async def run(self) -> None:
        """Deliver notifications as they are published, until cancelled."""
        while True:
            await self._wakeup.wait()
            self._wakeup.clear()
            await self.drain()
