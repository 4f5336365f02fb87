"""Storage layer: document store, notifications, and watcher."""

from notecal.storage.base import (
    DocumentStore,
    Notification,
    NotificationBus,
    NotificationKind,
    Subscription,
)
from notecal.storage.vault import Vault
from notecal.storage.watcher import VaultWatcher

__all__ = [
    "DocumentStore",
    "Notification",
    "NotificationBus",
    "NotificationKind",
    "Subscription",
    "Vault",
    "VaultWatcher",
]
