"""Tests for the vault store, notification bus and watcher."""

import os

import pytest

from notecal.exceptions import DirectoryMissingError, WriteFailureError
from notecal.storage.base import Notification, NotificationBus, NotificationKind
from notecal.storage.watcher import VaultWatcher


def record_into(log: list):
    async def handler(*args):
        log.append(args)

    return handler


async def test_read_metadata(vault, note):
    """Test metadata is read from front-matter."""
    note("events/a.md", {"title": "A", "date": "2024-01-05"}, "body\n")
    note("events/plain.md", None, "# no metadata\n")

    assert await vault.read_metadata("events/a.md") == {"title": "A", "date": "2024-01-05"}
    assert await vault.read_metadata("events/plain.md") is None
    assert await vault.read_metadata("events/missing.md") is None


async def test_exists(vault, note):
    """Test exists is true only for documents."""
    note("events/a.md", {"date": "2024-01-05"})
    assert await vault.exists("events/a.md") is True
    assert await vault.exists("events") is False
    assert await vault.exists("events/b.md") is False


def test_path_escaping_vault_rejected(vault):
    """Test paths outside the vault root are refused."""
    with pytest.raises(ValueError):
        vault.absolute("../outside.md")


async def test_write_metadata_keeps_body(vault, vault_dir, bus, note):
    """Test writing metadata preserves the body and announces the change."""
    note("events/a.md", {"title": "A", "date": "2024-01-05"}, "Agenda\n")

    await vault.write_metadata("./events/a.md", {"title": "A", "date": "2024-01-06"})

    metadata = await vault.read_metadata("events/a.md")
    assert metadata["date"] == "2024-01-06"
    assert (vault_dir / "events/a.md").read_text(encoding="utf-8").endswith("---\nAgenda\n")
    assert bus.pending == 1


async def test_write_metadata_missing_document(vault):
    """Test writing to a missing document fails."""
    with pytest.raises(WriteFailureError):
        await vault.write_metadata("events/ghost.md", {"date": "2024-01-05"})


async def test_list_directory(vault, note):
    """Test listing is sorted, skips hidden paths and honours recursion."""
    note("events/b.md", {})
    note("events/a.md", {})
    note("events/sub/c.md", {})
    note("events/.trash/d.md", {})
    note("events/readme.txt", None, "not markdown")

    assert await vault.list_directory("events", recursive=False) == ["events/a.md", "events/b.md"]
    assert await vault.list_directory("events", recursive=True) == [
        "events/a.md",
        "events/b.md",
        "events/sub/c.md",
    ]


async def test_list_directory_missing(vault, note):
    """Test a missing directory raises DirectoryMissingError."""
    note("file.md", {})
    with pytest.raises(DirectoryMissingError):
        await vault.list_directory("nope", recursive=False)
    with pytest.raises(DirectoryMissingError):
        await vault.list_directory("file.md", recursive=False)


async def test_create_document(vault, bus):
    """Test documents are created with metadata and announced."""
    path = await vault.create_document("events", "2024-01-05 Standup", {"title": "Standup"})
    assert path == "events/2024-01-05 Standup.md"
    assert await vault.read_metadata(path) == {"title": "Standup"}
    assert bus.pending == 1

    with pytest.raises(WriteFailureError):
        await vault.create_document("events", "2024-01-05 Standup.md", {"title": "Again"})


async def test_rename_and_delete_publish(vault, bus, note):
    """Test rename and delete publish their notifications in order."""
    note("events/a.md", {"date": "2024-01-05"})
    log = []
    bus.on_renamed(record_into(log))
    bus.on_deleted(record_into(log))

    await vault.rename("events/a.md", "archive/a.md")
    await vault.delete("archive/a.md")
    assert await bus.drain() == 2

    assert log == [("events/a.md", "archive/a.md"), ("archive/a.md",)]


async def test_bus_delivers_in_arrival_order():
    """Test notifications are delivered one at a time, in order."""
    bus = NotificationBus()
    log = []

    async def changed(path):
        log.append(("changed", path))

    async def deleted(path):
        log.append(("deleted", path))

    bus.on_changed(changed)
    bus.on_deleted(deleted)
    bus.changed("a.md")
    bus.deleted("b.md")
    bus.changed("c.md")

    assert await bus.drain() == 3
    assert log == [("changed", "a.md"), ("deleted", "b.md"), ("changed", "c.md")]
    assert bus.pending == 0


async def test_bus_closed_subscription_receives_nothing():
    """Test a subscription closed before delivery sees no queued notifications."""
    bus = NotificationBus()
    log = []
    subscription = bus.on_changed(record_into(log))
    bus.changed("a.md")

    subscription.close()
    subscription.close()
    await bus.drain()

    assert log == []
    assert subscription.closed is True
    assert bus.subscriber_count == 0


async def test_bus_subscription_context_manager():
    """Test leaving the with block detaches the handler."""
    bus = NotificationBus()
    log = []
    with bus.on_changed(record_into(log)):
        assert bus.subscriber_count == 1
    assert bus.subscriber_count == 0


async def test_bus_publish_notification():
    """Test publishing a prepared notification."""
    bus = NotificationBus()
    log = []
    bus.subscribe(NotificationKind.RENAMED, record_into(log))
    bus.publish(Notification(NotificationKind.RENAMED, "new.md", old_path="old.md"))
    await bus.drain()
    assert log == [("old.md", "new.md")]


async def test_watcher_detects_change_delete_and_rename(vault, vault_dir, bus, note):
    """Test external edits are turned into notifications."""
    note("events/a.md", {"date": "2024-01-05"})
    note("events/b.md", {"date": "2024-01-06"})
    note("events/c.md", {"date": "2024-01-07"})
    watcher = VaultWatcher(vault)
    await watcher.start()
    assert await watcher.scan() == 0

    log = []
    bus.on_changed(lambda path: _append(log, ("changed", path)))
    bus.on_deleted(lambda path: _append(log, ("deleted", path)))
    bus.on_renamed(lambda old, new: _append(log, ("renamed", old, new)))

    note("events/new.md", {"date": "2024-01-09"})
    os.rename(vault_dir / "events/a.md", vault_dir / "events/renamed.md")
    (vault_dir / "events/b.md").unlink()
    note("events/c.md", {"date": "2024-01-08", "title": "Longer metadata"})

    assert await watcher.scan() == 4
    await bus.drain()

    assert ("renamed", "events/a.md", "events/renamed.md") in log
    assert ("deleted", "events/b.md") in log
    assert ("changed", "events/c.md") in log
    assert ("changed", "events/new.md") in log
    assert len(log) == 4


async def _append(log, entry):
    log.append(entry)


async def test_directory_outside_vault_is_missing(vault):
    """Test paths escaping the vault are reported as missing, not raised."""
    with pytest.raises(DirectoryMissingError):
        await vault.list_directory("../elsewhere", recursive=False)
    assert await vault.exists("../elsewhere/a.md") is False
