"""Polling watcher for changes made to the vault outside this process."""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Dict

from notecal.storage.vault import DOCUMENT_SUFFIX, Vault

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileState:
    """Snapshot of one document on disk."""

    inode: int
    mtime_ns: int
    size: int


class VaultWatcher:
    """Detects external edits by diffing directory snapshots.

    A document that disappears while a new one with the same inode appears is
    reported as a rename; other disappearances are deletions, and new or
    modified documents are reported as changed.
    """

    def __init__(self, vault: Vault):
        self.vault = vault
        self._snapshot: Dict[str, FileState] = {}

    def _take_snapshot(self) -> Dict[str, FileState]:
        snapshot: Dict[str, FileState] = {}
        root = str(self.vault.root)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            for filename in filenames:
                if not filename.endswith(DOCUMENT_SUFFIX) or filename.startswith("."):
                    continue
                full_path = os.path.join(dirpath, filename)
                try:
                    stat = os.stat(full_path)
                except FileNotFoundError:
                    continue
                relative = os.path.relpath(full_path, root).replace(os.sep, "/")
                snapshot[relative] = FileState(stat.st_ino, stat.st_mtime_ns, stat.st_size)
        return snapshot

    async def start(self) -> None:
        """Record the baseline snapshot without publishing anything."""
        self._snapshot = await asyncio.to_thread(self._take_snapshot)

    async def scan(self) -> int:
        """Compare against the last snapshot and publish the differences.

        Returns:
            Number of notifications published
        """
        current = await asyncio.to_thread(self._take_snapshot)
        previous = self._snapshot
        self._snapshot = current

        removed = {p: s for p, s in previous.items() if p not in current}
        added = {p: s for p, s in current.items() if p not in previous}
        published = 0

        removed_by_inode = {s.inode: p for p, s in removed.items()}
        for new_path, state in sorted(added.items()):
            old_path = removed_by_inode.pop(state.inode, None)
            if old_path is not None:
                removed.pop(old_path)
                self.vault.bus.renamed(old_path, new_path)
            else:
                self.vault.bus.changed(new_path)
            published += 1

        for old_path in sorted(removed):
            self.vault.bus.deleted(old_path)
            published += 1

        for path, state in sorted(current.items()):
            before = previous.get(path)
            if before is not None and before != state:
                self.vault.bus.changed(path)
                published += 1

        if published:
            logger.debug(f"Watcher published {published} notification(s)")
        return published

    async def run(self, interval: float) -> None:
        """Scan every ``interval`` seconds until cancelled."""
        await self.start()
        while True:
            await asyncio.sleep(interval)
            await self.scan()
