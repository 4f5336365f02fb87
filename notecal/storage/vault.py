"""Filesystem-backed document store."""

import asyncio
import logging
from pathlib import Path, PurePosixPath
from typing import Any

from notecal.codec.frontmatter import join_document, split_document
from notecal.exceptions import DirectoryMissingError, WriteFailureError
from notecal.storage.base import NotificationBus
from notecal.utils import normalize_path

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".md"


class Vault:
    """Directory of markdown documents addressed by vault-relative paths.

    All mutations made through the vault are announced on its notification
    bus, the same way the host announces its own writes.
    """

    def __init__(self, root: Path, bus: NotificationBus | None = None):
        """
        Initialize vault.

        Args:
            root: Vault root directory
            bus: NotificationBus to announce changes on (created if omitted)
        """
        self.root = root.resolve()
        self.bus = bus or NotificationBus()

    def absolute(self, path: str) -> Path:
        """Filesystem location of a vault path."""
        relative = normalize_path(path)
        if relative.startswith("../") or relative == "..":
            raise ValueError(f"Path escapes the vault: {path}")
        if not relative:
            return self.root
        return self.root / relative

    def relative(self, path: Path) -> str:
        """Vault path for a filesystem location under the root."""
        return path.relative_to(self.root).as_posix()

    async def exists(self, path: str) -> bool:
        try:
            target = self.absolute(path)
        except ValueError:
            return False
        return await asyncio.to_thread(target.is_file)

    async def read_text(self, path: str) -> str | None:
        """Raw document text, or None if the document does not exist."""
        target = self.absolute(path)
        try:
            return await asyncio.to_thread(target.read_text, encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError):
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return None

    async def read_metadata(self, path: str) -> dict[str, Any] | None:
        text = await self.read_text(path)
        if text is None:
            return None
        metadata, _ = split_document(text)
        return metadata

    async def write_metadata(self, path: str, metadata: dict[str, Any]) -> None:
        text = await self.read_text(path)
        if text is None:
            raise WriteFailureError(f"Document not found: {path}")
        _, body = split_document(text)
        try:
            await asyncio.to_thread(
                self.absolute(path).write_text,
                join_document(metadata, body),
                encoding="utf-8",
            )
        except OSError as e:
            raise WriteFailureError(f"Failed to write {path}: {e}") from e
        logger.info(f"Wrote metadata: {path}")
        self.bus.changed(normalize_path(path))

    async def list_directory(self, path: str, recursive: bool) -> list[str]:
        try:
            directory = self.absolute(path)
        except ValueError as e:
            raise DirectoryMissingError(str(e)) from e
        return await asyncio.to_thread(self._list_directory, directory, path, recursive)

    def _list_directory(self, directory: Path, path: str, recursive: bool) -> list[str]:
        if not directory.is_dir():
            raise DirectoryMissingError(f"Not a directory: {path or '/'}")
        pattern = f"**/*{DOCUMENT_SUFFIX}" if recursive else f"*{DOCUMENT_SUFFIX}"
        return sorted(
            self.relative(p)
            for p in directory.glob(pattern)
            if p.is_file() and not self._is_hidden(p)
        )

    def _is_hidden(self, path: Path) -> bool:
        return any(part.startswith(".") for part in path.relative_to(self.root).parts)

    async def create_document(
        self, directory: str, name: str, metadata: dict[str, Any], body: str = ""
    ) -> str:
        filename = name if name.endswith(DOCUMENT_SUFFIX) else f"{name}{DOCUMENT_SUFFIX}"
        path = normalize_path(str(PurePosixPath(directory or ".") / filename))
        target = self.absolute(path)
        if target.exists():
            raise WriteFailureError(f"Document already exists: {path}")
        try:
            await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(
                target.write_text, join_document(metadata, body), encoding="utf-8"
            )
        except OSError as e:
            raise WriteFailureError(f"Failed to create {path}: {e}") from e
        logger.info(f"Created document: {path}")
        self.bus.changed(path)
        return path

    async def rename(self, old_path: str, new_path: str) -> None:
        """Move a document and announce the rename."""
        source = self.absolute(old_path)
        target = self.absolute(new_path)
        if target.exists():
            raise WriteFailureError(f"Document already exists: {new_path}")
        try:
            await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(source.rename, target)
        except OSError as e:
            raise WriteFailureError(f"Failed to rename {old_path}: {e}") from e
        logger.info(f"Renamed document: {old_path} -> {new_path}")
        self.bus.renamed(normalize_path(old_path), normalize_path(new_path))

    async def delete(self, path: str) -> None:
        """Delete a document and announce the deletion."""
        try:
            await asyncio.to_thread(self.absolute(path).unlink)
        except OSError as e:
            raise WriteFailureError(f"Failed to delete {path}: {e}") from e
        logger.info(f"Deleted document: {path}")
        self.bus.deleted(normalize_path(path))
