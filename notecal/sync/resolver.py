"""Identity resolution: locate the backing document of an event."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import PurePosixPath

from notecal.codec.frontmatter import decode, derive_basename
from notecal.exceptions import (
    DirectoryMissingError,
    IdentityAmbiguousError,
    IdentityNotFoundError,
)
from notecal.storage.base import DocumentStore
from notecal.utils import normalize_path

logger = logging.getLogger(__name__)


class ResolutionStatus(str, Enum):
    """Outcome of an identity lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"


@dataclass
class Resolution:
    """Result of an identity lookup. ``path`` is set only when FOUND."""

    status: ResolutionStatus
    path: str | None = None
    candidates: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status is ResolutionStatus.FOUND

    def unwrap(self) -> str:
        """Return the resolved path.

        Raises:
            IdentityNotFoundError: If nothing matched
            IdentityAmbiguousError: If more than one document matched
        """
        if self.status is ResolutionStatus.AMBIGUOUS:
            raise IdentityAmbiguousError(
                f"{len(self.candidates)} documents match: {', '.join(self.candidates)}",
                candidates=self.candidates,
            )
        if self.status is ResolutionStatus.NOT_FOUND or self.path is None:
            raise IdentityNotFoundError("No matching document")
        return self.path


class IdentityResolver:
    """Finds documents by path, or by directory and title.

    Title lookups never guess: when two documents would derive the same file
    name the result is AMBIGUOUS and the caller must stop.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def resolve_by_path(self, path: str) -> Resolution:
        path = normalize_path(path)
        if path and await self.store.exists(path):
            return Resolution(ResolutionStatus.FOUND, path=path, candidates=[path])
        return Resolution(ResolutionStatus.NOT_FOUND)

    async def resolve_by_directory_and_title(
        self,
        directory: str,
        title: str,
        on: date | datetime | None = None,
        pending: str | None = None,
    ) -> Resolution:
        """
        Find the single document in ``directory`` for an event title.

        Args:
            directory: Directory the event's identity lives in
            title: Event title
            on: Event date; when given, only documents on that date match
            pending: Identity about to be written with this title and date,
                counted as a candidate even if it does not match yet

        Returns:
            Resolution with every matching document listed as a candidate
        """
        directory = normalize_path(directory)
        try:
            paths = await self.store.list_directory(directory, recursive=False)
        except DirectoryMissingError:
            paths = []

        expected_name = derive_basename(on, title) if on is not None else None
        candidates: list[str] = []
        for path in paths:
            if expected_name is not None and PurePosixPath(path).stem == expected_name:
                candidates.append(path)
                continue
            record = decode(await self.store.read_metadata(path), path=path)
            if record is None or record.title != title:
                continue
            if on is not None and derive_basename(record.start, record.title) != expected_name:
                continue
            candidates.append(path)

        if pending is not None:
            pending = normalize_path(pending)
            if pending not in candidates:
                candidates.append(pending)

        if len(candidates) > 1:
            logger.warning(f"Ambiguous identity for '{title}' in {directory or '/'}: {candidates}")
            return Resolution(ResolutionStatus.AMBIGUOUS, candidates=candidates)
        if not candidates:
            return Resolution(ResolutionStatus.NOT_FOUND)
        return Resolution(ResolutionStatus.FOUND, path=candidates[0], candidates=candidates)
