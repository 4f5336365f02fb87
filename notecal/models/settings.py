"""Persisted view settings."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from notecal.exceptions import SettingsError
from notecal.models.source import CalendarSource, LocalSource


class ViewSettings(BaseModel):
    """Ordered calendar sources plus the global recursion toggle.

    Stored as JSON with camelCase keys. The view loads one snapshot when it
    opens and keeps it for its whole lifetime.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    calendar_sources: list[CalendarSource] = Field(
        default_factory=list, alias="calendarSources"
    )
    recursive_local: bool = Field(default=False, alias="recursiveLocal")

    @property
    def local_sources(self) -> list[LocalSource]:
        """Local sources in settings order."""
        return [s for s in self.calendar_sources if isinstance(s, LocalSource)]

    @classmethod
    def load(cls, path: Path) -> "ViewSettings":
        """Load settings from JSON, returning defaults if the file is absent."""
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Failed to read settings file {path}: {e}") from e
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise SettingsError(f"Invalid settings in {path}: {e}") from e

    def save(self, path: Path) -> None:
        """Write settings as JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            self.model_dump_json(by_alias=True, indent=2, exclude_none=True),
            encoding="utf-8",
        )
