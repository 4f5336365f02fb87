"""Shared fixtures: a temporary vault, its bus, config and a recording workspace."""

from typing import Any

import pytest

from notecal.codec.frontmatter import join_document
from notecal.config import CalendarConfig
from notecal.exceptions import WriteFailureError
from notecal.models.settings import ViewSettings
from notecal.models.source import LocalSource
from notecal.storage.base import NotificationBus
from notecal.storage.vault import Vault


class RecordingWorkspace:
    """Workspace stand-in that records every UI request."""

    def __init__(self):
        self.notices: list[str] = []
        self.opened: list[str] = []
        self.dialogs: list[tuple[dict[str, Any], str | None]] = []
        self.hovers: list[str] = []

    def show_notice(self, message: str) -> None:
        self.notices.append(message)

    def open_document(self, path: str) -> None:
        self.opened.append(path)

    def open_edit_dialog(self, fields: dict[str, Any], event_id: str | None = None) -> None:
        self.dialogs.append((fields, event_id))

    def show_hover(self, path: str) -> None:
        self.hovers.append(path)


class ReadOnlyVault(Vault):
    """Vault whose metadata writes always fail."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.write_attempts: list[str] = []

    async def write_metadata(self, path: str, metadata: dict[str, Any]) -> None:
        self.write_attempts.append(path)
        raise WriteFailureError(f"Read-only vault: {path}")


@pytest.fixture
def vault_dir(tmp_path):
    root = tmp_path / "vault"
    root.mkdir()
    return root


@pytest.fixture
def note(vault_dir):
    """Write a markdown note into the vault and return its vault path.

    ``metadata=None`` writes the body without any front-matter.
    """

    def _write(path: str, metadata: dict | None, body: str = "") -> str:
        target = vault_dir / path
        target.parent.mkdir(parents=True, exist_ok=True)
        text = body if metadata is None else join_document(metadata, body)
        target.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def bus():
    return NotificationBus()


@pytest.fixture
def vault(vault_dir, bus):
    return Vault(vault_dir, bus)


@pytest.fixture
def readonly_vault(vault_dir, bus):
    return ReadOnlyVault(vault_dir, bus)


@pytest.fixture
def config(vault_dir, tmp_path):
    return CalendarConfig(vault_dir=vault_dir, log_dir=tmp_path / "logs")


@pytest.fixture
def settings():
    """One local source over ``events/`` with a source colour."""
    return ViewSettings(calendar_sources=[LocalSource(directory="events", color="#ff0000")])


@pytest.fixture
def workspace():
    return RecordingWorkspace()
