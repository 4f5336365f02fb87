"""Shared CLI context with lazy-initialized dependencies."""

from notecal.config import CalendarConfig
from notecal.models.settings import ViewSettings
from notecal.storage.base import NotificationBus
from notecal.storage.vault import Vault
from notecal.view import CalendarView
from notecal_cli.workspace import ConsoleWorkspace


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    Usage:
        ctx = CLIContext()
        async with ctx.view().session() as view:
            ...
    """

    def __init__(self, verbose: bool = False, quiet: bool = False):
        """Initialize CLI context.

        Args:
            verbose: If True, enable info logging on the console
            quiet: If True, suppress non-error output
        """
        self.verbose = verbose
        self.quiet = quiet

        # Lazy-loaded dependencies
        self._config: CalendarConfig | None = None
        self._bus: NotificationBus | None = None
        self._vault: Vault | None = None
        self._workspace: ConsoleWorkspace | None = None

    @property
    def config(self) -> CalendarConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = CalendarConfig.from_env()
        return self._config

    @property
    def bus(self) -> NotificationBus:
        """Get notification bus (lazy-loaded)."""
        if self._bus is None:
            self._bus = NotificationBus()
        return self._bus

    @property
    def vault(self) -> Vault:
        """Get vault (lazy-loaded)."""
        if self._vault is None:
            self._vault = Vault(self.config.vault_dir, self.bus)
        return self._vault

    @property
    def workspace(self) -> ConsoleWorkspace:
        """Get console workspace (lazy-loaded)."""
        if self._workspace is None:
            self._workspace = ConsoleWorkspace()
        return self._workspace

    def load_settings(self) -> ViewSettings:
        """Read a fresh settings snapshot."""
        return ViewSettings.load(self.config.settings_path)

    def view(self) -> CalendarView:
        """Create a calendar view over the vault."""
        return CalendarView(self.vault, self.bus, self.config, self.workspace)


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context."""
    global _ctx
    _ctx = ctx
