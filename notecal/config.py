"""Configuration for notecal."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class CalendarConfig(BaseModel):
    """Calendar configuration with Pydantic validation."""

    # Storage paths
    vault_dir: Path = Field(default=Path("."))
    settings_file: Path = Field(default=Path(".notecal/settings.json"))
    log_dir: Path = Field(default=Path("logs"))

    # File naming
    log_filename: str = Field(default="notecal.log")

    # Theme fallbacks (accent is the last step of colour resolution)
    accent_color: str = Field(default="#7f6df2")
    text_on_accent: str = Field(default="#ffffff")

    # Watcher
    poll_interval: float = Field(default=1.0, gt=0)

    @property
    def settings_path(self) -> Path:
        """Absolute location of the view settings file."""
        if self.settings_file.is_absolute():
            return self.settings_file
        return self.vault_dir / self.settings_file

    @classmethod
    def from_env(cls) -> "CalendarConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv()

        config_dict = {}

        # Storage paths
        if "NOTECAL_VAULT_DIR" in os.environ:
            config_dict["vault_dir"] = Path(os.environ["NOTECAL_VAULT_DIR"])
        if "NOTECAL_SETTINGS_FILE" in os.environ:
            config_dict["settings_file"] = Path(os.environ["NOTECAL_SETTINGS_FILE"])
        if "NOTECAL_LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["NOTECAL_LOG_DIR"])

        # File naming
        if "NOTECAL_LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["NOTECAL_LOG_FILENAME"]

        # Theme
        if "NOTECAL_ACCENT_COLOR" in os.environ:
            config_dict["accent_color"] = os.environ["NOTECAL_ACCENT_COLOR"]
        if "NOTECAL_TEXT_ON_ACCENT" in os.environ:
            config_dict["text_on_accent"] = os.environ["NOTECAL_TEXT_ON_ACCENT"]

        # Watcher
        if "NOTECAL_POLL_INTERVAL" in os.environ:
            try:
                interval = float(os.environ["NOTECAL_POLL_INTERVAL"])
                if interval > 0:
                    config_dict["poll_interval"] = interval
            except ValueError:
                pass  # Keep default if invalid

        return cls(**config_dict)
