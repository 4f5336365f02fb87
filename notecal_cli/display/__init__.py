"""Display module for rendering CLI output.

- TableRenderer: Source and event tables
- console: Shared Rich console instance
- Formatting functions for event ranges
"""

from notecal_cli.display.console import console
from notecal_cli.display.formatters import format_range, format_when, swatch
from notecal_cli.display.table_renderer import SourceInfo, TableRenderer

__all__ = [
    "console",
    "TableRenderer",
    "SourceInfo",
    "format_range",
    "format_when",
    "swatch",
]
