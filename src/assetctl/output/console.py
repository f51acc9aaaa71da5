"""Rich Console factory and theme for assetctl output.

Result rendering uses Consoles backed by a StringIO buffer, preserving the
``format_result() -> str`` contract. Notifications go straight to stderr.
In non-TTY environments (tests, pipes) Rich automatically disables color.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ASSET_THEME = Theme(
    {
        "asset.ok": "bold green",
        "asset.error": "bold red",
        "asset.warning": "bold yellow",
        "asset.op": "bold cyan",
        "asset.key": "dim",
        "asset.path": "dim",
        "asset.task": "bold",
        "asset.skipped": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ASSET_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def create_stderr_console() -> Console:
    """Create a Console that writes notifications directly to stderr."""
    return Console(stderr=True, theme=ASSET_THEME, highlight=False)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
