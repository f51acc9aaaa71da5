"""Built-in console notifier.

Prints a framed line for every file a stage delivers and for every
transform failure, so a watch session shows results without scrolling
through logs. Services pass the ``[notifier] messages`` entry for the task;
tasks without one (``less``, ``imagemin``) stay silent on success.
"""

from __future__ import annotations

import pluggy
from rich.console import Console
from rich.text import Text

from assetctl.config.models import NotifierConfig
from assetctl.output.console import create_stderr_console

hookimpl = pluggy.HookimplMarker("assetctl")


class ConsoleNotifier:
    """Writes success and error notifications to stderr."""

    def __init__(self, config: NotifierConfig | None = None, console: Console | None = None) -> None:
        self._config = config or NotifierConfig()
        self._console = console or create_stderr_console()

    def _frame(self, message: str) -> str:
        return f"{self._config.prefix} {message} {self._config.suffix}".strip()

    def _excluded(self, path: str) -> bool:
        return any(path.endswith(suffix) for suffix in self._config.exclusions)

    @hookimpl
    def notify_success(self, task: str, message: str, path: str) -> None:
        if not self._config.enabled or not message or self._excluded(path):
            return
        self._console.print(
            Text(self._frame(message), style="asset.ok"),
            Text(path, style="asset.path"),
        )

    @hookimpl
    def notify_error(self, task: str, message: str, path: str) -> None:
        if not self._config.enabled:
            return
        self._console.print(
            Text(self._frame(f"{task} failed"), style="asset.error"),
            Text(path, style="asset.path"),
        )
        self._console.print(Text(f"  {message}", style="asset.error"))
