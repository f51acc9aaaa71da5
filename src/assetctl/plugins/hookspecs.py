"""Pluggy hook specifications for assetctl notifications and task events."""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("assetctl")


class AssetctlHookSpec:
    """Hook specifications for the assetctl plugin system."""

    @hookspec
    def notify_success(self, task: str, message: str, path: str) -> None:
        """Called for every file a stage wrote successfully."""

    @hookspec
    def notify_error(self, task: str, message: str, path: str) -> None:
        """Called when a content transform rejects a file."""

    @hookspec
    def post_task(self, task: str, ok: bool, data: dict[str, Any]) -> None:
        """Called after a named task (stage, composite, or housekeeping) finishes."""
