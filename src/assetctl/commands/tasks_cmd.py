"""Command: list registered tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    "tasks",
    cls=AssetCommand,
    examples="""\
  assetctl tasks
  assetctl -v tasks
  assetctl --json tasks""",
)
@click.pass_obj
def tasks_cmd(app: AppContext) -> None:
    """List every task and what it runs."""
    from assetctl.services.result import TaskResult

    described = app.runner.describe()
    app.emit(TaskResult(ok=True, op="tasks", data={"tasks": described, "count": len(described)}))
