"""Command: development server with rebuild-on-change."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl watch
  ASSETCTL_SERVER__PORT=8080 assetctl watch
  ASSETCTL_SERVER__OPEN_BROWSER=false assetctl watch""",
)
@click.pass_obj
def watch(app: AppContext) -> None:
    """Serve the project with live reload and rebuild on change (Ctrl-C to stop)."""
    app.run_task("watch")
