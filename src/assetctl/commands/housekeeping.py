"""Commands: clear-cache, clean-dist, zip."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    "clear-cache",
    cls=AssetCommand,
    examples="""\
  assetctl clear-cache
  assetctl --json clear-cache""",
)
@click.pass_obj
def clear_cache(app: AppContext) -> None:
    """Empty the image-optimization cache."""
    app.run_task("clear-cache")


@click.command(
    "clean-dist",
    cls=AssetCommand,
    examples="""\
  assetctl clean-dist
  assetctl clean-dist && assetctl sass""",
)
@click.pass_obj
def clean_dist(app: AppContext) -> None:
    """Delete everything inside the dist directory."""
    app.run_task("clean-dist")


@click.command(
    "zip",
    cls=AssetCommand,
    examples="""\
  assetctl zip
  ASSETCTL_ZIP__NAME=release.zip assetctl zip""",
)
@click.pass_obj
def zip_cmd(app: AppContext) -> None:
    """Archive the project (without node_modules, state and dotfiles)."""
    app.run_task("zip")
