"""Commands: the five build stages and their compositions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl sass
  assetctl --quiet sass
  assetctl --json sass""",
)
@click.pass_obj
def sass(app: AppContext) -> None:
    """Compile Sass to minified, vendor-prefixed CSS with source maps."""
    app.run_task("sass")


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl less
  assetctl -v less""",
)
@click.pass_obj
def less(app: AppContext) -> None:
    """Compile Less into dist/css/styles.min.css."""
    app.run_task("less")


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl javascript
  ASSETCTL_SCRIPTS__BUNDLE=app.js assetctl javascript""",
)
@click.pass_obj
def javascript(app: AppContext) -> None:
    """Transpile, concatenate and minify the configured scripts."""
    app.run_task("javascript")


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl imagemin
  assetctl clear-cache && assetctl imagemin""",
)
@click.pass_obj
def imagemin(app: AppContext) -> None:
    """Optimize images, skipping ones already in the cache."""
    app.run_task("imagemin")


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl kit""",
)
@click.pass_obj
def kit(app: AppContext) -> None:
    """Render .kit templates to HTML."""
    app.run_task("kit")


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl serve
  assetctl -j 4 serve""",
)
@click.pass_obj
def serve(app: AppContext) -> None:
    """Run every build stage (in parallel with --jobs > 1)."""
    app.run_task("serve")


@click.command(
    cls=AssetCommand,
    examples="""\
  assetctl default
  assetctl -j 4 default""",
)
@click.pass_obj
def default(app: AppContext) -> None:
    """Build everything, then serve and watch for changes."""
    app.run_task("default")
