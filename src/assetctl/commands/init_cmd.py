"""Command: project initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from assetctl.commands._base import AssetCommand

if TYPE_CHECKING:
    from assetctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  assetctl init
  assetctl init site --name "Landing page"
  assetctl init . --port 8080 --no-open --archive release.zip"""


@click.command("init", cls=AssetCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--name", default=None, help="Project name (defaults to the directory name).")
@click.option("--port", type=int, default=3000, show_default=True, help="Dev server port.")
@click.option("--open/--no-open", "open_browser", default=True, help="Open a browser on watch.")
@click.option("--archive", default="project.zip", show_default=True, help="Zip archive name.")
@click.pass_obj
def init_cmd(
    app: AppContext,
    path: str,
    name: str | None,
    port: int,
    open_browser: bool,
    archive: str,
) -> None:
    """Scaffold assetctl.toml and starter sources."""
    project_path = Path(path).resolve()

    from assetctl.services.init import InitService

    app.emit(
        InitService.init_project(
            project_path,
            name=name or project_path.name,
            port=port,
            open_browser=open_browser,
            archive=archive,
        )
    )
