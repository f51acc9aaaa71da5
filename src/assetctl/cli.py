"""Root CLI group for assetctl with global flags and command registration."""

from __future__ import annotations

import click

from assetctl import __version__
from assetctl.commands import register_commands
from assetctl.commands._base import AssetGroup
from assetctl.commands._context import AppContext
from assetctl.config.settings import AssetSettings


@click.group(
    cls=AssetGroup,
    invoke_without_command=True,
    examples="""\
  assetctl init
  assetctl sass
  assetctl -j 4 serve
  assetctl default""",
)
@click.version_option(version=__version__, prog_name="assetctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=None,
    help="Worker threads for parallel tasks.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    jobs: int | None,
) -> None:
    """assetctl — front-end asset build runner."""
    ctx.ensure_object(dict)
    settings = AssetSettings.from_cli(
        config_path=config_path,
        jobs=jobs,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
