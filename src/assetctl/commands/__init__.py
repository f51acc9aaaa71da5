"""Subcommand modules for assetctl.

Provides register_commands() which uses deferred imports to keep
``assetctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every task command plus ``init`` and ``tasks`` on the root group."""
    # --- Build stages and compositions ---
    from assetctl.commands.build import default, imagemin, javascript, kit, less, sass, serve

    cli.add_command(sass)
    cli.add_command(less)
    cli.add_command(javascript)
    cli.add_command(imagemin)
    cli.add_command(kit)
    cli.add_command(serve)
    cli.add_command(default)

    # --- Long-running ---
    from assetctl.commands.watch import watch

    cli.add_command(watch)

    # --- Housekeeping ---
    from assetctl.commands.housekeeping import clean_dist, clear_cache, zip_cmd

    cli.add_command(clear_cache)
    cli.add_command(clean_dist)
    cli.add_command(zip_cmd)

    # --- Project ---
    from assetctl.commands.init_cmd import init_cmd
    from assetctl.commands.tasks_cmd import tasks_cmd

    cli.add_command(init_cmd)
    cli.add_command(tasks_cmd)
