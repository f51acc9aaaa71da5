"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Project and TaskRunner creation and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from assetctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from assetctl.config.settings import AssetSettings
    from assetctl.infrastructure.project import Project
    from assetctl.services.result import TaskResult
    from assetctl.services.tasks import TaskRunner


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The project is lazily
    initialized on first use so ``--help`` and ``--version`` never load
    plugins or touch the image cache.
    """

    def __init__(self, settings: AssetSettings) -> None:
        self.settings = settings
        self._project: Project | None = None
        self._runner: TaskRunner | None = None

        # Configure structured logging
        from assetctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from assetctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def project(self) -> Project:
        """The project instance (created lazily, plugins loaded once)."""
        if self._project is None:
            from assetctl.infrastructure.project import Project

            self._project = Project(self.settings)
            self._project.load_plugins()
        return self._project

    @property
    def runner(self) -> TaskRunner:
        """Task runner with the standard task set registered."""
        if self._runner is None:
            from assetctl.infrastructure import server
            from assetctl.services.tasks import build_default_runner

            self._runner = build_default_runner(
                self.project, server_factory=server.livereload_server
            )
        return self._runner

    def run_task(self, name: str) -> None:
        """Run the named task and emit its result."""
        self.emit(self.runner.run(name))

    def close(self) -> None:
        if self._project is not None:
            self._project.close()

    def emit(self, result: TaskResult) -> None:
        """Format and output a TaskResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
