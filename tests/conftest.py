"""Shared pytest fixtures for assetctl tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pluggy
import pytest
from click.testing import CliRunner

from assetctl.config.settings import AssetSettings
from assetctl.infrastructure.project import Project

hookimpl = pluggy.HookimplMarker("assetctl")

SOURCE_DIRS = ("src/sass", "src/less", "src/js", "src/img", "html")


class RecordingPlugin:
    """Captures every notification and post_task call."""

    def __init__(self) -> None:
        self.successes: list[dict[str, str]] = []
        self.errors: list[dict[str, str]] = []
        self.tasks: list[dict[str, Any]] = []

    @hookimpl
    def notify_success(self, task: str, message: str, path: str) -> None:
        self.successes.append({"task": task, "message": message, "path": path})

    @hookimpl
    def notify_error(self, task: str, message: str, path: str) -> None:
        self.errors.append({"task": task, "message": message, "path": path})

    @hookimpl
    def post_task(self, task: str, ok: bool, data: dict[str, Any]) -> None:
        self.tasks.append({"task": task, "ok": ok})


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ASSETCTL_* environment out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("ASSETCTL_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory with the default source layout.

    This is the single source of truth for the project layout. All
    project-related fixtures (project, _isolated_project) build on this.
    """
    for rel in SOURCE_DIRS:
        (tmp_path / rel).mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_file(project_root: Path) -> Callable[[str, str | bytes], Path]:
    """Write a file below the project root, creating parent directories."""

    def _write(rel: str, contents: str | bytes) -> Path:
        path = project_root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contents, bytes):
            path.write_bytes(contents)
        else:
            path.write_text(contents, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project(project_root: Path) -> Iterator[Project]:
    """Project on the temp root with default settings."""
    settings = AssetSettings.from_cli(project_root=project_root)
    p = Project(settings)
    try:
        yield p
    finally:
        p.close()


@pytest.fixture
def recorder(project: Project) -> RecordingPlugin:
    """RecordingPlugin registered on the project's plugin manager."""
    plugin = RecordingPlugin()
    project.plugins.register_plugin(plugin, name="recorder")
    return plugin


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project root so the CLI works on an isolated project.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)
