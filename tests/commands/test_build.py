"""Tests for the build stage commands and their compositions."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from assetctl.cli import cli


class _NoopServer:
    def __init__(self) -> None:
        self.watched: list[str] = []

    def watch(self, filepath: str, func: Any = None) -> None:
        self.watched.append(filepath)

    def serve(self, **kwargs: Any) -> None:
        raise KeyboardInterrupt


@pytest.fixture
def _quiet_notifier(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASSETCTL_NOTIFIER__ENABLED", "false")


@pytest.mark.usefixtures("_isolated_project", "_quiet_notifier")
class TestKitCommand:
    def test_renders_html(self, cli_runner: CliRunner, project_root: Path, write_file) -> None:
        write_file("html/index.kit", "<!-- $title = Home -->\n<h1><!-- $title --></h1>\n")
        result = cli_runner.invoke(cli, ["kit"])
        assert result.exit_code == 0, result.output
        assert "OK" in result.output
        assert "index.html" in result.output
        assert "<h1>Home</h1>" in (project_root / "index.html").read_text()

    def test_quiet_prints_paths(self, cli_runner: CliRunner, write_file) -> None:
        write_file("html/index.kit", "<p>x</p>")
        result = cli_runner.invoke(cli, ["-q", "kit"])
        assert result.exit_code == 0
        assert result.output.strip() == "index.html"

    def test_json(self, cli_runner: CliRunner, write_file) -> None:
        write_file("html/index.kit", "<p>x</p>")
        result = cli_runner.invoke(cli, ["--json", "kit"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "kit"
        assert data["data"]["outputs"] == ["index.html"]

    def test_broken_file_listed_as_failed(self, cli_runner: CliRunner, write_file) -> None:
        write_file("html/index.kit", "<p><!-- $missing --></p>")
        write_file("html/about.kit", "<p>about</p>")
        result = cli_runner.invoke(cli, ["kit"])
        assert result.exit_code == 0, result.output
        assert "failed" in result.output
        assert "html/index.kit" in result.output
        assert "about.html" in result.output

    def test_broken_file_in_json(self, cli_runner: CliRunner, write_file) -> None:
        write_file("html/index.kit", "<p><!-- $missing --></p>")
        result = cli_runner.invoke(cli, ["--json", "kit"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["failed"][0]["path"] == "html/index.kit"
        assert data["warnings"][0].startswith("html/index.kit: ")

    def test_empty_input_succeeds(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "kit"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["inputs"] == 0
        assert data["data"]["outputs"] == []


@pytest.mark.usefixtures("_isolated_project", "_quiet_notifier")
class TestStageCommands:
    @pytest.mark.parametrize("stage", ["sass", "less", "javascript", "imagemin"])
    def test_nothing_to_do(self, cli_runner: CliRunner, project_root: Path, stage: str) -> None:
        result = cli_runner.invoke(cli, ["--json", stage])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["op"] == stage
        assert data["data"]["outputs"] == []

    def test_sass(self, cli_runner: CliRunner, project_root: Path, write_file) -> None:
        write_file("src/sass/main.scss", "$c: #123456;\nbody { color: $c; }\n")
        result = cli_runner.invoke(cli, ["-q", "sass"])
        assert result.exit_code == 0, result.output
        assert "dist/css/main.min.css" in result.output.splitlines()
        assert "#123456" in (project_root / "dist/css/main.min.css").read_text()


@pytest.mark.usefixtures("_isolated_project", "_quiet_notifier")
class TestCompositions:
    def test_serve_runs_every_stage(self, cli_runner: CliRunner, write_file) -> None:
        write_file("html/index.kit", "<p>x</p>")
        result = cli_runner.invoke(cli, ["--json", "serve"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["data"]["kind"] == "parallel"
        assert [t["op"] for t in data["data"]["tasks"]] == [
            "sass",
            "less",
            "javascript",
            "imagemin",
            "kit",
        ]

    def test_serve_with_jobs(self, cli_runner: CliRunner, write_file) -> None:
        write_file("html/index.kit", "<p>x</p>")
        result = cli_runner.invoke(cli, ["--json", "-j", "3", "serve"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["ok"] is True

    def test_serve_counts_failed_files(self, cli_runner: CliRunner, write_file) -> None:
        write_file("html/index.kit", "<p><!-- $missing --></p>")
        result = cli_runner.invoke(cli, ["serve"])
        assert result.exit_code == 0, result.output
        assert "1 failed" in result.output

    def test_default_builds_then_watches(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from assetctl.infrastructure import server

        fake = _NoopServer()
        monkeypatch.setattr(server, "livereload_server", lambda: fake)

        result = cli_runner.invoke(cli, ["--json", "default"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["data"]["kind"] == "series"
        assert [t["op"] for t in data["data"]["tasks"]] == ["serve", "watch"]
        assert data["data"]["skipped"] == []
        assert len(fake.watched) == 5

    def test_default_watches_after_broken_build(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch, write_file
    ) -> None:
        from assetctl.infrastructure import server

        fake = _NoopServer()
        monkeypatch.setattr(server, "livereload_server", lambda: fake)
        write_file("html/index.kit", "<p><!-- $missing --></p>")

        result = cli_runner.invoke(cli, ["default"])

        assert result.exit_code == 0, result.output
        assert "skipped" not in result.output
        assert len(fake.watched) == 5
