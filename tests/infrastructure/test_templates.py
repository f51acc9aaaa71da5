"""Tests for the Jinja2 template environment."""

from pathlib import Path

from assetctl.infrastructure.templates import build_template_environment


class TestBuildTemplateEnvironment:
    def test_packaged_templates(self) -> None:
        env = build_template_environment("init")
        out = env.get_template("assetctl.toml.j2").render(
            name="demo", port=4000, open_browser=False, archive="demo.zip"
        )
        assert "port = 4000" in out
        assert "open_browser = false" in out
        assert 'name = "demo.zip"' in out

    def test_project_override_wins(self, tmp_path: Path) -> None:
        override = tmp_path / ".assetctl" / "templates" / "init"
        override.mkdir(parents=True)
        (override / "index.kit.j2").write_text("custom {{ name }}")
        env = build_template_environment("init", project_root=tmp_path)
        assert env.get_template("index.kit.j2").render(name="x") == "custom x"
        # Files without an override still come from the package.
        assert "[paths]" in env.get_template("assetctl.toml.j2").render(
            name="x", port=1, open_browser=True, archive="a.zip"
        )
