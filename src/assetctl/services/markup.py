"""MarkupService — the ``kit`` stage.

Renders ``.kit`` templates (imports and variables), collapses whitespace,
and writes ``.html`` files to the html output (the project root by
default), keeping each file's path below the glob base.
"""

from __future__ import annotations

from pathlib import Path

from assetctl.domain.errors import TransformError
from assetctl.domain.files import AssetFile, replace_suffix
from assetctl.domain.kit import KitRenderer
from assetctl.infrastructure import compilers
from assetctl.services.pipeline import StageService, load_inputs
from assetctl.services.result import TaskResult
from assetctl.services.telemetry import traced


def _read_template(path: Path) -> str:
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Not valid UTF-8: {exc.reason} at byte {exc.start}"
        raise TransformError(msg, path=str(path)) from exc


def collapse_whitespace(asset: AssetFile) -> AssetFile:
    return asset.with_contents(compilers.minify_html(asset.text))


def rename_html(asset: AssetFile) -> AssetFile:
    return asset.with_relative(replace_suffix(asset.relative, ".html"))


class MarkupService(StageService):
    """Kit templating stage."""

    @traced
    def kit(self) -> TaskResult:
        root = self._project.root
        renderer = KitRenderer(read_file=_read_template)

        def render(asset: AssetFile) -> AssetFile:
            return asset.with_contents(renderer.render(root / asset.source, asset.text))

        inputs = load_inputs(root, self._project.paths.html, skip_partials=True)
        report = self._run_stage(
            "kit",
            inputs,
            [render, collapse_whitespace, rename_html],
            self._project.output_dir("html"),
            notify="kit",
        )
        return self._stage_result("kit", report, inputs=len(inputs))
