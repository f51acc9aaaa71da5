"""StyleService — the ``sass`` and ``less`` stages.

sass: vendor-prefix → compile to compressed CSS (libsass maps it) → write
map → append ``.min`` (never to ``.map`` files) → write to the css output →
notify.

less: compile (with source map) → minify → rename to the fixed output
name → write map → write to the css output.
"""

from __future__ import annotations

import os
from pathlib import Path

from assetctl.domain.files import AssetFile, append_min, replace_suffix
from assetctl.domain.prefixer import add_vendor_prefixes
from assetctl.domain.sourcemaps import identity_map, write_source_map
from assetctl.infrastructure import compilers
from assetctl.services.pipeline import StageService, load_inputs
from assetctl.services.result import TaskResult
from assetctl.services.telemetry import traced


def _relpath(target: Path, start: Path) -> str:
    return Path(os.path.relpath(target, start)).as_posix()


def minify(asset: AssetFile) -> AssetFile:
    return asset.with_contents(compilers.minify_css(asset.text))


def rename_min(asset: AssetFile) -> AssetFile:
    return asset.with_relative(append_min(asset.relative))


class StyleService(StageService):
    """Stylesheet stages."""

    @traced
    def sass(self) -> TaskResult:
        """Compile every non-partial ``.scss`` file selected by ``[paths] sass``."""
        root = self._project.root
        dest = self._project.output_dir("css")

        def compile_to_css(asset: AssetFile) -> AssetFile:
            css_relative = replace_suffix(asset.relative, ".css")
            css, source_map = compilers.compile_sass(
                root / asset.source,
                map_path=dest / f"{css_relative}.map",
                source=add_vendor_prefixes(asset.text),
            )
            return asset.with_relative(css_relative).with_contents(css).with_source_map(source_map)

        def finalize_map(asset: AssetFile) -> list[AssetFile]:
            return write_source_map(asset, file_name=append_min(asset.relative))

        inputs = load_inputs(root, self._project.paths.sass, skip_partials=True)
        report = self._run_stage(
            "sass",
            inputs,
            [compile_to_css, finalize_map, rename_min],
            dest,
            notify="sass",
        )
        return self._stage_result("sass", report, inputs=len(inputs))

    @traced
    def less(self) -> TaskResult:
        """Compile ``[paths] less`` into the single fixed-name stylesheet."""
        root = self._project.root
        dest = self._project.output_dir("css")
        output_name = self._project.settings.less.output_name

        def compile_to_css(asset: AssetFile) -> AssetFile:
            css = compilers.compile_less(root / asset.source)
            source_map = identity_map(_relpath(root / asset.source, dest), asset.text)
            return asset.with_contents(css).with_source_map(source_map)

        def rename_fixed(asset: AssetFile) -> AssetFile:
            return asset.with_relative(output_name)

        inputs = load_inputs(root, self._project.paths.less)
        report = self._run_stage(
            "less",
            inputs,
            [compile_to_css, minify, rename_fixed, write_source_map],
            dest,
        )
        return self._stage_result("less", report, inputs=len(inputs))
