"""ScriptService — the ``javascript`` stage.

Selects exactly the files listed in ``[scripts] files`` (in that order),
transpiles each with Babel, concatenates them into ``[scripts] bundle``,
minifies the bundle, appends ``.min`` and writes it to the js output.
"""

from __future__ import annotations

from assetctl.domain.files import AssetFile, append_min
from assetctl.infrastructure import compilers
from assetctl.services.pipeline import StageReport, StageService, load_inputs
from assetctl.services.result import TaskResult
from assetctl.services.telemetry import trace_span, traced

# gulp-concat compatible separator
CONCAT_SEPARATOR = "\n"


def transpile(asset: AssetFile) -> AssetFile:
    return asset.with_contents(compilers.transpile_js(asset.text, filename=asset.source))


def minify(asset: AssetFile) -> AssetFile:
    return asset.with_contents(compilers.minify_js(asset.text))


def rename_min(asset: AssetFile) -> AssetFile:
    return asset.with_relative(append_min(asset.relative))


def concatenate(assets: list[AssetFile], bundle: str) -> AssetFile:
    """Join *assets* in order into a single file named *bundle*."""
    return AssetFile(
        source=",".join(a.source for a in assets),
        relative=bundle,
        contents=CONCAT_SEPARATOR.join(a.text for a in assets).encode("utf-8"),
    )


class ScriptService(StageService):
    """JavaScript bundling stage."""

    @traced
    def javascript(self) -> TaskResult:
        """Build the minified bundle from the configured script files.

        Missing files are skipped. A file that fails to transpile is left
        out of the bundle and fails the task; the others still ship.
        """
        root = self._project.root
        config = self._project.settings.scripts
        dest = self._project.output_dir("js")

        inputs = load_inputs(root, config.files)
        report = StageReport()

        transpiled: list[AssetFile] = []
        for asset in inputs:
            with trace_span(asset.source):
                produced = self._guard("javascript", asset, [transpile], report)
            if produced is not None:
                transpiled.extend(produced)

        if transpiled:
            bundle = concatenate(transpiled, config.bundle)
            final = self._guard("javascript", bundle, [minify, rename_min], report)
            if final is not None:
                self._write(final, dest, report, notify="js")

        return self._stage_result("javascript", report, inputs=len(inputs))
