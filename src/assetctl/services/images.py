"""ImageService — the ``imagemin`` stage.

Every selected image is looked up in the image cache by content digest.
Hits are written straight from the cache; misses are optimized, stored,
and written. The result reports how many images took each path.
"""

from __future__ import annotations

from assetctl.domain.files import AssetFile
from assetctl.infrastructure import compilers
from assetctl.services.pipeline import StageReport, StageService, load_inputs
from assetctl.services.result import TaskResult
from assetctl.services.telemetry import traced


class ImageService(StageService):
    """Cache-aware image optimization stage."""

    @traced
    def imagemin(self) -> TaskResult:
        root = self._project.root
        config = self._project.settings.images
        dest = self._project.output_dir("img")

        inputs = load_inputs(root, self._project.paths.images)
        if not inputs:
            return self._stage_result("imagemin", StageReport(), inputs=0, processed=0, cached=0)

        cache = self._project.image_cache
        signature = compilers.optimizer_signature(jpeg_quality=config.jpeg_quality)
        counts = {"processed": 0, "cached": 0}

        def optimize(asset: AssetFile) -> AssetFile:
            key = cache.make_key(asset.contents, signature)
            hit = cache.get(key)
            if hit is not None:
                counts["cached"] += 1
                return asset.with_contents(hit)

            optimized = compilers.optimize_image(
                asset.contents,
                suffix=asset.suffix,
                jpeg_quality=config.jpeg_quality,
                filename=asset.source,
            )
            cache.put(key, source=asset.source, size_in=len(asset.contents), data=optimized)
            counts["processed"] += 1
            return asset.with_contents(optimized)

        report = self._run_stage("imagemin", inputs, [optimize], dest)
        return self._stage_result("imagemin", report, inputs=len(inputs), **counts)
