"""HousekeepingService — clear-cache, clean-dist, zip.

Single-step utility tasks. Filesystem or database failures fail the task
with ``IO_ERROR`` rather than being swallowed.
"""

from __future__ import annotations

import logging
import zipfile

from sqlalchemy.exc import SQLAlchemyError

from assetctl.infrastructure.filesystem import clear_directory, select_files
from assetctl.services.base import BaseService
from assetctl.services.result import TaskError, TaskResult
from assetctl.services.telemetry import traced

logger = logging.getLogger(__name__)


def _io_error(op: str, exc: Exception) -> TaskResult:
    logger.error("%s failed: %s", op, exc)
    return TaskResult(
        ok=False,
        op=op,
        error=TaskError(code="IO_ERROR", message=str(exc), detail={"type": type(exc).__name__}),
    )


class HousekeepingService(BaseService):
    """Cache invalidation, output cleanup, and project archiving."""

    @traced
    def clear_cache(self) -> TaskResult:
        """Drop every entry from the image-optimization cache."""
        op = "clear-cache"
        try:
            removed = self._project.image_cache.clear()
        except (OSError, SQLAlchemyError) as exc:
            return _io_error(op, exc)
        logger.debug("cleared %d cached images", removed)
        return TaskResult(ok=True, op=op, data={"removed": removed})

    @traced
    def clean_dist(self) -> TaskResult:
        """Delete everything inside the dist directory (the directory itself stays)."""
        op = "clean-dist"
        dist = self._project.dist_dir
        try:
            removed = clear_directory(dist)
        except OSError as exc:
            return _io_error(op, exc)
        return TaskResult(
            ok=True,
            op=op,
            data={"path": dist.relative_to(self._project.root).as_posix(), "removed": removed},
        )

    @traced
    def zip_project(self) -> TaskResult:
        """Archive the project tree into ``[zip] name`` at the project root.

        Dotfiles, ``[zip] exclude`` patterns and the archive itself are left out.
        """
        op = "zip"
        root = self._project.root
        config = self._project.settings.zip
        archive = root / config.name
        patterns = ["**/*", *(f"!{pattern}" for pattern in config.exclude), f"!{config.name}"]

        try:
            files = select_files(root, patterns)
            with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for selected in files:
                    zf.write(selected.path, arcname=selected.source)
        except OSError as exc:
            return _io_error(op, exc)

        return TaskResult(
            ok=True,
            op=op,
            data={"archive": config.name, "file_count": len(files)},
        )
