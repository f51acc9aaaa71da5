"""Transform stages — select, transform, write, notify.

A stage is a fixed, ordered list of transforms applied to every selected
file. Each transform receives the previous transform's output and may
fan one file out into several (a stylesheet plus its source map).

The error guard works per file: a :class:`TransformError` is routed to the
``notify_error`` hook, nothing is written for that file, and the remaining
files in the batch still run. Failed files are reported under
``data["failed"]`` and as warnings; the stage itself still succeeds, so a
broken source never aborts the composition that ran it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from assetctl.domain.errors import TransformError
from assetctl.domain.files import AssetFile, is_partial
from assetctl.infrastructure.filesystem import select_files, write_asset
from assetctl.services.base import BaseService
from assetctl.services.result import TaskResult
from assetctl.services.telemetry import trace_span

logger = logging.getLogger(__name__)

Transform = Callable[[AssetFile], AssetFile | Sequence[AssetFile]]


def load_inputs(
    root: Path,
    patterns: Sequence[str],
    *,
    skip_partials: bool = False,
) -> list[AssetFile]:
    """Select files for *patterns* and read them into AssetFiles."""
    assets: list[AssetFile] = []
    for selected in select_files(root, list(patterns)):
        if skip_partials and is_partial(selected.relative):
            continue
        assets.append(
            AssetFile(
                source=selected.source,
                relative=selected.relative,
                contents=selected.path.read_bytes(),
            )
        )
    return assets


def apply_transforms(asset: AssetFile, steps: Sequence[Transform]) -> list[AssetFile]:
    """Run *asset* through *steps* in order, flattening fan-out."""
    files = [asset]
    for step in steps:
        produced: list[AssetFile] = []
        for current in files:
            out = step(current)
            if isinstance(out, AssetFile):
                produced.append(out)
            else:
                produced.extend(out)
        files = produced
    return files


@dataclass
class StageReport:
    """Outcome of running a batch through a stage."""

    written: list[str] = field(default_factory=list)
    failed: list[dict[str, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class StageService(BaseService):
    """BaseService plus the guarded run loop shared by all transform stages."""

    def _guard(
        self,
        task: str,
        asset: AssetFile,
        steps: Sequence[Transform],
        report: StageReport,
    ) -> list[AssetFile] | None:
        """Apply *steps*, or record the failure and return None."""
        try:
            return apply_transforms(asset, steps)
        except TransformError as exc:
            path = exc.path or asset.source
            logger.warning("%s: %s failed: %s", task, path, exc.message)
            report.failed.append({"path": asset.source, "message": exc.message})
            self._notify_error(task, exc.message, path, report.warnings)
            return None

    def _write(
        self,
        files: Sequence[AssetFile],
        dest: Path,
        report: StageReport,
        *,
        notify: str | None,
    ) -> None:
        root = self._project.root
        for out in files:
            target = write_asset(dest, out)
            written = (
                target.relative_to(root).as_posix() if target.is_relative_to(root) else str(target)
            )
            report.written.append(written)
            logger.debug("wrote %s", written)
            self._notify_success(notify, written, report.warnings)

    def _run_stage(
        self,
        task: str,
        inputs: Sequence[AssetFile],
        steps: Sequence[Transform],
        dest: Path,
        *,
        notify: str | None = None,
    ) -> StageReport:
        """Guard, transform and write each input independently."""
        report = StageReport()
        for asset in inputs:
            with trace_span(asset.source):
                produced = self._guard(task, asset, steps, report)
                if produced is not None:
                    self._write(produced, dest, report, notify=notify)
        return report

    def _stage_result(
        self,
        task: str,
        report: StageReport,
        *,
        inputs: int,
        **extra: Any,
    ) -> TaskResult:
        data: dict[str, Any] = {
            "inputs": inputs,
            "outputs": report.written,
            "failed": report.failed,
            **extra,
        }
        warnings = [f"{item['path']}: {item['message']}" for item in report.failed]
        warnings.extend(report.warnings)
        return TaskResult(ok=True, op=task, data=data, warnings=warnings)
