"""TaskRunner — named tasks and their composition.

A task is either a callable returning :class:`TaskResult` or a
``series``/``parallel`` composition of other named tasks. Composition
inspects each child's ``ok``:

- ``series`` runs children one at a time and stops at the first failure.
  The children that never ran are listed under ``data["skipped"]``.
- ``parallel`` runs every child even if a sibling fails. With more than
  one job the children run on a thread pool; the composite returns only
  after all of them have finished.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from assetctl.infrastructure.server import ServerFactory, livereload_server
from assetctl.services.base import BaseService
from assetctl.services.result import TaskError, TaskResult
from assetctl.services.telemetry import traced

if TYPE_CHECKING:
    from assetctl.infrastructure.project import Project

logger = logging.getLogger(__name__)

TaskFn = Callable[[], TaskResult]
TaskKind = Literal["task", "series", "parallel"]

BUILD_TASKS = ("sass", "less", "javascript", "imagemin", "kit")


@dataclass(frozen=True)
class TaskSpec:
    """A registered task: either a callable or a composition of names."""

    name: str
    kind: TaskKind
    description: str = ""
    fn: TaskFn | None = None
    children: tuple[str, ...] = ()


class TaskRunner(BaseService):
    """Registry and executor for named tasks."""

    def __init__(self, project: Project, *, jobs: int = 1) -> None:
        super().__init__(project)
        self._jobs = max(1, jobs)
        self._tasks: dict[str, TaskSpec] = {}

    # ── Registration ─────────────────────────────────────────────

    def register(self, name: str, fn: TaskFn, description: str = "") -> None:
        self._add(TaskSpec(name=name, kind="task", description=description, fn=fn))

    def series(self, name: str, *names: str, description: str = "") -> None:
        """Register *name* as the strictly ordered composition of *names*."""
        self._add(TaskSpec(name=name, kind="series", description=description, children=names))

    def parallel(self, name: str, *names: str, description: str = "") -> None:
        """Register *name* as the unordered composition of *names*."""
        self._add(TaskSpec(name=name, kind="parallel", description=description, children=names))

    def _add(self, spec: TaskSpec) -> None:
        if spec.name in self._tasks:
            msg = f"Task already registered: {spec.name!r}"
            raise ValueError(msg)
        missing = [child for child in spec.children if child not in self._tasks]
        if missing:
            msg = f"Task {spec.name!r} references unknown task(s): {', '.join(missing)}"
            raise ValueError(msg)
        self._tasks[spec.name] = spec

    # ── Introspection ────────────────────────────────────────────

    def names(self) -> list[str]:
        return list(self._tasks)

    def get(self, name: str) -> TaskSpec | None:
        return self._tasks.get(name)

    def describe(self) -> list[dict[str, Any]]:
        """Registered tasks in registration order, for listing."""
        return [
            {
                "name": spec.name,
                "kind": spec.kind,
                "description": spec.description,
                "children": list(spec.children),
            }
            for spec in self._tasks.values()
        ]

    # ── Execution ────────────────────────────────────────────────

    @traced
    def run(self, name: str) -> TaskResult:
        """Run the task registered as *name* and return its result."""
        return self._run(name)

    def _run(self, name: str) -> TaskResult:
        spec = self._tasks.get(name)
        if spec is None:
            return TaskResult(
                ok=False,
                op=name,
                error=TaskError(
                    code="UNKNOWN_TASK",
                    message=f"Unknown task: {name}",
                    detail={"available": self.names()},
                ),
            )

        if spec.kind == "series":
            result = self._run_series(spec)
        elif spec.kind == "parallel":
            result = self._run_parallel(spec)
        else:
            result = self._call(spec)

        warnings = list(result.warnings)
        self._dispatch_hook(
            "post_task",
            {"task": name, "ok": result.ok, "data": result.data},
            warnings,
        )
        if len(warnings) != len(result.warnings):
            result = result.model_copy(update={"warnings": warnings})
        return result

    def _call(self, spec: TaskSpec) -> TaskResult:
        assert spec.fn is not None
        try:
            return spec.fn()
        except Exception as exc:
            logger.exception("Task %s crashed", spec.name)
            return TaskResult(
                ok=False,
                op=spec.name,
                error=TaskError(
                    code="TASK_CRASHED",
                    message=f"{type(exc).__name__}: {exc}",
                    detail={"type": type(exc).__name__},
                ),
            )

    def _run_series(self, spec: TaskSpec) -> TaskResult:
        results: list[TaskResult] = []
        skipped: list[str] = []
        for index, child in enumerate(spec.children):
            result = self._run(child)
            results.append(result)
            if not result.ok:
                skipped = list(spec.children[index + 1 :])
                break

        failed = next((r for r in results if not r.ok), None)
        error = None
        if failed is not None:
            logger.warning("%s: %s failed, skipping %s", spec.name, failed.op, skipped or "nothing")
            error = TaskError(
                code="SERIES_ABORTED",
                message=f"{failed.op} failed; {len(skipped)} task(s) skipped",
                detail={"failed": failed.op, "skipped": skipped},
            )
        return _composite(spec, results, error=error, skipped=skipped)

    def _run_parallel(self, spec: TaskSpec) -> TaskResult:
        if self._jobs == 1 or len(spec.children) < 2:
            results = [self._run(child) for child in spec.children]
        else:
            workers = min(self._jobs, len(spec.children))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="assetctl") as pool:
                futures = [
                    pool.submit(contextvars.copy_context().run, self._run, child)
                    for child in spec.children
                ]
                results = [future.result() for future in futures]

        failed = [r.op for r in results if not r.ok]
        error = None
        if failed:
            error = TaskError(
                code="PARALLEL_FAILED",
                message=f"{len(failed)} of {len(results)} task(s) failed: {', '.join(failed)}",
                detail={"failed": failed},
            )
        return _composite(spec, results, error=error)


def _composite(
    spec: TaskSpec,
    results: list[TaskResult],
    *,
    error: TaskError | None,
    skipped: list[str] | None = None,
) -> TaskResult:
    data: dict[str, Any] = {
        "kind": spec.kind,
        "tasks": [r.model_dump(exclude={"meta"}, exclude_none=True) for r in results],
    }
    if spec.kind == "series":
        data["skipped"] = skipped or []
    warnings = [f"{r.op}: {w}" for r in results for w in r.warnings]
    return TaskResult(ok=error is None, op=spec.name, data=data, warnings=warnings, error=error)


def build_default_runner(
    project: Project,
    *,
    jobs: int | None = None,
    server_factory: ServerFactory = livereload_server,
) -> TaskRunner:
    """Register the standard task set for *project*."""
    from assetctl.services.housekeeping import HousekeepingService
    from assetctl.services.images import ImageService
    from assetctl.services.markup import MarkupService
    from assetctl.services.scripts import ScriptService
    from assetctl.services.styles import StyleService
    from assetctl.services.watch import WatchService

    if jobs is None:
        jobs = project.settings.build.jobs
    runner = TaskRunner(project, jobs=jobs)

    styles = StyleService(project)
    housekeeping = HousekeepingService(project)
    runner.register("sass", styles.sass, "Compile Sass to minified CSS with source maps")
    runner.register("less", styles.less, "Compile Less to a single minified stylesheet")
    runner.register(
        "javascript",
        ScriptService(project).javascript,
        "Transpile, bundle and minify the configured scripts",
    )
    runner.register("imagemin", ImageService(project).imagemin, "Optimize images (cached)")
    runner.register("kit", MarkupService(project).kit, "Render .kit templates to HTML")
    runner.register("clear-cache", housekeeping.clear_cache, "Empty the image cache")
    runner.register("clean-dist", housekeeping.clean_dist, "Delete everything inside dist/")
    runner.register("zip", housekeeping.zip_project, "Archive the project")
    runner.parallel("serve", *BUILD_TASKS, description="Run every build stage")

    watcher = WatchService(
        project,
        rebuild=lambda: runner.run("serve"),
        server_factory=server_factory,
    )
    runner.register("watch", watcher.watch, "Serve the project and rebuild on change")
    runner.series("default", "serve", "watch", description="Build everything, then watch")
    return runner
