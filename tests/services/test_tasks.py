"""Tests for TaskRunner — registration, series, parallel."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any

import pytest

from assetctl.infrastructure.project import Project
from assetctl.services.result import TaskError, TaskResult
from assetctl.services.tasks import BUILD_TASKS, TaskRunner, build_default_runner


def _ok(name: str, log: list[str]) -> Callable[[], TaskResult]:
    def run() -> TaskResult:
        log.append(name)
        return TaskResult(ok=True, op=name, data={"outputs": [f"dist/{name}"]})

    return run


def _fail(name: str, log: list[str]) -> Callable[[], TaskResult]:
    def run() -> TaskResult:
        log.append(name)
        return TaskResult(
            ok=False, op=name, error=TaskError(code="IO_ERROR", message="bad input")
        )

    return run


@pytest.fixture
def log() -> list[str]:
    return []


class TestRegistration:
    def test_duplicate_name(self, project: Project, log: list[str]) -> None:
        runner = TaskRunner(project)
        runner.register("a", _ok("a", log))
        with pytest.raises(ValueError, match="already registered"):
            runner.register("a", _ok("a", log))

    def test_unknown_reference(self, project: Project) -> None:
        runner = TaskRunner(project)
        with pytest.raises(ValueError, match="unknown task"):
            runner.series("build", "missing")

    def test_describe(self, project: Project, log: list[str]) -> None:
        runner = TaskRunner(project)
        runner.register("a", _ok("a", log), "Task A")
        runner.parallel("all", "a", description="Everything")
        assert runner.describe() == [
            {"name": "a", "kind": "task", "description": "Task A", "children": []},
            {"name": "all", "kind": "parallel", "description": "Everything", "children": ["a"]},
        ]


class TestRun:
    def test_unknown_task(self, project: Project) -> None:
        result = TaskRunner(project).run("nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_TASK"

    def test_crash_becomes_error_result(self, project: Project) -> None:
        def boom() -> TaskResult:
            raise RuntimeError("kaboom")

        runner = TaskRunner(project)
        runner.register("boom", boom)
        result = runner.run("boom")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "TASK_CRASHED"
        assert "kaboom" in result.error.message

    def test_post_task_hook(self, project: Project, recorder: Any, log: list[str]) -> None:
        runner = TaskRunner(project)
        runner.register("a", _ok("a", log))
        runner.register("b", _fail("b", log))
        runner.parallel("all", "a", "b")
        runner.run("all")
        assert recorder.tasks == [
            {"task": "a", "ok": True},
            {"task": "b", "ok": False},
            {"task": "all", "ok": False},
        ]


class TestSeries:
    def test_runs_in_order(self, project: Project, log: list[str]) -> None:
        runner = TaskRunner(project)
        for name in ("a", "b", "c"):
            runner.register(name, _ok(name, log))
        runner.series("abc", "c", "a", "b")

        result = runner.run("abc")

        assert result.ok
        assert log == ["c", "a", "b"]
        assert [t["op"] for t in result.data["tasks"]] == ["c", "a", "b"]
        assert result.data["skipped"] == []

    def test_failure_stops_later_children(self, project: Project, log: list[str]) -> None:
        runner = TaskRunner(project)
        runner.register("a", _ok("a", log))
        runner.register("b", _fail("b", log))
        runner.register("c", _ok("c", log))
        runner.series("abc", "a", "b", "c")

        result = runner.run("abc")

        assert not result.ok
        assert result.error is not None
        assert result.error.code == "SERIES_ABORTED"
        assert log == ["a", "b"]
        assert result.data["skipped"] == ["c"]

    def test_each_child_completes_before_next(self, project: Project) -> None:
        events: list[str] = []

        def slow() -> TaskResult:
            events.append("slow:start")
            time.sleep(0.05)
            events.append("slow:end")
            return TaskResult(ok=True, op="slow")

        def fast() -> TaskResult:
            events.append("fast")
            return TaskResult(ok=True, op="fast")

        runner = TaskRunner(project, jobs=4)
        runner.register("slow", slow)
        runner.register("fast", fast)
        runner.series("both", "slow", "fast")
        runner.run("both")
        assert events == ["slow:start", "slow:end", "fast"]


class TestParallel:
    def test_failure_does_not_stop_siblings(self, project: Project, log: list[str]) -> None:
        runner = TaskRunner(project)
        runner.register("a", _fail("a", log))
        runner.register("b", _ok("b", log))
        runner.register("c", _ok("c", log))
        runner.parallel("abc", "a", "b", "c")

        result = runner.run("abc")

        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PARALLEL_FAILED"
        assert result.error.detail["failed"] == ["a"]
        assert sorted(log) == ["a", "b", "c"]

    def test_crash_does_not_stop_siblings(self, project: Project, log: list[str]) -> None:
        def boom() -> TaskResult:
            raise OSError("disk full")

        runner = TaskRunner(project)
        runner.register("boom", boom)
        runner.register("b", _ok("b", log))
        runner.parallel("both", "boom", "b")
        result = runner.run("both")
        assert not result.ok
        assert log == ["b"]

    def test_thread_pool_runs_concurrently(self, project: Project) -> None:
        barrier = threading.Barrier(3, timeout=5)

        def waiter(name: str) -> Callable[[], TaskResult]:
            def run() -> TaskResult:
                barrier.wait()
                return TaskResult(ok=True, op=name)

            return run

        runner = TaskRunner(project, jobs=3)
        for name in ("a", "b", "c"):
            runner.register(name, waiter(name))
        runner.parallel("abc", "a", "b", "c")

        result = runner.run("abc")

        assert result.ok
        assert [t["op"] for t in result.data["tasks"]] == ["a", "b", "c"]

    def test_nested_composition(self, project: Project, log: list[str]) -> None:
        runner = TaskRunner(project, jobs=2)
        runner.register("a", _ok("a", log))
        runner.register("b", _ok("b", log))
        runner.register("w", _ok("w", log))
        runner.parallel("build", "a", "b")
        runner.series("default", "build", "w")

        result = runner.run("default")

        assert result.ok
        assert log[-1] == "w"
        assert sorted(log[:2]) == ["a", "b"]


class TestDefaultRunner:
    def test_registered_tasks(self, project: Project) -> None:
        runner = build_default_runner(project)
        assert set(runner.names()) == {
            "sass",
            "less",
            "javascript",
            "imagemin",
            "kit",
            "watch",
            "clear-cache",
            "serve",
            "default",
            "zip",
            "clean-dist",
        }
        serve = runner.get("serve")
        default = runner.get("default")
        assert serve is not None and serve.kind == "parallel"
        assert serve.children == BUILD_TASKS
        assert default is not None and default.kind == "series"
        assert default.children == ("serve", "watch")

    def test_serve_on_empty_project(self, project: Project) -> None:
        result = build_default_runner(project).run("serve")
        assert result.ok
        assert sorted(t["op"] for t in result.data["tasks"]) == sorted(BUILD_TASKS)

    def test_jobs_from_settings(self, project: Project) -> None:
        runner = build_default_runner(project, jobs=4)
        result = runner.run("serve")
        assert result.ok
