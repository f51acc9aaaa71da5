"""Tests for output mode selection."""

import json

from assetctl.output.formatters import OutputSettings, format_result
from assetctl.services.result import TaskError, TaskResult


def _stage() -> TaskResult:
    return TaskResult(
        ok=True,
        op="sass",
        data={"inputs": 1, "outputs": ["dist/css/a.min.css", "dist/css/a.css.map"], "failed": []},
    )


class TestFormatResult:
    def test_json(self) -> None:
        out = format_result(_stage(), settings=OutputSettings(json_output=True))
        parsed = json.loads(out)
        assert parsed["ok"] is True
        assert parsed["op"] == "sass"
        assert parsed["data"]["outputs"][0] == "dist/css/a.min.css"

    def test_json_wins_over_quiet(self) -> None:
        out = format_result(_stage(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(out)["op"] == "sass"

    def test_quiet_lists_outputs(self) -> None:
        out = format_result(_stage(), settings=OutputSettings(quiet=True))
        assert out == "dist/css/a.min.css\ndist/css/a.css.map"

    def test_human_default(self) -> None:
        out = format_result(_stage())
        assert out.startswith("OK")
        assert "dist/css/a.min.css" in out

    def test_error_json_includes_code(self) -> None:
        result = TaskResult(
            ok=False, op="zip", error=TaskError(code="IO_ERROR", message="disk full")
        )
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["error"]["code"] == "IO_ERROR"
