"""TaskResult and TaskError — the universal task contract.

INVARIANT: Every named task returns a TaskResult, and returns it only
after all of its file I/O has finished. Composition inspects ``ok``
instead of relying on exceptions or callbacks.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class TaskError(BaseModel):
    """Structured error payload within a TaskResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class TaskResult(BaseModel):
    """Return type for all task operations.

    Attributes:
        ok: Whether the task succeeded.
        op: Name of the task (e.g. ``"sass"``).
        data: Task-specific payload (outputs written, counts, children).
        warnings: Non-fatal issues encountered during the task.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: TaskError | None = None
    meta: dict[str, Any] | None = None
