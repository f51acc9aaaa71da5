"""Errors raised by content transforms."""

from __future__ import annotations


class TransformError(Exception):
    """A content transform rejected its input (malformed source, missing import).

    Caught per file by the stage error guard; never aborts sibling files.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message
