"""WatchService — the ``watch`` task.

Serves the project root with live reload and rebuilds every stage when
anything under a watched source directory changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from assetctl.infrastructure.filesystem import watch_roots
from assetctl.infrastructure.server import ServerFactory, livereload_server, serve_forever
from assetctl.services.base import BaseService
from assetctl.services.result import TaskResult

if TYPE_CHECKING:
    from assetctl.infrastructure.project import Project

logger = logging.getLogger(__name__)


class WatchService(BaseService):
    """Static server plus change-triggered rebuilds."""

    def __init__(
        self,
        project: Project,
        *,
        rebuild: Callable[[], TaskResult],
        server_factory: ServerFactory = livereload_server,
    ) -> None:
        super().__init__(project)
        self._rebuild = rebuild
        self._server_factory = server_factory
        self._rebuilds = 0

    def watched_directories(self) -> list[str]:
        """Glob base directories of every registry category, root-relative."""
        root = self._project.root
        seen: list[str] = []
        for patterns in self._project.paths.categories().values():
            for directory in watch_roots(root, patterns):
                rel = directory.relative_to(root).as_posix() if directory != root else "."
                if rel not in seen:
                    seen.append(rel)
        return seen

    def _on_change(self) -> None:
        self._rebuilds += 1
        logger.info("change detected, rebuilding (#%d)", self._rebuilds)
        result = self._rebuild()
        if not result.ok and result.error is not None:
            logger.warning("rebuild failed: %s", result.error.message)
        for warning in result.warnings:
            logger.warning("rebuild: %s", warning)

    def watch(self) -> TaskResult:
        """Block until interrupted. Ctrl-C ends the task successfully."""
        root = self._project.root
        directories = self.watched_directories()
        server = self._server_factory()
        for rel in directories:
            server.watch(str(root / rel), self._on_change)
            logger.debug("watching %s", rel)

        try:
            serve_forever(server, root=root, config=self._project.settings.server)
        except KeyboardInterrupt:
            logger.debug("watch interrupted")

        return TaskResult(
            ok=True,
            op="watch",
            data={"watched": directories, "rebuilds": self._rebuilds},
        )
