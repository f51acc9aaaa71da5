"""BaseService — shared foundation for every task-providing service.

Every service receives a :class:`Project` at construction time. The
Project exposes the frozen settings, the path registry, output
directories, the image cache, and the plugin hook relay.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from assetctl.infrastructure.project import Project

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class StyleService(BaseService):
            def sass(self) -> TaskResult:
                files = load_inputs(self._project.root, self._project.paths.sass)
                ...
    """

    def __init__(self, project: Project) -> None:
        self._project = project

    def _dispatch_hook(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Call a plugin hook synchronously.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        hook_fn = getattr(self._project.plugins.hook, hook_name)
        try:
            hook_fn(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")

    def _notify_success(self, message_key: str | None, path: str, warnings: list[str]) -> None:
        if message_key is None:
            return
        message = self._project.settings.notifier.messages.get(message_key, "")
        self._dispatch_hook(
            "notify_success",
            {"task": message_key, "message": message, "path": path},
            warnings,
        )

    def _notify_error(self, task: str, message: str, path: str, warnings: list[str]) -> None:
        self._dispatch_hook(
            "notify_error",
            {"task": task, "message": message, "path": path},
            warnings,
        )
