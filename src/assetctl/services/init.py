"""InitService — scaffold a new assetctl project.

Writes ``assetctl.toml`` plus a starter file for every stage, rendered from
the packaged ``templates/init`` group. Existing starter files are left
untouched; an existing ``assetctl.toml`` aborts the scaffold.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import TemplateError

from assetctl.config.discovery import CONFIG_FILENAME
from assetctl.infrastructure.templates import build_template_environment
from assetctl.services.result import TaskError, TaskResult

logger = logging.getLogger(__name__)

# target path -> template name
STARTER_FILES: dict[str, str] = {
    "src/sass/main.scss": "main.scss.j2",
    "src/less/styles.less": "styles.less.j2",
    "src/js/alert.js": "alert.js.j2",
    "src/js/project.js": "project.js.j2",
    "html/index.kit": "index.kit.j2",
}

SOURCE_DIRS = ("src/sass", "src/less", "src/js", "src/img", "html")


class InitService:
    """Create the config file and source layout for a project."""

    @staticmethod
    def init_project(
        path: Path,
        *,
        name: str,
        port: int = 3000,
        open_browser: bool = True,
        archive: str = "project.zip",
    ) -> TaskResult:
        op = "init"
        path = path.resolve()
        config_file = path / CONFIG_FILENAME
        if config_file.exists():
            return TaskResult(
                ok=False,
                op=op,
                error=TaskError(
                    code="ALREADY_EXISTS",
                    message=f"{CONFIG_FILENAME} already exists in {path}",
                    detail={"path": str(config_file)},
                ),
            )

        env = build_template_environment("init")
        variables = {"name": name, "port": port, "open_browser": open_browser, "archive": archive}

        created: list[str] = []
        try:
            for directory in SOURCE_DIRS:
                (path / directory).mkdir(parents=True, exist_ok=True)

            config_file.write_text(
                env.get_template("assetctl.toml.j2").render(**variables), encoding="utf-8"
            )
            created.append(CONFIG_FILENAME)

            for target, template in STARTER_FILES.items():
                dest = path / target
                if dest.exists():
                    logger.debug("keeping existing %s", target)
                    continue
                dest.write_text(env.get_template(template).render(**variables), encoding="utf-8")
                created.append(target)
        except (OSError, TemplateError) as exc:
            return TaskResult(
                ok=False,
                op=op,
                error=TaskError(code="IO_ERROR", message=str(exc), detail={"created": created}),
            )

        return TaskResult(
            ok=True,
            op=op,
            data={"path": str(path), "name": name, "created": created},
        )
