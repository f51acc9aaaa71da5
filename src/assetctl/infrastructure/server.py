"""Development server with live reload, backed by the livereload package."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from assetctl.config.models import ServerConfig


class ReloadServer(Protocol):
    """The subset of :class:`livereload.Server` the watch loop relies on."""

    def watch(self, filepath: str, func: Callable[[], object] | None = None) -> None: ...

    def serve(
        self,
        port: int = ...,
        liveport: int | None = ...,
        host: str | None = ...,
        root: str | None = ...,
        open_url_delay: float | None = ...,
    ) -> None: ...


ServerFactory = Callable[[], ReloadServer]


def livereload_server() -> ReloadServer:
    from livereload import Server

    return Server()


def serve_forever(server: ReloadServer, *, root: Path, config: ServerConfig) -> None:
    """Block serving *root* until the process is interrupted.

    A browser tab is opened after ``config.delay`` seconds when
    ``config.open_browser`` is set.
    """
    open_delay: float | None = None
    if config.open_browser:
        open_delay = config.delay if config.delay is not None else 0.5
    server.serve(
        port=config.port,
        liveport=config.livereload_port,
        host=config.host,
        root=str(root),
        open_url_delay=open_delay,
    )
