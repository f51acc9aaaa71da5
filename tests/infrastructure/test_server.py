"""Tests for the live-reload server adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from assetctl.config.models import ServerConfig
from assetctl.infrastructure.server import serve_forever


class FakeServer:
    def __init__(self) -> None:
        self.served: dict[str, Any] | None = None

    def watch(self, filepath: str, func: Any = None) -> None:
        pass

    def serve(self, **kwargs: Any) -> None:
        self.served = kwargs


class TestServeForever:
    def test_passes_config(self, tmp_path: Path) -> None:
        server = FakeServer()
        config = ServerConfig(host="0.0.0.0", port=8080, livereload_port=35730, delay=2.0)
        serve_forever(server, root=tmp_path, config=config)
        assert server.served == {
            "port": 8080,
            "liveport": 35730,
            "host": "0.0.0.0",
            "root": str(tmp_path),
            "open_url_delay": 2.0,
        }

    def test_default_open_delay(self, tmp_path: Path) -> None:
        server = FakeServer()
        serve_forever(server, root=tmp_path, config=ServerConfig())
        assert server.served is not None
        assert server.served["open_url_delay"] == 0.5

    def test_no_browser(self, tmp_path: Path) -> None:
        server = FakeServer()
        serve_forever(server, root=tmp_path, config=ServerConfig(open_browser=False))
        assert server.served is not None
        assert server.served["open_url_delay"] is None
