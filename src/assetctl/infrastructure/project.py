"""Project — the single dependency injected into every service.

The Project owns the resolved settings (including the frozen path
registry), the lazily created image-cache database, and the plugin
manager used for notifications. It performs no building itself.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from assetctl.infrastructure.cache import ImageCache
from assetctl.infrastructure.database.engine import init_database

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from assetctl.config.models import PathRegistry
    from assetctl.config.settings import AssetSettings
    from assetctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

STATE_DIR = ".assetctl"
OUTPUT_KINDS = ("css", "js", "img", "html")


class Project:
    """A front-end project rooted at ``settings.project_root``.

    The image cache engine is created on first use so tasks that never
    touch images (and ``--help``) never create ``.assetctl/``.
    """

    def __init__(self, settings: AssetSettings) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        self._image_cache: ImageCache | None = None
        self._plugins: PluginManager | None = None
        self._lock = threading.RLock()

    @property
    def root(self) -> Path:
        return self._settings.project_root

    @property
    def settings(self) -> AssetSettings:
        return self._settings

    @property
    def paths(self) -> PathRegistry:
        """The path registry (frozen; shared by every stage)."""
        return self._settings.paths

    def output_dir(self, kind: str) -> Path:
        """Destination directory for *kind* (``css``, ``js``, ``img``, ``html``)."""
        if kind not in OUTPUT_KINDS:
            msg = f"Unknown output kind: {kind!r}"
            raise ValueError(msg)
        return self.root / getattr(self._settings.output, kind)

    @property
    def dist_dir(self) -> Path:
        return self.root / self._settings.output.dist

    @property
    def state_dir(self) -> Path:
        return self.root / STATE_DIR

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine for the state database (created lazily)."""
        with self._lock:
            if self._engine is None:
                self._engine = init_database(self.root / self._settings.images.cache_path)
            return self._engine

    @property
    def image_cache(self) -> ImageCache:
        with self._lock:
            if self._image_cache is None:
                self._image_cache = ImageCache(self.engine)
            return self._image_cache

    @property
    def plugins(self) -> PluginManager:
        """Plugin manager with the built-in console notifier registered.

        Entry-point and local plugins are only added by :meth:`load_plugins`.
        """
        with self._lock:
            if self._plugins is None:
                from assetctl.plugins.builtins.notifier import ConsoleNotifier
                from assetctl.plugins.manager import PluginManager

                pm = PluginManager()
                pm.register_plugin(
                    ConsoleNotifier(self._settings.notifier), name="console-notifier"
                )
                self._plugins = pm
            return self._plugins

    def load_plugins(self) -> list[str]:
        """Discover entry-point plugins and ``.assetctl/plugins/*.py``."""
        return self.plugins.discover_and_load(local_dir=self.state_dir / "plugins")

    def close(self) -> None:
        """Dispose of the database engine, if one was created."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._image_cache = None
