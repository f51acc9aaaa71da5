"""Pluggy manager for assetctl notification hooks.

Plugins come from three places, registered in this order:

1. the built-in console notifier (registered by ``Project.plugins``);
2. installed distributions exposing an ``assetctl.plugins`` entry point;
3. ``.assetctl/plugins/*.py`` inside the project, one module per file.

Every plugin receives ``notify_success``/``notify_error`` per file and
``post_task`` per finished task. A plugin that fails to import or
construct is logged and left out; it never stops a build.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

import pluggy

from assetctl.plugins.hookspecs import AssetctlHookSpec

PROJECT_NAME = "assetctl"
ENTRY_POINT_GROUP = "assetctl.plugins"
LOCAL_MODULE_PREFIX = "assetctl_local_plugin_"

logger = logging.getLogger(__name__)


def _import_local(py_file: Path) -> ModuleType | None:
    module_name = LOCAL_MODULE_PREFIX + py_file.stem
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("plugin %s: not an importable module", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("plugin %s: import failed", py_file, exc_info=True)
        return None
    return module


class PluginManager:
    """Wraps ``pluggy.PluginManager`` with assetctl's discovery rules."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(AssetctlHookSpec)
        self._loaded: bool = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        resolved = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("plugin registered: %s", resolved)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Add entry-point plugins, then project-local ones from *local_dir*.

        Returns the names of every registered plugin, built-ins included.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()
        if local_dir is not None and local_dir.is_dir():
            for py_file in sorted(local_dir.glob("*.py")):
                if not py_file.name.startswith("_"):
                    self._load_local(py_file)
        self._loaded = True
        return self.list_plugin_names()

    def _load_local(self, py_file: Path) -> None:
        module = _import_local(py_file)
        if module is None:
            return
        for cls in self._hook_classes(module):
            try:
                plugin = cls()
            except Exception:
                logger.warning("plugin %s: %s() failed", py_file, cls.__name__, exc_info=True)
                continue
            self.register_plugin(plugin, name=f"{module.__name__}.{cls.__name__}")

    @classmethod
    def _hook_classes(cls, module: ModuleType) -> list[type]:
        """Classes defined in *module* itself that implement a hook."""
        return [
            obj
            for _, obj in inspect.getmembers(module, inspect.isclass)
            if obj.__module__ == module.__name__ and cls._has_hook_impls(obj)
        ]

    def _instantiate_entry_point_classes(self) -> None:
        # An entry point may name the plugin class; hooks need an instance.
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("plugin %s: constructor failed", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """True if any public attribute of *cls* carries ``assetctl_impl``."""
        return any(
            callable(member) and getattr(member, f"{PROJECT_NAME}_impl", None)
            for name, member in inspect.getmembers(cls)
            if not name.startswith("_")
        )
