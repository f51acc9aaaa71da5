"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins in ``.assetctl/plugins/``.
INVARIANT: Plugin failures are warnings, never errors.
"""

from assetctl.plugins.manager import PluginManager

__all__ = ["PluginManager"]
