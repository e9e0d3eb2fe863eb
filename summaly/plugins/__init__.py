"""Builtin plugins, in dispatch order."""

from __future__ import annotations

import importlib
import logging

from summaly.plugins.base import SummalyPlugin

logger = logging.getLogger(__name__)

_PLUGIN_MODULES = [
    "summaly.plugins.bluesky",
    "summaly.plugins.skeb",
]


def get_builtin_plugins() -> list[SummalyPlugin]:
    """Import and instantiate all builtin plugins."""
    plugins: list[SummalyPlugin] = []
    for mod_path in _PLUGIN_MODULES:
        mod = importlib.import_module(mod_path)
        for attr_name in dir(mod):
            attr = getattr(mod, attr_name)
            if (
                isinstance(attr, type)
                and issubclass(attr, SummalyPlugin)
                and attr is not SummalyPlugin
                and attr.__module__ == mod_path
            ):
                plugins.append(attr())
    logger.debug("Loaded %d builtin plugins", len(plugins))
    return plugins
