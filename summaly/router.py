"""Plugin registry: dispatch URLs to the plugin that claims them."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import ParseResult

from summaly.plugins.base import SummalyPlugin


class PluginRegistry:
    """Ordered plugins; the first one whose ``test`` matches wins."""

    def __init__(self, plugins: Iterable[SummalyPlugin] = ()) -> None:
        self._plugins: list[SummalyPlugin] = list(plugins)

    def register(self, plugin: SummalyPlugin) -> None:
        self._plugins.append(plugin)

    def resolve(self, url: ParseResult) -> SummalyPlugin | None:
        for plugin in self._plugins:
            if plugin.test(url):
                return plugin
        return None

    def __len__(self) -> int:
        return len(self._plugins)
