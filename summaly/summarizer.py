"""Summarize a URL: resolve redirects, pick a plugin, run it."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache
from typing import Any
from urllib.parse import urlparse

from summaly.config import Config
from summaly.errors import FetchError, SummarizeFailed
from summaly.general import GeneralPlugin
from summaly.models import SummalyOptions, Summary
from summaly.plugins import get_builtin_plugins
from summaly.plugins.base import SummalyPlugin
from summaly.redirects import resolve_redirects
from summaly.router import PluginRegistry
from summaly.utils.http import GuardedFetcher
from summaly.utils.robots import RobotsPolicy

logger = logging.getLogger(__name__)


class Summarizer:
    """Owns a fetcher (and through it the robots cache) plus default options."""

    def __init__(
        self,
        options: SummalyOptions | None = None,
        *,
        fetcher: GuardedFetcher | None = None,
        builtin_plugins: Sequence[SummalyPlugin] | None = None,
    ) -> None:
        self.defaults = options or SummalyOptions()
        self.fetcher = fetcher or GuardedFetcher()
        self.builtin_plugins = list(
            get_builtin_plugins() if builtin_plugins is None else builtin_plugins
        )
        self.fallback: SummalyPlugin = GeneralPlugin()

    def merge_options(self, options: SummalyOptions | None = None, **overrides: Any) -> SummalyOptions:
        """Caller values that were explicitly set win over the defaults."""
        update: dict[str, Any] = {}
        if options is not None:
            update = {name: getattr(options, name) for name in options.model_fields_set}
        update.update(overrides)
        return SummalyOptions.model_validate({**dict(self.defaults), **update})

    async def summarize(
        self, url: str, options: SummalyOptions | None = None, **overrides: Any
    ) -> Summary:
        opts = self.merge_options(options, **overrides)
        registry = PluginRegistry([*self.builtin_plugins, *opts.plugins])
        scraping_options = opts.scraping_options()

        actual_url = url
        if opts.follow_redirects:
            actual_url = await resolve_redirects(self.fetcher, url, scraping_options)

        try:
            parsed = urlparse(actual_url)
        except ValueError as exc:
            raise FetchError(f"Invalid URL {actual_url!r}: {exc}") from exc
        plugin = registry.resolve(parsed) or self.fallback
        logger.debug("Summarizing %s with %s", actual_url, plugin.name)

        summary = await plugin.summarize(parsed, scraping_options, self.fetcher)
        if summary is None:
            raise SummarizeFailed()

        return summary.model_copy(update={"url": actual_url})


@lru_cache(maxsize=1)
def default_summarizer() -> Summarizer:
    """Process-wide summarizer sharing one robots cache."""
    return Summarizer(fetcher=GuardedFetcher(robots=RobotsPolicy(), config=Config.from_env()))


async def summaly(url: str, options: SummalyOptions | None = None, **overrides: Any) -> Summary:
    """Summarize a web page."""
    return await default_summarizer().summarize(url, options, **overrides)
