"""Base plugin interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from fnmatch import fnmatch
from typing import TYPE_CHECKING
from urllib.parse import ParseResult

if TYPE_CHECKING:
    from summaly.models import ScrapingOptions, Summary
    from summaly.utils.http import GuardedFetcher


class SummalyPlugin(ABC):
    """A site-specific summarizer.

    A plugin claims URLs through :meth:`test` and turns a claimed URL into a
    :class:`~summaly.models.Summary`. All network access should go through
    the supplied fetcher so robots, timeouts and size limits apply.
    """

    hostnames: list[str] = []

    def test(self, url: ParseResult) -> bool:
        """Check if this plugin handles *url*; matches ``hostnames`` patterns."""
        host = (url.hostname or "").lower()
        return bool(host) and any(fnmatch(host, p) for p in self.hostnames)

    @abstractmethod
    async def summarize(
        self, url: ParseResult, opts: ScrapingOptions, fetcher: GuardedFetcher
    ) -> Summary | None:
        """Summarize *url*, or return None when nothing could be extracted."""
        ...

    @property
    def name(self) -> str:
        return type(self).__name__
