"""Bluesky post and profile pages."""

from __future__ import annotations

from urllib.parse import ParseResult

from summaly.general import Page, parse_general
from summaly.models import ScrapingOptions, Summary
from summaly.plugins.base import SummalyPlugin
from summaly.utils.http import GuardedFetcher


class BlueskyPlugin(SummalyPlugin):
    """bsky.app serves its OpenGraph tags to GET only; HEAD answers 404."""

    hostnames = ["bsky.app"]

    async def summarize(
        self, url: ParseResult, opts: ScrapingOptions, fetcher: GuardedFetcher
    ) -> Summary | None:
        response = await fetcher.get(url.geturl(), opts)
        return parse_general(url, Page.from_response(response))
