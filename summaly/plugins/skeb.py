"""Skeb (skeb.jp) scraper with its rate-limit cookie handshake."""

from __future__ import annotations

import asyncio
import logging
import re
from urllib.parse import ParseResult

from bs4 import BeautifulSoup

from summaly.general import Page, parse_general
from summaly.models import ScrapingOptions, Summary
from summaly.plugins.base import SummalyPlugin
from summaly.utils.http import GuardedFetcher

logger = logging.getLogger(__name__)

_COOKIE_RE = re.compile(r'document\.cookie\s*=\s*"([^"]*)"')
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def find_cookie(html: str) -> str | None:
    """Return the cookie an inline script would set, if any."""
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script"):
        match = _COOKIE_RE.search(script.get_text())
        if match and match.group(1):
            return match.group(1)
    return None


def retry_after_delay(header: str | None) -> float | None:
    """Seconds to wait for a ``Retry-After`` header.

    Only a leading integer is read (``"5.5"`` waits 5 seconds); None when the
    header does not start with one.
    """
    if header is None:
        return None
    match = _LEADING_INT_RE.match(header)
    if match is None:
        return None
    return float(max(int(match.group(1)), 0))


class SkebPlugin(SummalyPlugin):
    """Skeb answers the first visit with 429 and a cookie-setting script.

    The page is retried once with that cookie after the advertised delay.
    """

    hostnames = ["skeb.jp", "ske.be"]

    sleep = staticmethod(asyncio.sleep)

    async def summarize(
        self, url: ParseResult, opts: ScrapingOptions, fetcher: GuardedFetcher
    ) -> Summary | None:
        response = await fetcher.get(url.geturl(), opts, tolerated_statuses=(429,))

        retry_after = response.headers.get("retry-after")
        if response.status == 429 and retry_after:
            cookie = find_cookie(response.text)
            delay = retry_after_delay(retry_after)
            logger.debug("Skeb rate limited %s; retrying in %ss", url.geturl(), delay)
            if delay:
                await self.sleep(delay)
            retry_opts = opts.model_copy(update={"cookie": opts.cookie or cookie})
            response = await fetcher.get(url.geturl(), retry_opts)

        return parse_general(url, Page.from_response(response))
