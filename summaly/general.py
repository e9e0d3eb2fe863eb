"""General summarizer, the fallback for any URL no plugin claims."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import ParseResult, urljoin

from bs4 import BeautifulSoup
from trafilatura.metadata import extract_metadata

from summaly.models import Player, ScrapingOptions, Summary
from summaly.plugins.base import SummalyPlugin
from summaly.utils.http import FetchResponse, GuardedFetcher

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

TITLE_MAX = 100
DESCRIPTION_MAX = 300
DEFAULT_PLAYER_ALLOW = ["autoplay", "encrypted-media", "fullscreen"]


@dataclass(frozen=True)
class Page:
    """A fetched HTML document ready for extraction."""

    body: str
    soup: BeautifulSoup
    response: FetchResponse

    @classmethod
    def from_response(cls, response: FetchResponse) -> Page:
        return cls(body=response.text, soup=BeautifulSoup(response.text, "html.parser"), response=response)


async def scrape(fetcher: GuardedFetcher, url: str, opts: ScrapingOptions) -> Page:
    """GET *url* as HTML and parse it."""
    response = await fetcher.get(url, opts)
    return Page.from_response(response)


class GeneralPlugin(SummalyPlugin):
    """Extract OpenGraph / Twitter card / HTML metadata from any page."""

    def test(self, url: ParseResult) -> bool:
        return True

    async def summarize(
        self, url: ParseResult, opts: ScrapingOptions, fetcher: GuardedFetcher
    ) -> Summary | None:
        page = await scrape(fetcher, url.geturl(), opts)
        return parse_general(url, page)


def parse_general(url: ParseResult, page: Page) -> Summary | None:
    """Build a summary from *page*; None when the page has no usable title."""
    soup = page.soup
    base = page.response.url or url.geturl()
    fallback = _trafilatura_metadata(page.body, base)

    title = _clip(
        _meta(soup, "og:title")
        or _meta(soup, "twitter:title")
        or _title_tag(soup)
        or fallback.get("title"),
        TITLE_MAX,
    )
    if not title:
        return None

    description = _clip(
        _meta(soup, "og:description")
        or _meta(soup, "twitter:description")
        or _meta(soup, "description")
        or fallback.get("description"),
        DESCRIPTION_MAX,
    )
    if description == title:
        description = None

    thumbnail = (
        _meta(soup, "og:image")
        or _meta(soup, "twitter:image")
        or _link(soup, "image_src")
        or _link(soup, "apple-touch-icon")
        or fallback.get("image")
    )
    icon = _link(soup, "icon") or _link(soup, "shortcut icon") or _link(soup, "apple-touch-icon")
    sitename = (
        _meta(soup, "og:site_name")
        or _meta(soup, "application-name")
        or fallback.get("sitename")
        or url.hostname
    )

    return Summary(
        title=title,
        icon=_absolute(base, icon),
        description=description,
        thumbnail=_absolute(base, thumbnail),
        sitename=sitename,
        player=_player(soup, base),
        sensitive=_meta(soup, "mixi:content-rating") == "1",
        activity_pub=_activity_pub(soup, base),
        fediverse_creator=_meta(soup, "fediverse:creator"),
    )


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------


def _meta(soup: BeautifulSoup, key: str) -> str | None:
    tag = soup.find("meta", attrs={"property": key}) or soup.find("meta", attrs={"name": key})
    if tag is None:
        return None
    content = tag.get("content")
    if not isinstance(content, str):
        return None
    content = content.strip()
    return content or None


def _link(soup: BeautifulSoup, rel: str) -> str | None:
    wanted = rel.split()
    for tag in soup.find_all("link", href=True):
        rels = [r.lower() for r in tag.get("rel") or []]
        if rels == wanted or (len(wanted) == 1 and wanted[0] in rels):
            return tag["href"].strip() or None
    return None


def _title_tag(soup: BeautifulSoup) -> str | None:
    if soup.title is None:
        return None
    return soup.title.get_text() or None


def _clip(text: str | None, limit: int) -> str | None:
    if not text:
        return None
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if len(text) > limit:
        text = text[: limit - 1].rstrip() + "…"
    return text or None


def _absolute(base: str, href: str | None) -> str | None:
    if not href:
        return None
    return urljoin(base, href)


def _int(value: str | None) -> int | None:
    try:
        return int(value) if value else None
    except ValueError:
        return None


def _player(soup: BeautifulSoup, base: str) -> Player:
    url = (
        _meta(soup, "twitter:player")
        or _meta(soup, "og:video:secure_url")
        or _meta(soup, "og:video:url")
        or _meta(soup, "og:video")
    )
    if not url:
        return Player()
    width = _int(_meta(soup, "twitter:player:width") or _meta(soup, "og:video:width"))
    height = _int(_meta(soup, "twitter:player:height") or _meta(soup, "og:video:height"))
    return Player(url=_absolute(base, url), width=width, height=height, allow=list(DEFAULT_PLAYER_ALLOW))


def _activity_pub(soup: BeautifulSoup, base: str) -> str | None:
    tag = soup.find("link", attrs={"rel": "alternate", "type": "application/activity+json"})
    if tag is None or not tag.get("href"):
        return None
    return _absolute(base, tag["href"])


def _trafilatura_metadata(html: str, url: str) -> dict[str, Any]:
    try:
        document = extract_metadata(html, default_url=url)
    except Exception:
        logger.warning("trafilatura metadata extraction failed for %s", url, exc_info=True)
        return {}
    if document is None:
        return {}
    return {
        key: getattr(document, key, None)
        for key in ("title", "description", "sitename", "image")
    }
