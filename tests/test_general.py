"""Tests for the general (fallback) extractor."""

from __future__ import annotations

from urllib.parse import urlparse

import httpx
import pytest

from summaly.general import DEFAULT_PLAYER_ALLOW, GeneralPlugin, Page, parse_general
from summaly.models import ScrapingOptions
from summaly.utils.http import FetchResponse

from conftest import FakeSite, html, html_page

_URL = "https://site.test/articles/1"

_OG_HEAD = """
<meta property="og:title" content="  OpenGraph   Title ">
<meta property="og:description" content="A description from OpenGraph.">
<meta property="og:image" content="/img/cover.png">
<meta property="og:site_name" content="Site Test">
<meta name="fediverse:creator" content="@alice@site.test">
<link rel="icon" href="/favicon.png">
<link rel="alternate" type="application/activity+json" href="https://site.test/ap/1">
"""


def _page(document: str, url: str = _URL) -> Page:
    raw = document.encode("utf-8")
    response = FetchResponse(
        url=url,
        status=200,
        status_text="OK",
        headers=httpx.Headers({"content-type": "text/html; charset=utf-8"}),
        raw=raw,
        text=document,
    )
    return Page.from_response(response)


class TestParseGeneral:
    def test_opengraph_page(self) -> None:
        summary = parse_general(urlparse(_URL), _page(html_page("HTML title", _OG_HEAD)))

        assert summary is not None
        assert summary.title == "OpenGraph Title"
        assert summary.description == "A description from OpenGraph."
        assert summary.thumbnail == "https://site.test/img/cover.png"
        assert summary.icon == "https://site.test/favicon.png"
        assert summary.sitename == "Site Test"
        assert summary.fediverse_creator == "@alice@site.test"
        assert summary.activity_pub == "https://site.test/ap/1"
        assert summary.sensitive is False
        assert summary.player.url is None

    def test_title_tag_and_meta_description(self) -> None:
        head = '<meta name="description" content="Plain description">'
        summary = parse_general(urlparse(_URL), _page(html_page("Just a title", head)))

        assert summary is not None
        assert summary.title == "Just a title"
        assert summary.description == "Plain description"

    def test_twitter_card(self) -> None:
        head = """
        <meta name="twitter:title" content="Tweet title">
        <meta name="twitter:description" content="Tweet description">
        <meta name="twitter:image" content="https://cdn.site.test/t.jpg">
        <meta name="twitter:player" content="https://site.test/embed/1">
        <meta name="twitter:player:width" content="640">
        <meta name="twitter:player:height" content="360">
        """
        summary = parse_general(urlparse(_URL), _page(html_page("", head)))

        assert summary is not None
        assert summary.title == "Tweet title"
        assert summary.thumbnail == "https://cdn.site.test/t.jpg"
        assert summary.player.url == "https://site.test/embed/1"
        assert summary.player.width == 640
        assert summary.player.height == 360
        assert summary.player.allow == DEFAULT_PLAYER_ALLOW

    def test_no_title_returns_none(self) -> None:
        document = "<html><head></head><body><p>nothing to see</p></body></html>"
        assert parse_general(urlparse(_URL), _page(document)) is None

    def test_long_title_is_clipped(self) -> None:
        summary = parse_general(urlparse(_URL), _page(html_page("x" * 250)))
        assert summary is not None
        assert len(summary.title or "") == 100
        assert (summary.title or "").endswith("…")

    def test_description_equal_to_title_dropped(self) -> None:
        head = '<meta name="description" content="Same">'
        summary = parse_general(urlparse(_URL), _page(html_page("Same", head)))
        assert summary is not None
        assert summary.description is None

    def test_sensitive_flag(self) -> None:
        head = '<meta property="mixi:content-rating" content="1">'
        summary = parse_general(urlparse(_URL), _page(html_page("Adult", head)))
        assert summary is not None
        assert summary.sensitive is True

    def test_relative_urls_resolve_against_final_url(self) -> None:
        head = '<meta property="og:image" content="thumb.jpg">'
        page = _page(html_page("T", head), url="https://other.test/deep/page.html")
        summary = parse_general(urlparse(_URL), page)
        assert summary is not None
        assert summary.thumbnail == "https://other.test/deep/thumb.jpg"

    def test_json_uses_original_keys(self) -> None:
        summary = parse_general(urlparse(_URL), _page(html_page("T", _OG_HEAD)))
        assert summary is not None
        payload = summary.model_dump(mode="json", by_alias=True)
        assert payload["activityPub"] == "https://site.test/ap/1"
        assert payload["fediverseCreator"] == "@alice@site.test"


class TestGeneralPlugin:
    def test_claims_everything(self) -> None:
        assert GeneralPlugin().test(urlparse("https://anything.test/x")) is True

    @pytest.mark.asyncio
    async def test_fetches_and_parses(self, make_fetcher) -> None:
        site = FakeSite({"/articles/1": html(html_page("Fetched", _OG_HEAD))})
        fetcher = make_fetcher(site)

        summary = await GeneralPlugin().summarize(urlparse(_URL), ScrapingOptions(), fetcher)

        assert summary is not None
        assert summary.title == "OpenGraph Title"
        assert len(site.hits("/robots.txt")) == 1
