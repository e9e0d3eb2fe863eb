"""Shared fixtures: an in-memory fake web site served through httpx.MockTransport."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from summaly.config import Config
from summaly.utils.http import GuardedFetcher
from summaly.utils.robots import RobotsPolicy

Route = Callable[[httpx.Request], httpx.Response]


def html_page(title: str = "Example Domain", head: str = "", body: str = "<p>Hello</p>") -> str:
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{title}</title>{head}"
        f"</head><body>{body}</body></html>"
    )


def html(content: str, status: int = 200, headers: dict[str, str] | None = None) -> Route:
    """Route answering with an HTML document."""

    def route(request: httpx.Request) -> httpx.Response:
        merged = {"content-type": "text/html; charset=utf-8", **(headers or {})}
        return httpx.Response(status, headers=merged, content=content.encode("utf-8"))

    return route


def redirect(location: str, status: int = 302) -> Route:
    def route(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, headers={"location": location})

    return route


class FakeSite:
    """Routes keyed by ``host/path`` or bare ``path``; records every request."""

    def __init__(
        self,
        routes: dict[str, Route] | None = None,
        robots: str | None = None,
        robots_status: int = 200,
    ) -> None:
        self.routes = dict(routes or {})
        self.robots = robots
        self.robots_status = robots_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/robots.txt":
            if self.robots is None:
                return httpx.Response(404, text="not found")
            return httpx.Response(self.robots_status, text=self.robots)

        route = self.routes.get(f"{request.url.host}{path}") or self.routes.get(path)
        if route is None:
            return httpx.Response(404, text="not found")
        return route(request)

    def hits(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def make_fetcher() -> Callable[..., GuardedFetcher]:
    """Build a GuardedFetcher with an isolated robots cache over a handler."""

    def factory(handler: Callable, **config: object) -> GuardedFetcher:
        return GuardedFetcher(
            robots=RobotsPolicy(),
            config=Config(**config),
            transport=httpx.MockTransport(handler),
        )

    return factory
