"""robots.txt policy with per-origin caching and request coalescing."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from urllib.parse import urlparse

from protego import Protego

logger = logging.getLogger(__name__)

RobotsLoader = Callable[[str], Awaitable[str]]


def robots_origin(url: str) -> str | None:
    """Return ``scheme://host[:port]`` for *url*, or None when it has no host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    host = parsed.netloc.rpartition("@")[2].lower()
    if not parsed.scheme or not host:
        return None
    return f"{parsed.scheme.lower()}://{host}"


class RobotsPolicy:
    """Answer "may this user agent fetch this URL" for any origin.

    Each origin's robots.txt is fetched at most once for the lifetime of the
    policy object. A failed fetch is remembered as "no rules", which allows
    everything: the policy fails open rather than blocking traffic because a
    site's robots.txt is broken or unreachable.

    Concurrent callers asking about the same uncached origin share a single
    in-flight fetch. The lookup of the cache and the registration of the
    in-flight task happen without an intervening ``await``, so the event loop
    cannot interleave a second fetch for that origin.
    """

    def __init__(self) -> None:
        self._cache: dict[str, Protego | None] = {}
        self._fetching: dict[str, asyncio.Task[Protego | None]] = {}

    @property
    def origins(self) -> frozenset[str]:
        """Origins whose robots.txt outcome is cached."""
        return frozenset(self._cache)

    def is_pending(self, origin: str) -> bool:
        return origin in self._fetching

    async def is_allowed(self, url: str, user_agent: str, load: RobotsLoader) -> bool:
        origin = robots_origin(url)
        if origin is None:
            return True

        if origin in self._cache:
            rules = self._cache[origin]
        else:
            task = self._fetching.get(origin)
            if task is None:
                task = asyncio.ensure_future(self._fetch_and_parse(origin, load))
                self._fetching[origin] = task
            rules = await asyncio.shield(task)

        if rules is None:
            return True

        allowed = rules.can_fetch(url, user_agent)
        logger.debug(
            "robots.txt check for %s as %s: %s",
            url,
            user_agent,
            "allowed" if allowed else "disallowed",
        )
        return allowed

    async def _fetch_and_parse(
        self, origin: str, load: RobotsLoader
    ) -> Protego | None:
        robots_url = f"{origin}/robots.txt"
        rules: Protego | None = None
        try:
            text = await load(robots_url)
            rules = Protego.parse(text)
        except Exception:
            logger.debug("No usable robots.txt at %s; allowing all", robots_url, exc_info=True)
            rules = None
        finally:
            self._fetching.pop(origin, None)
        self._cache[origin] = rules
        return rules
