"""Guarded HTTP requests: robots, timeouts, type filter and size limits."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

import httpx

from summaly.config import (
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_OPERATION_TIMEOUT,
    DEFAULT_RESPONSE_TIMEOUT,
    ROBOTS_USER_AGENT,
    Config,
)
from summaly.errors import (
    FetchError,
    Forbidden,
    HttpStatusError,
    LengthRequired,
    RequestTimeout,
    SizeExceeded,
    TypeRejected,
)
from summaly.models import ScrapingOptions
from summaly.utils.encoding import detect_encoding, to_utf8
from summaly.utils.robots import RobotsPolicy

logger = logging.getLogger(__name__)

Method = Literal["GET", "HEAD", "POST"]

HTML_ACCEPT = "text/html,application/xhtml+xml"
HTML_TYPE_FILTER = re.compile(r"^(text/html|application/xhtml\+xml)", re.IGNORECASE)


@dataclass(frozen=True)
class FetchRequest:
    """Everything needed to perform one guarded request."""

    url: str
    method: Method = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | str | None = None
    type_filter: re.Pattern[str] | None = None
    follow_redirects: bool = True
    response_timeout: float = DEFAULT_RESPONSE_TIMEOUT
    operation_timeout: float = DEFAULT_OPERATION_TIMEOUT
    max_size: int = DEFAULT_MAX_RESPONSE_SIZE
    content_length_required: bool = False
    tolerated_statuses: tuple[int, ...] = ()
    check_robots: bool = True

    def __post_init__(self) -> None:
        if self.method not in ("GET", "HEAD", "POST"):
            raise ValueError(f"unsupported method: {self.method}")
        if self.response_timeout < 0 or self.operation_timeout < 0:
            raise ValueError("timeouts must be non-negative")
        if self.max_size <= 0:
            raise ValueError("max_size must be positive")
        object.__setattr__(self, "tolerated_statuses", tuple(self.tolerated_statuses))


@dataclass(frozen=True)
class FetchResponse:
    """A fully received response; the body was read from the wire once."""

    url: str
    status: int
    status_text: str
    headers: httpx.Headers
    raw: bytes
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @classmethod
    def from_httpx(cls, response: httpx.Response, raw: bytes) -> FetchResponse:
        encoding = detect_encoding(raw, response.headers.get("content-type"))
        return cls(
            url=str(response.url),
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=response.headers,
            raw=raw,
            text=to_utf8(raw, encoding),
        )


class GuardedFetcher:
    """Perform HTTP requests under summaly's safety contract.

    The fetcher owns the robots policy it consults; pass a shared
    :class:`RobotsPolicy` to several fetchers to share the cache.
    """

    def __init__(
        self,
        robots: RobotsPolicy | None = None,
        config: Config | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.robots = robots if robots is not None else RobotsPolicy()
        self.config = config or Config()
        self._transport = transport

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def request_for(
        self,
        url: str,
        opts: ScrapingOptions | None = None,
        *,
        method: Method = "GET",
        accept: str = HTML_ACCEPT,
        type_filter: re.Pattern[str] | None = HTML_TYPE_FILTER,
        tolerated_statuses: tuple[int, ...] = (),
        check_robots: bool = True,
    ) -> FetchRequest:
        """Build a request from scraping options and the configured defaults."""
        opts = opts or ScrapingOptions()
        headers = {
            "accept": accept,
            "user-agent": opts.user_agent or self.config.user_agent,
        }
        if opts.lang:
            headers["accept-language"] = opts.lang
        if opts.cookie:
            headers["cookie"] = opts.cookie

        return FetchRequest(
            url=url,
            method=method,
            headers=headers,
            type_filter=type_filter,
            follow_redirects=opts.follow_redirects,
            response_timeout=_pick(opts.response_timeout, self.config.response_timeout),
            operation_timeout=_pick(opts.operation_timeout, self.config.operation_timeout),
            max_size=opts.content_length_limit or self.config.max_response_size,
            content_length_required=opts.content_length_required,
            tolerated_statuses=tolerated_statuses,
            check_robots=check_robots,
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute(self, request: FetchRequest) -> FetchResponse:
        try:
            httpx.URL(request.url)
        except (httpx.InvalidURL, ValueError) as exc:
            raise FetchError(f"Invalid URL {request.url!r}: {exc}") from exc

        if request.check_robots:
            allowed = await self.robots.is_allowed(
                request.url, ROBOTS_USER_AGENT, self._load_robots_txt
            )
            if not allowed:
                raise Forbidden()

        try:
            async with asyncio.timeout(request.operation_timeout):
                return await self._transfer(request)
        except TimeoutError as exc:
            raise RequestTimeout() from exc

    async def get(self, url: str, opts: ScrapingOptions | None = None, **kwargs) -> FetchResponse:
        return await self.execute(self.request_for(url, opts, method="GET", **kwargs))

    async def head(self, url: str, opts: ScrapingOptions | None = None, **kwargs) -> FetchResponse:
        return await self.execute(self.request_for(url, opts, method="HEAD", **kwargs))

    async def _load_robots_txt(self, robots_url: str) -> str:
        response = await self.execute(
            FetchRequest(
                url=robots_url,
                headers={"accept": "*/*", "user-agent": self.config.user_agent},
                response_timeout=self.config.response_timeout,
                operation_timeout=self.config.operation_timeout,
                max_size=self.config.max_response_size,
                check_robots=False,
            )
        )
        return response.text

    def _client(self, request: FetchRequest) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(request.response_timeout),
            verify=not self.config.allow_private_ip,
            transport=self._transport,
        )

    async def _transfer(self, request: FetchRequest) -> FetchResponse:
        try:
            async with self._client(request) as client:
                async with client.stream(
                    request.method,
                    request.url,
                    headers=dict(request.headers),
                    content=request.body,
                    follow_redirects=request.follow_redirects,
                ) as response:
                    _check_status(request, response)
                    _check_content_type(request, response)
                    _check_declared_length(request, response)
                    raw = await _read_body(response, request.max_size)
                    logger.debug(
                        "%s %s -> %d (%d bytes)",
                        request.method,
                        request.url,
                        response.status_code,
                        len(raw),
                    )
                    return FetchResponse.from_httpx(response, raw)
        except httpx.TimeoutException as exc:
            raise RequestTimeout() from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"{type(exc).__name__}: {exc}") from exc


# ----------------------------------------------------------------------
# Response guards
# ----------------------------------------------------------------------


def _pick(value: float | None, default: float) -> float:
    return default if value is None else value


def _check_status(request: FetchRequest, response: httpx.Response) -> None:
    if response.is_success or response.status_code in request.tolerated_statuses:
        return
    raise HttpStatusError(response.status_code, response.reason_phrase)


def _check_content_type(request: FetchRequest, response: httpx.Response) -> None:
    if request.type_filter is None:
        return
    content_type = response.headers.get("content-type")
    if not content_type or not request.type_filter.match(content_type):
        raise TypeRejected(f"Rejected by type filter {content_type}")


def _check_declared_length(request: FetchRequest, response: httpx.Response) -> None:
    declared = response.headers.get("content-length")
    size: int | None = None
    if declared is not None:
        try:
            size = int(declared)
        except ValueError:
            size = None

    if size is None:
        if request.content_length_required:
            raise LengthRequired("content-length required")
        return
    if size > request.max_size:
        raise SizeExceeded(f"maxSize exceeded ({size} > {request.max_size}) on response")


async def _read_body(response: httpx.Response, max_size: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    async for chunk in response.aiter_bytes():
        total += len(chunk)
        if total > max_size:
            raise SizeExceeded(f"maxSize exceeded ({total} > {max_size}) on response")
        chunks.append(chunk)
    return b"".join(chunks)
