"""Best-effort discovery of a URL's final location."""

from __future__ import annotations

import logging

from summaly.errors import SummalyError
from summaly.models import ScrapingOptions
from summaly.utils.http import GuardedFetcher

logger = logging.getLogger(__name__)


async def resolve_redirects(fetcher: GuardedFetcher, url: str, opts: ScrapingOptions) -> str:
    """HEAD *url* following redirects and return where it ended up.

    Any failure yields *url* unchanged; the probe must never abort a
    summarization.
    """
    probe_opts = ScrapingOptions(
        lang=opts.lang,
        user_agent=opts.user_agent,
        response_timeout=opts.response_timeout,
        operation_timeout=opts.operation_timeout,
        follow_redirects=True,
    )
    try:
        response = await fetcher.head(url, probe_opts)
    except SummalyError as exc:
        logger.debug("Redirect probe for %s failed (%s); using it as is", url, exc)
        return url
    return response.url
