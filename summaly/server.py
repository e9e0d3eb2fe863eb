"""HTTP surface: a single GET endpoint returning the summary as JSON."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from summaly.models import SummalyOptions
from summaly.summarizer import Summarizer
from summaly.utils.http import GuardedFetcher

logger = logging.getLogger(__name__)


def create_app(
    options: SummalyOptions | None = None,
    *,
    fetcher: GuardedFetcher | None = None,
) -> FastAPI:
    """Build the app; redirects are not followed unless *options* say so."""
    defaults = SummalyOptions(follow_redirects=False)
    if options is not None:
        defaults = defaults.model_copy(
            update={name: getattr(options, name) for name in options.model_fields_set}
        )
    summarizer = Summarizer(defaults, fetcher=fetcher)

    app = FastAPI(title="summaly")
    app.state.summarizer = summarizer

    @app.get("/")
    async def summarize(
        url: str | None = Query(None),
        lang: str | None = Query(None),
    ) -> JSONResponse:
        if url is None:
            return JSONResponse({"error": "url is required"}, status_code=400)

        overrides = {"lang": lang} if lang is not None else {}
        try:
            summary = await summarizer.summarize(url, **overrides)
        except Exception as exc:
            logger.info("Failed to summarize %s: %s", url, exc)
            return JSONResponse({"error": str(exc)}, status_code=500)

        return JSONResponse(summary.model_dump(mode="json", by_alias=True))

    return app
