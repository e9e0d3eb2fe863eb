"""CLI entry point for summaly."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click
import uvicorn

from summaly.config import VERSION, Config
from summaly.errors import SummalyError
from summaly.models import SummalyOptions, Summary
from summaly.server import create_app
from summaly.summarizer import Summarizer
from summaly.utils.http import GuardedFetcher


def _configure_logging(verbose: bool, config: Config) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


async def _run(urls: list[str], options: SummalyOptions, config: Config) -> list[Summary | None]:
    """Summarize every URL with one shared fetcher and robots cache."""
    summarizer = Summarizer(options, fetcher=GuardedFetcher(config=config))
    results: list[Summary | None] = []
    for url in urls:
        try:
            results.append(await summarizer.summarize(url))
        except SummalyError as e:
            click.echo(f"✗ {url}: {e}", err=True)
            results.append(None)
    return results


@click.command()
@click.argument("urls", nargs=-1, required=True)
@click.option("--lang", "-l", default=None, help="Accept-Language sent with requests")
@click.option("--no-follow", is_flag=True, help="Do not resolve redirects before summarizing")
@click.option("--user-agent", default=None, help="Override the User-Agent header")
@click.option("--timeout", type=float, default=None, help="Operation timeout in seconds")
@click.option("--max-size", type=int, default=None, help="Maximum response size in bytes")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(VERSION, prog_name="summaly")
def main(
    urls: tuple[str, ...],
    lang: str | None,
    no_follow: bool,
    user_agent: str | None,
    timeout: float | None,
    max_size: int | None,
    verbose: bool,
) -> None:
    """summaly — print link preview summaries as JSON."""
    config = Config.from_env()
    _configure_logging(verbose, config)

    options = SummalyOptions(
        lang=lang,
        follow_redirects=not no_follow,
        user_agent=user_agent,
        operation_timeout=timeout,
        content_length_limit=max_size,
    )
    results = asyncio.run(_run(list(urls), options, config))

    for summary in results:
        if summary is not None:
            click.echo(json.dumps(summary.model_dump(mode="json", by_alias=True), ensure_ascii=False))

    if any(summary is None for summary in results):
        sys.exit(1)


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", type=int, default=3001, show_default=True, help="Port to listen on")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(VERSION, prog_name="summaly-serve")
def serve(host: str, port: int, verbose: bool) -> None:
    """Serve summaries over HTTP: GET /?url=...&lang=..."""
    config = Config.from_env()
    _configure_logging(verbose, config)

    app = create_app(fetcher=GuardedFetcher(config=config))
    click.echo(f"Server is running on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="debug" if verbose else "info")


if __name__ == "__main__":
    main()
